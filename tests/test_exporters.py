"""Tests for exporters."""

import json
from pathlib import Path

import pytest

from adr.model import AdrDocument, AdrIssue, AdrIssueType, AdrReference, AdrScanResult
from exporters import render_report
from exporters.html_exporter import to_html
from exporters.json_exporter import to_json
from exporters.text_exporter import to_text


ROOT = Path("/repo")


def _result():
    refs = (
        AdrReference("ADR-0001", "/repo/src/a.ts", 3, 0, r"//\s*ADR-(\d+)"),
        AdrReference("ADR-0001", "/repo/src/b.ts", 9, 1, r"\*\s*@adr\s*ADR-(\d+)"),
        AdrReference("ADR-0007", "/repo/src/b.ts", 12, 0, r"//\s*ADR-(\d+)"),
    )
    docs = (
        AdrDocument(
            id="ADR-0001",
            path="/repo/docs/adr/0001-use-graphql.md",
            title="Use <GraphQL>",
            status="accepted",
            date="2024-01-15",
            tags=("api", "graphql"),
        ),
        AdrDocument(id="ADR-0002", path="/repo/docs/adr/0002-old.md", title="Old", status="deprecated"),
    )
    issues = (
        AdrIssue(AdrIssueType.MISSING_DOCUMENT, "Referenced ADR ADR-0007 does not exist", "/repo/src/b.ts", 12, "ADR-0007"),
        AdrIssue(AdrIssueType.UNUSED_DOCUMENT, "ADR ADR-0002 is not referenced in any source file",
                 "/repo/docs/adr/0002-old.md", None, "ADR-0002"),
        AdrIssue(AdrIssueType.BROKEN_LINK, "Potential broken link in ADR-0001: x -> ./x.md",
                 "/repo/docs/adr/0001-use-graphql.md", 4, "ADR-0001"),
    )
    return AdrScanResult(references=refs, documents=docs, issues=issues)


class TestTextExporter:
    """Tests for the text exporter."""

    def test_empty_result(self):
        """Test an empty result reports zero counts and no issues."""
        output = to_text(AdrScanResult())

        assert "Found 0 ADR documents" in output
        assert "Found 0 ADR references in code" in output
        assert "No issues found!" in output

    def test_summary_and_sections(self):
        """Test counts and issue sections."""
        output = to_text(_result(), base=ROOT)

        assert "Found 2 ADR documents" in output
        assert "Found 3 ADR references in code" in output
        assert "Detected 3 issues" in output
        assert "Missing ADR Documents (1):" in output
        assert "x ADR-0007 referenced in src/b.ts:12" in output
        assert "Unused ADR Documents (1):" in output
        assert "Other Issues (1):" in output
        assert "Conflicting ADR References" not in output

    def test_documents_with_reference_tree(self):
        """Test each document lists its references as a tree."""
        output = to_text(_result(), base=ROOT)

        assert "ADR-0001 - Use <GraphQL>" in output
        assert "  Tags: api, graphql" in output
        assert "  Path: docs/adr/0001-use-graphql.md" in output
        assert "  References in code: 2" in output
        assert "  ├── src/a.ts:3  // ADR-NNNN" in output
        assert "  └── src/b.ts:9  * @adr ADR-NNNN" in output

    def test_ascii_style(self):
        """Test pure ASCII connectors."""
        output = to_text(_result(), base=ROOT, style="ascii")

        assert "├" not in output
        assert "└" not in output
        assert "|-- src/a.ts:3" in output
        assert "\\-- src/b.ts:9" in output

    def test_conflicting_reference_line(self):
        """Test a conflict is printed once, after its location."""
        conflict = AdrIssue(
            AdrIssueType.CONFLICTING_REFERENCE,
            "Multiple ADRs referenced on the same line: ADR-0001, ADR-0002",
            "/repo/src/a.ts",
            3,
        )

        output = to_text(AdrScanResult(issues=(conflict,)), base=ROOT)

        assert "Conflicting ADR References (1):" in output
        assert "  x src/a.ts:3: Multiple ADRs referenced on the same line: ADR-0001, ADR-0002" in output
        assert output.count("Multiple ADRs referenced") == 1

    def test_paths_outside_base_stay_absolute(self):
        output = to_text(_result(), base=Path("/elsewhere"))
        assert "/repo/src/a.ts:3" in output


class TestJSONExporter:
    """Tests for the JSON exporter."""

    def test_empty_result(self):
        data = json.loads(to_json(AdrScanResult()))
        assert data == {"references": [], "documents": [], "issues": []}

    def test_contract_fields(self):
        """Test the report uses the stable field names."""
        data = json.loads(to_json(_result()))

        assert data["references"][0]["commentType"] == r"//\s*ADR-(\d+)"
        assert data["documents"][0]["tags"] == ["api", "graphql"]
        assert data["issues"][0]["type"] == "missing_document"
        assert data["issues"][0]["adrId"] == "ADR-0007"
        assert "line" not in data["issues"][1]

    def test_loads_back(self):
        """Test a JSON report rebuilds the same result."""
        result = _result()
        assert AdrScanResult.from_dict(json.loads(to_json(result))) == result


class TestHTMLExporter:
    """Tests for the HTML exporter."""

    def test_structure(self):
        output = to_html(_result(), base=ROOT)

        assert output.startswith("<!DOCTYPE html>")
        assert "Missing ADR Documents (1)" in output
        assert "Other Issues (1)" in output
        assert '<span class="status accepted">accepted</span>' in output
        assert '<span class="status deprecated">deprecated</span>' in output
        assert '<span class="tag">graphql</span>' in output

    def test_escapes_text(self):
        """Test document text is HTML-escaped."""
        output = to_html(_result(), base=ROOT)

        assert "Use &lt;GraphQL&gt;" in output
        assert "Use <GraphQL>" not in output

    def test_no_issues(self):
        assert "No issues found!" in to_html(AdrScanResult())

    def test_comment_types_formatted(self):
        assert "<code>// ADR-NNNN</code>" in to_html(_result(), base=ROOT)


class TestRenderReport:
    """Tests for format dispatch."""

    def test_dispatch(self):
        result = _result()
        assert render_report(result, "json") == to_json(result)
        assert render_report(result, "html", base=ROOT) == to_html(result, base=ROOT)
        assert render_report(result, "text", base=ROOT, style="ascii") == to_text(result, base=ROOT, style="ascii")

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            render_report(_result(), "pdf")
