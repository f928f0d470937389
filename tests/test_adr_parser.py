"""Tests for the ADR document parser."""

from adr.model import AdrIssueType
from scanner.adr_parser import adr_id_from_filename, parse_adr_document, validate_adr_document


SAMPLE_ADR = """# Use GraphQL for the public API

Status: Accepted
Date: 2024-03-01
Tags: api, graphql , backend

## Context

See [the RFC](https://example.com/rfc) and [notes](#context).
"""


class TestIdDerivation:
    """Tests for ADR ids from file names."""

    def test_numeric_prefix(self):
        assert adr_id_from_filename("0007-adopt-graphql.md") == "ADR-0007"

    def test_short_number_is_padded(self):
        assert adr_id_from_filename("/docs/adr/12-use-kafka.md") == "ADR-0012"

    def test_long_number_is_kept(self):
        assert adr_id_from_filename("12345-big.md") == "ADR-12345"

    def test_no_prefix_uses_sentinel(self):
        """Test names without a numeric prefix collapse into ADR-0000."""
        assert adr_id_from_filename("adopt-graphql.md") == "ADR-0000"
        assert adr_id_from_filename("0007_adopt.md") == "ADR-0000"


class TestParseAdrDocument:
    """Tests for parse_adr_document."""

    def test_full_document(self):
        """Test all metadata fields are extracted."""
        doc = parse_adr_document("/repo/docs/adr/0001-use-graphql.md", SAMPLE_ADR)

        assert doc.id == "ADR-0001"
        assert doc.path == "/repo/docs/adr/0001-use-graphql.md"
        assert doc.title == "Use GraphQL for the public API"
        assert doc.status == "accepted"
        assert doc.date == "2024-03-01"
        assert doc.tags == ("api", "graphql", "backend")
        assert doc.content == SAMPLE_ADR
        assert doc.references == ()

    def test_defaults_for_empty_document(self):
        """Test defaults when no metadata is present."""
        doc = parse_adr_document("notes.md", "Just some text\n")

        assert doc.id == "ADR-0000"
        assert doc.title == ""
        assert doc.status == "unknown"
        assert doc.date == ""
        assert doc.tags == ()

    def test_title_requires_h1_marker(self):
        """Test only '# ' lines count as the title."""
        doc = parse_adr_document("0001-a.md", "## Sub heading\n#NoSpace\n# Real Title  \n# Later\n")
        assert doc.title == "Real Title"

    def test_first_keyword_line_wins(self):
        """Test later lines with the same keyword are ignored."""
        content = "Status: proposed\nStatus: accepted\nDate: 2023-01-01\nDate: 2024-01-01\n"
        doc = parse_adr_document("0002-a.md", content)
        assert doc.status == "proposed"
        assert doc.date == "2023-01-01"

    def test_status_stops_at_non_letters(self):
        """Test status keeps letters and spaces only."""
        doc = parse_adr_document("0003-a.md", "**Status:** Superseded by ADR-0004\n")
        assert doc.status == "unknown"

        doc = parse_adr_document("0003-a.md", "status: Superseded by ADR-0004\n")
        assert doc.status == "superseded by adr"

    def test_only_first_status_line_is_read(self):
        """Test a first status line without letters is not skipped over."""
        doc = parse_adr_document("0004-a.md", "status: 123\nStatus: accepted\n")
        assert doc.status == ""

    def test_keyword_anywhere_in_line(self):
        """Test keywords are found mid-line, case-insensitively."""
        doc = parse_adr_document("0005-a.md", "* DATE: 1 May 2024\n- Decision status: Rejected\n")
        assert doc.date == "1 May 2024"
        assert doc.status == "rejected"


class TestValidateAdrDocument:
    """Tests for document validation."""

    def test_complete_document_has_no_issues(self):
        doc = parse_adr_document("0001-use-graphql.md", SAMPLE_ADR)
        assert validate_adr_document(doc) == []

    def test_missing_metadata(self):
        """Test missing title, status and date are each reported."""
        doc = parse_adr_document("0002-empty.md", "nothing here\n")

        issues = validate_adr_document(doc)

        assert [i.type for i in issues] == [AdrIssueType.MISSING_METADATA] * 3
        assert [i.message for i in issues] == [
            "Missing title in ADR-0002",
            "Missing status in ADR-0002",
            "Missing date in ADR-0002",
        ]
        assert all(i.adr_id == "ADR-0002" and i.file == "0002-empty.md" for i in issues)

    def test_relative_links_are_potentially_broken(self):
        """Test links that are not http or anchors are flagged."""
        content = "# T\nStatus: accepted\nDate: 2024\n\nSee [other](./0002-other.md) and [web](http://x.io).\n"
        doc = parse_adr_document("0001-a.md", content)

        issues = validate_adr_document(doc)

        assert len(issues) == 1
        assert issues[0].type == AdrIssueType.BROKEN_LINK
        assert issues[0].message == "Potential broken link in ADR-0001: other -> ./0002-other.md"
        assert issues[0].line == 5
