"""Standalone HTML exporter for scan results."""

from html import escape
from pathlib import Path
from typing import List, Optional

from adr.model import AdrIssue, AdrIssueType, AdrScanResult, format_comment_type
from .paths import display_path


KNOWN_STATUSES = {"accepted", "rejected", "deprecated", "proposed", "superseded"}

STYLE = """
    body { font-family: -apple-system, "Segoe UI", Roboto, sans-serif; line-height: 1.6;
           color: #333; max-width: 1200px; margin: 0 auto; padding: 20px; }
    h1, h2, h3 { color: #0066cc; }
    .summary { background-color: #f5f5f5; padding: 20px; border-radius: 5px; margin-bottom: 20px; }
    .issue { padding: 10px; border-left: 4px solid #ddd; margin-bottom: 10px; }
    .issue.error { border-left-color: #dc3545; background-color: rgba(220, 53, 69, 0.1); }
    .issue.warning { border-left-color: #ffc107; background-color: rgba(255, 193, 7, 0.1); }
    .adr-document { background-color: #f8f9fa; padding: 15px; margin-bottom: 15px;
                    border-radius: 5px; border-left: 4px solid #0066cc; }
    .status { display: inline-block; padding: 3px 8px; border-radius: 3px; font-size: 0.8em;
              font-weight: bold; color: white; background-color: #6c757d; }
    .status.accepted { background-color: #28a745; }
    .status.rejected { background-color: #dc3545; }
    .status.deprecated, .status.superseded { background-color: #ffc107; color: black; }
    .status.proposed { background-color: #17a2b8; }
    .tag { display: inline-block; background-color: #e9ecef; padding: 2px 6px; border-radius: 3px;
           font-size: 0.8em; margin-right: 5px; }
    table { border-collapse: collapse; }
    td { padding: 2px 12px 2px 0; }
"""

# (issue type, heading, css class)
ISSUE_GROUPS = [
    (AdrIssueType.MISSING_DOCUMENT, "Missing ADR Documents", "error"),
    (AdrIssueType.UNUSED_DOCUMENT, "Unused ADR Documents", "warning"),
    (AdrIssueType.CONFLICTING_REFERENCE, "Conflicting ADR References", "error"),
]


def to_html(result: AdrScanResult, base: Optional[Path] = None) -> str:
    """
    Convert a scan result to a self-contained HTML page.

    Args:
        result: The scan result to export.
        base: Optional base path for relative path display.

    Returns:
        HTML document string.
    """
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="UTF-8">',
        "  <title>ADR Checker Report</title>",
        f"  <style>{STYLE}  </style>",
        "</head>",
        "<body>",
        "  <h1>ADR Checker Report</h1>",
        '  <div class="summary">',
        "    <h2>Summary</h2>",
        f"    <p>Found <strong>{len(result.documents)}</strong> ADR documents</p>",
        f"    <p>Found <strong>{len(result.references)}</strong> ADR references in code</p>",
        f"    <p>Detected <strong>{len(result.issues)}</strong> issues</p>",
        "  </div>",
        '  <div class="issues">',
        "    <h2>Issues</h2>",
    ]

    if result.issues:
        lines.extend(_render_issue_groups(result, base))
    else:
        lines.append("    <p>No issues found!</p>")
    lines.append("  </div>")

    lines.append('  <div class="adr-documents">')
    lines.append("    <h2>ADR Documents</h2>")
    for doc in result.documents:
        refs = result.references_to(doc.id)
        status_class = doc.status if doc.status in KNOWN_STATUSES else "unknown"
        title = f"{doc.id} - {doc.title}" if doc.title else doc.id
        lines.append('    <div class="adr-document">')
        lines.append(f"      <h3>{escape(title)}</h3>")
        lines.append(f'      <p>Status: <span class="status {status_class}">{escape(doc.status)}</span></p>')
        if doc.date:
            lines.append(f"      <p>Date: {escape(doc.date)}</p>")
        if doc.tags:
            tags = " ".join(f'<span class="tag">{escape(tag)}</span>' for tag in doc.tags)
            lines.append(f"      <p>Tags: {tags}</p>")
        lines.append(f"      <p>References in code: {len(refs)}</p>")
        lines.append(f"      <p>Path: {escape(display_path(doc.path, base))}</p>")
        if refs:
            lines.append("      <table>")
            for ref in refs:
                location = f"{display_path(ref.file, base)}:{ref.line}"
                lines.append(
                    f"        <tr><td>{escape(location)}</td>"
                    f"<td><code>{escape(format_comment_type(ref.comment_type))}</code></td></tr>"
                )
            lines.append("      </table>")
        lines.append("    </div>")
    lines.append("  </div>")

    lines.append("</body>")
    lines.append("</html>")
    return "\n".join(lines) + "\n"


def _render_issue_groups(result: AdrScanResult, base: Optional[Path]) -> List[str]:
    lines: List[str] = []
    grouped = {issue_type for issue_type, _, _ in ISSUE_GROUPS}

    for issue_type, heading, css_class in ISSUE_GROUPS:
        issues = result.issues_of(issue_type)
        if issues:
            lines.extend(_render_group(heading, css_class, issues, base))

    other = [issue for issue in result.issues if issue.type not in grouped]
    if other:
        lines.extend(_render_group("Other Issues", "warning", other, base))

    return lines


def _render_group(heading: str, css_class: str, issues: List[AdrIssue], base: Optional[Path]) -> List[str]:
    lines = [
        '    <div class="issue-group">',
        f"      <h3>{escape(heading)} ({len(issues)})</h3>",
    ]
    for issue in issues:
        location = ""
        if issue.file is not None:
            location = display_path(issue.file, base)
            if issue.line is not None:
                location = f"{location}:{issue.line}"
        text = f"{issue.message} ({location})" if location else issue.message
        lines.append(f'      <div class="issue {css_class}"><p>{escape(text)}</p></div>')
    lines.append("    </div>")
    return lines
