"""Plain-text exporter for scan results, with tree-style reference listings."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from adr.model import AdrIssue, AdrIssueType, AdrScanResult, format_comment_type
from .paths import display_path


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "

# (issue type, heading, marker) for the issue types with their own section
ISSUE_SECTIONS: List[Tuple[AdrIssueType, str, str]] = [
    (AdrIssueType.MISSING_DOCUMENT, "Missing ADR Documents", "x"),
    (AdrIssueType.UNUSED_DOCUMENT, "Unused ADR Documents", "!"),
    (AdrIssueType.CONFLICTING_REFERENCE, "Conflicting ADR References", "x"),
]


def to_text(
    result: AdrScanResult,
    base: Optional[Path] = None,
    style: str = "tree",
) -> str:
    """
    Convert a scan result to a human-readable report.

    Args:
        result: The scan result to export.
        base: Optional base path for relative path display.
        style: Reference listing style - "tree" (Unicode) or "ascii" (pure ASCII).

    Returns:
        Report text.
    """
    if style == "ascii":
        branch, last = ASCII_BRANCH, ASCII_LAST
    else:
        branch, last = UNICODE_BRANCH, UNICODE_LAST

    lines: List[str] = [
        "=== ADR Checker Summary ===",
        "",
        f"Found {len(result.documents)} ADR documents",
        f"Found {len(result.references)} ADR references in code",
        f"Detected {len(result.issues)} issues",
        "",
    ]

    if result.issues:
        lines.append("=== Issues ===")
        lines.append("")
        lines.extend(_render_issues(result, base))
    else:
        lines.append("No issues found!")
        lines.append("")

    lines.append("=== ADR Documents ===")
    lines.append("")
    for doc in result.documents:
        refs = result.references_to(doc.id)
        lines.append(f"{doc.id} - {doc.title}" if doc.title else doc.id)
        lines.append(f"  Status: {doc.status}")
        if doc.date:
            lines.append(f"  Date: {doc.date}")
        if doc.tags:
            lines.append(f"  Tags: {', '.join(doc.tags)}")
        lines.append(f"  Path: {display_path(doc.path, base)}")
        lines.append(f"  References in code: {len(refs)}")
        for i, ref in enumerate(refs):
            connector = last if i == len(refs) - 1 else branch
            location = f"{display_path(ref.file, base)}:{ref.line}"
            lines.append(f"  {connector}{location}  {format_comment_type(ref.comment_type)}")
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def _render_issues(result: AdrScanResult, base: Optional[Path]) -> List[str]:
    """Render issues grouped by type, dedicated sections first."""
    lines: List[str] = []
    by_type: Dict[AdrIssueType, List[AdrIssue]] = {}
    for issue in result.issues:
        by_type.setdefault(issue.type, []).append(issue)

    for issue_type, heading, marker in ISSUE_SECTIONS:
        issues = by_type.pop(issue_type, [])
        if not issues:
            continue
        lines.append(f"{heading} ({len(issues)}):")
        for issue in issues:
            lines.append(f"  {marker} {_describe(issue, base)}")
        lines.append("")

    other = [issue for issues in by_type.values() for issue in issues]
    if other:
        lines.append(f"Other Issues ({len(other)}):")
        for issue in other:
            lines.append(f"  ! {_describe(issue, base)}")
        lines.append("")

    return lines


def _describe(issue: AdrIssue, base: Optional[Path]) -> str:
    """One-line description of an issue, matching its section."""
    location = ""
    if issue.file is not None:
        location = display_path(issue.file, base)
        if issue.line is not None:
            location = f"{location}:{issue.line}"

    if issue.type == AdrIssueType.MISSING_DOCUMENT:
        return f"{issue.adr_id} referenced in {location}"
    if issue.type == AdrIssueType.UNUSED_DOCUMENT:
        return f"{issue.adr_id} is not referenced in any source file"
    if issue.type == AdrIssueType.CONFLICTING_REFERENCE:
        return f"{location}: {issue.message}"
    return f"{issue.message} in {location}" if location else issue.message
