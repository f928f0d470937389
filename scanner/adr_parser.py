"""Parser for ADR markdown documents."""

import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from adr.model import AdrDocument, AdrIssue, AdrIssueType


# e.g. 0001-use-graphql.md -> ADR-0001
FILENAME_ID_PATTERN = re.compile(r"^(\d+)-")
FALLBACK_ID = "ADR-0000"

STATUS_PATTERN = re.compile(r"status:\s*([a-z\s]+)", re.IGNORECASE)
DATE_PATTERN = re.compile(r"date:\s*(.+)", re.IGNORECASE)
TAGS_PATTERN = re.compile(r"tags:\s*(.+)", re.IGNORECASE)

LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def format_adr_id(number: str) -> str:
    """Zero-pad an ADR number to four digits and add the ADR- prefix."""
    return f"ADR-{number.zfill(4)}"


def adr_id_from_filename(file_path: Union[str, Path]) -> str:
    """
    Derive an ADR id from a document's file name.

    Names without a leading number all map to ``ADR-0000``.
    """
    match = FILENAME_ID_PATTERN.match(Path(file_path).name)
    return format_adr_id(match.group(1)) if match else FALLBACK_ID


def parse_adr_document(file_path: Union[str, Path], content: str) -> AdrDocument:
    """
    Parse an ADR markdown document.

    Each metadata field comes from the first line mentioning its keyword;
    later lines with the same keyword are ignored.

    Args:
        file_path: Path of the document.
        content: Raw markdown text.

    Returns:
        The parsed AdrDocument.
    """
    lines = content.split("\n")

    title = ""
    title_line = next((line for line in lines if line.startswith("# ")), None)
    if title_line is not None:
        title = title_line[2:].strip()

    status = "unknown"
    match = _match_first(lines, "status:", STATUS_PATTERN)
    if match:
        status = match.group(1).strip().lower()

    date = ""
    match = _match_first(lines, "date:", DATE_PATTERN)
    if match:
        date = match.group(1).strip()

    tags: Tuple[str, ...] = ()
    match = _match_first(lines, "tags:", TAGS_PATTERN)
    if match:
        tags = tuple(tag.strip() for tag in match.group(1).strip().split(","))

    return AdrDocument(
        id=adr_id_from_filename(file_path),
        path=str(file_path),
        title=title,
        status=status,
        date=date,
        tags=tags,
        content=content,
    )


def _match_first(lines: List[str], keyword: str, pattern: "re.Pattern[str]") -> Optional["re.Match[str]"]:
    """Match ``pattern`` against the first line containing ``keyword``."""
    line = next((line for line in lines if keyword in line.lower()), None)
    if line is None:
        return None
    return pattern.search(line)


def validate_adr_document(document: AdrDocument) -> List[AdrIssue]:
    """
    Check an ADR document for missing metadata and suspicious links.

    Links whose target does not start with ``http`` or ``#`` are reported as
    potential broken links; the filesystem is not consulted.

    Args:
        document: The parsed document.

    Returns:
        List of issues, in the order the checks run.
    """
    issues: List[AdrIssue] = []

    def _metadata_issue(field_name: str) -> None:
        issues.append(AdrIssue(
            type=AdrIssueType.MISSING_METADATA,
            message=f"Missing {field_name} in {document.id}",
            file=document.path,
            adr_id=document.id,
        ))

    if not document.title:
        _metadata_issue("title")
    if not document.status or document.status == "unknown":
        _metadata_issue("status")
    if not document.date:
        _metadata_issue("date")

    for match in LINK_PATTERN.finditer(document.content):
        text, target = match.group(1), match.group(2)
        if not target.startswith(("http", "#")):
            line = document.content.count("\n", 0, match.start()) + 1
            issues.append(AdrIssue(
                type=AdrIssueType.BROKEN_LINK,
                message=f"Potential broken link in {document.id}: {text} -> {target}",
                file=document.path,
                line=line,
                adr_id=document.id,
            ))

    return issues
