"""Data model for ADR references, documents, issues and scan results."""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


class AdrIssueType(str, Enum):
    """Kinds of inconsistency reported by a scan."""

    MISSING_DOCUMENT = "missing_document"
    UNUSED_DOCUMENT = "unused_document"
    CONFLICTING_REFERENCE = "conflicting_reference"
    BROKEN_LINK = "broken_link"
    MISSING_METADATA = "missing_metadata"
    OUTDATED_DECISION = "outdated_decision"


# Issue types produced by document validation rather than cross-referencing
DOCUMENT_ISSUE_TYPES = frozenset({
    AdrIssueType.MISSING_METADATA,
    AdrIssueType.BROKEN_LINK,
    AdrIssueType.OUTDATED_DECISION,
})


@dataclass(frozen=True)
class AdrReference:
    """One occurrence of an ADR citation in a source file."""

    id: str
    file: str
    line: int
    column: int
    comment_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "commentType": self.comment_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdrReference":
        return cls(
            id=data["id"],
            file=data["file"],
            line=int(data["line"]),
            column=int(data.get("column", 0)),
            comment_type=data.get("commentType", ""),
        )


@dataclass(frozen=True)
class AdrDocument:
    """
    One parsed ADR markdown file.

    ``references`` is always empty when the document comes out of the parser;
    linking references to documents is the validator's job.
    """

    id: str
    path: str
    title: str = ""
    status: str = "unknown"
    date: str = ""
    tags: Tuple[str, ...] = ()
    content: str = ""
    references: Tuple[AdrReference, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "path": self.path,
            "status": self.status,
            "date": self.date,
            "tags": list(self.tags),
            "content": self.content,
            "references": [ref.to_dict() for ref in self.references],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdrDocument":
        return cls(
            id=data["id"],
            path=data["path"],
            title=data.get("title") or "",
            status=data.get("status") or "unknown",
            date=data.get("date") or "",
            tags=tuple(data.get("tags") or ()),
            content=data.get("content") or "",
            references=tuple(AdrReference.from_dict(r) for r in data.get("references") or ()),
        )


@dataclass(frozen=True)
class AdrIssue:
    """One detected inconsistency between references and documents."""

    type: AdrIssueType
    message: str
    file: Optional[str] = None
    line: Optional[int] = None
    adr_id: Optional[str] = None

    def location(self) -> str:
        """Return ``file:line`` (or just ``file``), empty when unknown."""
        if self.file is None:
            return ""
        if self.line is None:
            return self.file
        return f"{self.file}:{self.line}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value, "message": self.message}
        if self.file is not None:
            data["file"] = self.file
        if self.line is not None:
            data["line"] = self.line
        if self.adr_id is not None:
            data["adrId"] = self.adr_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdrIssue":
        line = data.get("line")
        return cls(
            type=AdrIssueType(data["type"]),
            message=data.get("message", ""),
            file=data.get("file"),
            line=int(line) if line is not None else None,
            adr_id=data.get("adrId"),
        )


@dataclass(frozen=True)
class AdrScanResult:
    """
    Aggregate output of a scan.

    This is the only object handed to the reporting layer, so it must stay
    plain data: ``to_dict()`` gives a JSON-ready structure with the stable
    field names used in written reports.
    """

    references: Tuple[AdrReference, ...] = field(default_factory=tuple)
    documents: Tuple[AdrDocument, ...] = field(default_factory=tuple)
    issues: Tuple[AdrIssue, ...] = field(default_factory=tuple)

    def with_issues(self, issues: Iterable[AdrIssue]) -> "AdrScanResult":
        """Return a copy of this result with a replaced issue list."""
        return replace(self, issues=tuple(issues))

    def references_to(self, adr_id: str) -> List[AdrReference]:
        """Get all references citing the given ADR id."""
        return [ref for ref in self.references if ref.id == adr_id]

    def references_in(self, file: str) -> List[AdrReference]:
        """Get all references found in the given file."""
        return [ref for ref in self.references if ref.file == file]

    def issues_of(self, *types: AdrIssueType) -> List[AdrIssue]:
        """Get issues of the given types, in result order."""
        return [issue for issue in self.issues if issue.type in types]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "references": [ref.to_dict() for ref in self.references],
            "documents": [doc.to_dict() for doc in self.documents],
            "issues": [issue.to_dict() for issue in self.issues],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdrScanResult":
        """Rebuild a result from a previously written JSON report."""
        return cls(
            references=tuple(AdrReference.from_dict(r) for r in data.get("references") or ()),
            documents=tuple(AdrDocument.from_dict(d) for d in data.get("documents") or ()),
            issues=tuple(AdrIssue.from_dict(i) for i in data.get("issues") or ()),
        )


def format_comment_type(comment_type: str) -> str:
    """
    Convert a reference's ``comment_type`` into a readable comment form.

    The comment type is the source of the pattern that matched, e.g.
    ``//\\s*ADR-(\\d+)`` becomes ``// ADR-NNNN``. Every exporter displays
    comment types through this function.

    Args:
        comment_type: The comment type recorded on an AdrReference.

    Returns:
        Display string for the comment form.
    """
    text = re.sub(r"\\s[*+?]?", " ", comment_type)
    text = re.sub(r"\(?\\d[*+]?\)?", "NNNN", text)
    text = text.replace("\\", "")
    return re.sub(r" {2,}", " ", text).strip()
