"""Cross-checks between ADR references in code and ADR documents."""

from typing import Dict, List, Sequence, Set, Tuple

from adr.model import AdrDocument, AdrIssue, AdrIssueType, AdrReference
from .adr_parser import validate_adr_document


# Statuses whose decisions should no longer be cited from code
OUTDATED_STATUSES = {"deprecated", "superseded"}


def validate_references(
    references: Sequence[AdrReference],
    documents: Sequence[AdrDocument],
) -> List[AdrIssue]:
    """
    Compute the issues between references and documents.

    Issues come out grouped: every missing document (reference order), then
    every unused document (document order), then every line citing more than
    one ADR (order of first appearance). Documents sharing an id are not
    flagged.

    Args:
        references: All references found in source files.
        documents: All parsed ADR documents.

    Returns:
        List of issues.
    """
    document_ids: Set[str] = {doc.id for doc in documents}

    missing: List[AdrIssue] = []
    for ref in references:
        if ref.id not in document_ids:
            missing.append(AdrIssue(
                type=AdrIssueType.MISSING_DOCUMENT,
                message=f"Referenced ADR {ref.id} does not exist",
                file=ref.file,
                line=ref.line,
                adr_id=ref.id,
            ))

    referenced_ids: Set[str] = {ref.id for ref in references}
    unused: List[AdrIssue] = []
    for doc in documents:
        if doc.id not in referenced_ids:
            unused.append(AdrIssue(
                type=AdrIssueType.UNUSED_DOCUMENT,
                message=f"ADR {doc.id} is not referenced in any source file",
                file=doc.path,
                adr_id=doc.id,
            ))

    # dicts keep insertion order, so groups come out in first-seen order
    by_line: Dict[Tuple[str, int], List[str]] = {}
    for ref in references:
        by_line.setdefault((ref.file, ref.line), []).append(ref.id)

    conflicting: List[AdrIssue] = []
    for (file, line), ids in by_line.items():
        if len(ids) > 1:
            conflicting.append(AdrIssue(
                type=AdrIssueType.CONFLICTING_REFERENCE,
                message=f"Multiple ADRs referenced on the same line: {', '.join(ids)}",
                file=file,
                line=line,
            ))

    return missing + unused + conflicting


def validate_documents(
    documents: Sequence[AdrDocument],
    references: Sequence[AdrReference] = (),
) -> List[AdrIssue]:
    """
    Check ADR documents themselves.

    Reports missing metadata and potential broken links per document, then
    every reference that cites a deprecated or superseded decision.

    Args:
        documents: All parsed ADR documents.
        references: All references found in source files.

    Returns:
        List of issues.
    """
    issues: List[AdrIssue] = []
    for doc in documents:
        issues.extend(validate_adr_document(doc))

    status_by_id: Dict[str, str] = {}
    for doc in documents:
        status_by_id.setdefault(doc.id, doc.status)

    for ref in references:
        # "Superseded by ADR-0002" is parsed as "superseded by adr"
        words = status_by_id.get(ref.id, "").split()
        if words and words[0] in OUTDATED_STATUSES:
            issues.append(AdrIssue(
                type=AdrIssueType.OUTDATED_DECISION,
                message=f"Reference to {words[0]} ADR {ref.id}",
                file=ref.file,
                line=ref.line,
                adr_id=ref.id,
            ))

    return issues
