"""Scan orchestration: discovery, per-file parsing, and validation."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, List, Optional, TypeVar

from adr.config import AdrConfig
from adr.model import AdrDocument, AdrReference, AdrScanResult
from .adr_parser import parse_adr_document
from .discovery import iter_adr_files, iter_source_files
from .extractors import ExtractorRegistry, build_registry
from .validator import validate_documents as check_documents
from .validator import validate_references

logger = logging.getLogger(__name__)

T = TypeVar("T")


def scan_project(
    config: AdrConfig,
    registry: Optional[ExtractorRegistry] = None,
    validate_documents: bool = False,
    workers: int = 1,
    base: Optional[Path] = None,
) -> AdrScanResult:
    """
    Scan source code for ADR references and validate them against ADR documents.

    Args:
        config: Scan configuration.
        registry: Extractors keyed by extension (default: built from
                  ``config.languages``).
        validate_documents: If True, also append document issues (missing
                            metadata, broken links, outdated decisions).
        workers: Number of threads for per-file work; 1 means sequential.
        base: Directory that relative config paths resolve against
              (default: current directory).

    Returns:
        AdrScanResult with references, documents, and issues.
    """
    if registry is None:
        registry = build_registry(config.languages)

    documents = scan_adr_documents(config, workers=workers, base=base)
    references = scan_source_files(config, registry, workers=workers, base=base)

    issues = validate_references(references, documents)
    if validate_documents:
        issues.extend(check_documents(documents, references))

    logger.info(
        "Scanned %d documents and %d references, %d issues",
        len(documents), len(references), len(issues),
    )

    return AdrScanResult(
        references=tuple(references),
        documents=tuple(documents),
        issues=tuple(issues),
    )


def scan_adr_documents(
    config: AdrConfig,
    workers: int = 1,
    base: Optional[Path] = None,
) -> List[AdrDocument]:
    """Parse every markdown document under the configured ADR directory."""
    adr_dir = _resolve(config.adr_dir, base)
    files = list(iter_adr_files(adr_dir))
    logger.debug("Found %d ADR documents in %s", len(files), adr_dir)

    def _parse(file_path: Path) -> Optional[AdrDocument]:
        try:
            content = file_path.read_text(encoding="utf-8")
            return parse_adr_document(file_path, content)
        except (OSError, ValueError) as e:
            logger.warning("Error parsing ADR document %s: %s", file_path, e)
            return None

    return [doc for doc in _map(_parse, files, workers) if doc is not None]


def scan_source_files(
    config: AdrConfig,
    registry: ExtractorRegistry,
    workers: int = 1,
    base: Optional[Path] = None,
) -> List[AdrReference]:
    """Extract ADR references from every source file the registry handles."""
    source_dir = _resolve(config.source_dir, base)
    extensions = config.extensions or registry.extensions
    files = [
        path
        for path in iter_source_files(source_dir, extensions, config.ignore_patterns, base=base)
        if registry.get(path) is not None
    ]
    logger.debug("Found %d source files in %s", len(files), source_dir)

    def _extract(file_path: Path) -> List[AdrReference]:
        try:
            content = file_path.read_text(encoding="utf-8")
            return registry.extract(file_path, content)
        except (OSError, ValueError) as e:
            logger.warning("Error parsing file %s: %s", file_path, e)
            return []

    references: List[AdrReference] = []
    for file_references in _map(_extract, files, workers):
        references.extend(file_references)
    return references


def _resolve(directory: str, base: Optional[Path]) -> Path:
    path = Path(directory)
    if not path.is_absolute():
        path = (base or Path.cwd()) / path
    return path.resolve()


def _map(func: Callable[[Path], T], files: Iterable[Path], workers: int) -> List[T]:
    """Apply ``func`` to each file, keeping input order."""
    if workers <= 1:
        return [func(path) for path in files]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(func, files))
