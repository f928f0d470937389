"""File discovery utilities for ADR documents and source trees."""

import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Set

logger = logging.getLogger(__name__)


ADR_EXTENSIONS = {".md"}


def normalize_extensions(extensions: Iterable[str]) -> Set[str]:
    """Lower-case extensions and make sure each starts with a dot."""
    normalized = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        normalized.add(ext)
    return normalized


def iter_files(
    root: Path,
    include_ext: Iterable[str],
    ignore_patterns: Sequence[str] = (),
    base: Optional[Path] = None,
) -> Iterator[Path]:
    """
    Iterate over files in a directory tree.

    Args:
        root: Root directory to scan. A missing root yields nothing.
        include_ext: File extensions to include (e.g., {'.ts', '.js'}).
        ignore_patterns: Glob patterns; a file is skipped when its path
                         relative to ``root`` or to ``base`` matches one.
                         ``*`` also matches across ``/``, and a leading
                         ``**/`` may match no directory at all.
        base: Second anchor for ignore patterns (default: current directory).

    Yields:
        Absolute paths of matching files, sorted within each directory.
    """
    include_ext = normalize_extensions(include_ext)
    root = root.resolve()
    base = (base or Path.cwd()).resolve()

    if not root.is_dir():
        logger.debug("Directory not found, nothing to scan: %s", root)
        return

    def _relative_forms(path: Path) -> List[str]:
        forms = [path.relative_to(root).as_posix()]
        try:
            forms.append(path.relative_to(base).as_posix())
        except ValueError:
            pass
        return forms

    patterns = [variant for pattern in ignore_patterns for variant in _glob_variants(pattern)]

    def _ignored_file(path: Path) -> bool:
        return any(
            fnmatch(form, pattern)
            for form in _relative_forms(path)
            for pattern in patterns
        )

    def _ignored_dir(path: Path) -> bool:
        # Only "<dir>/**" style patterns prune whole directories
        return any(
            fnmatch(form, pattern[:-3])
            for form in _relative_forms(path)
            for pattern in patterns
            if pattern.endswith("/**")
        )

    def _walk(current: Path) -> Iterator[Path]:
        try:
            entries = sorted(current.iterdir())
        except PermissionError:
            logger.warning("Permission denied, skipping directory: %s", current)
            return

        for entry in entries:
            if entry.is_dir():
                if _ignored_dir(entry):
                    continue
                yield from _walk(entry)
            elif entry.is_file():
                if entry.suffix.lower() in include_ext and not _ignored_file(entry):
                    yield entry

    yield from _walk(root)


def _glob_variants(pattern: str) -> List[str]:
    """Expand a pattern so each leading ``**/`` may also match no directory."""
    variants = [pattern]
    while pattern.startswith("**/"):
        pattern = pattern[3:]
        variants.append(pattern)
    return variants


def iter_adr_files(adr_dir: Path) -> Iterator[Path]:
    """Iterate over ADR markdown documents. Ignore patterns do not apply."""
    return iter_files(adr_dir, ADR_EXTENSIONS)


def iter_source_files(
    source_dir: Path,
    extensions: Iterable[str],
    ignore_patterns: Sequence[str] = (),
    base: Optional[Path] = None,
) -> Iterator[Path]:
    """Iterate over source files with the given extensions."""
    return iter_files(source_dir, extensions, ignore_patterns, base=base)
