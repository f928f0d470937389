"""Extraction of ADR references from source file comments."""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Sequence, Union

from adr.config import LanguageConfig
from adr.model import AdrReference
from .adr_parser import format_adr_id
from .discovery import normalize_extensions

logger = logging.getLogger(__name__)


JAVASCRIPT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")

JAVASCRIPT_PATTERNS = (
    # Single line comment: // ADR-0001
    r"//\s*ADR-(\d+)",
    # Block comment, whole block on one line: /* ADR-0001 */
    r"/\*\s*ADR-(\d+)\s*\*/",
    # JSDoc tag: * @adr ADR-0001
    r"\*\s*@adr\s*ADR-(\d+)",
)

ADR_NUMBER_PATTERN = re.compile(r"ADR-(\d+)")


class CommentPatternExtractor:
    """
    Finds ADR references line by line using a fixed list of patterns.

    Every pattern is tried on every line, and each pattern that matches
    contributes one reference. A line that satisfies two patterns therefore
    yields two references.
    """

    def __init__(self, patterns: Sequence[Union[str, Pattern[str]]]):
        self._patterns: List[Pattern[str]] = [
            p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns
        ]

    @property
    def patterns(self) -> List[str]:
        return [p.pattern for p in self._patterns]

    def extract(self, file_path: Union[str, Path], content: str) -> List[AdrReference]:
        """
        Extract ADR references from one file's text.

        Args:
            file_path: Path recorded on each reference.
            content: Raw file text.

        Returns:
            References in order of appearance (line, then pattern order).
        """
        references: List[AdrReference] = []
        file = str(file_path)

        for line_index, line in enumerate(content.split("\n")):
            for pattern in self._patterns:
                match = pattern.search(line)
                if match is None:
                    continue
                number = _adr_number(match)
                if number is None:
                    continue
                references.append(AdrReference(
                    id=format_adr_id(number),
                    file=file,
                    line=line_index + 1,
                    column=match.start(),
                    comment_type=pattern.pattern,
                ))

        return references


def _adr_number(match: "re.Match[str]") -> Optional[str]:
    """Get the ADR number from a match: first group, else ADR-<n> in the text."""
    if match.re.groups:
        number = match.group(1)
        if number and number.isdigit():
            return number
    inner = ADR_NUMBER_PATTERN.search(match.group(0))
    return inner.group(1) if inner else None


class ExtractorRegistry:
    """Maps file extensions to the extractor that handles them."""

    def __init__(self):
        self._extractors: Dict[str, CommentPatternExtractor] = {}

    @property
    def extensions(self) -> List[str]:
        """Registered extensions, in registration order."""
        return list(self._extractors)

    def register(self, extensions: Iterable[str], extractor: CommentPatternExtractor) -> None:
        """Register an extractor for one or more extensions, replacing earlier ones."""
        for ext in sorted(normalize_extensions(extensions)):
            self._extractors[ext] = extractor

    def get(self, file_path: Union[str, Path]) -> Optional[CommentPatternExtractor]:
        """Get the extractor for a file, or None if its extension is unknown."""
        return self._extractors.get(Path(file_path).suffix.lower())

    def extract(self, file_path: Union[str, Path], content: str) -> List[AdrReference]:
        """Extract references with the file's extractor; unknown extensions yield none."""
        extractor = self.get(file_path)
        if extractor is None:
            return []
        return extractor.extract(file_path, content)

    def __contains__(self, ext: str) -> bool:
        return ext.lower() in self._extractors

    def __len__(self) -> int:
        return len(self._extractors)


def default_registry() -> ExtractorRegistry:
    """Registry with the built-in JavaScript/TypeScript comment forms."""
    registry = ExtractorRegistry()
    registry.register(JAVASCRIPT_EXTENSIONS, CommentPatternExtractor(JAVASCRIPT_PATTERNS))
    return registry


def build_registry(languages: Mapping[str, LanguageConfig]) -> ExtractorRegistry:
    """
    Build a registry from the configured languages.

    Each language's ``comment_patterns`` are compiled into its extractor.
    A language without patterns uses the built-in JavaScript comment forms,
    and a pattern that does not compile is skipped with a warning.

    Args:
        languages: Language name -> language configuration.

    Returns:
        Registry covering every configured extension.
    """
    registry = ExtractorRegistry()

    for name, language in languages.items():
        compiled: List[Pattern[str]] = []
        for source in language.comment_patterns:
            try:
                compiled.append(re.compile(source))
            except re.error as e:
                logger.warning("Skipping invalid comment pattern %r for %s: %s", source, name, e)

        if not language.comment_patterns:
            compiled = [re.compile(p) for p in JAVASCRIPT_PATTERNS]

        if not compiled:
            logger.warning("No usable comment patterns for %s, its files will yield no references", name)

        registry.register(language.extensions, CommentPatternExtractor(compiled))
        logger.debug("Registered %s extractor for %s", name, ", ".join(language.extensions))

    return registry
