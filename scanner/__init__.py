"""Scanner module for ADR discovery, reference extraction and validation."""

from .discovery import iter_files, iter_adr_files, iter_source_files
from .adr_parser import parse_adr_document, validate_adr_document
from .extractors import CommentPatternExtractor, ExtractorRegistry, build_registry, default_registry
from .validator import validate_references, validate_documents
from .builder import scan_project

__all__ = [
    "iter_files",
    "iter_adr_files",
    "iter_source_files",
    "parse_adr_document",
    "validate_adr_document",
    "CommentPatternExtractor",
    "ExtractorRegistry",
    "build_registry",
    "default_registry",
    "validate_references",
    "validate_documents",
    "scan_project",
]
