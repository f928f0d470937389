"""ADR data model and configuration shared by the scanner and exporters."""

__version__ = "0.1.0"

from .model import (
    AdrReference,
    AdrDocument,
    AdrIssue,
    AdrIssueType,
    AdrScanResult,
    DOCUMENT_ISSUE_TYPES,
    format_comment_type,
)
from .config import AdrConfig, LanguageConfig, ConfigError, load_config, create_default_config

__all__ = [
    "AdrReference",
    "AdrDocument",
    "AdrIssue",
    "AdrIssueType",
    "AdrScanResult",
    "DOCUMENT_ISSUE_TYPES",
    "format_comment_type",
    "AdrConfig",
    "LanguageConfig",
    "ConfigError",
    "load_config",
    "create_default_config",
]
