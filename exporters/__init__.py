"""Exporters for converting scan results to various report formats."""

from pathlib import Path
from typing import Optional

from adr.model import AdrScanResult
from .text_exporter import to_text
from .json_exporter import to_json
from .html_exporter import to_html

__all__ = ["to_text", "to_json", "to_html", "render_report"]


def render_report(
    result: AdrScanResult,
    fmt: str = "text",
    base: Optional[Path] = None,
    style: str = "tree",
) -> str:
    """Render a scan result in the named format (text, json or html)."""
    if fmt == "json":
        return to_json(result)
    if fmt == "html":
        return to_html(result, base=base)
    if fmt == "text":
        return to_text(result, base=base, style=style)
    raise ValueError(f"Unknown report format: {fmt}")
