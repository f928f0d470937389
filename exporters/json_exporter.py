"""JSON exporter for scan results (machine-friendly format)."""

import json

from adr.model import AdrScanResult


def to_json(result: AdrScanResult, indent: int = 2) -> str:
    """
    Convert a scan result to JSON.

    Field names follow the report contract (``commentType``, ``adrId``, ...),
    so the output can be loaded back with ``AdrScanResult.from_dict``.

    Args:
        result: The scan result to export.
        indent: JSON indentation level.

    Returns:
        JSON string representation of the result.
    """
    return json.dumps(result.to_dict(), indent=indent)
