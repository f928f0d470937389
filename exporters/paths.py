"""Path display helpers shared by the exporters."""

from pathlib import Path
from typing import Optional, Union


def display_path(path: Union[str, Path], base: Optional[Path] = None) -> str:
    """Get the display form of a path: relative to base when possible, forward slashes."""
    if base is None:
        return str(path).replace("\\", "/")
    try:
        rel_path = Path(path).resolve().relative_to(base.resolve())
        return str(rel_path).replace("\\", "/")
    except ValueError:
        return str(path).replace("\\", "/")
