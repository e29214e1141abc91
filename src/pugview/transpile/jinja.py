"""Pass-through adapter for views authored directly in Jinja2 syntax."""
from __future__ import annotations

from pathlib import Path

from pugview.exceptions import TranspileError


def transpile(path: Path, left_delim: str, right_delim: str) -> str:
    # Delimiters are applied by the Jinja2 environment; the source is used verbatim.
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TranspileError(f"cannot read {path}: {exc}", path=path) from exc


__all__ = ["transpile"]
