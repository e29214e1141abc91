"""Pug (Jade) to Jinja2 transpiler backed by pypugjs."""
from __future__ import annotations

from pathlib import Path

from pypugjs.ext.jinja import Compiler
from pypugjs.utils import process

from pugview.exceptions import TranspileError


def transpile(path: Path, left_delim: str, right_delim: str) -> str:
    """Transpile the pug file at ``path`` into Jinja2 source.

    Interpolations (``#{expr}``, ``= expr``) are emitted with the given
    variable delimiters.
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TranspileError(f"cannot read {path}: {exc}", path=path) from exc

    try:
        return process(
            source,
            filename=str(path),
            compiler=Compiler,
            variable_start_string=left_delim,
            variable_end_string=right_delim,
        )
    except Exception as exc:
        # pypugjs reports parse failures with assorted exception types.
        raise TranspileError(f"{path}: {exc}", path=path) from exc


__all__ = ["transpile"]
