"""Directory scanning for view scopes.

Layout relative to the views base directory::

    common/**/*.<ext>    common partials (required)
    layouts/*.<ext>      one file per layout, flat (required)
    pages/**/*.<ext>     page fragments (required)
    errors/**/*.<ext>    error pages (optional)

All listings are sorted so registration order, and therefore which of two
colliding files is reported as the duplicate, is deterministic.
"""
from __future__ import annotations

from pathlib import Path
from typing import List

from pugview.exceptions import DirectoryNotFoundError


def require_directory(base_dir: Path, scope: str) -> Path:
    """Return ``base_dir / scope``, raising if it is not an existing directory."""
    path = Path(base_dir) / scope
    if not path.is_dir():
        raise DirectoryNotFoundError(
            f"{scope} base dir does not exist: {path}",
            path=path,
            scope=scope,
        )
    return path


def dirs_path(base_dir: Path, recursive: bool = True) -> List[Path]:
    """List ``base_dir`` itself followed by its subdirectories."""
    base_dir = Path(base_dir)
    if recursive:
        subdirs = [p for p in base_dir.rglob("*") if p.is_dir()]
    else:
        subdirs = [p for p in base_dir.iterdir() if p.is_dir()]
    return [base_dir, *sorted(subdirs)]


def files_path(base_dir: Path, recursive: bool = True) -> List[Path]:
    """List every regular file under ``base_dir`` regardless of extension."""
    base_dir = Path(base_dir)
    candidates = base_dir.rglob("*") if recursive else base_dir.iterdir()
    return sorted(p for p in candidates if p.is_file())


def glob_files(directory: Path, ext: str) -> List[Path]:
    """Files directly inside ``directory`` whose name ends with ``ext``."""
    return sorted(p for p in Path(directory).glob(f"*{ext}") if p.is_file())


def template_key(base_dir: Path, file_path: Path, case_sensitive: bool) -> str:
    """Derive the registry key for ``file_path``.

    Keys are POSIX paths relative to the views base directory:
      <base>/pages/app/index.pug -> "pages/app/index.pug"
    """
    key = Path(file_path).relative_to(base_dir).as_posix()
    return key if case_sensitive else key.lower()


__all__ = ["require_directory", "dirs_path", "files_path", "glob_files", "template_key"]
