"""Filesystem scanning, buffer pooling and merge helpers."""
from __future__ import annotations

from .merge import deep_merge
from .paths import dirs_path, files_path, glob_files, require_directory, template_key
from .pool import BufferPool

__all__ = [
    "BufferPool",
    "deep_merge",
    "dirs_path",
    "files_path",
    "glob_files",
    "require_directory",
    "template_key",
]
