"""Configuration loading for the pug view engine."""
from __future__ import annotations

from .manager import ConfigManager
from .view import ViewConfig, parse_delimiters

__all__ = ["ConfigManager", "ViewConfig", "parse_delimiters"]
