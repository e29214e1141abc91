"""pugview command line interface."""
from __future__ import annotations

from ._output import OutputFormatter

__all__ = ["OutputFormatter"]
