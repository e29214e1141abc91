"""Exception types raised by the pug view engine.

Structural problems (missing directories, bad configuration) surface as
``ConfigError`` immediately. Per-file problems found while bulk loading pages
are recorded as ``TemplateFailure`` entries and reported together through
``AggregateCompileError``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence


class PugViewError(Exception):
    """Base exception for the pug view engine."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(PugViewError, ValueError):
    """Raised for invalid view configuration."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PugViewError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class DirectoryNotFoundError(ConfigError):
    """Raised when the views base dir or a required scope dir is missing."""

    def __init__(self, message: str, *, path: Path, scope: str) -> None:
        super().__init__(message, context={"path": str(path), "scope": scope})
        self.path = path
        self.scope = scope


class TranspileError(PugViewError):
    """Raised when a view source file cannot be transpiled."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message, context={"path": str(path)})
        self.path = path


class CompileError(PugViewError):
    """Raised when transpiled source cannot be compiled into a template."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message, context={"path": str(path)})
        self.path = path


class DuplicateKeyError(PugViewError, ValueError):
    """Raised when a template key is registered twice in the same registry."""

    def __init__(self, message: str, *, key: str) -> None:
        PugViewError.__init__(self, message, context={"key": key})
        ValueError.__init__(self, message)
        self.key = key


class TemplateNotFoundError(PugViewError, LookupError):
    """Raised when a layout/path/name triple does not resolve to a template."""

    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None) -> None:
        PugViewError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class FailureKind(Enum):
    TRANSPILE = "transpile"
    COMPILE = "compile"
    DUPLICATE_KEY = "duplicate-key"


@dataclass(frozen=True)
class TemplateFailure:
    """One file that could not be registered during bulk loading."""

    path: Path
    error: PugViewError
    layout: Optional[str] = None

    @property
    def kind(self) -> FailureKind:
        if isinstance(self.error, TranspileError):
            return FailureKind.TRANSPILE
        if isinstance(self.error, DuplicateKeyError):
            return FailureKind.DUPLICATE_KEY
        return FailureKind.COMPILE

    def __str__(self) -> str:
        where = f" (layout {self.layout})" if self.layout else ""
        return f"[{self.kind.value}] {self.path}{where}: {self.error}"


class AggregateCompileError(PugViewError):
    """Raised when one or more view files failed to load."""

    def __init__(self, failures: Sequence[TemplateFailure]) -> None:
        self.failures: List[TemplateFailure] = list(failures)
        lines = "\n    ".join(str(f) for f in self.failures)
        message = f"error processing templates, {len(self.failures)} failure(s):\n    {lines}"
        super().__init__(
            message,
            context={"failures": [str(f) for f in self.failures]},
        )

    def by_kind(self, kind: FailureKind) -> List[TemplateFailure]:
        return [f for f in self.failures if f.kind is kind]


__all__ = [
    "PugViewError",
    "ConfigError",
    "DirectoryNotFoundError",
    "TranspileError",
    "CompileError",
    "DuplicateKeyError",
    "TemplateNotFoundError",
    "FailureKind",
    "TemplateFailure",
    "AggregateCompileError",
]
