"""
pugview - Pug (Jade) view engine

Discovers view sources under a views base directory, compiles every page
against every layout on Jinja2, and resolves ``(layout, path, name)`` to a
compiled template at request time.

Pug markup is transpiled with pypugjs (https://github.com/kakulukia/pypugjs).
"""

__version__ = "1.0.1"

from pugview.engine import PugViewEngine
from pugview.engines import add_engine, create_engine, get_engine
from pugview.exceptions import (
    AggregateCompileError,
    CompileError,
    ConfigError,
    DirectoryNotFoundError,
    DuplicateKeyError,
    PugViewError,
    TemplateNotFoundError,
    TranspileError,
)
from pugview.funcs import add_template_func

__all__ = [
    "__version__",
    "PugViewEngine",
    "add_engine",
    "add_template_func",
    "create_engine",
    "get_engine",
    "AggregateCompileError",
    "CompileError",
    "ConfigError",
    "DirectoryNotFoundError",
    "DuplicateKeyError",
    "PugViewError",
    "TemplateNotFoundError",
    "TranspileError",
]
