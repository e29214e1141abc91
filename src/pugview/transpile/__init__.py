"""
Source transpile adapters.

A transpiler turns one view source file into Jinja2 template source. The
delimiter pair is passed on every call rather than set on the underlying
library, so concurrent engines with different delimiters do not interfere.

Built-in adapters:
- ``pug``: Pug/Jade markup via pypugjs (install the ``pug`` extra)
- ``jinja``: pass-through for views already written in Jinja2 syntax

Adapter modules are imported on first use so the pypugjs dependency is only
needed when the ``pug`` adapter is selected.

Usage:
    >>> from pugview.transpile import get_transpiler
    >>> transpile = get_transpiler("pug")
    >>> source = transpile(Path("views/pages/index.pug"), "{{", "}}")
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Callable, Dict, List

from pugview.exceptions import ConfigError

Transpiler = Callable[[Path, str, str], str]

# name -> module implementing ``transpile(path, left_delim, right_delim)``
_TRANSPILERS: Dict[str, str] = {
    "pug": "pugview.transpile.pug",
    "jinja": "pugview.transpile.jinja",
}

_LOADED: Dict[str, Transpiler] = {}


def register_transpiler(name: str, module: str) -> None:
    """Register a third-party adapter module under ``name``."""
    _TRANSPILERS[name] = module
    _LOADED.pop(name, None)


def available_transpilers() -> List[str]:
    return sorted(_TRANSPILERS)


def get_transpiler(name: str) -> Transpiler:
    """Return the ``transpile`` callable of the named adapter.

    Raises:
        ConfigError: If the adapter is unknown or its module cannot be imported
    """
    if name in _LOADED:
        return _LOADED[name]
    if name not in _TRANSPILERS:
        raise ConfigError(
            f"unknown transpiler '{name}'. Available: {', '.join(available_transpilers())}",
            context={"transpiler": name},
        )
    try:
        module = importlib.import_module(_TRANSPILERS[name])
    except ImportError as exc:
        raise ConfigError(
            f"transpiler '{name}' is not available: {exc}",
            context={"transpiler": name},
        ) from exc
    _LOADED[name] = module.transpile
    return module.transpile


__all__ = ["Transpiler", "available_transpilers", "get_transpiler", "register_transpiler"]
