"""
Host view-engine registry.

Engines register a class under a short name (the pug engine registers itself
as ``pug`` when :mod:`pugview` is imported). The host creates an engine by
name, calls ``init`` once before serving requests and ``get`` per request.

Usage:
    >>> from pugview.engines import create_engine
    >>>
    >>> engine = create_engine("pug")
    >>> engine.init({"view": {"ext": ".pug"}}, "app/views")
    >>> tmpl = engine.get("master.pug", "pages/app", "index.pug")
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable

from pugview.exceptions import ConfigError


@runtime_checkable
class ViewEngine(Protocol):
    """Interface a view engine exposes to the host."""

    def init(self, app_config: Optional[Mapping[str, Any]], base_dir: Union[str, Path]) -> None: ...

    def get(self, layout: str, path: str, name: str) -> Any: ...


_ENGINES: Dict[str, type] = {}


def add_engine(name: str, engine_class: type) -> None:
    """Register a view engine class.

    Raises:
        ValueError: If a different class is already registered under ``name``
    """
    existing = _ENGINES.get(name)
    if existing is not None and existing is not engine_class:
        raise ValueError(f"view engine name '{name}' is already added, skip it")
    _ENGINES[name] = engine_class


def get_engine(name: str) -> Optional[type]:
    return _ENGINES.get(name)


def available_engines() -> List[str]:
    return sorted(_ENGINES)


def create_engine(name: str, **kwargs: Any) -> ViewEngine:
    """Instantiate the engine registered under ``name``.

    Raises:
        ConfigError: If no engine is registered under ``name``
    """
    engine_class = _ENGINES.get(name)
    if engine_class is None:
        raise ConfigError(
            f"Unknown view engine: '{name}'. Available: {', '.join(available_engines())}",
            context={"engine": name},
        )
    return engine_class(**kwargs)


__all__ = ["ViewEngine", "add_engine", "available_engines", "create_engine", "get_engine"]
