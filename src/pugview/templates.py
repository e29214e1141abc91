"""Compiled view templates and the per-scope template registry."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional

from jinja2 import Template

from pugview.exceptions import DuplicateKeyError, TemplateNotFoundError


class ViewTemplate:
    """A compiled view addressable by one or more internal names.

    A page compiled against a layout answers to the layout's file name (page
    content rendered inside the layout) and to the page's own file name (page
    content only). Standalone templates have a single name.
    """

    def __init__(self, key: str, templates: Mapping[str, Template], default: str) -> None:
        if default not in templates:
            raise ValueError(f"default template name '{default}' is not one of {sorted(templates)}")
        self.key = key
        self.default_name = default
        self._templates: Dict[str, Template] = dict(templates)

    @property
    def names(self) -> List[str]:
        return sorted(self._templates)

    def lookup(self, name: str) -> Optional[Template]:
        return self._templates.get(name)

    def _select(self, name: Optional[str]) -> Template:
        tmpl = self._templates.get(name or self.default_name)
        if tmpl is None:
            raise TemplateNotFoundError(
                f"template '{self.key}' has no sub-template named '{name}'",
                context={"key": self.key, "name": name, "names": self.names},
            )
        return tmpl

    def execute_named(self, name: str, data: Optional[Mapping[str, Any]] = None) -> str:
        return self._select(name).render(dict(data or {}))

    def render(self, data: Optional[Mapping[str, Any]] = None, *, name: Optional[str] = None) -> str:
        """Render ``name`` (default: the layout, or the page when standalone)."""
        return self._select(name).render(dict(data or {}))

    def generate(self, data: Optional[Mapping[str, Any]] = None, *, name: Optional[str] = None) -> Iterator[str]:
        return self._select(name).generate(dict(data or {}))

    def __repr__(self) -> str:
        return f"<ViewTemplate {self.key!r} names={self.names}>"


class Templates:
    """Registry of compiled templates keyed by template key.

    Keys are matched exactly; callers fold case before ``add`` and
    ``lookup`` according to the engine configuration. The first registration
    of a key wins and any later one raises ``DuplicateKeyError``.
    """

    def __init__(self) -> None:
        self._templates: Dict[str, ViewTemplate] = {}

    def add(self, key: str, tmpl: ViewTemplate) -> None:
        if key in self._templates:
            raise DuplicateKeyError(f"template key already exists: {key}", key=key)
        self._templates[key] = tmpl

    def lookup(self, key: str) -> Optional[ViewTemplate]:
        return self._templates.get(key)

    def keys(self) -> List[str]:
        return sorted(self._templates)

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


__all__ = ["Templates", "ViewTemplate"]
