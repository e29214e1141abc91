"""Layout/page composition for the pug view engine.

Builds every template registry for one initialization run:

- common partials (``common/**``), loaded fatally since every page may include them
- one registry per layout (``layouts/*``) holding each page (``pages/**``)
  compiled against that layout
- the ``nolayout`` registry holding standalone pages (when the default layout
  is disabled) and error pages (``errors/**``, when present)

Per-file failures in the page scopes are collected and raised together as
``AggregateCompileError`` once every file has been tried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from jinja2 import DictLoader, Environment, Template, TemplateError

from pugview.anticsrf import AntiCSRFField
from pugview.config.view import ViewConfig
from pugview.exceptions import (
    AggregateCompileError,
    CompileError,
    PugViewError,
    TemplateFailure,
)
from pugview.funcs import make_include
from pugview.templates import Templates, ViewTemplate
from pugview.transpile import get_transpiler
from pugview.utils.paths import dirs_path, files_path, glob_files, require_directory, template_key
from pugview.utils.pool import BufferPool

logger = logging.getLogger(__name__)

NO_LAYOUT = "nolayout"

COMMON_DIR = "common"
LAYOUTS_DIR = "layouts"
PAGES_DIR = "pages"
ERRORS_DIR = "errors"


@dataclass
class CompositionResult:
    """Registries produced by a successful composition run."""

    environment: Environment
    common: Templates
    layouts: Dict[str, Templates]


class Composer:
    """Discovers, transpiles and compiles the views under ``base_dir``.

    One instance serves one initialization run. Sources are kept in memory
    behind a ``DictLoader`` so a page can extend its layout by name without
    writing scratch files.
    """

    def __init__(
        self,
        base_dir: Path,
        config: ViewConfig,
        *,
        functions: Optional[Mapping[str, Callable[..., Any]]] = None,
        pool: Optional[BufferPool] = None,
        engine_name: str = "pug",
    ) -> None:
        self.base_dir = Path(base_dir)
        self.config = config
        self.transpiler = get_transpiler(config.transpiler)
        self.anti_csrf = AntiCSRFField(engine_name, config.left_delim, config.right_delim)
        self.pool = pool or BufferPool()

        self.common = Templates()
        self.layouts: Dict[str, Templates] = {}
        self.failures: List[TemplateFailure] = []

        self._sources: Dict[str, str] = {}
        self.environment = self._create_environment(functions or {})

    def _create_environment(self, functions: Mapping[str, Callable[..., Any]]) -> Environment:
        env = Environment(
            loader=DictLoader(self._sources),
            autoescape=True,
            variable_start_string=self.config.left_delim,
            variable_end_string=self.config.right_delim,
        )
        env.globals.update(functions)
        include = make_include(self.common, self.pool, self.config.case_sensitive)
        env.globals["include"] = include
        env.globals["import"] = include
        return env

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _rel(self, path: Path) -> str:
        return path.relative_to(self.base_dir).as_posix()

    def _key(self, path: Path) -> str:
        return template_key(self.base_dir, path, self.config.case_sensitive)

    def _source(self, path: Path) -> str:
        """Transpile ``path`` and insert the anti-CSRF field."""
        text = self.transpiler(path, self.config.left_delim, self.config.right_delim)
        return self.anti_csrf.insert_on_string(text)

    def _compile(self, name: str, source: str, path: Path) -> Template:
        self._sources[name] = source
        try:
            return self.environment.get_template(name)
        except TemplateError as exc:
            raise CompileError(f"{self._rel(path)}: {exc}", path=path) from exc

    def _extends(self, layout_name: str) -> str:
        env = self.environment
        return f"{env.block_start_string} extends {layout_name!r} {env.block_end_string}"

    def _fail(self, path: Path, error: PugViewError, layout: Optional[str] = None) -> None:
        logger.debug("failed to load %s: %s", self._rel(path), error)
        self.failures.append(TemplateFailure(path=path, error=error, layout=layout))

    # -------------------------------------------------------------------------
    # Scopes
    # -------------------------------------------------------------------------

    def load_common_templates(self) -> None:
        """Load ``common/**``; the first error aborts the run."""
        common_dir = require_directory(self.base_dir, COMMON_DIR)
        ext = self.config.ext

        for file in files_path(common_dir):
            if not file.name.endswith(ext):
                logger.warning("pugview: not a valid template extension[%s]: %s", ext, self._rel(file))
                continue

            key = self._key(file)
            logger.debug("Parsing file: %s", self._rel(file))
            tmpl = self._compile(self._rel(file), self._source(file), file)
            self.common.add(key, ViewTemplate(key, {file.name: tmpl}, default=file.name))

    def find_layouts(self) -> List[Path]:
        layouts_dir = require_directory(self.base_dir, LAYOUTS_DIR)
        return glob_files(layouts_dir, self.config.ext)

    def load_layout_templates(self, layouts: List[Path]) -> None:
        """Compile every page against every layout."""
        pages_dir = require_directory(self.base_dir, PAGES_DIR)
        dirs = dirs_path(pages_dir)

        for layout in layouts:
            layout_key = layout.name.lower()
            registry = self.layouts.setdefault(layout_key, Templates())
            layout_name = self._rel(layout)

            try:
                self._compile(layout_name, self._source(layout), layout)
            except PugViewError as exc:
                # Without a usable layout none of its pages can compile.
                self._fail(layout, exc, layout_key)
                continue

            for directory in dirs:
                for file in glob_files(directory, self.config.ext):
                    self._add_layout_page(registry, layout, layout_name, file)

    def _add_layout_page(self, registry: Templates, layout: Path, layout_name: str, file: Path) -> None:
        key = self._key(file)
        page_name = self._rel(file)
        logger.debug("Parsing files: %s, %s", page_name, layout_name)
        try:
            source = self._source(file)
            page = self._compile(page_name, source, file)
            composite = self._compile(
                f"{layout_name}::{page_name}",
                self._extends(layout_name) + source,
                file,
            )
            # Same file name on both sides: the layout definition wins.
            named = {file.name: page, layout.name: composite}
            registry.add(key, ViewTemplate(key, named, default=layout.name))
        except PugViewError as exc:
            self._fail(file, exc, layout.name.lower())

    def load_non_layout_templates(self, scope: str) -> None:
        """Compile ``scope/**`` standalone into the ``nolayout`` registry."""
        scope_dir = require_directory(self.base_dir, scope)
        registry = self.layouts.setdefault(NO_LAYOUT, Templates())

        for directory in dirs_path(scope_dir):
            for file in glob_files(directory, self.config.ext):
                rel = self._rel(file)
                key = self.config.fold(f"{NO_LAYOUT}-{rel}")
                logger.debug("Parsing file: %s", rel)
                try:
                    tmpl = self._compile(rel, self._source(file), file)
                    registry.add(key, ViewTemplate(key, {file.name: tmpl}, default=file.name))
                except PugViewError as exc:
                    self._fail(file, exc)

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def compose(self) -> CompositionResult:
        """Run every scope and return the registries.

        Raises:
            DirectoryNotFoundError: If common/, layouts/ or pages/ is missing
            TranspileError, CompileError, DuplicateKeyError: For a broken common template
            AggregateCompileError: If any layout, page or error template failed
        """
        self.load_common_templates()
        layouts = self.find_layouts()
        self.load_layout_templates(layouts)

        if not self.config.default_layout:
            self.load_non_layout_templates(PAGES_DIR)

        if (self.base_dir / ERRORS_DIR).is_dir():
            self.load_non_layout_templates(ERRORS_DIR)
        else:
            logger.debug("no %s directory under %s, skipping", ERRORS_DIR, self.base_dir)

        if self.failures:
            logger.error(
                "View templates parsing error(s):\n    %s",
                "\n    ".join(str(f) for f in self.failures),
            )
            raise AggregateCompileError(self.failures)

        return CompositionResult(
            environment=self.environment,
            common=self.common,
            layouts=self.layouts,
        )


__all__ = [
    "Composer",
    "CompositionResult",
    "NO_LAYOUT",
    "COMMON_DIR",
    "LAYOUTS_DIR",
    "PAGES_DIR",
    "ERRORS_DIR",
]
