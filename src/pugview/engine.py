"""Pug view engine: initialization and request-time template lookup."""
from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from jinja2 import Environment

from pugview.composition import NO_LAYOUT, Composer
from pugview.config.view import ViewConfig
from pugview.engines import add_engine
from pugview.exceptions import DirectoryNotFoundError, TemplateNotFoundError
from pugview.funcs import template_funcs
from pugview.templates import Templates, ViewTemplate
from pugview.utils.pool import BufferPool

logger = logging.getLogger(__name__)


class PugViewEngine:
    """Pug (formerly Jade) view engine.

    ``init`` discovers and compiles every view once; ``get`` is a pure
    dictionary lookup afterwards. Registries are built completely before being
    published on the engine, so a failed ``init`` leaves the previous state
    untouched and concurrent ``get``/render calls never see a partial build.
    """

    name = "pug"

    def __init__(self, functions: Optional[Mapping[str, Callable[..., Any]]] = None) -> None:
        self.functions: Dict[str, Callable[..., Any]] = dict(functions or {})
        self.base_dir: Optional[Path] = None
        self.app_config: Optional[Mapping[str, Any]] = None
        self.config: ViewConfig = ViewConfig()
        self.environment: Optional[Environment] = None
        self.common_templates = Templates()
        self.layouts: Dict[str, Templates] = {}
        self._pool = BufferPool()

    @property
    def case_sensitive(self) -> bool:
        return self.config.case_sensitive

    def init(
        self,
        app_config: Union[Mapping[str, Any], ViewConfig, None],
        base_dir: Union[str, Path],
    ) -> None:
        """Initialize the engine from the application config and views base dir.

        Args:
            app_config: Application config mapping with a ``view`` section, or a
                ready ``ViewConfig``
            base_dir: Views base directory holding common/, layouts/, pages/
                and optionally errors/

        Raises:
            ConfigError: Missing directories or invalid view configuration
            TranspileError, CompileError, DuplicateKeyError: Broken common template
            AggregateCompileError: One or more layouts/pages/error pages failed
        """
        base_dir = Path(base_dir)
        if not base_dir.is_dir():
            raise DirectoryNotFoundError(
                f"views base dir does not exist: {base_dir}",
                path=base_dir,
                scope="views",
            )

        if isinstance(app_config, ViewConfig):
            config = app_config
        else:
            config = ViewConfig.from_mapping(app_config)

        functions = template_funcs()
        functions.update(self.functions)

        composer = Composer(
            base_dir,
            config,
            functions=functions,
            pool=self._pool,
            engine_name=self.name,
        )
        result = composer.compose()

        self.base_dir = base_dir
        self.app_config = None if isinstance(app_config, ViewConfig) else app_config
        self.config = config
        self.environment = result.environment
        self.common_templates = result.common
        self.layouts = result.layouts

        logger.debug(
            "pugview: loaded %d common template(s), %d layout scope(s) from %s",
            len(self.common_templates),
            len(self.layouts),
            base_dir,
        )

    def get(self, layout: str, path: str, name: str) -> ViewTemplate:
        """Return the template for ``layout``/``path``/``name``.

        An empty ``layout`` selects the templates compiled without a layout.

        Raises:
            TemplateNotFoundError: If the layout or the template is unknown
        """
        if not layout:
            layout = NO_LAYOUT
        if not self.case_sensitive:
            layout = layout.lower()

        registry = self.layouts.get(layout)
        if registry is not None:
            key = posixpath.normpath(posixpath.join(path.replace("\\", "/"), name))
            if layout == NO_LAYOUT:
                key = f"{NO_LAYOUT}-{key}"
            tmpl = registry.lookup(self.config.fold(key))
            if tmpl is not None:
                return tmpl

        raise TemplateNotFoundError(
            f"template not found: layout={layout!r} path={path!r} name={name!r}",
            context={"layout": layout, "path": path, "name": name},
        )


add_engine(PugViewEngine.name, PugViewEngine)


__all__ = ["PugViewEngine"]
