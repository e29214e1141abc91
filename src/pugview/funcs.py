"""Template function table.

Hosts extend the process-wide default table with ``add_template_func``
before initializing an engine. Each engine snapshots the table at init and
adds its own ``include``/``import`` functions bound to its own common
template registry.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from jinja2 import pass_context
from jinja2.runtime import Context
from markupsafe import Markup

from pugview.anticsrf import FIELD_NAME, TOKEN_FUNC
from pugview.templates import Templates
from pugview.utils.pool import BufferPool

logger = logging.getLogger(__name__)

COMMON_SCOPE = "common"


@pass_context
def anticsrftoken(context: Context) -> str:
    """Default token provider: reads ``anti_csrf_token`` from the view args."""
    value = context.get(FIELD_NAME)
    return "" if value is None else str(value)


_TEMPLATE_FUNCS: Dict[str, Callable[..., Any]] = {
    TOKEN_FUNC: anticsrftoken,
}


def add_template_func(funcs: Mapping[str, Callable[..., Any]]) -> None:
    """Add or replace functions in the default template function table."""
    _TEMPLATE_FUNCS.update(funcs)


def template_funcs() -> Dict[str, Callable[..., Any]]:
    """Return a copy of the default template function table."""
    return dict(_TEMPLATE_FUNCS)


def common_template_name(name: str) -> str:
    """Normalize an include name into the common scope (``header.pug`` -> ``common/header.pug``)."""
    name = name.replace("\\", "/")
    if not name.startswith(COMMON_SCOPE):
        name = f"{COMMON_SCOPE}/{name}"
    return name


def make_include(
    common: Templates,
    pool: BufferPool,
    case_sensitive: bool = False,
) -> Callable[..., Markup]:
    """Build the ``include`` template function for one engine.

    The returned function renders a common template with the given view args
    (the caller's full context when omitted). A missing template or a render
    failure is logged and yields empty output so the including page still
    renders.
    """

    @pass_context
    def include(context: Context, name: str, view_args: Optional[Mapping[str, Any]] = None) -> Markup:
        key = common_template_name(name)
        if not case_sensitive:
            key = key.lower()

        tmpl = common.lookup(key)
        if tmpl is None:
            logger.warning("pugview: common template not found: %s", key)
            return Markup("")

        data = dict(view_args) if view_args is not None else context.get_all()
        with pool.buffer() as buf:
            try:
                for chunk in tmpl.generate(data):
                    buf.write(chunk)
            except Exception as exc:
                logger.error("pugview: error rendering common template %s: %s", key, exc)
                return Markup("")
            return Markup(buf.getvalue())

    return include


__all__ = [
    "COMMON_SCOPE",
    "add_template_func",
    "anticsrftoken",
    "common_template_name",
    "make_include",
    "template_funcs",
]
