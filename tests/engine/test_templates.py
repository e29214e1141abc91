"""Template registry and multi-name view templates."""
from __future__ import annotations

import pytest
from jinja2 import Environment

from pugview.exceptions import DuplicateKeyError, TemplateNotFoundError
from pugview.templates import Templates, ViewTemplate


@pytest.fixture
def env() -> Environment:
    return Environment(autoescape=True)


def _view(env: Environment, key: str = "pages/index.pug") -> ViewTemplate:
    return ViewTemplate(
        key,
        {
            "index.pug": env.from_string("<p>{{ name }}</p>"),
            "master.pug": env.from_string("<html><p>{{ name }}</p></html>"),
        },
        default="master.pug",
    )


def test_default_name_must_exist(env: Environment) -> None:
    with pytest.raises(ValueError, match="default template name"):
        ViewTemplate("k", {"a.pug": env.from_string("")}, default="b.pug")


def test_render_default_and_named(env: Environment) -> None:
    view = _view(env)

    assert view.render({"name": "x"}) == "<html><p>x</p></html>"
    assert view.render({"name": "x"}, name="index.pug") == "<p>x</p>"
    assert "".join(view.generate({"name": "y"})) == "<html><p>y</p></html>"
    assert view.lookup("index.pug") is not None
    assert view.lookup("nope.pug") is None


def test_execute_named_unknown(env: Environment) -> None:
    with pytest.raises(TemplateNotFoundError) as exc_info:
        _view(env).execute_named("other.pug", {})
    assert exc_info.value.context["names"] == ["index.pug", "master.pug"]


def test_registry_add_and_lookup(env: Environment) -> None:
    registry = Templates()
    view = _view(env)
    registry.add(view.key, view)

    assert registry.lookup("pages/index.pug") is view
    assert registry.lookup("pages/other.pug") is None
    assert "pages/index.pug" in registry
    assert len(registry) == 1
    assert list(registry) == ["pages/index.pug"]


def test_registry_first_registration_wins(env: Environment) -> None:
    registry = Templates()
    first, second = _view(env), _view(env)
    registry.add("pages/index.pug", first)

    with pytest.raises(DuplicateKeyError) as exc_info:
        registry.add("pages/index.pug", second)

    assert exc_info.value.key == "pages/index.pug"
    assert registry.lookup("pages/index.pug") is first
