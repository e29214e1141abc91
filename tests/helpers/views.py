"""View tree builders."""
from __future__ import annotations

from pathlib import Path
from typing import Dict

TESTDATA = Path(__file__).resolve().parent.parent / "testdata"

# Views written directly in Jinja2 syntax, so the engine can be exercised
# without the pug transpiler installed.
JINJA_VIEWS: Dict[str, str] = {
    "common/header.html": "<header>Hello {{ GreetName }}</header>",
    "common/footer.html": "<footer>footer</footer>",
    "common/partials/greet.html": "<span>{{ GreetName }}</span>",
    "layouts/master.html": (
        "<html><head><title>{% block title %}Master{% endblock %}</title></head>"
        "<body>{{ include('header.html') }}"
        "<main>{% block content %}{% endblock %}</main>"
        "{{ include('footer.html') }}</body></html>"
    ),
    "layouts/docs.html": (
        "<html><body class=\"docs\">{% block content %}{% endblock %}</body></html>"
    ),
    "pages/about.html": "{% block content %}<p>about</p>{% endblock %}",
    "pages/app/index.html": (
        "{% block title %}App Home{% endblock %}"
        "{% block content %}<p>{{ GreetName }} {{ PageName }}</p>{% endblock %}"
    ),
    "pages/user/index.html": (
        "{% block title %}User Home{% endblock %}"
        "{% block content %}<p>{{ GreetName }} {{ PageName }}</p>"
        "<form method=\"post\"></form>{% endblock %}"
    ),
}


def write_views(root: Path, files: Dict[str, str]) -> Path:
    """Write ``files`` (relative path -> content) under ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def jinja_config(**overrides) -> dict:
    """App config mapping for ``.html`` views in Jinja2 syntax."""
    view = {"ext": ".html", "transpiler": "jinja"}
    view.update(overrides)
    return {"view": view}
