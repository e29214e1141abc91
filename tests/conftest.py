import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'pugview' and tests/helpers as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from helpers.views import JINJA_VIEWS, TESTDATA, write_views  # noqa: E402


@pytest.fixture
def views_dir(tmp_path: Path) -> Path:
    """A complete views tree (common/, layouts/, pages/) in Jinja2 syntax."""
    return write_views(tmp_path / "views", JINJA_VIEWS)


@pytest.fixture
def pug_views_dir() -> Path:
    return TESTDATA / "views"


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Project config selecting the Jinja2 pass-through for ``.html`` views."""
    path = tmp_path / "pugview.yaml"
    path.write_text("view:\n  ext: .html\n  transpiler: jinja\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for key in list(os.environ):
        if key.startswith("PUGVIEW_"):
            monkeypatch.delenv(key, raising=False)
