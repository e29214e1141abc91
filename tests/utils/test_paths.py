from __future__ import annotations

from pathlib import Path

import pytest

from pugview.exceptions import DirectoryNotFoundError
from pugview.utils.paths import dirs_path, files_path, glob_files, require_directory, template_key
from helpers.views import write_views


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    return write_views(
        tmp_path,
        {
            "pages/index.pug": "",
            "pages/notes.txt": "",
            "pages/app/index.pug": "",
            "pages/app/Login.pug": "",
            "pages/app/admin/users.pug": "",
        },
    )


def test_require_directory(tree: Path) -> None:
    assert require_directory(tree, "pages") == tree / "pages"

    with pytest.raises(DirectoryNotFoundError) as exc_info:
        require_directory(tree, "layouts")
    assert exc_info.value.scope == "layouts"
    assert exc_info.value.path == tree / "layouts"
    assert str(exc_info.value).startswith("layouts base dir does not exist: ")


def test_require_directory_rejects_file(tree: Path) -> None:
    (tree / "common").write_text("", encoding="utf-8")

    with pytest.raises(DirectoryNotFoundError):
        require_directory(tree, "common")


def test_dirs_path_starts_with_base(tree: Path) -> None:
    pages = tree / "pages"

    assert dirs_path(pages) == [pages, pages / "app", pages / "app" / "admin"]
    assert dirs_path(pages, recursive=False) == [pages, pages / "app"]


def test_files_path_ignores_extension(tree: Path) -> None:
    pages = tree / "pages"

    names = [p.relative_to(pages).as_posix() for p in files_path(pages)]
    assert names == [
        "app/Login.pug",
        "app/admin/users.pug",
        "app/index.pug",
        "index.pug",
        "notes.txt",
    ]
    assert [p.name for p in files_path(pages, recursive=False)] == ["index.pug", "notes.txt"]


def test_glob_files_is_flat_and_filtered(tree: Path) -> None:
    assert [p.name for p in glob_files(tree / "pages", ".pug")] == ["index.pug"]
    assert [p.name for p in glob_files(tree / "pages" / "app", ".pug")] == ["Login.pug", "index.pug"]


def test_template_key(tree: Path) -> None:
    file = tree / "pages" / "app" / "Login.pug"

    assert template_key(tree, file, case_sensitive=False) == "pages/app/login.pug"
    assert template_key(tree, file, case_sensitive=True) == "pages/app/Login.pug"
