"""Layered configuration: bundled defaults, project file, environment."""
from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from pugview.config import ConfigManager
from pugview.config.manager import coerce_env_value
from pugview.exceptions import ConfigError


def _write(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_bundled_defaults() -> None:
    cfg = ConfigManager().load_config()

    assert cfg["view"] == {
        "ext": ".pug",
        "case_sensitive": False,
        "default_layout": True,
        "delimiters": "{{.}}",
        "transpiler": "pug",
    }


def test_project_file_merges_over_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path / "app.yaml", {"view": {"case_sensitive": True}, "app": {"name": "demo"}})

    cfg = ConfigManager(path).load_config()

    assert cfg["view"]["case_sensitive"] is True
    assert cfg["view"]["ext"] == ".pug"
    assert cfg["app"] == {"name": "demo"}


def test_env_overrides_take_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path / "app.yaml", {"view": {"case_sensitive": False}})
    monkeypatch.setenv("PUGVIEW_VIEW__CASE_SENSITIVE", "true")
    monkeypatch.setenv("PUGVIEW_VIEW__DELIMITERS", "{{.}}")
    monkeypatch.setenv("PUGVIEW_VIEW__EXT", ".jade")

    cfg = ConfigManager(path).load_config()

    assert cfg["view"]["case_sensitive"] is True
    assert cfg["view"]["delimiters"] == "{{.}}"
    assert cfg["view"]["ext"] == ".jade"


def test_env_override_creates_nested_sections(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUGVIEW_APP__LIMITS__DEPTH", "3")
    monkeypatch.setenv("PUGVIEW_APP__RATIO", "0.5")
    monkeypatch.setenv("PUGVIEW_APP__TAGS", '["a", "b"]')

    cfg = ConfigManager().load_config()

    assert cfg["app"] == {"limits": {"depth": 3}, "ratio": 0.5, "tags": ["a", "b"]}


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("true", True),
        (" FALSE ", False),
        ("3", 3),
        ("-2", -2),
        ("0.5", 0.5),
        ('["a", "b"]', ["a", "b"]),
        ('{"k": 1}', {"k": 1}),
        ("{{.}}", "{{.}}"),
        ("[[.]]", "[[.]]"),
        (".jade", ".jade"),
        ("null", "null"),
        ("plain text", "plain text"),
    ],
)
def test_coerce_env_value(raw: str, expected) -> None:
    assert coerce_env_value(raw) == expected


def test_malformed_env_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUGVIEW_VIEW____EXT", ".pug")

    with pytest.raises(ConfigError, match="Malformed PUGVIEW_"):
        ConfigManager().load_config()


@pytest.mark.parametrize(
    "view",
    [
        {"case_sensitive": 3},
        {"transpiler": "erb"},
        {"ext": ""},
        {"delimiters": 5},
    ],
)
def test_schema_rejects_invalid_values(tmp_path: Path, view: dict) -> None:
    path = _write(tmp_path / "app.yaml", {"view": view})

    with pytest.raises(ConfigError) as exc_info:
        ConfigManager(path).load_config()
    assert exc_info.value.context["errors"]
    assert str(exc_info.value).startswith("configuration is invalid")


def test_validation_can_be_skipped(tmp_path: Path) -> None:
    path = _write(tmp_path / "app.yaml", {"view": {"transpiler": "erb"}})

    assert ConfigManager(path).load_config(validate=False)["view"]["transpiler"] == "erb"


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="config file does not exist"):
        ConfigManager(tmp_path / "missing.yaml").load_config()


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("view: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid YAML"):
        ConfigManager(path).load_config()


def test_non_mapping_yaml(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="must contain a mapping"):
        ConfigManager(path).load_config()


def test_empty_file_keeps_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert ConfigManager(path).load_config()["view"]["ext"] == ".pug"
