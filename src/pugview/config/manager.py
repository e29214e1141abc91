"""
pugview configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from pugview.data import get_data_path, read_yaml
from pugview.exceptions import ConfigError
from pugview.utils.merge import deep_merge

logger = logging.getLogger(__name__)


def coerce_env_value(raw: str) -> Any:
    """Interpret a ``PUGVIEW_*`` override value.

    ``true``/``false`` in any case become booleans and JSON numbers, arrays
    and objects are decoded. Everything else stays a string, including
    delimiter pairs such as ``{{.}}`` and ``[[.]]``.
    """
    value = raw.strip()
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        decoded = json.loads(value)
    except ValueError:
        return value
    return value if decoded is None else decoded


class ConfigManager:
    """Load, merge, and validate view engine configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: PUGVIEW_<SECTION>__<KEY>
    2. Project config file passed as ``config_path`` (YAML)
    3. Bundled defaults: pugview.data/config/view.yaml
    """

    ENV_PREFIX = "PUGVIEW_"
    SCHEMA_FILE = "config.yaml"

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = Path(config_path) if config_path is not None else None
        self.core_config_path = get_data_path("config", "view.yaml")

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigError(f"config file does not exist: {path}", context={"path": str(path)})
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"config file must contain a mapping: {path}", context={"path": str(path)})
        return data

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(self.ENV_PREFIX):
                continue
            raw = key[len(self.ENV_PREFIX):]
            segs = [seg.lower() for seg in raw.split("__")]
            if not raw or any(seg == "" for seg in segs):
                raise ConfigError(f"Malformed {self.ENV_PREFIX}* key: '{key}'", context={"key": key})
            yield segs, coerce_env_value(os.environ[key])

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, value in self._iter_env_overrides():
            cur = cfg
            for part in path[:-1]:
                nxt = cur.get(part)
                if not isinstance(nxt, dict):
                    nxt = {}
                    cur[part] = nxt
                cur = nxt
            cur[path[-1]] = value
            logger.debug("config override from environment: %s", ".".join(path))

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_yaml("schemas", self.SCHEMA_FILE)
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
        if errors:
            details = [
                f"{'.'.join(str(p) for p in err.path) or '<root>'}: {err.message}"
                for err in errors
            ]
            raise ConfigError(
                "configuration is invalid:\n  " + "\n  ".join(details),
                context={"errors": details},
            )

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all sources.

        Args:
            validate: If True, validate the merged result against the bundled schema

        Returns:
            Merged configuration dictionary
        """
        cfg: Dict[str, Any] = deep_merge({}, self.load_yaml(self.core_config_path))

        if self.config_path is not None:
            cfg = deep_merge(cfg, self.load_yaml(self.config_path))

        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg


__all__ = ["ConfigManager", "coerce_env_value"]
