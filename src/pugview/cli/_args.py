"""Argument helpers shared by CLI commands."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from pugview.config import ConfigManager


def add_views_dir_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("views_dir", type=Path, help="Views base directory (common/, layouts/, pages/)")


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file merged over the bundled defaults",
    )


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Output as JSON")


def load_app_config(args: argparse.Namespace) -> Dict[str, Any]:
    return ConfigManager(getattr(args, "config", None)).load_config()


__all__ = ["add_views_dir_arg", "add_config_flag", "add_json_flag", "load_app_config"]
