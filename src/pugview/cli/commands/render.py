"""
pugview render command.

SUMMARY: Render one view to stdout

Initializes the engine, resolves LAYOUT/PATH/NAME and renders it with data
read from a YAML or JSON file. Pass an empty LAYOUT ("") for no-layout views.
"""

from __future__ import annotations

import argparse
from pathlib import Path

import yaml

from pugview.cli._args import add_config_flag, add_views_dir_arg, load_app_config
from pugview.cli._output import OutputFormatter
from pugview.engine import PugViewEngine
from pugview.exceptions import PugViewError

SUMMARY = "Render one view to stdout"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_views_dir_arg(parser)
    parser.add_argument("layout", help="Layout file name (e.g. master.pug), or '' for none")
    parser.add_argument("path", help="Directory of the view relative to the views dir (e.g. pages/app)")
    parser.add_argument("name", help="View file name (e.g. index.pug)")
    parser.add_argument("--data", type=Path, default=None, help="YAML/JSON file with view args")
    parser.add_argument(
        "--template",
        default=None,
        help="Sub-template to render (page file name renders the page without its layout)",
    )
    add_config_flag(parser)


def _load_data(path: Path | None) -> dict:
    if path is None:
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"view args file must contain a mapping: {path}")
    return data


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()
    engine = PugViewEngine()

    try:
        data = _load_data(args.data)
        engine.init(load_app_config(args), args.views_dir)
        tmpl = engine.get(args.layout, args.path, args.name)
        print(tmpl.render(data, name=args.template))
    except (PugViewError, ValueError, OSError) as exc:
        formatter.error(exc)
        return 1
    return 0
