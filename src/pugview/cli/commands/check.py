"""
pugview check command.

SUMMARY: Compile every view and report failures

Runs a full engine initialization against a views directory and prints the
registries that were built, or every file that failed to load.
"""

from __future__ import annotations

import argparse

from pugview.cli._args import add_config_flag, add_json_flag, add_views_dir_arg, load_app_config
from pugview.cli._output import OutputFormatter
from pugview.engine import PugViewEngine
from pugview.exceptions import AggregateCompileError, PugViewError

SUMMARY = "Compile every view and report failures"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_views_dir_arg(parser)
    add_config_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=args.json)
    engine = PugViewEngine()

    try:
        engine.init(load_app_config(args), args.views_dir)
    except AggregateCompileError as exc:
        if args.json:
            formatter.error(exc)
        else:
            formatter.error(exc, f"{len(exc.failures)} view file(s) failed to load")
            for failure in exc.failures:
                print(f"  {failure}")
        return 1
    except PugViewError as exc:
        formatter.error(exc)
        return 1

    layouts = {name: registry.keys() for name, registry in sorted(engine.layouts.items())}
    lines = [f"common: {len(engine.common_templates)} template(s)"]
    lines.extend(f"{name}: {len(keys)} template(s)" for name, keys in layouts.items())
    formatter.success(
        {"common": engine.common_templates.keys(), "layouts": layouts},
        "\n".join(lines),
    )
    return 0
