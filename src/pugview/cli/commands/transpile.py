"""
pugview transpile command.

SUMMARY: Write transpiled Jinja2 sources for inspection

Transpiles every view file into a per-run temporary directory, then writes
copies with the anti-CSRF field inserted into OUT_DIR, mirroring the views
directory structure.
"""

from __future__ import annotations

import argparse
import logging
import tempfile
from pathlib import Path

from pugview.anticsrf import AntiCSRFField
from pugview.cli._args import add_config_flag, add_views_dir_arg, load_app_config
from pugview.cli._output import OutputFormatter
from pugview.composition import COMMON_DIR, ERRORS_DIR, LAYOUTS_DIR, PAGES_DIR
from pugview.config.view import ViewConfig
from pugview.exceptions import PugViewError
from pugview.transpile import get_transpiler
from pugview.utils.paths import files_path

SUMMARY = "Write transpiled Jinja2 sources for inspection"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_views_dir_arg(parser)
    parser.add_argument("out_dir", type=Path, help="Output directory")
    add_config_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()
    views_dir: Path = args.views_dir

    try:
        config = ViewConfig.from_mapping(load_app_config(args))
        transpile = get_transpiler(config.transpiler)
        anti_csrf = AntiCSRFField("pug", config.left_delim, config.right_delim)

        with tempfile.TemporaryDirectory(prefix="pugview_") as tmp:
            scratch = Path(tmp)
            written = []
            for scope in (COMMON_DIR, LAYOUTS_DIR, PAGES_DIR, ERRORS_DIR):
                scope_dir = views_dir / scope
                if not scope_dir.is_dir():
                    continue
                for file in files_path(scope_dir):
                    if not file.name.endswith(config.ext):
                        continue
                    target = scratch / file.relative_to(views_dir)
                    target.parent.mkdir(parents=True, exist_ok=True)
                    target.write_text(transpile(file, config.left_delim, config.right_delim), encoding="utf-8")
                    written.append(target)

            copies = anti_csrf.insert_on_files(written, args.out_dir, root=scratch)
    except (PugViewError, OSError) as exc:
        formatter.error(exc)
        return 1

    logger.info("transpiled %d file(s) into %s", len(copies), args.out_dir)
    formatter.success({"files": [str(p) for p in copies]}, f"{len(copies)} file(s) written to {args.out_dir}")
    return 0
