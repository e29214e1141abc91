"""Anti-CSRF hidden field injection for view sources.

Every closing ``</form>`` tag gets a hidden ``anti_csrf_token`` input inserted
in front of it. The field value is a call to the ``anticsrftoken`` template
function, written with the engine's variable delimiters.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

_FORM_END_RE = re.compile(r"</form\s*>", re.IGNORECASE)

FIELD_NAME = "anti_csrf_token"
TOKEN_FUNC = "anticsrftoken"


class AntiCSRFField:
    """Inserts the anti-CSRF hidden field into template source."""

    def __init__(self, engine_name: str, left_delim: str, right_delim: str) -> None:
        self.engine_name = engine_name
        self.left_delim = left_delim
        self.right_delim = right_delim
        self.field = (
            f'<input type="hidden" name="{FIELD_NAME}" '
            f'value="{left_delim} {TOKEN_FUNC}() {right_delim}">'
        )

    def insert_on_string(self, text: str) -> str:
        return _FORM_END_RE.sub(lambda m: self.field + m.group(0), text)

    def insert_on_files(
        self,
        files: Iterable[Path],
        target_dir: Path,
        *,
        root: Optional[Path] = None,
    ) -> List[Path]:
        """Write rewritten copies of ``files`` into ``target_dir``.

        Copies keep their path relative to ``root`` (or just the file name
        when no root is given). Returns the copies in input order.
        """
        written: List[Path] = []
        for file in files:
            file = Path(file)
            rel = file.relative_to(root) if root is not None else Path(file.name)
            target = Path(target_dir) / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            text = file.read_text(encoding="utf-8")
            target.write_text(self.insert_on_string(text), encoding="utf-8")
            logger.debug("%s: anti-CSRF field inserted: %s", self.engine_name, target)
            written.append(target)
        return written


__all__ = ["AntiCSRFField", "FIELD_NAME", "TOKEN_FUNC"]
