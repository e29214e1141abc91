"""View engine settings extracted from the ``view`` config section."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from jinja2.defaults import BLOCK_START_STRING, COMMENT_START_STRING

from pugview.exceptions import ConfigError
from pugview.transpile import available_transpilers

DEFAULT_EXT = ".pug"
DEFAULT_DELIMITERS = "{{.}}"
DEFAULT_TRANSPILER = "pug"


def parse_delimiters(value: str) -> Tuple[str, str]:
    """Split a ``left.right`` delimiter string into its two parts.

    Raises:
        ConfigError: unless there are exactly two non-empty parts
    """
    parts = str(value).split(".")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise ConfigError(
            "config 'view.delimiters' value is invalid",
            context={"delimiters": value},
        )
    return parts[0], parts[1]


@dataclass(frozen=True)
class ViewConfig:
    """Immutable view engine settings.

    Attributes:
        ext: File suffix used for discovery (``.pug``)
        case_sensitive: Keep template key case when registering/looking up
        default_layout: When False, pages are also compiled without a layout
        left_delim: Left variable delimiter
        right_delim: Right variable delimiter
        transpiler: Source adapter name (``pug`` or ``jinja``)
    """

    ext: str = DEFAULT_EXT
    case_sensitive: bool = False
    default_layout: bool = True
    left_delim: str = "{{"
    right_delim: str = "}}"
    transpiler: str = DEFAULT_TRANSPILER

    def __post_init__(self) -> None:
        if not self.ext:
            raise ConfigError("config 'view.ext' must not be empty")
        for option in ("case_sensitive", "default_layout"):
            value = getattr(self, option)
            if not isinstance(value, bool):
                raise ConfigError(
                    f"config 'view.{option}' must be a boolean, got {value!r}",
                    context={option: value},
                )
        if (
            not self.left_delim
            or not self.right_delim
            or self.left_delim in (BLOCK_START_STRING, COMMENT_START_STRING)
        ):
            # The left delimiter must not shadow Jinja2's block or comment start.
            raise ConfigError(
                "config 'view.delimiters' value is invalid",
                context={"delimiters": f"{self.left_delim}.{self.right_delim}"},
            )
        if self.transpiler not in available_transpilers():
            raise ConfigError(
                f"unknown transpiler '{self.transpiler}'. "
                f"Available: {', '.join(available_transpilers())}",
                context={"transpiler": self.transpiler},
            )

    @property
    def delimiters(self) -> Tuple[str, str]:
        return self.left_delim, self.right_delim

    def fold(self, key: str) -> str:
        """Apply the configured case policy to a registry key."""
        return key if self.case_sensitive else key.lower()

    @classmethod
    def from_mapping(cls, cfg: Optional[Mapping[str, Any]]) -> "ViewConfig":
        """Build from an application config mapping holding a ``view`` section."""
        section = (cfg or {}).get("view") or {}
        if not isinstance(section, Mapping):
            raise ConfigError("config 'view' section must be a mapping")

        left, right = parse_delimiters(section.get("delimiters", DEFAULT_DELIMITERS))
        return cls(
            ext=str(section.get("ext", DEFAULT_EXT)),
            case_sensitive=section.get("case_sensitive", False),
            default_layout=section.get("default_layout", True),
            left_delim=left,
            right_delim=right,
            transpiler=str(section.get("transpiler", DEFAULT_TRANSPILER)),
        )


__all__ = ["ViewConfig", "parse_delimiters", "DEFAULT_DELIMITERS", "DEFAULT_EXT"]
