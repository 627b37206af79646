"""SGR (Select Graphic Rendition) style state.

The style is absolute: every attribute always has a value, and a reset
restores the baseline (white on black, normal intensity, no toggles).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any

from rich.markup import escape

from ansicat.console import print_trace

SEPARATOR = ";"


class Color(Enum):
    """The 8 standard colors and their bright variants, in wire order."""

    BLACK = auto()
    RED = auto()
    GREEN = auto()
    YELLOW = auto()
    BLUE = auto()
    MAGENTA = auto()
    CYAN = auto()
    WHITE = auto()
    BRIGHT_BLACK = auto()
    BRIGHT_RED = auto()
    BRIGHT_GREEN = auto()
    BRIGHT_YELLOW = auto()
    BRIGHT_BLUE = auto()
    BRIGHT_MAGENTA = auto()
    BRIGHT_CYAN = auto()
    BRIGHT_WHITE = auto()


class Intensity(Enum):
    """Emphasis level, bold and faint are mutually exclusive."""

    NORMAL = auto()
    BOLD = auto()
    FAINT = auto()


@dataclass(frozen=True)
class Style:
    """Rendering attributes in effect at a point of the text."""

    fg: Color = Color.WHITE
    bg: Color = Color.BLACK
    intensity: Intensity = Intensity.NORMAL
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reversed: bool = False
    hidden: bool = False
    strikethrough: bool = False


BASELINE = Style()

_STANDARD = list(Color)[:8]
_BRIGHT = list(Color)[8:]


def _build_sgr_table() -> dict[int, dict[str, Any]]:
    table: dict[int, dict[str, Any]] = {
        1: {"intensity": Intensity.BOLD},
        2: {"intensity": Intensity.FAINT},
        3: {"italic": True},
        4: {"underline": True},
        5: {"blink": True},
        7: {"reversed": True},
        8: {"hidden": True},
        9: {"strikethrough": True},
        22: {"intensity": Intensity.NORMAL},
        23: {"italic": False},
        24: {"underline": False},
        25: {"blink": False},
        27: {"reversed": False},
        28: {"hidden": False},
        29: {"strikethrough": False},
    }
    for offset, color in enumerate(_STANDARD):
        table[30 + offset] = {"fg": color}
        table[40 + offset] = {"bg": color}
    for offset, color in enumerate(_BRIGHT):
        table[90 + offset] = {"fg": color}
        table[100 + offset] = {"bg": color}
    return table


# Parameter code -> attribute changes. Code 0 is handled as a reset.
SGR_TABLE = _build_sgr_table()


def parse_code(token: str) -> int | None:
    """Parse an SGR parameter as a decimal code.

    Returns 0 for an empty token, None if the token is not decimal digits.
    """
    if not token:
        return 0
    if not (token.isascii() and token.isdigit()):
        return None
    return int(token)


def apply_code(style: Style, code: int) -> Style:
    """Return the style after applying a single SGR parameter code."""
    if code == 0:
        return BASELINE
    changes = SGR_TABLE.get(code)
    if changes is None:
        print_trace(f"Ignoring unsupported SGR parameter {code}")
        return style
    return replace(style, **changes)


def apply_sgr(style: Style, params: str | bytes) -> Style:
    """Apply the parameters of an SGR sequence, left to right.

    Args:
        style: Style in effect before the sequence
        params: Sequence content without introducer and final byte,
            like "1;31"

    Returns:
        The style in effect after the sequence
    """
    if isinstance(params, bytes):
        # Non-ASCII bytes never form a valid code, latin-1 keeps them apart
        params = params.decode("latin-1")
    for token in params.split(SEPARATOR):
        code = parse_code(token)
        if code is None:
            print_trace(
                "Ignoring malformed SGR parameter", escape(repr(token))
            )
            continue
        style = apply_code(style, code)
    return style
