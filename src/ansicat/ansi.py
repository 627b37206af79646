"""ANSI control sequence scanner.

Locates CSI (Control Sequence Introducer) sequences in text. Works on both
``str`` and ``bytes``: offsets are code point indices for ``str`` and byte
offsets for ``bytes``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markup import escape

from ansicat.console import is_verbose, print_warning

if TYPE_CHECKING:
    from collections.abc import Iterator

CSI = "\x1b["

_CSI_PATTERN = r"""
    \x1b\[          # CSI - Control Sequence Introducer: ESC [
    [^\x40-\x7e]*   # Anything that is not a final byte, including nothing
    [\x40-\x7e]     # Final byte: the first one in 0x40-0x7E ends the sequence
                    #   m: SGR (colors), H: cursor, J: erase, etc.
"""

# Compiled once, read-only afterwards
ANSI_REGEX = re.compile(_CSI_PATTERN, re.VERBOSE)
ANSI_BYTES_REGEX = re.compile(_CSI_PATTERN.encode("ascii"), re.VERBOSE)


@dataclass(frozen=True)
class Match[S: (str, bytes)]:
    """Control sequence located in a text.

    ``text`` is ``source[start:end]``, introducer and final byte included.
    """

    start: int
    end: int
    text: S

    @property
    def params(self) -> S:
        """Content between the introducer and the final byte."""
        return self.text[len(CSI) : -1]

    @property
    def final(self) -> str:
        """Final byte of the sequence, as a one character string."""
        final = self.text[-1:]
        if isinstance(final, bytes):
            return final.decode("ascii")
        return final


def _regex_for[S: (str, bytes)](text: S) -> re.Pattern[S]:
    if isinstance(text, bytes):
        return ANSI_BYTES_REGEX
    return ANSI_REGEX


def iter_matches[S: (str, bytes)](text: S) -> Iterator[Match[S]]:
    """Yield each control sequence in ``text``, left to right.

    Sequences that never reach a final byte are not reported, their
    characters are ordinary text.
    """
    end = 0
    for found in _regex_for(text).finditer(text):
        end = found.end()
        yield Match(found.start(), end, found.group())
    if is_verbose():
        _warn_unterminated(text, end)


def scan[S: (str, bytes)](text: S) -> list[Match[S]]:
    r"""Find every control sequence in ``text``.

    >>> [(m.start, m.end) for m in scan("Hello, \x1b[31;4mworld\x1b[0m!")]
    [(7, 14), (19, 23)]
    """
    return list(iter_matches(text))


def strip_ansi[S: (str, bytes)](text: S) -> S:
    """Remove control sequences from text.

    Strips CSI sequences: ESC [ params final
    Common: ESC[31m (red), ESC[1;32m (bold green), ESC[0m (reset)
    """
    empty = b"" if isinstance(text, bytes) else ""
    return _regex_for(text).sub(empty, text)


def _warn_unterminated(text: str | bytes, pos: int) -> None:
    introducer = CSI.encode("ascii") if isinstance(text, bytes) else CSI
    index = text.find(introducer, pos)  # type: ignore[arg-type]
    if index >= 0:
        print_warning(
            f"Unterminated control sequence at offset {index}:",
            escape(repr(text[index:])),
        )
