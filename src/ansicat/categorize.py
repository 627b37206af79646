"""Categorize text into slices tagged with their SGR style.

Each slice is a span of the source text with no control sequence inside,
together with the style in effect over that span. Concatenating the slices
gives the source text without its control sequences.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from rich.markup import escape

from ansicat.ansi import iter_matches
from ansicat.console import print_trace
from ansicat.style import BASELINE, Style, apply_sgr

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

SGR_FINAL = "m"


class MixedSourceError(TypeError):
    """Error when slices of str and bytes sources are joined together."""

    def __init__(self, expected: type, found: type) -> None:
        """Initialize with the conflicting source types."""
        self.expected = expected
        self.found = found
        super().__init__(
            f"Cannot join {found.__name__} slice with {expected.__name__} "
            "slices"
        )

    def __rich__(self) -> str:
        """Rich formatted error message."""
        return (
            f"[bold red]Error:[/] Mixed slice sources\n"
            f"[bold]Expected:[/] {self.expected.__name__}, "
            f"[bold]found:[/] {self.found.__name__}"
        )


@dataclass(frozen=True)
class CategorizedSlice[S: (str, bytes)]:
    """Span of the source text, with the style in effect over it."""

    source: S = field(repr=False)
    start: int
    end: int
    style: Style = BASELINE

    @property
    def text(self) -> S:
        """Text of the slice, ``source[start:end]``."""
        return self.source[self.start : self.end]

    def with_span(self, start: int, end: int) -> CategorizedSlice[S]:
        """Copy this slice style to another span of the same source."""
        return replace(self, start=start, end=end)


def iter_slices[S: (str, bytes)](text: S) -> Iterator[CategorizedSlice[S]]:
    """Yield the styled slices of ``text``, in order.

    Control sequences other than SGR are skipped: removed from the text, with
    no effect on the style. Empty slices, between adjacent control sequences,
    are not produced.
    """
    style = BASELINE
    lo = 0
    for match in iter_matches(text):
        if match.start > lo:
            yield CategorizedSlice(text, lo, match.start, style)
        if match.final == SGR_FINAL:
            style = apply_sgr(style, match.params)
        else:
            print_trace("Skipping control sequence", escape(repr(match.text)))
        lo = match.end
    if lo < len(text):
        yield CategorizedSlice(text, lo, len(text), style)


def categorize[S: (str, bytes)](text: S) -> list[CategorizedSlice[S]]:
    r"""Split ``text`` into styled slices.

    Never fails. The result has at most one more slice than there are
    control sequences in the text.

    >>> [s.text for s in categorize("\x1b[30mH\x1b[31mi")]
    ['H', 'i']
    """
    return list(iter_slices(text))


def strip[S: (str, bytes)](
    slices: Iterable[CategorizedSlice[S]], empty: S | None = None
) -> S:
    """Join the slice texts, giving the source without control sequences.

    Args:
        slices: Slices of a single source
        empty: Result if there are no slices, an empty str by default. Pass
            b"" to join slices of a bytes source.

    Raises:
        MixedSourceError: If str and bytes slices are mixed
    """
    parts = [s.text for s in slices]
    if not parts:
        return "" if empty is None else empty  # type: ignore[return-value]
    kind = type(parts[0])
    for part in parts:
        if type(part) is not kind:
            raise MixedSourceError(kind, type(part))
    return parts[0][:0].join(parts)


def strip_lossy(slices: Iterable[CategorizedSlice]) -> str:
    """Join the slice texts as a str, decoding bytes as UTF-8.

    Invalid byte sequences are replaced with U+FFFD.
    """
    text = strip(slices)
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text
