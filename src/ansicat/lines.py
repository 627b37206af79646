r"""Split categorized slices into lines, keeping their styles.

A line ends at "\n" or "\r\n". A lone "\r" is ordinary text.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from ansicat.console import print_trace

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ansicat.categorize import CategorizedSlice


class State(Enum):
    """State machine states for line splitting."""

    IDLE = auto()
    PENDING = auto()


def split_first_line[S: (str, bytes)](
    piece: CategorizedSlice[S],
) -> tuple[CategorizedSlice[S], CategorizedSlice[S] | None]:
    """Split a slice at its first line break.

    Returns:
        The part before the break, and the part after it, or None if the
        slice has no line break. Either part may be empty.
    """
    source = piece.source
    if isinstance(source, bytes):
        index = source.find(b"\n", piece.start, piece.end)
        carriage = b"\r"
    else:
        index = source.find("\n", piece.start, piece.end)
        carriage = "\r"
    if index < 0:
        return piece, None
    line_end = index
    if line_end > piece.start and source[index - 1 : index] == carriage:
        line_end -= 1
    return piece.with_span(piece.start, line_end), piece.with_span(
        index + 1, piece.end
    )


def _trim_carriage_return[S: (str, bytes)](
    line: list[CategorizedSlice[S]], blank: CategorizedSlice[S] | None
) -> CategorizedSlice[S] | None:
    r"""Drop a "\r" ending the last fragment of the line.

    Returns the blank fragment to use if the line ends up empty.
    """
    last = line[-1]
    carriage = b"\r" if isinstance(last.source, bytes) else "\r"
    if last.source[last.end - 1 : last.end] != carriage:
        return blank
    trimmed = last.with_span(last.start, last.end - 1)
    if trimmed.start < trimmed.end:
        line[-1] = trimmed
    else:
        line.pop()
        if not line and blank is None:
            return trimmed
    return blank


class LineSplitter[S: (str, bytes)]:
    """Iterator over the lines of categorized slices.

    Each line is a list of slices. A slice holding a line break is split in
    two with the same style, and the part after the break is kept pending for
    the next line.
    """

    def __init__(self, slices: Iterable[CategorizedSlice[S]]) -> None:
        """Initialize the line splitter."""
        self.slices = iter(slices)
        self.state = State.IDLE
        self.pending: CategorizedSlice[S] | None = None

    def __iter__(self) -> Iterator[list[CategorizedSlice[S]]]:
        """Return the iterator itself."""
        return self

    def __next__(self) -> list[CategorizedSlice[S]]:
        """Return the next line, as a list of slices."""
        line: list[CategorizedSlice[S]] = []
        # Empty fragment, only used if the line has nothing else
        blank: CategorizedSlice[S] | None = None

        if self.state == State.PENDING:
            assert self.pending is not None
            first, rest = split_first_line(self.pending)
            if rest is None:
                self._clear_pending()
            else:
                self._set_pending(rest)
            if first.start < first.end:
                line.append(first)
            else:
                blank = first
            if rest is not None:
                return line or [first]

        for piece in self.slices:
            first, rest = split_first_line(piece)
            if rest is not None and rest.start == piece.start + 1 and line:
                # "\r\n" split by a control sequence
                blank = _trim_carriage_return(line, blank)
            if first.start < first.end:
                line.append(first)
            elif blank is None:
                blank = first
            if rest is not None:
                # A trailing line break leaves nothing pending
                if rest.start < rest.end:
                    self._set_pending(rest)
                break

        if line:
            return line
        if blank is not None:
            return [blank]
        raise StopIteration

    def _set_pending(self, rest: CategorizedSlice[S]) -> None:
        print_trace(f"Pending line remainder at {rest.start}-{rest.end}")
        self.state = State.PENDING
        self.pending = rest

    def _clear_pending(self) -> None:
        self.state = State.IDLE
        self.pending = None


def split_lines[S: (str, bytes)](
    slices: Iterable[CategorizedSlice[S]],
) -> LineSplitter[S]:
    r"""Split categorized slices into lines, lazily.

    >>> from ansicat.categorize import categorize, strip
    >>> [strip(line) for line in split_lines(categorize("a\nb\r\nc"))]
    ['a', 'b', 'c']
    """
    return LineSplitter(slices)
