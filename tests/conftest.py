"""Common test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from rich.console import Console

if TYPE_CHECKING:
    from collections.abc import Iterator

ESC = "\x1b"


def sgr(*codes: int | str) -> str:
    """Build an SGR sequence from parameter codes."""
    return f"{ESC}[{';'.join(str(code) for code in codes)}m"


def styled(text: str, *codes: int | str) -> str:
    """Wrap text in SGR codes and a trailing reset, like styling libraries."""
    return f"{sgr(*codes)}{text}{sgr(0)}"


@dataclass
class ConsoleFixture:
    """Console output fixture that tracks whether output was checked.

    Usage patterns:
    1. Verify specific output: assert console_out.getvalue() == "expected"
    2. No output expected: don't call getvalue(), fixture verifies empty
    3. Ignore output: call console_out.ignore_output()

    NEVER call getvalue() without asserting its value - this defeats the
    safety check for unexpected output.
    """

    _output: StringIO
    _checked: bool = field(default=False, init=False)

    def getvalue(self) -> str:
        """Get console output, marking it as checked."""
        self._checked = True
        return self._output.getvalue()

    def ignore_output(self) -> None:
        """Mark output as intentionally ignored."""
        self._checked = True

    def assert_no_unexpected_output(self) -> None:
        """Assert no unexpected output if not already checked."""
        if not self._checked:
            output = self._output.getvalue()
            assert output == "", "Unexpected console output"


@pytest.fixture(autouse=True)
def console_out() -> Iterator[ConsoleFixture]:
    """Patch console with test console using StringIO (no colors).

    Verbose and trace flags start cleared, whatever the environment says.
    """
    output = StringIO()
    test_console = Console(file=output, force_terminal=False, width=200)
    fixture = ConsoleFixture(output)

    with (
        patch("ansicat.console._console", test_console),
        patch("ansicat.console._verbose", False),  # noqa: FBT003
        patch("ansicat.console._trace", False),  # noqa: FBT003
    ):
        yield fixture

    fixture.assert_no_unexpected_output()
