"""Tests for console logging behavior."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ansicat import console

if TYPE_CHECKING:
    from conftest import ConsoleFixture


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, False), ("", False), ("0", False), ("1", True), ("yes", True)],
)
def test_env_flag(
    monkeypatch: pytest.MonkeyPatch, value: str | None, expected: bool
) -> None:
    """Any value but empty or 0 turns a flag on."""
    if value is None:
        monkeypatch.delenv(console.ANSICAT_TRACE, raising=False)
    else:
        monkeypatch.setenv(console.ANSICAT_TRACE, value)
    assert console._env_flag(console.ANSICAT_TRACE) is expected


def test_quiet_by_default(console_out: ConsoleFixture) -> None:
    """Warnings and traces are not printed unless enabled."""
    console.print_warning("warning")
    console.print_trace("trace")
    assert not console.is_verbose()
    assert console_out.getvalue() == ""


def test_verbose_prints_warnings(console_out: ConsoleFixture) -> None:
    """Verbose mode prints warnings, but not traces."""
    console.set_verbose()
    console.print_warning("warning")
    console.print_trace("trace")
    assert console_out.getvalue() == "warning\n"


def test_trace_implies_verbose(console_out: ConsoleFixture) -> None:
    """Trace mode prints both warnings and traces."""
    console.set_trace()
    assert console.is_verbose()
    console.print_warning("[bold]warning")
    console.print_trace("trace")
    assert console_out.getvalue() == "warning\ntrace\n"
