"""Shared console instance for ansicat diagnostics."""

import os
from typing import Any

from rich.console import Console

ANSICAT_VERBOSE = "ANSICAT_VERBOSE"
ANSICAT_TRACE = "ANSICAT_TRACE"


def _env_flag(name: str) -> bool:
    value = os.environ.get(name, "")
    return value not in ("", "0")


_console = Console(soft_wrap=True, stderr=True)
_trace = _env_flag(ANSICAT_TRACE)
_verbose = _trace or _env_flag(ANSICAT_VERBOSE)


def set_verbose() -> None:
    """Turn on verbose mode.

    Note: Tests use the console_out fixture to clear flags between tests.
    """
    global _verbose  # noqa: PLW0603
    _verbose = True


def set_trace() -> None:
    """Turn on trace mode, which implies verbose mode."""
    global _trace  # noqa: PLW0603
    _trace = True
    set_verbose()


def is_verbose() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose


def print_trace(*args: Any) -> None:  # noqa: ANN401
    """Print trace messages (extra verbose)."""
    if _trace:
        _console.print(*args, style="dim")
        _console.file.flush()


def print_warning(*args: Any) -> None:  # noqa: ANN401
    """Print a warning message, verbose mode."""
    if _verbose:
        _console.print(*args, style="yellow")
        _console.file.flush()
