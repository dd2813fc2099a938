"""Process exit codes.

One code per terminal cause, shared by the services (which decide the
outcome) and the CLI (which turns it into `typer.Exit`).
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit status of a run."""

    OK = 0
    FAILURE = 1
    ATTEMPTS_EXHAUSTED = 2
    LIBRARY_LOAD_FAILED = 3
    INIT_MISSING = 4
    INIT_FAILED = 5
