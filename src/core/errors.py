"""Exceptions raised by the core services."""

from __future__ import annotations


class IdlerError(Exception):
    """Base class for errors that end a run."""


class AttemptsExhaustedError(IdlerError):
    """The validation loop hit its attempt ceiling."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"gave up after {limit} attempts")
        self.limit = limit


class InputClosedError(IdlerError):
    """Standard input reached EOF while a prompt was waiting."""
