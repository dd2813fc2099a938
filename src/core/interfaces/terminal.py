"""Interactive terminal contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Terminal(Protocol):
    """User-facing text I/O.

    `prompt` raises `core.errors.InputClosedError` when input is exhausted.
    """

    def display(self, text: str) -> None:
        ...

    def prompt(self, text: str) -> str:
        ...
