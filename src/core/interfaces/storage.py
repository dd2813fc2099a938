"""Persisted AppID slot contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AppIdStore(Protocol):
    """Single-value slot holding the last confirmed AppID."""

    def load(self) -> str:
        """Return the stored value trimmed, or an empty string."""

        ...

    def save(self, app_id: str) -> None:
        ...
