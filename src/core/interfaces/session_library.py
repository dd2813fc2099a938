"""Native session library contracts.

The library is resolved at runtime: a loader turns a list of candidate
names into a handle, and the handle resolves exported symbols one by one.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence, runtime_checkable


@runtime_checkable
class NativeLibrary(Protocol):
    """A loaded library. `release` must be called exactly once."""

    name: str

    def resolve(self, symbol: str) -> Callable[..., Any] | None:
        """Return a callable for `symbol`, or `None` when it is not exported."""

        ...

    def release(self) -> None:
        ...


@runtime_checkable
class LibraryLoader(Protocol):
    def load(self, names: Sequence[str]) -> NativeLibrary | None:
        """Try each name in order and return the first library that loads."""

        ...
