"""ctypes loader for the Steam API shared library.

No SDK headers are linked: the library is opened by name and every export
is looked up on demand, with its C signature applied from `SIGNATURES`.
"""

from __future__ import annotations

import ctypes
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

logger = logging.getLogger(__name__)

# symbol -> (restype, argtypes)
SIGNATURES: dict[str, tuple[Any, list[Any]]] = {
    "SteamAPI_Init": (ctypes.c_bool, []),
    "SteamAPI_Shutdown": (None, []),
    "SteamAPI_RunCallbacks": (None, []),
    "SteamAPI_IsSteamRunning": (ctypes.c_bool, []),
    "SteamAPI_SteamUser": (ctypes.c_void_p, []),
    "SteamAPI_ISteamUser_BLoggedOn": (ctypes.c_bool, [ctypes.c_void_p]),
}


def _close_handle(handle: int) -> None:
    import _ctypes  # noqa: PLC0415

    if sys.platform.startswith("win"):
        _ctypes.FreeLibrary(handle)  # type: ignore[attr-defined]
    else:
        _ctypes.dlclose(handle)  # type: ignore[attr-defined]


class CtypesLibrary:
    """A library opened with `ctypes.CDLL`."""

    def __init__(self, name: str, dll: ctypes.CDLL) -> None:
        self.name = name
        self._dll: ctypes.CDLL | None = dll

    @property
    def released(self) -> bool:
        return self._dll is None

    def resolve(self, symbol: str) -> Callable[..., Any] | None:
        if self._dll is None:
            raise RuntimeError(f"{self.name} has been released")
        try:
            func = getattr(self._dll, symbol)
        except AttributeError:
            logger.debug("%s does not export %s", self.name, symbol)
            return None

        restype, argtypes = SIGNATURES.get(symbol, (ctypes.c_int, []))
        func.restype = restype
        func.argtypes = argtypes
        return func

    def release(self) -> None:
        if self._dll is None:
            return
        handle = self._dll._handle
        self._dll = None
        try:
            _close_handle(handle)
        except OSError as exc:
            logger.warning("could not unload %s: %s", self.name, exc)
        else:
            logger.debug("unloaded %s", self.name)


class CtypesLibraryLoader:
    def load(self, names: Sequence[str]) -> CtypesLibrary | None:
        for name in names:
            # Windows no longer searches the working directory for DLLs.
            local = Path(name)
            target = str(local.resolve()) if local.is_file() else name
            try:
                dll = ctypes.CDLL(target)
            except OSError as exc:
                logger.debug("could not load %s: %s", name, exc)
                continue
            logger.info("loaded session library %s", name)
            return CtypesLibrary(name, dll)
        return None
