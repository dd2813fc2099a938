"""Configuration surfaces read by the native session library.

The Steam API picks its AppID from `steam_appid.txt` and from the
`SteamAppId`/`SteamGameId` process variables. They are bracketed explicitly
around every session attempt so a previous attempt never leaks into the
next one.
"""

from __future__ import annotations

import logging
import os
from typing import MutableMapping, Sequence

from core.interfaces.storage import AppIdStore

logger = logging.getLogger(__name__)


class SessionEnvironment:
    """Explicit set/clear of the AppID surfaces for one session attempt."""

    def __init__(
        self,
        store: AppIdStore,
        variable_names: Sequence[str],
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self._store = store
        self._names = tuple(variable_names)
        self._environ = os.environ if environ is None else environ

    @property
    def variable_names(self) -> tuple[str, ...]:
        return self._names

    def export(self, app_id: str) -> None:
        self.clear()
        self._store.save(app_id)
        for name in self._names:
            self._environ[name] = app_id
        logger.debug("exported AppID %s to %s", app_id, ", ".join(self._names))

    def clear(self) -> None:
        for name in self._names:
            self._environ.pop(name, None)

    def current(self) -> dict[str, str]:
        """Variables currently set, for diagnostics."""

        return {name: self._environ[name] for name in self._names if name in self._environ}
