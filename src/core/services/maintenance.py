"""Background callback pump for a running session."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)


class MaintenanceLoop:
    """Calls `pump` every `interval` seconds on a worker thread.

    Cancellation is cooperative: `stop` clears the running flag and joins,
    so an in-flight call always completes before `stop` returns.
    """

    def __init__(
        self,
        pump: Callable[[], Any] | None,
        interval: float,
        *,
        name: str = "session-maintenance",
    ) -> None:
        self._pump = pump
        self._interval = interval
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.cycles = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("maintenance loop already started")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join()
        logger.debug("maintenance loop stopped after %d cycles", self.cycles)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            if self._pump is not None:
                try:
                    self._pump()
                except Exception:
                    logger.exception("maintenance call failed")
            self.cycles += 1
            self._stop_event.wait(self._interval)
