"""Idle run orchestration.

Feeds AppID candidates to the validation machine and hands each confirmed
AppID to the session lifecycle until the session completes, the user quits,
input closes or the attempt ceiling is reached. Printing goes through the
injected terminal, so the flow is reusable from tests and other
entry-points.
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Callable

from adapters.output_suppression import suppress_native_output
from core.config import AppSettings
from core.domain.exit_codes import ExitCode
from core.errors import AttemptsExhaustedError, InputClosedError
from core.interfaces.catalog import CatalogClient
from core.interfaces.session_library import LibraryLoader
from core.interfaces.storage import AppIdStore
from core.interfaces.terminal import Terminal
from core.services.attempts import AttemptCounter
from core.services.environment import SessionEnvironment
from core.services.identifier import resolve_candidate
from core.services.session_lifecycle import SessionLifecycleManager, SessionStatus
from core.services.validation import AppIdValidator

logger = logging.getLogger(__name__)

MSG_ABORTING = "Aborting: too many attempts or unrecoverable error."


@dataclass
class IdleRequest:
    """Parameters of one idle run."""

    app_id: str | None = None


@dataclass
class IdleResult:
    """Output of a pipeline invocation."""

    exit_code: ExitCode
    app_id: str = ""
    display_name: str | None = None
    attempts: int = 0


class IdlePipeline:
    def __init__(
        self,
        *,
        terminal: Terminal,
        catalog: CatalogClient,
        store: AppIdStore,
        loader: LibraryLoader,
        settings: AppSettings | None = None,
        environment: SessionEnvironment | None = None,
        quiet: Callable[[], AbstractContextManager[Any]] = suppress_native_output,
    ) -> None:
        self._settings = settings or AppSettings()
        self._terminal = terminal
        self._catalog = catalog
        self._store = store
        self._loader = loader
        self._environment = environment or SessionEnvironment(store, self._settings.env_var_names)
        self._quiet = quiet

    def run(self, request: IdleRequest | None = None) -> IdleResult:
        request = request or IdleRequest()
        attempts = AttemptCounter(limit=self._settings.max_attempts)
        validator = AppIdValidator(
            terminal=self._terminal,
            catalog=self._catalog,
            store=self._store,
            attempts=attempts,
            scan_window=self._settings.store_scan_window,
        )
        lifecycle = SessionLifecycleManager(
            terminal=self._terminal,
            loader=self._loader,
            environment=self._environment,
            store=self._store,
            attempts=attempts,
            library_names=self._settings.library_names,
            interval=self._settings.maintenance_interval_seconds,
            quiet=self._quiet,
        )

        candidate = resolve_candidate(request.app_id, self._store.load())
        try:
            while True:
                outcome = validator.confirm(candidate)
                if not outcome.confirmed:
                    return IdleResult(ExitCode.OK, attempts=attempts.used)

                session = lifecycle.run(outcome.app_id, outcome.display_name)
                if session.status is SessionStatus.COMPLETED:
                    return IdleResult(
                        ExitCode.OK,
                        app_id=outcome.app_id,
                        display_name=outcome.display_name,
                        attempts=attempts.used,
                    )
                if session.status is SessionStatus.QUIT:
                    return IdleResult(ExitCode.OK, attempts=attempts.used)
                candidate = session.next_candidate
        except AttemptsExhaustedError as exc:
            logger.error("%s", exc)
            self._terminal.display(MSG_ABORTING)
            return IdleResult(ExitCode.ATTEMPTS_EXHAUSTED, attempts=attempts.used)
        except InputClosedError:
            logger.info("input closed; last failure %s", attempts.last_failure.name)
            return IdleResult(attempts.last_failure, attempts=attempts.used)
