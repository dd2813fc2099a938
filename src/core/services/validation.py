"""AppID validation state machine.

Reconciles three unreliable inputs (command-line argument, persisted slot,
interactive input) and the remote store into one confirmed AppID:

    NEED_INPUT -> SYNTAX_CHECK -> CATALOG_CHECK -> CONFIRMED
         ^             |               |
         +-------------+---------------+        (any state) -> QUIT

Every pass through NEED_INPUT consumes one attempt from the shared
`AttemptCounter`; exceeding it raises `AttemptsExhaustedError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from core.domain.exit_codes import ExitCode
from core.domain.models import CatalogRecord
from core.interfaces.catalog import CatalogClient
from core.interfaces.storage import AppIdStore
from core.interfaces.terminal import Terminal
from core.services.attempts import AttemptCounter
from core.services.catalog_scan import DEFAULT_SUCCESS_WINDOW, scan_catalog_response
from core.services.identifier import first_choice, is_quit, is_well_formed, normalize

logger = logging.getLogger(__name__)

PROMPT_APPID = "Enter Steam AppID (or Q to quit): "
PROMPT_OFFLINE = "Retry? (Y to retry, N to continue without Store check, Q to quit): "
MSG_BAD_FORMAT = "Error: AppID must contain digits only."
MSG_CHECKING = "Checking Steam Store for AppID..."
MSG_OFFLINE = "Warning: Could not contact Steam Store (network issue?)."
MSG_NOT_FOUND = "AppID not found or store reports no data for this AppID."
MSG_EXITING = "Exiting."


class ValidationState(str, Enum):
    NEED_INPUT = "need_input"
    SYNTAX_CHECK = "syntax_check"
    CATALOG_CHECK = "catalog_check"
    CONFIRMED = "confirmed"
    QUIT = "quit"

    @property
    def is_terminal(self) -> bool:
        return self in (ValidationState.CONFIRMED, ValidationState.QUIT)


@dataclass
class ValidationOutcome:
    """Terminal result of `AppIdValidator.confirm`."""

    state: ValidationState
    app_id: str = ""
    display_name: str | None = None
    verified: bool = False

    @property
    def confirmed(self) -> bool:
        return self.state is ValidationState.CONFIRMED


class AppIdValidator:
    """Drives one candidate (or a series of them) to CONFIRMED or QUIT."""

    def __init__(
        self,
        *,
        terminal: Terminal,
        catalog: CatalogClient,
        store: AppIdStore,
        attempts: AttemptCounter,
        scan_window: int = DEFAULT_SUCCESS_WINDOW,
    ) -> None:
        self._terminal = terminal
        self._catalog = catalog
        self._store = store
        self._attempts = attempts
        self._scan_window = scan_window

        self._candidate = ""
        self._record: CatalogRecord | None = None
        self._verified = False

        self._handlers: dict[ValidationState, Callable[[], ValidationState]] = {
            ValidationState.NEED_INPUT: self._need_input,
            ValidationState.SYNTAX_CHECK: self._syntax_check,
            ValidationState.CATALOG_CHECK: self._catalog_check,
        }

    def confirm(self, candidate: str = "") -> ValidationOutcome:
        """Run the machine starting from `candidate` (may be empty)."""

        self._candidate = normalize(candidate)
        self._record = None
        self._verified = False

        state = ValidationState.NEED_INPUT
        while not state.is_terminal:
            next_state = self._handlers[state]()
            logger.debug("validation %s -> %s", state.value, next_state.value)
            state = next_state

        if state is ValidationState.QUIT:
            return ValidationOutcome(state=state)

        self._store.save(self._candidate)
        return ValidationOutcome(
            state=state,
            app_id=self._candidate,
            display_name=self._record.display_name if self._record else None,
            verified=self._verified,
        )

    def _retry(self, cause: ExitCode = ExitCode.FAILURE) -> ValidationState:
        self._attempts.fail(cause)
        self._candidate = ""
        self._record = None
        return ValidationState.NEED_INPUT

    def _need_input(self) -> ValidationState:
        self._attempts.tick()
        if self._candidate:
            return ValidationState.SYNTAX_CHECK

        answer = normalize(self._terminal.prompt(PROMPT_APPID))
        if is_quit(answer):
            self._terminal.display(MSG_EXITING)
            return ValidationState.QUIT
        self._candidate = answer
        return ValidationState.SYNTAX_CHECK

    def _syntax_check(self) -> ValidationState:
        if not is_well_formed(self._candidate):
            self._terminal.display(MSG_BAD_FORMAT)
            return self._retry()
        return ValidationState.CATALOG_CHECK

    def _catalog_check(self) -> ValidationState:
        self._terminal.display(MSG_CHECKING)
        payload = self._catalog.fetch(self._candidate)

        if payload is None:
            return self._offline_choice()

        record = scan_catalog_response(payload, self._candidate, window=self._scan_window)
        if not record.exists:
            self._terminal.display(MSG_NOT_FOUND)
            return self._retry()

        self._record = record
        self._verified = True
        return ValidationState.CONFIRMED

    def _offline_choice(self) -> ValidationState:
        self._terminal.display(MSG_OFFLINE)
        choice = first_choice(self._terminal.prompt(PROMPT_OFFLINE))
        if choice == "q":
            self._terminal.display(MSG_EXITING)
            return ValidationState.QUIT
        if choice == "y":
            return self._retry()

        # "N" and anything unrecognized proceed unverified.
        logger.info("proceeding with AppID %s without store verification", self._candidate)
        self._record = None
        self._verified = False
        return ValidationState.CONFIRMED
