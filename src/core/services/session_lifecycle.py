"""Steam API session lifecycle.

    UNLOADED -> LOADED -> INITIALIZING -> RUNNING -> SHUTTING_DOWN -> UNLOADED

`SessionLifecycleManager.run` owns the native library from load to release
for one confirmed AppID and reports whether the run completed, the user
quit, or another AppID should be tried.
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence

from adapters.output_suppression import suppress_native_output
from core.domain.exit_codes import ExitCode
from core.errors import InputClosedError
from core.interfaces.session_library import LibraryLoader, NativeLibrary
from core.interfaces.storage import AppIdStore
from core.interfaces.terminal import Terminal
from core.services.attempts import AttemptCounter
from core.services.environment import SessionEnvironment
from core.services.identifier import first_choice, is_quit, normalize
from core.services.maintenance import MaintenanceLoop

logger = logging.getLogger(__name__)

SYMBOL_INIT = "SteamAPI_Init"
SYMBOL_SHUTDOWN = "SteamAPI_Shutdown"
SYMBOL_RUN_CALLBACKS = "SteamAPI_RunCallbacks"
SYMBOL_IS_RUNNING = "SteamAPI_IsSteamRunning"
SYMBOL_STEAM_USER = "SteamAPI_SteamUser"
SYMBOL_LOGGED_ON = "SteamAPI_ISteamUser_BLoggedOn"

PROMPT_LOAD_RETRY = "Place the appropriate library and press ENTER to retry, or Q to quit: "
PROMPT_NEW_APPID = "Enter a different AppID to try again, or Q to quit: "
MSG_INCOMPATIBLE = "Error: steam_api library loaded but SteamAPI_Init not found (incompatible library?)."
MSG_NOT_RUNNING = (
    "Steam client is not running with a valid user session.",
    "Please start Steam and log in before trying again.",
)
MSG_NOT_LOGGED_ON = (
    "Steam client is running but no user is logged in.",
    "Please log in to Steam before trying again.",
)
MSG_NOT_OWNED = "The AppID appears valid but the game is not owned by the logged-in account."
MSG_PRESS_ENTER = "Press ENTER to stop the simulation and exit."
MSG_STOPPED = "Simulation stopped. Exiting."
MSG_EXITING = "Exiting."


class LifecycleState(str, Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"
    INITIALIZING = "initializing"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


class InitDiagnosis(str, Enum):
    """Best-effort reason for a failed `SteamAPI_Init`."""

    CLIENT_NOT_RUNNING = "client_not_running"
    NOT_LOGGED_ON = "not_logged_on"
    NOT_OWNED = "not_owned"


class SessionStatus(str, Enum):
    COMPLETED = "completed"
    QUIT = "quit"
    RETRY = "retry"


@dataclass
class SessionOutcome:
    status: SessionStatus
    next_candidate: str = ""
    diagnosis: InitDiagnosis | None = None


@dataclass
class SessionCapabilities:
    """Exports resolved from the library. Only `init` is mandatory."""

    init: Callable[[], Any]
    shutdown: Callable[[], Any] | None = None
    run_callbacks: Callable[[], Any] | None = None
    is_client_running: Callable[[], Any] | None = None
    current_user: Callable[[], Any] | None = None
    is_logged_on: Callable[[Any], Any] | None = None


def resolve_capabilities(library: NativeLibrary) -> SessionCapabilities | None:
    """Return the capability set, or `None` when `SteamAPI_Init` is missing."""

    init = library.resolve(SYMBOL_INIT)
    if init is None:
        return None
    return SessionCapabilities(
        init=init,
        shutdown=library.resolve(SYMBOL_SHUTDOWN),
        run_callbacks=library.resolve(SYMBOL_RUN_CALLBACKS),
        is_client_running=library.resolve(SYMBOL_IS_RUNNING),
        current_user=library.resolve(SYMBOL_STEAM_USER),
        is_logged_on=library.resolve(SYMBOL_LOGGED_ON),
    )


def diagnose_init_failure(caps: SessionCapabilities) -> InitDiagnosis:
    """Narrow down why init failed using the optional exports.

    A missing `IsSteamRunning` counts as "not running". When the client runs
    but the user exports are missing, ownership is assumed to be the cause.
    """

    running = bool(caps.is_client_running()) if caps.is_client_running else False
    if not running:
        return InitDiagnosis.CLIENT_NOT_RUNNING

    if caps.current_user is not None and caps.is_logged_on is not None:
        user = caps.current_user()
        if not user or not caps.is_logged_on(user):
            return InitDiagnosis.NOT_LOGGED_ON

    return InitDiagnosis.NOT_OWNED


def describe_app(app_id: str, display_name: str | None) -> str:
    if display_name:
        return f'game "{display_name}" (AppID {app_id})'
    return f"AppID {app_id}"


class SessionLifecycleManager:
    """Loads, initializes, runs and shuts down the Steam API for one AppID.

    At most one library handle is live at a time; it is released on every
    exit path of `run`.
    """

    def __init__(
        self,
        *,
        terminal: Terminal,
        loader: LibraryLoader,
        environment: SessionEnvironment,
        store: AppIdStore,
        attempts: AttemptCounter,
        library_names: Sequence[str],
        interval: float = 1.0,
        quiet: Callable[[], AbstractContextManager[Any]] = suppress_native_output,
    ) -> None:
        self._terminal = terminal
        self._loader = loader
        self._env = environment
        self._store = store
        self._attempts = attempts
        self._library_names = tuple(library_names)
        self._interval = interval
        self._quiet = quiet
        self._state = LifecycleState.UNLOADED

    @property
    def state(self) -> LifecycleState:
        return self._state

    def _enter(self, state: LifecycleState) -> None:
        logger.debug("session %s -> %s", self._state.value, state.value)
        self._state = state

    def run(self, app_id: str, display_name: str | None = None) -> SessionOutcome:
        library = self._loader.load(self._library_names)
        if library is None:
            return self._load_failed()

        self._enter(LifecycleState.LOADED)
        try:
            outcome = self._drive(library, app_id, display_name)
        finally:
            self._env.clear()
            library.release()
            self._enter(LifecycleState.UNLOADED)

        if outcome.status is SessionStatus.COMPLETED:
            self._terminal.display(MSG_STOPPED)
        return outcome

    def _load_failed(self) -> SessionOutcome:
        self._attempts.fail(ExitCode.LIBRARY_LOAD_FAILED)
        names = " or ".join(self._library_names)
        self._terminal.display(f"Error: Could not find {names} in the current folder.")
        if first_choice(self._terminal.prompt(PROMPT_LOAD_RETRY)) == "q":
            self._terminal.display(MSG_EXITING)
            return SessionOutcome(SessionStatus.QUIT)
        return SessionOutcome(SessionStatus.RETRY)

    def _drive(
        self,
        library: NativeLibrary,
        app_id: str,
        display_name: str | None,
    ) -> SessionOutcome:
        caps = resolve_capabilities(library)
        if caps is None:
            logger.warning("%s does not export %s", library.name, SYMBOL_INIT)
            self._attempts.fail(ExitCode.INIT_MISSING)
            self._terminal.display(MSG_INCOMPATIBLE)
            return SessionOutcome(SessionStatus.RETRY)

        self._enter(LifecycleState.INITIALIZING)
        self._env.export(app_id)
        with self._quiet():
            ok = bool(caps.init())

        if not ok:
            return self._init_failed(caps, app_id, display_name)
        return self._run_session(caps, app_id, display_name)

    def _init_failed(
        self,
        caps: SessionCapabilities,
        app_id: str,
        display_name: str | None,
    ) -> SessionOutcome:
        self._attempts.fail(ExitCode.INIT_FAILED)
        with self._quiet():
            diagnosis = diagnose_init_failure(caps)
        logger.info("init failed for AppID %s: %s", app_id, diagnosis.value)

        if diagnosis is InitDiagnosis.CLIENT_NOT_RUNNING:
            lines: tuple[str, ...] = MSG_NOT_RUNNING
        elif diagnosis is InitDiagnosis.NOT_LOGGED_ON:
            lines = MSG_NOT_LOGGED_ON
        else:
            lines = (
                MSG_NOT_OWNED,
                f"Cannot execute {describe_app(app_id, display_name)}"
                " - Not owned by this Steam account.",
            )
        for line in lines:
            self._terminal.display(line)

        answer = normalize(self._terminal.prompt(PROMPT_NEW_APPID))
        if is_quit(answer):
            self._terminal.display(MSG_EXITING)
            return SessionOutcome(SessionStatus.QUIT, diagnosis=diagnosis)
        return SessionOutcome(SessionStatus.RETRY, next_candidate=answer, diagnosis=diagnosis)

    def _run_session(
        self,
        caps: SessionCapabilities,
        app_id: str,
        display_name: str | None,
    ) -> SessionOutcome:
        self._store.save(app_id)
        if display_name:
            self._terminal.display(f"Executing {describe_app(app_id, display_name)}...")
        else:
            self._terminal.display(f"Executing AppID {app_id} (name not found)...")

        loop = MaintenanceLoop(caps.run_callbacks, self._interval)
        self._enter(LifecycleState.RUNNING)
        loop.start()
        try:
            self._terminal.display(MSG_PRESS_ENTER)
            try:
                self._terminal.prompt("")
            except InputClosedError:
                logger.info("input closed; stopping the session")
        finally:
            self._enter(LifecycleState.SHUTTING_DOWN)
            loop.stop()
            if caps.shutdown is not None:
                caps.shutdown()

        return SessionOutcome(SessionStatus.COMPLETED)
