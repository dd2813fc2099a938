"""Shared fixtures for the unit tests."""

from __future__ import annotations

from contextlib import nullcontext
from typing import Callable

import pytest

from core.config import AppSettings
from core.services.attempts import AttemptCounter
from core.services.environment import SessionEnvironment
from fakes import MemoryStore, ScriptedTerminal


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        appid_file=tmp_path / "steam_appid.txt",
        library_names=["steam_api64.dll", "steam_api.dll"],
        max_attempts=20,
        maintenance_interval_seconds=0.01,
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def environ() -> dict[str, str]:
    return {}


@pytest.fixture
def session_env(store, environ) -> SessionEnvironment:
    return SessionEnvironment(store, ["SteamAppId", "SteamGameId"], environ)


@pytest.fixture
def attempts() -> AttemptCounter:
    return AttemptCounter(limit=20)


@pytest.fixture
def make_terminal() -> Callable[..., ScriptedTerminal]:
    return lambda *answers: ScriptedTerminal(list(answers))


@pytest.fixture
def quiet():
    """No-op stand-in for the fd-level output suppression."""

    return nullcontext
