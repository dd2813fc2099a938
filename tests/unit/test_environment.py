"""Unit tests for the AppID configuration surfaces."""

import os

from core.services.environment import SessionEnvironment
from fakes import MemoryStore


def test_export_sets_both_variables_and_the_slot(session_env, environ, store):
    session_env.export("440")

    assert environ == {"SteamAppId": "440", "SteamGameId": "440"}
    assert store.value == "440"


def test_export_replaces_stale_values(session_env, environ):
    environ["SteamAppId"] = "570"
    environ["Unrelated"] = "x"

    session_env.export("440")

    assert environ["SteamAppId"] == "440"
    assert environ["Unrelated"] == "x"


def test_clear_removes_only_known_variables(session_env, environ):
    session_env.export("440")
    environ["Unrelated"] = "x"

    session_env.clear()

    assert environ == {"Unrelated": "x"}
    assert session_env.current() == {}


def test_defaults_to_process_environment(monkeypatch):
    monkeypatch.delenv("STEAM_IDLER_TEST_VAR", raising=False)
    env = SessionEnvironment(MemoryStore(), ["STEAM_IDLER_TEST_VAR"])

    env.export("10")

    assert os.environ["STEAM_IDLER_TEST_VAR"] == "10"
    env.clear()
    assert "STEAM_IDLER_TEST_VAR" not in os.environ
