"""Test doubles: scripted terminal, in-memory slot, fake store, fake library."""

from __future__ import annotations

import json
import threading
from typing import Any, Callable

from core.errors import InputClosedError


class ScriptedTerminal:
    """Answers prompts from a script; raises InputClosedError when it runs out.

    A callable answer is invoked at prompt time, which lets a test block the
    "press ENTER" prompt until something happened on another thread.
    """

    def __init__(self, answers: list[Any]) -> None:
        self.answers = list(answers)
        self.lines: list[str] = []
        self.prompts: list[str] = []

    def display(self, text: str) -> None:
        self.lines.append(text)

    def prompt(self, text: str) -> str:
        self.prompts.append(text)
        if not self.answers:
            raise InputClosedError("script exhausted")
        answer = self.answers.pop(0)
        return answer() if callable(answer) else answer

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


class MemoryStore:
    def __init__(self, value: str = "") -> None:
        self.value = value
        self.saves: list[str] = []

    def load(self) -> str:
        return self.value

    def save(self, app_id: str) -> None:
        self.value = app_id
        self.saves.append(app_id)


class FakeCatalog:
    """Returns canned bodies per AppID; `None` simulates a transport failure."""

    def __init__(self, responses: dict[str, bytes | None] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[str] = []

    def fetch(self, app_id: str) -> bytes | None:
        self.calls.append(app_id)
        return self.responses.get(app_id)


class FakeLibrary:
    def __init__(self, name: str, symbols: dict[str, Callable[..., Any]]) -> None:
        self.name = name
        self.symbols = symbols
        self.release_count = 0
        self.events: list[str] = []

    def resolve(self, symbol: str) -> Callable[..., Any] | None:
        return self.symbols.get(symbol)

    def release(self) -> None:
        self.release_count += 1
        self.events.append("release")


class FakeLoader:
    """Hands out the scripted libraries in order; the last one repeats."""

    def __init__(self, *libraries: FakeLibrary | None) -> None:
        self.libraries = list(libraries)
        self.calls: list[tuple[str, ...]] = []

    def load(self, names):
        self.calls.append(tuple(names))
        if len(self.libraries) > 1:
            return self.libraries.pop(0)
        return self.libraries[0] if self.libraries else None


def build_library(
    *,
    init_result: bool = True,
    running: bool | None = True,
    user: int | None = 1,
    logged_on: bool | None = True,
    omit: tuple[str, ...] = (),
    name: str = "steam_api64.dll",
) -> FakeLibrary:
    """A fake Steam API whose exports record their calls on `lib.events`."""

    pumped = threading.Event()
    lib = FakeLibrary(name, {})

    def init() -> bool:
        lib.events.append("init")
        return init_result

    def run_callbacks() -> None:
        lib.events.append("callbacks")
        pumped.set()

    def shutdown() -> None:
        lib.events.append("shutdown")

    symbols: dict[str, Callable[..., Any]] = {
        "SteamAPI_Init": init,
        "SteamAPI_RunCallbacks": run_callbacks,
        "SteamAPI_Shutdown": shutdown,
    }
    if running is not None:
        symbols["SteamAPI_IsSteamRunning"] = lambda: running
    if user is not None or logged_on is not None:
        symbols["SteamAPI_SteamUser"] = lambda: user
        symbols["SteamAPI_ISteamUser_BLoggedOn"] = lambda handle: bool(logged_on)
    for symbol in omit:
        symbols.pop(symbol, None)

    lib.symbols = symbols
    lib.pumped = pumped  # type: ignore[attr-defined]
    return lib


def store_payload(app_id: str, name: str | None = None, success: bool = True) -> bytes:
    entry: dict[str, Any] = {"success": success}
    if success:
        entry["data"] = {"type": "game", "name": name or "", "steam_appid": int(app_id)}
    return json.dumps({app_id: entry}).encode("utf-8")
