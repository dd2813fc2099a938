"""AppID normalization and candidate resolution.

Pure helpers: no I/O, no side effects.
"""

from __future__ import annotations

_WHITESPACE = " \t\r\n"
_DIGITS = frozenset("0123456789")


def normalize(text: str | None) -> str:
    """Trim spaces, tabs, CR and LF from both ends."""

    if not text:
        return ""
    return text.strip(_WHITESPACE)


def is_well_formed(app_id: str) -> bool:
    """True when `app_id` is one or more ASCII decimal digits.

    Superscripts, full-width and Arabic-Indic digits are rejected.
    """

    return bool(app_id) and all(ch in _DIGITS for ch in app_id)


def is_quit(answer: str) -> bool:
    """Single-character `Q`/`q`, the quit signal at identifier prompts."""

    return answer in ("Q", "q")


def first_choice(answer: str) -> str:
    """Lower-cased first character of a choice prompt answer ('' if empty)."""

    answer = normalize(answer)
    return answer[0].lower() if answer else ""


def resolve_candidate(cli_arg: str | None, stored: str | None) -> str:
    """Pick the starting AppID candidate.

    Order:
    1) non-empty command-line argument, even if it trims to nothing
    2) persisted slot value
    3) empty string: the caller must prompt
    """

    if cli_arg:
        return normalize(cli_arg)
    return normalize(stored)
