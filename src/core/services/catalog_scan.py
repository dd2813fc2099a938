"""Targeted scan of a store `appdetails` response.

The response shape is fixed and small, and only two values are needed, so
this is a substring search rather than a JSON parse:

    {"440": {"success": true, "data": {"name": "Team Fortress 2", ...}}}

Every lookup starts after the previous marker. The first occurrence of the
quoted AppID is used.
"""

from __future__ import annotations

import logging

from core.domain.models import CatalogRecord

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_WINDOW = 50

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "n": "\n",
    "t": "\t",
}


def _decode_payload(payload: bytes | str) -> str:
    if isinstance(payload, str):
        return payload
    return payload.decode("utf-8", errors="replace")


def read_quoted(text: str, start: int) -> str | None:
    """Decode the JSON-ish string whose opening quote is at `start - 1`.

    Only `\\"`, `\\\\`, `\\/`, `\\n` and `\\t` are translated; any other escape
    keeps the following character and drops the backslash. Returns `None`
    when no closing quote is found.
    """

    out: list[str] = []
    i = start
    end = len(text)
    while i < end:
        ch = text[i]
        if ch == '"':
            return "".join(out)
        if ch == "\\" and i + 1 < end:
            nxt = text[i + 1]
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return None


def _success_marker(text: str, app_id: str, window: int) -> int | None:
    """Index of the `"success"` marker when its value window holds `true`."""

    key_pos = text.find(f'"{app_id}"')
    if key_pos < 0:
        return None

    success_pos = text.find('"success"', key_pos)
    if success_pos < 0:
        return None

    colon_pos = text.find(":", success_pos)
    if colon_pos < 0:
        return None

    if "true" not in text[colon_pos : colon_pos + window]:
        return None
    return success_pos


def _display_name(text: str, success_pos: int) -> str | None:
    data_pos = text.find('"data"', success_pos)
    if data_pos < 0:
        return None

    name_pos = text.find('"name"', data_pos)
    if name_pos < 0:
        return None

    colon_pos = text.find(":", name_pos)
    if colon_pos < 0:
        return None

    quote_pos = text.find('"', colon_pos + 1)
    if quote_pos < 0:
        return None

    return read_quoted(text, quote_pos + 1)


def scan_catalog_response(
    payload: bytes | str,
    app_id: str,
    *,
    window: int = DEFAULT_SUCCESS_WINDOW,
) -> CatalogRecord:
    """Extract existence and display name for `app_id` from `payload`."""

    if not payload:
        return CatalogRecord.missing(app_id)

    text = _decode_payload(payload)
    success_pos = _success_marker(text, app_id, window)
    if success_pos is None:
        logger.debug("store reports no data for AppID %s", app_id)
        return CatalogRecord.missing(app_id)

    name = _display_name(text, success_pos) or None
    if name is None:
        logger.debug("AppID %s exists but no name could be read", app_id)
    return CatalogRecord(app_id=app_id, exists=True, display_name=name)
