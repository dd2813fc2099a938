"""`steam_appid.txt` persistence."""

from __future__ import annotations

import logging
from pathlib import Path

from core.services.identifier import normalize

logger = logging.getLogger(__name__)


class AppIdFile:
    """Single-line text file holding the last confirmed AppID.

    The Steam API also reads this file from the working directory, so the
    format stays exactly `<appid>\\n`.
    """

    def __init__(self, path: Path | str = "steam_appid.txt") -> None:
        self.path = Path(path)

    def load(self) -> str:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("could not read %s: %s", self.path, exc)
            return ""
        lines = text.splitlines()
        return normalize(lines[0]) if lines else ""

    def save(self, app_id: str) -> None:
        try:
            self.path.write_text(f"{app_id}\n", encoding="utf-8")
        except OSError as exc:
            logger.warning("could not write %s: %s", self.path, exc)
