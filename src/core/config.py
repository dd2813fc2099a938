"""Core configuration.

Centralizes environment variables (pydantic-settings) so the CLI and the
adapters (HTTP catalog, native session library, persisted AppID file) read
the same values.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "steam-idler"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "steam-idler"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "steam-idler"
    return Path.home() / ".config" / "steam-idler"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_library_names() -> list[str]:
    """Native session library names, primary first then fallback."""

    if sys.platform.startswith("win"):
        return ["steam_api64.dll", "steam_api.dll"]
    if sys.platform == "darwin":
        return ["libsteam_api.dylib", "./libsteam_api.dylib"]
    return ["libsteam_api.so", "./libsteam_api.so"]


class AppSettings(BaseSettings):
    """Application settings.

    Every field can be overridden with a `STEAM_IDLER_` prefixed variable,
    either in the process environment or in a `.env` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="STEAM_IDLER_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user-level config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    catalog_url: str = Field(
        default="https://store.steampowered.com/api/appdetails",
        min_length=8,
        description="Store endpoint queried with `?appids=<id>`.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per catalog request (seconds).",
    )
    user_agent: str = Field(
        default="SimpleSteamIdler/1.0",
        min_length=1,
        description="User-Agent sent to the store.",
    )
    store_scan_window: int = Field(
        default=50,
        ge=4,
        le=1000,
        description="Characters after the `success` colon searched for `true`.",
    )

    appid_file: Path = Field(
        default=Path("steam_appid.txt"),
        description="Single-value file holding the last confirmed AppID.",
    )
    library_names: list[str] = Field(
        default_factory=default_library_names,
        min_length=1,
        description="Native session library names, tried in order.",
    )
    env_var_names: list[str] = Field(
        default_factory=lambda: ["SteamAppId", "SteamGameId"],
        min_length=1,
        description="Process environment variables read by the session library.",
    )

    max_attempts: int = Field(
        default=1000,
        ge=1,
        description="Ceiling on validation attempts before aborting.",
    )
    maintenance_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        le=60,
        description="Period of the background callback pump (seconds).",
    )
