"""Doctor command for environment diagnostics."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from adapters.appid_file import AppIdFile
from adapters.http_client import StoreCatalogClient
from adapters.native_library import CtypesLibraryLoader
from core.config import AppSettings
from core.interfaces.catalog import CatalogClient
from core.interfaces.session_library import LibraryLoader
from core.services.catalog_scan import scan_catalog_response
from core.services.environment import SessionEnvironment
from core.services.identifier import is_well_formed
from core.services.session_lifecycle import SYMBOL_INIT

# Team Fortress 2: free, always listed.
PROBE_APP_ID = "440"


def _check_catalog(catalog: CatalogClient, settings: AppSettings) -> tuple[bool, str]:
    payload = catalog.fetch(PROBE_APP_ID)
    if payload is None:
        return False, f"no response from {settings.catalog_url}"
    record = scan_catalog_response(payload, PROBE_APP_ID, window=settings.store_scan_window)
    if not record.exists:
        return False, f"unexpected answer for AppID {PROBE_APP_ID}"
    return True, record.display_name or "OK"


def _check_library(loader: LibraryLoader, settings: AppSettings) -> tuple[bool, str]:
    library = loader.load(settings.library_names)
    if library is None:
        return False, "not found: " + ", ".join(settings.library_names)
    try:
        if library.resolve(SYMBOL_INIT) is None:
            return False, f"{library.name} has no {SYMBOL_INIT}"
        return True, library.name
    finally:
        library.release()


def run_doctor(
    console: Console,
    settings: AppSettings | None = None,
    *,
    catalog: CatalogClient | None = None,
    loader: LibraryLoader | None = None,
) -> bool:
    """Run baseline diagnostics and print them as a table.

    Returns True when the store and the library checks both pass.
    """

    settings = settings or AppSettings()
    store = AppIdFile(settings.appid_file)
    environment = SessionEnvironment(store, settings.env_var_names)

    table = Table(title="SimpleSteamIdler Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    saved = store.load()
    if not saved:
        table.add_row("Saved AppID", "OPTIONAL", f"{settings.appid_file} is empty or missing")
    elif is_well_formed(saved):
        table.add_row("Saved AppID", "OK", saved)
    else:
        table.add_row("Saved AppID", "WARN", f"{saved!r} is not a numeric AppID")

    leftovers = environment.current()
    if leftovers:
        detail = ", ".join(f"{k}={v}" for k, v in leftovers.items())
        table.add_row("Environment", "WARN", f"stale variables: {detail}")
    else:
        table.add_row("Environment", "OK", "no stale AppID variables")

    if catalog is None:
        with StoreCatalogClient(settings) as client:
            ok_store, detail_store = _check_catalog(client, settings)
    else:
        ok_store, detail_store = _check_catalog(catalog, settings)
    table.add_row("Steam Store", "OK" if ok_store else "FAIL", detail_store)

    ok_lib, detail_lib = _check_library(loader or CtypesLibraryLoader(), settings)
    table.add_row("steam_api library", "OK" if ok_lib else "FAIL", detail_lib)

    console.print(table)

    if not ok_lib:
        console.print(
            "\n[yellow]Note:[/yellow] Copy steam_api64.dll/steam_api.dll (or libsteam_api.so) "
            "from the Steamworks SDK next to the executable."
        )
    return ok_store and ok_lib
