"""Typer entry point.

    steam-idler [APP_ID] [--doctor] [--verbose] [--no-banner]

The command only wires adapters together; the flow itself lives in
`core.services.idle_pipeline`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.appid_file import AppIdFile
from adapters.http_client import StoreCatalogClient
from adapters.native_library import CtypesLibraryLoader
from cli.doctor import run_doctor
from cli.ui_components import RichTerminal, print_banner
from core.config import AppSettings
from core.domain.exit_codes import ExitCode
from core.services.idle_pipeline import IdlePipeline, IdleRequest

app = typer.Typer(
    add_completion=False,
    help="Validate a Steam AppID against the Store and idle it through the Steam API.",
)

_console = Console(highlight=False)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def idle(app_id: str | None, settings: AppSettings, terminal: RichTerminal) -> ExitCode:
    """Run the idle pipeline with the production adapters."""

    with StoreCatalogClient(settings) as catalog:
        pipeline = IdlePipeline(
            terminal=terminal,
            catalog=catalog,
            store=AppIdFile(settings.appid_file),
            loader=CtypesLibraryLoader(),
            settings=settings,
        )
        result = pipeline.run(IdleRequest(app_id=app_id))
    return result.exit_code


@app.command()
def main(
    app_id: Optional[str] = typer.Argument(
        None,
        help="Steam AppID. Falls back to steam_appid.txt, then to an interactive prompt.",
        show_default=False,
    ),
    doctor: bool = typer.Option(False, "--doctor", help="Run environment diagnostics and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the welcome banner."),
) -> None:
    configure_logging(verbose)
    settings = AppSettings()

    if not no_banner:
        print_banner(_console)

    if doctor:
        ok = run_doctor(_console, settings)
        raise typer.Exit(code=0 if ok else 1)

    code = idle(app_id, settings, RichTerminal(_console))
    raise typer.Exit(code=int(code))


def run() -> None:
    # Game names carry characters such as "™"; Windows consoles default to cp1252.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()


if __name__ == "__main__":
    run()
