"""CLI UI components (Rich).

Keeps visual details (banner, terminal I/O) out of the command logic.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from core.errors import InputClosedError


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Lives here rather than in `main` to avoid a circular import with
    `doctor`; non-interactive runs skip it with `--no-banner`.
    """

    title = Text("SimpleSteamIdler", style="bold cyan")
    subtitle = Text("AppID validation • Steam session idling", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


class RichTerminal:
    """`core.interfaces.terminal.Terminal` on top of a Rich console.

    Dynamic text (game names, AppIDs typed by the user) is printed with
    markup and highlighting disabled so it reaches the screen verbatim.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def display(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def prompt(self, text: str) -> str:
        try:
            return self.console.input(Text(text))
        except EOFError as exc:
            raise InputClosedError("standard input closed") from exc
