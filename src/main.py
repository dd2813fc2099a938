"""Run script.

Allows `python -m main` from inside `src/` during development, next to the
installed `steam-idler` script.
"""

from __future__ import annotations

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
