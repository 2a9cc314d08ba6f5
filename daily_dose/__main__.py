"""
Entry point for the `daily-dose` script and `python -m daily_dose`.
"""

import logging
import os
import sys
from typing import Optional, Sequence

from rich.console import Console

from daily_dose.cli.app import app
from daily_dose.cli.formatters import format_error_with_suggestions
from daily_dose.exceptions import DailyDoseError

log = logging.getLogger("daily_dose")


def _force_utf8_output() -> None:
    """Setlist bullets and show labels need UTF-8 on legacy Windows consoles."""
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Runs the CLI. Commands report their own expected failures; anything that
    still escapes is shown as an error panel on stderr with exit code 1.
    Ctrl-C and typer.Exit are handled by Click's standalone mode.
    """
    if os.name == "nt":
        _force_utf8_output()

    args = list(argv) if argv is not None else None
    try:
        app(args=args, prog_name="daily-dose")
    except DailyDoseError as e:
        Console(stderr=True).print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        Console(stderr=True).print(
            format_error_with_suggestions(e, {"type": "Unexpected"})
        )
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
