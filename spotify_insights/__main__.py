"""
Console-script entry point: runs the Typer app and turns anything that escapes
a command into an error panel and an exit status.
"""

import logging
import sys

import typer

from spotify_insights.cli.app import app, console
from spotify_insights.cli.formatters import format_error_with_suggestions
from spotify_insights.exceptions import SpotifyInsightsError

log = logging.getLogger("spotify_insights")


def _report(error: Exception, unexpected: bool = False) -> int:
    context = {"type": "Unexpected"} if unexpected else None
    console.print()
    console.print(format_error_with_suggestions(error, context))
    if unexpected:
        log.debug("Full traceback:", exc_info=error)
    return 1


def main() -> None:
    try:
        app()
    except (typer.Exit, typer.Abort):
        return
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Cancelled.[/yellow]")
        code = 0
    except SpotifyInsightsError as e:
        code = _report(e)
    except Exception as e:
        code = _report(e, unexpected=True)
    else:
        return
    sys.exit(code)


if __name__ == "__main__":
    main()
