"""stringplugin CLI entry point.

Usage:
    stringplugin bundle [options]    - Resolve string imports
    stringplugin version [options]   - Show version information
"""

import logging
import sys
from typing import Annotated

import structlog
import typer

from stringplugin.cli.commands import bundle, version

app = typer.Typer(
    name="stringplugin",
    help="Import text files as strings when bundling",
    no_args_is_help=True,
)


@app.callback()
def configure_logging(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Log level for plugin diagnostics (written to stderr)",
        ),
    ] = "WARNING",
) -> None:
    """Import text files as strings when bundling."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        typer.echo(f"Error: Unknown log level '{log_level}'", err=True)
        raise typer.Exit(2)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


app.command(name="bundle")(bundle.bundle_command)
app.command(name="version")(version.version_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
