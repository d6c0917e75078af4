"""Version command for the stringplugin CLI."""

import sys
from typing import Annotated

import typer

from stringplugin.loader import PluginLoader


def get_version() -> str:
    """Get the installed stringplugin version.

    Returns:
        Version string or 'unknown' if not found.
    """
    try:
        from importlib.metadata import version

        return version("stringplugin")
    except Exception:
        return "unknown"


def version_command(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show detailed version information",
        ),
    ] = False,
) -> None:
    """Show stringplugin version information."""
    plugin_version = get_version()

    if not verbose:
        typer.echo(f"stringplugin {plugin_version}")
        return

    typer.echo(f"stringplugin version: {plugin_version}")
    typer.echo(f"Plugin package: {PluginLoader.package_name()}")
    typer.echo(f"Conflicts with: {', '.join(PluginLoader.conflict_packages())}")
    typer.echo(f"Python version: {sys.version}")

    typer.echo("\nDependencies:")
    for dep in ["pydantic", "pyyaml", "structlog", "typer"]:
        try:
            from importlib.metadata import version

            typer.echo(f"  {dep}: {version(dep)}")
        except Exception:
            typer.echo(f"  {dep}: not found")
