"""Bundle command for the stringplugin CLI.

This module provides the `stringplugin bundle` command. It loads the string
plugin into a host, resolves the `--string` flag (falling back to the
`{PREFIX}_STRING` environment variable) and prints the options of the input
plugin the bundler would receive.

Exit codes:
    0: Success
    1: Invalid string configuration or plugin options
    2: Settings file could not be loaded
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError

from stringplugin.config import BundleData, HostSettings, load_settings
from stringplugin.errors import NonFatalError
from stringplugin.host import PluginHost
from stringplugin.loader import PluginLoader


def _load_host_settings(config: Path | None) -> HostSettings:
    if config is None:
        return HostSettings()

    try:
        return load_settings(config).host
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from e
    except yaml.YAMLError as e:
        typer.echo(f"Error: Invalid YAML in {config}: {e}", err=True)
        raise typer.Exit(2) from e
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: Failed to load settings: {e}", err=True)
        raise typer.Exit(2) from e


def bundle_command(
    string: Annotated[
        list[str] | None,
        typer.Option(
            "--string",
            "-s",
            help="Allows imports of string / text content.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a settings file",
        ),
    ] = None,
    inputs: Annotated[
        list[Path] | None,
        typer.Option(
            "--input",
            "-i",
            help="Source file to check against the string plugin filter",
        ),
    ] = None,
) -> None:
    """Resolve string imports for the bundle command.

    Prints the options of the configured string input plugin as JSON.

    Examples:
        stringplugin bundle                          # Use env or **/*.html
        stringplugin bundle -s "**/*.txt" -s "*.md"  # Explicit patterns
        stringplugin bundle -i views/page.html       # Check a source file
    """
    settings = _load_host_settings(config)
    host = PluginHost(settings)
    asyncio.run(host.load_plugin(PluginLoader))

    try:
        flags = host.parse_flags("bundle", {"string": string or None})
    except NonFatalError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1) from e

    try:
        plugin = host.get_input_plugin(BundleData(cli_flags=flags))
    except ValidationError as e:
        typer.echo(f"Error: Invalid string plugin options: {e}", err=True)
        raise typer.Exit(1) from e

    if plugin is None:
        typer.echo("null")
        return

    typer.echo(json.dumps(plugin.options.model_dump()))

    for path in inputs or []:
        status = "string" if plugin.filter(path) else "skipped"
        typer.echo(f"{path.as_posix()}: {status}")
