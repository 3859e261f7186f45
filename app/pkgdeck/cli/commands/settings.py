"""Settings commands for inspecting and creating the settings file.

Provides commands to show the effective settings and to write a settings
file with the defaults.
"""

import shlex
from typing import Annotated

import typer
from rich.table import Table

from pkgdeck.cli.types import require_settings
from pkgdeck.core.paths import ensure_config_dir, get_settings_path
from pkgdeck.core.settings import AppSettings, SettingsError, save_settings
from pkgdeck.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the pkgdeck settings file.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    path = get_settings_path()
    settings = require_settings()

    if not path.exists():
        print_info(f"No settings file at {path}, showing defaults.")

    table = Table(title="Settings", header_style="bold_header", border_style="border")
    table.add_column("Key", style="bold_header")
    table.add_column("Value")
    table.add_row("tool_command", shlex.join(settings.tool_command))
    table.add_row("timeout_seconds", str(settings.timeout_seconds))
    table.add_row("poll_interval", str(settings.poll_interval))
    console.print(table)


@app.command()
def init(
    tool: Annotated[
        str | None,
        typer.Option(
            "--tool",
            help="Package tool command line, e.g. 'dotnet upm.dll'.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_error(f"Settings file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        settings = AppSettings(tool_command=shlex.split(tool)) if tool else AppSettings()
    except ValueError as e:
        print_error(f"Invalid tool command: {e}")
        raise typer.Exit(code=1) from e

    try:
        ensure_config_dir()
        saved = save_settings(settings, path)
    except (RuntimeError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
