"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from pkgdeck import __version__
from pkgdeck.cli.commands import (
    create,
    delete,
    info,
    install,
    locate,
    packages,
    project,
    releases,
    settings,
)
from pkgdeck.models.project import ProjectConfigType
from pkgdeck.utils.log import setup_logging

# Create main Typer app
app = typer.Typer(
    name="pkgdeck",
    help="Manage the packages, releases and project links of a Unity project.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pkgdeck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    project_dir: Annotated[
        Path | None,
        typer.Option(
            "--project-dir",
            "-C",
            help="Project root directory (default: current directory).",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    config_type: Annotated[
        ProjectConfigType,
        typer.Option(
            "--config-type",
            "-t",
            help="Project config file to read and write.",
            case_sensitive=False,
        ),
    ] = ProjectConfigType.LOCAL_PROJECT,
) -> None:
    """pkgdeck - Package manager front-end for Unity projects.

    Lists installed packages and available releases, installs releases,
    and manages which packages are linked into the project as assets or
    plugins.
    """
    setup_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["project_dir"] = project_dir
    ctx.obj["config_type"] = config_type


# Register commands
app.add_typer(packages.app, name="packages")
app.add_typer(releases.app, name="releases")
app.command(name="install")(install.install)
app.command(name="delete")(delete.delete)
app.add_typer(create.app, name="create")
app.command(name="info")(info.info)
app.command(name="locate")(locate.locate)
app.add_typer(project.app, name="project")
app.add_typer(settings.app, name="settings")


if __name__ == "__main__":
    app()
