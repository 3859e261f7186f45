"""Create command for making a new empty package.

This module provides the `pkgdeck create` command.
"""

import typer

from pkgdeck.cli.types import drive, open_manager

app = typer.Typer(
    name="create",
    help="Create a new package.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def create(ctx: typer.Context) -> None:
    """Create a new package, prompting for its name.

    Examples:
        pkgdeck create
    """
    if ctx.invoked_subcommand is not None:
        return

    manager, settings = open_manager(ctx, load_lists=False)
    manager.create_package()
    drive(manager, settings)
