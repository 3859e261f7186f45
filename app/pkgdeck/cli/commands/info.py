"""Info command for showing release details.

This module provides the `pkgdeck info` command.
"""

from typing import Annotated

import typer

from pkgdeck.cli.types import drive, open_manager, select_by_names
from pkgdeck.core.manager import ContextAction
from pkgdeck.utils.formatting import console


def info(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Release name or ID."),
    ],
) -> None:
    """Show the details of a release.

    Prints the asset store page URL too when the release has one.

    Examples:
        pkgdeck info MyTool
    """
    manager, settings = open_manager(ctx)
    (entry,) = select_by_names(manager, manager.releases, [name])

    manager.show_release_info_for_selected()
    drive(manager, settings)

    actions = manager.context_actions(manager.releases)
    if actions.get(ContextAction.OPEN_IN_ASSET_STORE):
        console.print(f"Asset Store: [info]{manager.asset_store_url(entry.tag)}[/]")
    if actions.get(ContextAction.OPEN_FOLDER):
        console.print(f"Archive: [muted]{entry.tag.local_path}[/]")
