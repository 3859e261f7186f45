"""Locate command for finding a package on disk.

This module provides the `pkgdeck locate` command.
"""

from typing import Annotated

import typer

from pkgdeck.cli.types import drive, open_manager, select_by_names
from pkgdeck.core.collection import TypedCollection
from pkgdeck.core.manager import PackageManager
from pkgdeck.utils.formatting import console, print_error


def locate(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Package, release, asset or plugin name."),
    ],
) -> None:
    """Print where a package lives on disk.

    Project items are looked up in the project's Assets and Assets/Plugins
    folders; packages in the package cache; releases by their archive.

    Examples:
        pkgdeck locate MyTool
    """
    manager, settings = open_manager(ctx)
    collection = _find_collection(manager, name)
    if collection is None:
        print_error(f"No package, release or project item named '{name}'")
        raise typer.Exit(code=1)

    select_by_names(manager, collection, [name])
    if collection.role.is_project_item:
        path = manager.show_selected_in_project()
    else:
        path = manager.folder_for_selected()

    if path is None:
        # The error popup was queued by the manager
        drive(manager, settings)
        raise typer.Exit(code=1)

    console.print(str(path))


def _find_collection(manager: PackageManager, name: str) -> TypedCollection | None:
    for collection in (manager.assets, manager.plugins, manager.packages, manager.releases):
        if collection.contains(name):
            return collection
    return None
