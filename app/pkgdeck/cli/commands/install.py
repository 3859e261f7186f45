"""Install command for installing releases.

This module provides the `pkgdeck install` command.
"""

from typing import Annotated

import typer

from pkgdeck.cli.types import drive, open_manager, select_by_names
from pkgdeck.core.classification import DropAction
from pkgdeck.utils.formatting import print_info


def install(
    ctx: typer.Context,
    names: Annotated[
        list[str],
        typer.Argument(help="Release names or IDs to install."),
    ],
) -> None:
    """Install one or more releases.

    Releases that are already installed in another version prompt for an
    upgrade, downgrade or overwrite; choosing Cancel stops the whole batch.

    Examples:
        pkgdeck install MyTool
        pkgdeck install MyTool OtherTool
    """
    manager, settings = open_manager(ctx)
    select_by_names(manager, manager.releases, list(dict.fromkeys(names)))

    payload = manager.begin_drag()
    if payload is None or manager.on_drag_drop(payload, manager.packages) != DropAction.INSTALL:
        print_info("Nothing to install.")
        return

    drive(manager, settings)
