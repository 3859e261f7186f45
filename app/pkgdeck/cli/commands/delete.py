"""Delete command for removing installed packages.

This module provides the `pkgdeck delete` command.
"""

from typing import Annotated

import typer

from pkgdeck.cli.types import drive, open_manager, select_by_names
from pkgdeck.utils.formatting import print_info, print_success


def delete(
    ctx: typer.Context,
    names: Annotated[
        list[str],
        typer.Argument(help="Names of installed packages to delete."),
    ],
) -> None:
    """Delete installed packages after confirmation.

    Examples:
        pkgdeck delete MyTool
    """
    unique = list(dict.fromkeys(names))
    manager, settings = open_manager(ctx)
    select_by_names(manager, manager.packages, unique)

    manager.delete_selected()
    drive(manager, settings)

    remaining = [name for name in unique if manager.packages.contains(name)]
    if remaining:
        print_info(f"Kept {len(remaining)} package(s): {', '.join(remaining)}")
    else:
        print_success(f"Deleted {len(unique)} package(s)")
