"""Packages command for listing installed packages.

This module provides the `pkgdeck packages` command.
"""

import json
from typing import Annotated

import typer

from pkgdeck.cli.types import open_manager
from pkgdeck.models.package import PackageInfo
from pkgdeck.utils.formatting import console, create_package_table, print_info

app = typer.Typer(
    name="packages",
    help="List installed packages.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def packages(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """List the packages installed in the package cache.

    Examples:
        pkgdeck packages            # Table output
        pkgdeck packages --json     # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    manager, _ = open_manager(ctx)
    infos: list[PackageInfo] = [entry.tag for entry in manager.packages]

    if json_output:
        data = [info.model_dump(mode="json", by_alias=True) for info in infos]
        console.print_json(json.dumps(data))
        return

    if not infos:
        print_info("No packages installed.")
        return

    console.print(create_package_table(infos))
