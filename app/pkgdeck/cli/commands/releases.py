"""Releases command for listing available releases.

This module provides the `pkgdeck releases` command.
"""

import json
from typing import Annotated

import typer

from pkgdeck.cli.types import open_manager
from pkgdeck.core.manager import ReleaseSortMethod
from pkgdeck.models.package import ReleaseInfo
from pkgdeck.utils.formatting import console, create_release_table, print_info

app = typer.Typer(
    name="releases",
    help="List releases available for install.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def releases(
    ctx: typer.Context,
    sort: Annotated[
        ReleaseSortMethod,
        typer.Option(
            "--sort",
            "-s",
            help="Sort releases by name, size or publish date.",
            case_sensitive=False,
        ),
    ] = ReleaseSortMethod.NAME,
    descending: Annotated[
        bool,
        typer.Option(
            "--descending",
            "-d",
            help="Reverse the sort order.",
        ),
    ] = False,
    search: Annotated[
        str,
        typer.Option(
            "--filter",
            "-f",
            help="Only list releases whose name contains this text (case-insensitive).",
        ),
    ] = "",
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """List the releases the package tool can install.

    Examples:
        pkgdeck releases                    # Sorted by name
        pkgdeck releases -s size -d         # Largest first
        pkgdeck releases -f shader          # Names containing "shader"
        pkgdeck releases --json
    """
    if ctx.invoked_subcommand is not None:
        return

    manager, _ = open_manager(ctx)
    manager.change_release_sort_method(sort)
    if descending:
        manager.toggle_release_sort_direction()
    manager.change_release_search_filter(search)

    infos: list[ReleaseInfo] = manager.visible_releases()

    if json_output:
        data = [info.model_dump(mode="json", by_alias=True) for info in infos]
        console.print_json(json.dumps(data))
        return

    if not infos:
        if search:
            print_info(f"No releases match '{search}'.")
        else:
            print_info("No releases available.")
        return

    console.print(create_release_table(infos))
