"""Project commands for managing which packages are linked into the project.

This module provides the `pkgdeck project` command group:
- show: List the packages linked as assets and plugins
- assign: Link installed packages as assets or plugins
- unassign: Remove packages from the project
- apply: Save the project config and update the directory links
"""

from typing import Annotated

import typer
from rich.table import Table

from pkgdeck.cli.types import ProjectItemKind, drive, open_manager, select_by_names
from pkgdeck.core.collection import TypedCollection
from pkgdeck.core.manager import PackageManager
from pkgdeck.core.project import ProjectConfigError
from pkgdeck.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage the packages linked into the project.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _load_project(manager: PackageManager) -> None:
    try:
        manager.refresh_project()
    except ProjectConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _save_project(manager: PackageManager) -> None:
    try:
        path = manager.overwrite_config()
    except ProjectConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Saved project config to {path}")


def _print_items(
    manager: PackageManager, title: str, style: str, collection: TypedCollection
) -> None:
    table = Table(title=title, header_style="bold_header", border_style="border")
    table.add_column("Package", style=style)
    table.add_column("Linked", justify="center")
    for entry in collection:
        linked = manager.find_project_folder(entry.name) is not None
        table.add_row(entry.name, "[success]yes[/]" if linked else "[muted]no[/]")
    console.print(table)


@app.command()
def show(ctx: typer.Context) -> None:
    """List the packages linked as assets and plugins."""
    manager, _ = open_manager(ctx, load_lists=False)
    _load_project(manager)

    path = manager.store.path_for(manager.project_config_type)
    console.print(f"[muted]Config ({manager.project_config_type.value}):[/] {path}")

    if not len(manager.assets) and not len(manager.plugins):
        print_info("No packages are linked into this project.")
        return

    _print_items(manager, "Assets", "role.asset", manager.assets)
    _print_items(manager, "Plugins", "role.plugin", manager.plugins)


@app.command()
def assign(
    ctx: typer.Context,
    names: Annotated[
        list[str],
        typer.Argument(help="Installed packages to link."),
    ],
    kind: Annotated[
        ProjectItemKind,
        typer.Option(
            "--as",
            help="Link as asset or plugin.",
            case_sensitive=False,
        ),
    ] = ProjectItemKind.ASSET,
) -> None:
    """Link installed packages into the project.

    A package that is already linked the other way is moved over.

    Examples:
        pkgdeck project assign MyTool
        pkgdeck project assign MyTool --as plugin
    """
    manager, _ = open_manager(ctx)
    select_by_names(manager, manager.packages, list(dict.fromkeys(names)))

    dest = manager.plugins if kind == ProjectItemKind.PLUGIN else manager.assets
    payload = manager.begin_drag()
    if payload is None or not manager.is_drag_allowed(payload, dest):
        print_error(f"Cannot link packages as {kind.value}s")
        raise typer.Exit(code=1)

    manager.on_drag_drop(payload, dest)
    _save_project(manager)


@app.command()
def unassign(
    ctx: typer.Context,
    names: Annotated[
        list[str],
        typer.Argument(help="Linked packages to remove from the project."),
    ],
) -> None:
    """Remove packages from the project's asset and plugin lists.

    Examples:
        pkgdeck project unassign MyTool
    """
    manager, settings = open_manager(ctx, load_lists=False)
    _load_project(manager)

    unique = list(dict.fromkeys(names))
    missing = [
        n for n in unique if not manager.assets.contains(n) and not manager.plugins.contains(n)
    ]
    if missing:
        print_error(f"Not linked into the project: {', '.join(missing)}")
        raise typer.Exit(code=1)

    # A selection holds entries of one collection only
    for collection in (manager.assets, manager.plugins):
        in_list = [n for n in unique if collection.contains(n)]
        if in_list:
            select_by_names(manager, collection, in_list)
            manager.delete_selected()
            drive(manager, settings)

    _save_project(manager)


@app.command()
def apply(ctx: typer.Context) -> None:
    """Save the project config and update the project's directory links."""
    manager, settings = open_manager(ctx, load_lists=False)
    _load_project(manager)

    try:
        manager.apply_project()
    except ProjectConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    drive(manager, settings)
    print_success("Project links updated")
