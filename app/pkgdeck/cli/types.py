"""Shared types and helpers for CLI commands.

This module provides the helpers every command uses to build a
PackageManager from the global options, run its tasks and pick entries
by name.
"""

from enum import Enum
from pathlib import Path

import typer

from pkgdeck.catalog.command import CommandCatalogService
from pkgdeck.cli.driver import run_tasks
from pkgdeck.core.collection import Entry, Role, TypedCollection
from pkgdeck.core.manager import PackageManager
from pkgdeck.core.project import ProjectStore
from pkgdeck.core.settings import AppSettings, SettingsError, load_settings
from pkgdeck.models.project import ProjectConfigType
from pkgdeck.utils.formatting import print_error


class ProjectItemKind(str, Enum):
    """Project list a package can be assigned to."""

    ASSET = "asset"
    PLUGIN = "plugin"


def require_settings() -> AppSettings:
    """Load settings or exit with a helpful error message.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e


def get_project_dir(ctx: typer.Context) -> Path:
    obj = ctx.obj or {}
    return Path(obj.get("project_dir") or Path.cwd())


def get_config_type(ctx: typer.Context) -> ProjectConfigType:
    obj = ctx.obj or {}
    return obj.get("config_type") or ProjectConfigType.LOCAL_PROJECT


def build_manager(
    settings: AppSettings, project_dir: Path, config_type: ProjectConfigType
) -> PackageManager:
    """Create a PackageManager wired to the external package tool.

    Args:
        settings: Application settings.
        project_dir: Root directory of the project.
        config_type: Which project membership file to use.

    Returns:
        A new, idle PackageManager.
    """
    catalog = CommandCatalogService(settings, cwd=str(project_dir))
    return PackageManager(catalog, ProjectStore(project_dir), config_type=config_type)


def open_manager(ctx: typer.Context, load_lists: bool = True) -> tuple[PackageManager, AppSettings]:
    """Build a manager for the selected project and optionally load its lists.

    Args:
        ctx: Typer context carrying the global options.
        load_lists: Load the project config and both package tool lists.

    Returns:
        The manager and the settings it was built from.

    Raises:
        typer.Exit: If loading the lists failed.
    """
    settings = require_settings()
    manager = build_manager(settings, get_project_dir(ctx), get_config_type(ctx))
    if load_lists:
        manager.start()
        drive(manager, settings)
    return manager, settings


def drive(manager: PackageManager, settings: AppSettings) -> None:
    """Run queued tasks to completion.

    Raises:
        typer.Exit: If a package tool command failed.
    """
    if not run_tasks(manager.scheduler, settings.poll_interval):
        raise typer.Exit(code=1)


def select_by_names(
    manager: PackageManager, collection: TypedCollection, names: list[str]
) -> list[Entry]:
    """Select the named entries of one collection.

    Releases may also be named by their ID.

    Raises:
        typer.Exit: If a name matches no entry.
    """
    entries: list[Entry] = []
    for name in names:
        entry = collection.get(name) or _find_release_by_id(collection, name)
        if entry is None:
            print_error(f"No {collection.role.value} named '{name}'")
            raise typer.Exit(code=1)
        # A release may be named both by name and by ID
        if entry not in entries:
            entries.append(entry)

    manager.selection.clear()
    for entry in entries:
        manager.select(entry, ctrl=True)
    return entries


def _find_release_by_id(collection: TypedCollection, release_id: str) -> Entry | None:
    if collection.role != Role.RELEASE:
        return None
    for entry in collection:
        if entry.tag.id == release_id:
            return entry
    return None
