"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from pkgdeck.core.theme import get_theme

if TYPE_CHECKING:
    from pkgdeck.models.package import PackageInfo, ReleaseInfo


def _detect_color_system() -> str | None:
    """Use truecolor for interactive terminals, let Rich auto-detect otherwise."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def _new_table(title: str) -> Table:
    return Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )


def create_package_table(packages: list[PackageInfo], title: str = "Installed Packages") -> Table:
    """Create a table listing installed packages.

    Args:
        packages: Packages in display order.
        title: Table title.

    Returns:
        Rich Table with one row per package.
    """
    table = _new_table(title)
    table.add_column("Package", style="role.package", no_wrap=True)
    table.add_column("Version", style="version")
    table.add_column("Release", style="muted")
    table.add_column("Path", style="muted", overflow="ellipsis")

    for pkg in packages:
        release = pkg.release_info
        table.add_row(
            pkg.name,
            pkg.version or "-",
            release.id if release is not None else "-",
            pkg.path,
        )
    return table


def create_release_table(releases: list[ReleaseInfo], title: str = "Available Releases") -> Table:
    """Create a table listing available releases.

    Args:
        releases: Releases in display order.
        title: Table title.

    Returns:
        Rich Table with one row per release.
    """
    table = _new_table(title)
    table.add_column("Release", style="role.release", no_wrap=True)
    table.add_column("Version", style="version")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Published", style="muted")

    for release in releases:
        store = release.asset_store_info
        table.add_row(
            release.name,
            release.version or "-",
            release.size_human,
            (store.publish_date if store is not None else None) or "-",
        )
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
