"""CLI commands for pkgdeck.

This package contains all subcommand implementations.
"""

from pkgdeck.cli.commands import (
    create,
    delete,
    info,
    install,
    locate,
    packages,
    project,
    releases,
    settings,
)

__all__ = [
    "create",
    "delete",
    "info",
    "install",
    "locate",
    "packages",
    "project",
    "releases",
    "settings",
]
