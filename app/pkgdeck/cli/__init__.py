"""CLI package for pkgdeck.

This package contains the Typer application and all subcommands.
"""

from pkgdeck.cli.main import app

__all__ = ["app"]
