"""Logging configuration for pkgdeck.

Library modules only create loggers with ``logging.getLogger(__name__)``;
the CLI attaches a handler once at startup.
"""

import logging

from rich.logging import RichHandler

from pkgdeck.utils.formatting import err_console

_root_logger = logging.getLogger("pkgdeck")


def setup_logging(verbose: bool = False) -> None:
    """Configure the package logger.

    Warnings and errors are always shown on stderr. With ``verbose``,
    debug output including every package tool invocation is shown too.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    handler = RichHandler(
        console=err_console,
        show_path=verbose,
        show_time=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    _root_logger.addHandler(handler)
