"""Relay of catalog commands into the active task.

Drives a running catalog command one step per tick, mirrors its latest
progress line into the task's status message and resolves to the command's
result. A failed command is reported to the user in a blocking error
dialog, after which the whole task is aborted.
"""

import logging
from collections.abc import Iterator
from typing import Any

from pkgdeck.catalog.base import CommandResponse, CommandSteps
from pkgdeck.core.errors import InvariantError
from pkgdeck.core.prompts import display_error
from pkgdeck.core.routine import Routine
from pkgdeck.core.scheduler import TaskScheduler

logger = logging.getLogger(__name__)


def process_command(
    scheduler: TaskScheduler, status_name: str, command: CommandSteps
) -> Iterator[Any]:
    """Run a catalog command inside the active task.

    Yields the command's result as the final value on success. On failure
    the task is force-aborted, so the caller never resumes.

    Args:
        scheduler: Scheduler owning the active task.
        status_name: Status text shown until the first progress line arrives.
        command: The running command's step sequence.

    Raises:
        InvariantError: If the command doesn't end with exactly one CommandResponse.
    """
    scheduler.set_status_message(status_name)

    response: CommandResponse | None = None
    for step in command:
        if isinstance(step, CommandResponse):
            response = step
            if next(command, None) is not None:
                msg = f"{status_name}: command produced steps after its response"
                raise InvariantError(msg)
            break

        if step is not None:
            if not isinstance(step, list):
                msg = f"{status_name}: unexpected command step {step!r}"
                raise InvariantError(msg)
            if step:
                scheduler.set_status_message(step[-1])

        yield None

    if response is None:
        msg = f"{status_name}: command finished without a response"
        raise InvariantError(msg)

    if response.succeeded:
        if response.result is not None:
            yield response.result
        return

    error_message = (
        f"Operation aborted! The package tool encountered errors:\n\n{response.error_message}"
    )
    logger.error("%s", error_message)

    yield display_error(scheduler, error_message)

    scheduler.force_abort()
    yield None


def process_command_for_result(
    scheduler: TaskScheduler, status_name: str, command: CommandSteps
) -> Routine[Any]:
    """Wrap ``process_command`` so its result can be read after completion."""
    return Routine(process_command(scheduler, status_name, command))
