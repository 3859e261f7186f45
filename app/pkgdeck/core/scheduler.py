"""Single-slot cooperative task scheduler.

At most one long-running operation (a Task) exists at a time. The
front-end calls ``tick`` once per frame; each tick advances the task's
routine to its next suspension point. While a task runs, the front-end
suppresses its own input and renders either the open popup or, if the task
asked for it, a processing overlay with the task's status text.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from pkgdeck.core.errors import InvariantError
from pkgdeck.core.popups import Popup
from pkgdeck.core.routine import Routine

logger = logging.getLogger(__name__)

DEFAULT_STATUS_TITLE = "Processing"


@dataclass(slots=True)
class Task:
    """The single in-flight operation.

    Attributes:
        routine: Routine advanced once per tick.
        status_title: Heading of the processing overlay.
        status_message: Latest progress text, updated while the task runs.
        show_processing_label: Whether the processing overlay is shown.
    """

    routine: Routine[Any]
    status_title: str | None = None
    status_message: str | None = None
    show_processing_label: bool = True
    ticks: int = field(default=0)

    @property
    def display_title(self) -> str:
        return self.status_title or DEFAULT_STATUS_TITLE


class TaskScheduler:
    """Owns the active Task and the overlay popup slot."""

    def __init__(self) -> None:
        self._task: Task | None = None
        self._popup: Popup | None = None
        self.abort_count = 0

    @property
    def task(self) -> Task | None:
        return self._task

    @property
    def is_busy(self) -> bool:
        """Check if a task is active; interactive input should be ignored then."""
        return self._task is not None

    @property
    def popup(self) -> Popup | None:
        """The open popup, only ever set while a task is active."""
        if self._task is None and self._popup is not None:
            msg = "A popup is open without an active task"
            raise InvariantError(msg)
        return self._popup

    def submit(
        self,
        routine: Routine[Any] | Iterator[Any],
        show_processing_label: bool = True,
        title: str | None = None,
    ) -> Task:
        """Start a new task.

        Args:
            routine: Routine or generator to run.
            show_processing_label: Show the processing overlay while running.
            title: Overlay heading.

        Returns:
            The new active task.

        Raises:
            InvariantError: If a task is already active.
        """
        if self._task is not None:
            msg = (
                f"Cannot start {title or 'task'!r}: "
                f"{self._task.display_title!r} is still running"
            )
            raise InvariantError(msg)

        if not isinstance(routine, Routine):
            routine = Routine(routine)

        self._task = Task(
            routine=routine,
            status_title=title,
            show_processing_label=show_processing_label,
        )
        logger.debug("Started task %r", self._task.display_title)
        return self._task

    def tick(self) -> bool:
        """Advance the active task by one step.

        Returns:
            True if a task is still active afterwards.
        """
        task = self._task
        if task is None:
            return False

        task.ticks += 1
        try:
            more = task.routine.advance()
        except Exception:
            logger.exception("Task %r failed", task.display_title)
            if self._task is task:
                self._clear()
            raise

        # The routine may have force-aborted itself during this step
        if not more and self._task is task:
            logger.debug("Task %r finished after %d ticks", task.display_title, task.ticks)
            self._clear()

        return self._task is not None

    def force_abort(self) -> None:
        """Drop the active task without running it any further."""
        if self._task is not None:
            logger.debug("Aborting task %r", self._task.display_title)
            self.abort_count += 1
        self._clear()

    def set_status_message(self, message: str) -> None:
        """Update the progress text of the active task.

        Raises:
            InvariantError: If no task is active.
        """
        self._require_task().status_message = message

    def set_show_processing_label(self, show: bool) -> None:
        self._require_task().show_processing_label = show

    def open_popup(self, popup: Popup) -> None:
        """Put a popup in the overlay slot.

        Raises:
            InvariantError: If no task is active or a popup is already open.
        """
        self._require_task()
        if self._popup is not None:
            msg = "Another popup is already open"
            raise InvariantError(msg)
        self._popup = popup

    def close_popup(self, popup: Popup) -> None:
        if self._popup is not popup:
            msg = "Closing a popup that isn't open"
            raise InvariantError(msg)
        self._popup = None

    def run_until_idle(self, max_ticks: int = 10_000) -> None:
        """Tick until no task is active.

        Only useful for tasks that never wait on a popup.

        Raises:
            InvariantError: If the task is still active after ``max_ticks``.
        """
        for _ in range(max_ticks):
            if not self.tick():
                return
        msg = f"Task still running after {max_ticks} ticks"
        raise InvariantError(msg)

    def _require_task(self) -> Task:
        if self._task is None:
            msg = "No task is active"
            raise InvariantError(msg)
        return self._task

    def _clear(self) -> None:
        self._task = None
        self._popup = None
