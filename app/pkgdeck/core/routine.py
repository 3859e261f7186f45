"""Step-wise routines built on generators.

Long-running operations are written as generators and driven one step per
scheduler tick. A generator step may yield:

- ``None`` to suspend until the next tick;
- another generator or Routine, which runs to completion before the outer
  generator resumes (it can read the inner Routine's result afterwards);
- any other value, which becomes the routine's final result. Nothing may
  follow a final result.

Wrapping a generator in a Routine is what lets a prompt ("ask the user to
pick one of three choices") or a relayed tool command ("list the installed
packages") be awaited as a single value.

Example:
    >>> def ask():
    ...     choice = prompt_for_choice(scheduler, None, "Continue?", "Yes", "No")
    ...     yield choice
    ...     if choice.current == 0:
    ...         yield do_work()
"""

import logging
from collections.abc import Generator, Iterator
from enum import Enum
from typing import Any, Generic, TypeVar

from pkgdeck.core.errors import InvariantError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Steps = Iterator[Any]


class RoutineState(Enum):
    """Lifecycle of a Routine."""

    PENDING = "pending"
    RUNNING = "running"
    FINISHED = "finished"


class Routine(Generic[T]):
    """Drives a generator step by step and captures its final value.

    Attributes:
        current: The final value, once produced. None until then.
    """

    def __init__(self, steps: Steps) -> None:
        self._steps = steps
        self._child: Routine[Any] | None = None
        self._current: T | None = None
        self._has_result = False
        self._state = RoutineState.PENDING

    @property
    def current(self) -> T | None:
        return self._current

    @property
    def has_result(self) -> bool:
        """Check if the routine produced a final value."""
        return self._has_result

    @property
    def state(self) -> RoutineState:
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._state == RoutineState.FINISHED

    def advance(self) -> bool:
        """Run the routine until its next suspension point.

        Returns:
            True if more steps remain, False once the routine has finished.

        Raises:
            InvariantError: If the generator keeps going after its final value.
        """
        if self._state == RoutineState.FINISHED:
            return False
        self._state = RoutineState.RUNNING

        while True:
            if self._child is not None:
                if self._child.advance():
                    return True
                self._child = None

            try:
                value = next(self._steps)
            except StopIteration:
                self._state = RoutineState.FINISHED
                return False

            if self._has_result:
                msg = f"Routine produced {value!r} after its final value {self._current!r}"
                raise InvariantError(msg)

            if value is None:
                return True

            if isinstance(value, Routine):
                self._child = value
            elif isinstance(value, Generator):
                self._child = Routine(value)
            else:
                self._current = value
                self._has_result = True

    def run_to_completion(self, max_steps: int = 10_000) -> T | None:
        """Advance until finished, for routines that never wait on a user.

        Raises:
            InvariantError: If the routine doesn't finish within ``max_steps``.
        """
        for _ in range(max_steps):
            if not self.advance():
                return self._current
        msg = f"Routine did not finish within {max_steps} steps"
        raise InvariantError(msg)


def wrap(steps: Steps) -> Routine[Any]:
    """Wrap a generator so its final value can be read after it completes."""
    return Routine(steps)
