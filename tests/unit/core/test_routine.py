"""Unit tests for Routine.

Tests for step-wise advancing, nested routines and final values.
"""

from collections.abc import Iterator
from typing import Any

import pytest

from pkgdeck.core.errors import InvariantError
from pkgdeck.core.routine import Routine, RoutineState, wrap


def _countdown(n: int) -> Iterator[Any]:
    for _ in range(n):
        yield None
    yield f"done after {n}"


class TestRoutine:
    """Tests for Routine class."""

    def test_suspends_on_none(self) -> None:
        """Each None is one suspension point."""
        routine = Routine(_countdown(2))

        assert routine.state == RoutineState.PENDING
        assert routine.advance() is True
        assert routine.state == RoutineState.RUNNING
        assert routine.advance() is True
        assert routine.advance() is False
        assert routine.is_finished
        assert routine.current == "done after 2"
        assert routine.has_result

    def test_finished_routine_stays_finished(self) -> None:
        """Advancing a finished routine is a no-op."""
        routine = Routine(_countdown(0))
        routine.advance()

        assert routine.advance() is False
        assert routine.current == "done after 0"

    def test_no_final_value(self) -> None:
        """A routine may finish without producing a value."""

        def steps() -> Iterator[Any]:
            yield None

        routine = Routine(steps())

        assert routine.run_to_completion() is None
        assert not routine.has_result

    def test_falsy_final_values_count(self) -> None:
        """0 and empty lists are final values, only None suspends."""

        def zero() -> Iterator[Any]:
            yield 0

        def empty() -> Iterator[Any]:
            yield []

        assert Routine(zero()).run_to_completion() == 0
        empty_routine = Routine(empty())
        assert empty_routine.run_to_completion() == []
        assert empty_routine.has_result

    def test_value_after_final_value_raises(self) -> None:
        """Nothing may follow the final value."""

        def steps() -> Iterator[Any]:
            yield "first"
            yield "second"

        with pytest.raises(InvariantError):
            Routine(steps()).run_to_completion()

    def test_nested_generator_runs_first(self) -> None:
        """A yielded generator runs to completion before the outer resumes."""
        order: list[str] = []

        def inner() -> Iterator[Any]:
            order.append("inner start")
            yield None
            order.append("inner end")

        def outer() -> Iterator[Any]:
            yield inner()
            order.append("outer")
            yield "result"

        routine = Routine(outer())

        assert routine.advance() is True
        assert order == ["inner start"]
        assert routine.advance() is False
        assert order == ["inner start", "inner end", "outer"]
        assert routine.current == "result"

    def test_nested_routine_result_is_readable(self) -> None:
        """The outer routine reads the child's final value after yielding it."""

        def outer() -> Iterator[Any]:
            child = wrap(_countdown(3))
            yield child
            yield child.current.upper()

        assert Routine(outer()).run_to_completion() == "DONE AFTER 3"

    def test_nested_child_without_value_doesnt_finish_parent(self) -> None:
        """A child's missing value leaves the parent without one too."""

        def child() -> Iterator[Any]:
            yield None

        def outer() -> Iterator[Any]:
            yield child()
            yield None

        routine = Routine(outer())
        routine.run_to_completion()

        assert not routine.has_result

    def test_run_to_completion_step_limit(self) -> None:
        """run_to_completion() gives up on routines that never finish."""

        def forever() -> Iterator[Any]:
            while True:
                yield None

        with pytest.raises(InvariantError):
            Routine(forever()).run_to_completion(max_steps=10)
