"""User prompts as awaitable routines.

Each prompt opens one popup in the scheduler's overlay slot, waits for the
front-end to answer it and then produces the answer as its final value.
"""

from collections.abc import Iterator
from typing import Any

from pkgdeck.core.popups import ChoicePopup, InputPopup, InputState, ReleaseInfoPopup
from pkgdeck.core.routine import Routine
from pkgdeck.core.scheduler import TaskScheduler
from pkgdeck.models.package import ReleaseInfo

ERROR_TITLE = "Error!"


def prompt_for_choice(
    scheduler: TaskScheduler, title: str | None, question: str, *choices: str
) -> Routine[int]:
    """Ask a question with fixed answers.

    Returns:
        Routine whose final value is the index of the chosen answer.
    """
    return Routine(_prompt_for_choice(scheduler, ChoicePopup(title, question, choices)))


def _prompt_for_choice(scheduler: TaskScheduler, popup: ChoicePopup) -> Iterator[Any]:
    scheduler.open_popup(popup)
    while popup.choice is None:
        yield None
    scheduler.close_popup(popup)
    yield popup.choice


def alert_user(scheduler: TaskScheduler, title: str | None, message: str) -> Routine[int]:
    return prompt_for_choice(scheduler, title, message, "Ok")


def display_error(scheduler: TaskScheduler, message: str) -> Routine[int]:
    return alert_user(scheduler, ERROR_TITLE, message)


def prompt_for_input(scheduler: TaskScheduler, label: str, default: str) -> Routine[str]:
    """Ask for a line of text.

    Returns:
        Routine whose final value is the submitted text. A cancelled prompt
        finishes without a final value.
    """
    return Routine(_prompt_for_input(scheduler, InputPopup(label, default)))


def _prompt_for_input(scheduler: TaskScheduler, popup: InputPopup) -> Iterator[Any]:
    scheduler.open_popup(popup)
    while popup.state == InputState.NONE:
        yield None
    scheduler.close_popup(popup)
    if popup.state == InputState.SUBMITTED:
        yield popup.value


def show_release_info(scheduler: TaskScheduler, release: ReleaseInfo) -> Iterator[Any]:
    """Show a release's details until the user dismisses them."""
    popup = ReleaseInfoPopup(release)
    scheduler.open_popup(popup)
    while not popup.dismissed:
        yield None
    scheduler.close_popup(popup)
