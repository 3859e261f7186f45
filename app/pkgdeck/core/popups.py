"""Popup state shown in the scheduler's overlay slot.

Popups only hold state. A front-end renders whichever popup is open and
reports the user's answer back through ``choose``/``submit``/``cancel``/
``dismiss``; the routine that opened the popup notices on its next step.
"""

from enum import Enum

from pkgdeck.core.errors import InvariantError
from pkgdeck.models.package import ReleaseInfo

NOT_AVAILABLE_LABEL = "N/A"


class Popup:
    """Base class for everything that can occupy the overlay slot."""

    @property
    def is_done(self) -> bool:
        raise NotImplementedError


class ChoicePopup(Popup):
    """A question with a fixed set of answer buttons.

    Args:
        title: Optional heading.
        question: The question text.
        choices: Button labels, in display order.
    """

    def __init__(self, title: str | None, question: str, choices: tuple[str, ...]) -> None:
        if not choices:
            msg = "A choice popup needs at least one choice"
            raise InvariantError(msg)
        self.title = title
        self.question = question
        self.choices = choices
        self.choice: int | None = None

    @property
    def is_done(self) -> bool:
        return self.choice is not None

    def choose(self, index: int) -> None:
        """Record the chosen button.

        Raises:
            InvariantError: If the index doesn't name a choice.
        """
        if not 0 <= index < len(self.choices):
            msg = f"Choice {index} out of range for {self.choices}"
            raise InvariantError(msg)
        self.choice = index

    def choose_label(self, label: str) -> None:
        """Record the chosen button by its label."""
        try:
            self.choose(self.choices.index(label))
        except ValueError:
            msg = f"Unknown choice {label!r}, expected one of {self.choices}"
            raise InvariantError(msg) from None


class InputState(Enum):
    """Progress of a text input popup."""

    NONE = "none"
    CANCELLED = "cancelled"
    SUBMITTED = "submitted"


class InputPopup(Popup):
    """A single-line text prompt with Submit and Cancel.

    Args:
        label: Prompt text.
        value: Initial text.
    """

    def __init__(self, label: str, value: str) -> None:
        self.label = label
        self.value = value
        self.state = InputState.NONE

    @property
    def is_done(self) -> bool:
        return self.state != InputState.NONE

    def submit(self, value: str | None = None) -> None:
        if value is not None:
            self.value = value
        self.state = InputState.SUBMITTED

    def cancel(self) -> None:
        self.state = InputState.CANCELLED


def _or_na(value: object) -> str:
    if value is None or value == "":
        return NOT_AVAILABLE_LABEL
    return str(value)


class ReleaseInfoPopup(Popup):
    """Read-only details of one release, closed with Ok."""

    def __init__(self, release: ReleaseInfo) -> None:
        self.release = release
        self.dismissed = False

    @property
    def is_done(self) -> bool:
        return self.dismissed

    def dismiss(self) -> None:
        self.dismissed = True

    def rows(self) -> list[tuple[str, str]]:
        """Label/value pairs to display, with N/A for missing values."""
        info = self.release
        store = info.asset_store_info
        return [
            ("Name", info.name),
            ("Version", _or_na(info.version)),
            ("Publish Date", _or_na(store.publish_date if store else None)),
            (
                "Compressed Size",
                info.size_human if info.compressed_size is not None else NOT_AVAILABLE_LABEL,
            ),
            ("Publisher", _or_na(store.publisher_label if store else None)),
            ("Category", _or_na(store.category_label if store else None)),
            ("Description", _or_na(store.description if store else None)),
            ("Unity Version", _or_na(store.unity_version if store else None)),
            ("ID", info.id),
            ("Publish Notes", _or_na(store.publish_notes if store else None)),
            ("Version Code", _or_na(info.version_code)),
        ]
