"""Terminal driver for the task scheduler.

Ticks the scheduler until it is idle, showing a spinner with the task's
status while it processes and turning popups into terminal prompts.
"""

import logging
import time

import typer
from rich.panel import Panel
from rich.table import Table

from pkgdeck.core.popups import ChoicePopup, InputPopup, Popup, ReleaseInfoPopup
from pkgdeck.core.prompts import ERROR_TITLE
from pkgdeck.core.scheduler import TaskScheduler
from pkgdeck.utils.formatting import console, print_warning

logger = logging.getLogger(__name__)


def run_tasks(scheduler: TaskScheduler, poll_interval: float = 0.05) -> bool:
    """Drive the scheduler until no task is active.

    Args:
        scheduler: Scheduler to drive.
        poll_interval: Seconds to sleep between ticks while waiting on the tool.

    Returns:
        True if no task was aborted by a failed command.
    """
    aborts_before = scheduler.abort_count
    status = console.status("")
    spinning = False

    try:
        while scheduler.is_busy:
            popup = scheduler.popup
            task = scheduler.task

            if popup is not None and not popup.is_done:
                if spinning:
                    status.stop()
                    spinning = False
                render_popup(popup)
            elif task is not None and task.show_processing_label:
                message = task.status_message or ""
                status.update(f"[bold_header]{task.display_title}[/] [muted]{message}[/]")
                if not spinning:
                    status.start()
                    spinning = True

            scheduler.tick()

            if scheduler.is_busy and scheduler.popup is None:
                time.sleep(poll_interval)
    finally:
        if spinning:
            status.stop()

    return scheduler.abort_count == aborts_before


def render_popup(popup: Popup) -> None:
    """Show a popup and record the user's answer on it."""
    if isinstance(popup, ChoicePopup):
        _render_choice(popup)
    elif isinstance(popup, InputPopup):
        _render_input(popup)
    elif isinstance(popup, ReleaseInfoPopup):
        _render_release_info(popup)
    else:
        msg = f"Don't know how to render {type(popup).__name__}"
        raise TypeError(msg)


def _render_choice(popup: ChoicePopup) -> None:
    style = "error" if popup.title == ERROR_TITLE else "border"
    console.print(Panel(popup.question, title=popup.title, border_style=style))

    # Alerts only have one button
    if len(popup.choices) == 1:
        popup.choose(0)
        return

    for i, label in enumerate(popup.choices, start=1):
        console.print(f"  [info]{i}[/] {label}")

    while not popup.is_done:
        try:
            answer = typer.prompt("Choose", type=int)
        except typer.Abort:
            if "Cancel" not in popup.choices:
                raise
            popup.choose_label("Cancel")
            return
        if 1 <= answer <= len(popup.choices):
            popup.choose(answer - 1)
        else:
            print_warning(f"Please enter a number between 1 and {len(popup.choices)}")


def _render_input(popup: InputPopup) -> None:
    try:
        popup.submit(typer.prompt(popup.label, default=popup.value))
    except typer.Abort:
        popup.cancel()


def _render_release_info(popup: ReleaseInfoPopup) -> None:
    table = Table(title="Release Info", show_header=False, border_style="border")
    table.add_column("Field", style="bold_header")
    table.add_column("Value")
    for label, value in popup.rows():
        table.add_row(label, f"[muted]{value}[/]" if value == "N/A" else value)
    console.print(table)
    popup.dismiss()
