"""Multi-item selection.

The selection is an ordered set of entries that always share one owning
collection. Selecting an entry from another collection evicts the rest.
"""

from pkgdeck.core.classification import ClassificationMatrix, DragPayload
from pkgdeck.core.collection import Entry, Role
from pkgdeck.core.errors import InvariantError


class SelectionManager:
    """Tracks the selected entries with click, ctrl-toggle and shift-range semantics.

    Args:
        matrix: Registry used to check that selected entries share a role.
    """

    def __init__(self, matrix: ClassificationMatrix) -> None:
        self._matrix = matrix
        self._selected: list[Entry] = []

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, entry: object) -> bool:
        return entry in self._selected

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Snapshot of the selection in selection order."""
        return tuple(self._selected)

    @property
    def is_empty(self) -> bool:
        return not self._selected

    def only(self) -> Entry | None:
        """Return the selected entry if exactly one is selected."""
        if len(self._selected) == 1:
            return self._selected[0]
        return None

    @property
    def role(self) -> Role | None:
        """Role shared by the whole selection, or None if nothing is selected.

        Raises:
            InvariantError: If the selection spans more than one role.
        """
        if not self._selected:
            return None
        role = self._matrix.classify(self._selected[0].owner)
        if any(self._matrix.classify(e.owner) != role for e in self._selected):
            msg = "Selection spans more than one collection"
            raise InvariantError(msg)
        return role

    def clear(self) -> None:
        self._selected.clear()

    def select(self, entry: Entry, ctrl: bool = False, shift: bool = False) -> None:
        """Select an entry the way a list click does.

        Args:
            entry: The clicked entry.
            ctrl: Toggle the entry instead of replacing the selection.
            shift: Extend the selection from the nearest selected entry.
        """
        if entry in self._selected:
            if ctrl:
                self._selected.remove(entry)
            return

        if not ctrl and not shift:
            self._selected.clear()

        self._selected = [e for e in self._selected if e.owner is entry.owner]

        if shift and self._selected:
            # min() keeps the earliest selected entry on distance ties
            closest = min(self._selected, key=lambda e: abs(e.index - entry.index))
            start = min(closest.index, entry.index) + 1
            end = max(closest.index, entry.index)
            for i in range(start, end):
                between = entry.owner.get_at_index(i)
                if between not in self._selected:
                    self._selected.append(between)

        self._selected.append(entry)

    def select_all(self) -> None:
        """Extend the selection to every entry of the selected collection.

        Does nothing when the selection is empty.
        """
        if self.role is None:
            return

        owner = self._selected[0].owner
        for entry in owner.values():
            if entry not in self._selected:
                self._selected.append(entry)

    def prune(self) -> None:
        """Drop entries that were removed from their collection."""
        self._selected = [e for e in self._selected if e.is_attached]

    def begin_drag(self) -> DragPayload | None:
        """Snapshot the selection as a drag payload.

        Returns:
            The payload, or None if nothing is selected.
        """
        if self.role is None:
            return None
        return DragPayload(source=self._selected[0].owner, entries=tuple(self._selected))
