"""Typed, name-keyed collections of entries.

Each of the four lists the package manager shows (installed packages,
releases, project assets and project plugins) is a TypedCollection. The
collection's Role is fixed at construction time and decides how its entries
may be dragged around.
"""

import logging
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any

from pkgdeck.core.errors import InvariantError

logger = logging.getLogger(__name__)

SortKey = Callable[["Entry"], Any]


class Role(Enum):
    """Semantic category of a collection and of the entries it owns.

    Attributes:
        PACKAGE: Packages installed in the local package folder.
        RELEASE: Releases available from the catalog.
        ASSET_ITEM: Packages the project links as plain assets.
        PLUGIN_ITEM: Packages the project links as plugins.
    """

    PACKAGE = "package"
    RELEASE = "release"
    ASSET_ITEM = "asset"
    PLUGIN_ITEM = "plugin"

    @property
    def is_project_item(self) -> bool:
        """Check if this role is one of the two project membership roles."""
        return self in (Role.ASSET_ITEM, Role.PLUGIN_ITEM)


def sort_by_name(entry: "Entry") -> str:
    """Default sort key: case-sensitive name."""
    return entry.name


class Entry:
    """A named item owned by exactly one TypedCollection.

    Identity is the (name, owner) pair and never changes. Moving an item to
    another collection means removing this entry and adding a new one there.
    """

    __slots__ = ("_index", "_name", "_owner", "_tag")

    def __init__(self, name: str, tag: Any, owner: "TypedCollection") -> None:
        self._name = name
        self._tag = tag
        self._owner = owner
        self._index = -1

    @property
    def name(self) -> str:
        return self._name

    @property
    def tag(self) -> Any:
        """Opaque payload, e.g. a PackageInfo or ReleaseInfo. May be None."""
        return self._tag

    @property
    def owner(self) -> "TypedCollection":
        return self._owner

    @property
    def index(self) -> int:
        """Position in the owner's current ordering, -1 once removed."""
        return self._index

    @property
    def is_attached(self) -> bool:
        return self._index >= 0

    @property
    def role(self) -> Role:
        return self._owner.role

    def __repr__(self) -> str:
        return f"Entry(name={self._name!r}, role={self._owner.role.value}, index={self._index})"


class TypedCollection:
    """Ordered mapping from name to Entry.

    Entries are kept in the collection's current sort order at all times;
    ``force_sort`` re-applies the order after the sort settings change.

    Attributes:
        role: The fixed Role of this collection.
        search_filter: Text an entry name must contain to be visible.
    """

    def __init__(
        self, role: Role, sort_key: SortKey = sort_by_name, descending: bool = False
    ) -> None:
        self.role = role
        self._sort_key = sort_key
        self._descending = descending
        self._entries: list[Entry] = []
        self._by_name: dict[str, Entry] = {}
        self.search_filter = ""

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"TypedCollection(role={self.role.value}, size={len(self._entries)})"

    def values(self) -> list[Entry]:
        """Snapshot of the entries in current sort order."""
        return list(self._entries)

    def names(self) -> list[str]:
        """Snapshot of the entry names in current sort order."""
        return [entry.name for entry in self._entries]

    def visible(self) -> list[Entry]:
        """Entries whose name contains the search filter, ignoring case.

        An empty filter shows every entry. Hidden entries stay in the
        collection and keep their index.
        """
        needle = self.search_filter.strip().casefold()
        if not needle:
            return list(self._entries)
        return [entry for entry in self._entries if needle in entry.name.casefold()]

    def contains(self, name: str) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Entry | None:
        return self._by_name.get(name)

    def get_at_index(self, index: int) -> Entry:
        """Return the entry at a position of the current ordering.

        Raises:
            IndexError: If the index is out of range.
        """
        if not 0 <= index < len(self._entries):
            msg = f"Index {index} out of range for {self!r}"
            raise IndexError(msg)
        return self._entries[index]

    def add(self, name: str, tag: Any = None) -> Entry | None:
        """Add a new entry.

        Names are unique within a collection; adding an existing name is a
        no-op.

        Args:
            name: Entry name.
            tag: Optional payload carried by the entry.

        Returns:
            The new entry, or None if the name was already present.
        """
        if name in self._by_name:
            logger.debug("Ignoring duplicate %r in %s collection", name, self.role.value)
            return None

        entry = Entry(name, tag, self)
        self._entries.append(entry)
        self._by_name[name] = entry
        self._reorder()
        return entry

    def remove(self, entry: Entry) -> None:
        """Remove an entry owned by this collection.

        Raises:
            InvariantError: If the entry is not currently in this collection.
        """
        if entry.owner is not self or self._by_name.get(entry.name) is not entry:
            msg = f"{entry!r} is not a member of {self!r}"
            raise InvariantError(msg)

        del self._by_name[entry.name]
        self._entries.remove(entry)
        entry._index = -1
        self._reindex()

    def remove_by_name(self, name: str) -> bool:
        """Remove the entry with the given name.

        Returns:
            True if an entry was removed, False if the name was not present.
        """
        entry = self._by_name.get(name)
        if entry is None:
            return False
        self.remove(entry)
        return True

    def clear(self) -> None:
        for entry in self._entries:
            entry._index = -1
        self._entries.clear()
        self._by_name.clear()

    def set_sort(self, sort_key: SortKey, descending: bool = False) -> None:
        """Change the sort order and re-sort immediately."""
        self._sort_key = sort_key
        self._descending = descending
        self.force_sort()

    def force_sort(self) -> None:
        """Re-apply the current sort order.

        Needed when the sort key depends on state outside the collection.
        """
        self._reorder()

    def _reorder(self) -> None:
        self._entries.sort(key=self._sort_key, reverse=self._descending)
        self._reindex()

    def _reindex(self) -> None:
        for i, entry in enumerate(self._entries):
            entry._index = i
