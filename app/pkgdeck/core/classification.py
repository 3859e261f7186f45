"""Role classification and drag/drop rules.

The package manager shows four collections, one per Role. This module binds
those collections to their roles, decides which drags between them are
legal and applies the list mutations an accepted drop implies.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from pkgdeck.core.collection import Entry, Role, TypedCollection
from pkgdeck.core.errors import InvariantError

logger = logging.getLogger(__name__)

# Drop destination -> roles allowed to drag onto it (same-role drags are always allowed)
_ALLOWED_SOURCES: dict[Role, frozenset[Role]] = {
    Role.PACKAGE: frozenset({Role.RELEASE, Role.ASSET_ITEM, Role.PLUGIN_ITEM}),
    Role.RELEASE: frozenset(),
    Role.ASSET_ITEM: frozenset({Role.PACKAGE, Role.PLUGIN_ITEM}),
    Role.PLUGIN_ITEM: frozenset({Role.PACKAGE, Role.ASSET_ITEM}),
}


def is_drag_allowed(source: Role, dest: Role) -> bool:
    """Check whether items of one role may be dropped onto another.

    Args:
        source: Role of the collection the drag started in.
        dest: Role of the collection under the cursor.

    Returns:
        True if the drop would be accepted.
    """
    if source == dest:
        return True
    return source in _ALLOWED_SOURCES[dest]


class DropAction(Enum):
    """What an accepted drop resulted in.

    Attributes:
        NONE: Nothing happened (rejected, or dropped onto its own list).
        MOVED: Entries were moved between or removed from collections.
        INSTALL: The dragged releases should be installed.
    """

    NONE = "none"
    MOVED = "moved"
    INSTALL = "install"


@dataclass(frozen=True, slots=True)
class DragPayload:
    """Transient bundle describing one drag gesture.

    Attributes:
        source: Collection the drag started in.
        entries: Snapshot of the selection at the time the drag started.
    """

    source: TypedCollection
    entries: tuple[Entry, ...]


class ClassificationMatrix:
    """Registry of the four collections and their drag/drop semantics.

    Args:
        packages: Collection of installed packages.
        releases: Collection of available releases.
        assets: Collection of project asset items.
        plugins: Collection of project plugin items.

    Raises:
        InvariantError: If a collection's role doesn't match its slot.
    """

    def __init__(
        self,
        packages: TypedCollection,
        releases: TypedCollection,
        assets: TypedCollection,
        plugins: TypedCollection,
    ) -> None:
        self._by_role: dict[Role, TypedCollection] = {
            Role.PACKAGE: packages,
            Role.RELEASE: releases,
            Role.ASSET_ITEM: assets,
            Role.PLUGIN_ITEM: plugins,
        }
        for role, collection in self._by_role.items():
            if collection.role != role:
                msg = f"{collection!r} registered as {role.value}"
                raise InvariantError(msg)
        if len({id(c) for c in self._by_role.values()}) != len(self._by_role):
            msg = "The same collection was registered for several roles"
            raise InvariantError(msg)

    def classify(self, collection: TypedCollection) -> Role:
        """Return the role of a registered collection.

        Raises:
            InvariantError: If the collection isn't one of the four registered ones.
        """
        if self._by_role.get(collection.role) is not collection:
            msg = f"{collection!r} is not registered with this package manager"
            raise InvariantError(msg)
        return collection.role

    def collection_for(self, role: Role) -> TypedCollection:
        return self._by_role[role]

    def other_project_collection(self, role: Role) -> TypedCollection:
        """Return the project collection that isn't ``role``.

        Raises:
            InvariantError: If ``role`` isn't a project membership role.
        """
        if role == Role.ASSET_ITEM:
            return self._by_role[Role.PLUGIN_ITEM]
        if role == Role.PLUGIN_ITEM:
            return self._by_role[Role.ASSET_ITEM]
        msg = f"{role.value} is not a project item role"
        raise InvariantError(msg)

    def is_drag_allowed(self, payload: DragPayload, dest: TypedCollection) -> bool:
        return is_drag_allowed(self.classify(payload.source), self.classify(dest))

    def apply_drop(self, payload: DragPayload, dest: TypedCollection) -> DropAction:
        """Apply the collection changes an accepted drop implies.

        Release drops onto the package list don't move anything; the caller
        is told to start the install workflow instead.

        Args:
            payload: The drag being dropped.
            dest: Collection the drag was released over.

        Returns:
            The kind of change the drop made or requested.
        """
        source_role = self.classify(payload.source)
        dest_role = self.classify(dest)

        if payload.source is dest or not is_drag_allowed(source_role, dest_role):
            return DropAction.NONE

        if dest_role == Role.PACKAGE:
            if source_role == Role.RELEASE:
                return DropAction.INSTALL
            # Dropping project items back onto the packages unlinks them
            for entry in payload.entries:
                if entry.is_attached:
                    payload.source.remove(entry)
            return DropAction.MOVED

        if source_role.is_project_item:
            for entry in payload.entries:
                if dest.contains(entry.name) or not entry.is_attached:
                    continue
                payload.source.remove(entry)
                dest.add(entry.name, entry.tag)
            return DropAction.MOVED

        if source_role == Role.PACKAGE:
            other = self.other_project_collection(dest_role)
            for entry in payload.entries:
                if dest.contains(entry.name):
                    continue
                other.remove_by_name(entry.name)
                dest.add(entry.name)
            return DropAction.MOVED

        msg = f"Unhandled drop from {source_role.value} to {dest_role.value}"
        raise InvariantError(msg)
