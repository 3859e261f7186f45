"""Unit tests for the classification matrix.

Tests for drag legality and the list changes each kind of drop makes.
"""

import itertools

import pytest

from pkgdeck.core.classification import (
    ClassificationMatrix,
    DragPayload,
    DropAction,
    is_drag_allowed,
)
from pkgdeck.core.collection import Role, TypedCollection
from pkgdeck.core.errors import InvariantError


@pytest.fixture
def matrix() -> ClassificationMatrix:
    packages = TypedCollection(Role.PACKAGE)
    for name in ("alpha", "bravo", "charlie"):
        packages.add(name)
    releases = TypedCollection(Role.RELEASE)
    releases.add("tool-release", tag="release-info")
    assets = TypedCollection(Role.ASSET_ITEM)
    assets.add("bravo")
    plugins = TypedCollection(Role.PLUGIN_ITEM)
    plugins.add("charlie")
    return ClassificationMatrix(packages, releases, assets, plugins)


def _payload(matrix: ClassificationMatrix, role: Role, *names: str) -> DragPayload:
    source = matrix.collection_for(role)
    entries = tuple(source.get(name) for name in names)
    assert all(entries)
    return DragPayload(source=source, entries=entries)  # type: ignore[arg-type]


def _snapshot(matrix: ClassificationMatrix) -> dict[Role, list[str]]:
    return {role: matrix.collection_for(role).names() for role in Role}


class TestDragRules:
    """Tests for is_drag_allowed()."""

    @pytest.mark.parametrize(
        ("source", "dest", "allowed"),
        [
            (Role.PACKAGE, Role.RELEASE, False),
            (Role.PACKAGE, Role.ASSET_ITEM, True),
            (Role.PACKAGE, Role.PLUGIN_ITEM, True),
            (Role.RELEASE, Role.PACKAGE, True),
            (Role.RELEASE, Role.ASSET_ITEM, False),
            (Role.RELEASE, Role.PLUGIN_ITEM, False),
            (Role.ASSET_ITEM, Role.PACKAGE, True),
            (Role.ASSET_ITEM, Role.RELEASE, False),
            (Role.ASSET_ITEM, Role.PLUGIN_ITEM, True),
            (Role.PLUGIN_ITEM, Role.PACKAGE, True),
            (Role.PLUGIN_ITEM, Role.RELEASE, False),
            (Role.PLUGIN_ITEM, Role.ASSET_ITEM, True),
        ],
    )
    def test_cross_role_table(self, source: Role, dest: Role, allowed: bool) -> None:
        """Cross-role drags follow the drag table."""
        assert is_drag_allowed(source, dest) is allowed

    @pytest.mark.parametrize("role", list(Role))
    def test_same_role_always_allowed(self, role: Role) -> None:
        """Dragging within a role is always allowed."""
        assert is_drag_allowed(role, role)


class TestClassificationMatrix:
    """Tests for ClassificationMatrix class."""

    def test_classify_registered(self, matrix: ClassificationMatrix) -> None:
        """Registered collections classify as their role."""
        for role in Role:
            assert matrix.classify(matrix.collection_for(role)) == role

    def test_classify_unregistered_raises(self, matrix: ClassificationMatrix) -> None:
        """A lookalike collection with the same role is still rejected."""
        with pytest.raises(InvariantError):
            matrix.classify(TypedCollection(Role.PACKAGE))

    def test_role_mismatch_raises(self) -> None:
        """Collections must be registered under their own role."""
        with pytest.raises(InvariantError):
            ClassificationMatrix(
                TypedCollection(Role.RELEASE),
                TypedCollection(Role.RELEASE),
                TypedCollection(Role.ASSET_ITEM),
                TypedCollection(Role.PLUGIN_ITEM),
            )

    def test_other_project_collection(self, matrix: ClassificationMatrix) -> None:
        """Asset and plugin lists are each other's counterpart."""
        assert matrix.other_project_collection(Role.ASSET_ITEM) is matrix.collection_for(
            Role.PLUGIN_ITEM
        )
        with pytest.raises(InvariantError):
            matrix.other_project_collection(Role.PACKAGE)


class TestApplyDrop:
    """Tests for ClassificationMatrix.apply_drop()."""

    def test_release_onto_packages_requests_install(self, matrix: ClassificationMatrix) -> None:
        """Releases dropped on packages aren't moved; an install is requested."""
        before = _snapshot(matrix)

        action = matrix.apply_drop(
            _payload(matrix, Role.RELEASE, "tool-release"), matrix.collection_for(Role.PACKAGE)
        )

        assert action == DropAction.INSTALL
        assert _snapshot(matrix) == before

    def test_project_item_onto_packages_removes_it(self, matrix: ClassificationMatrix) -> None:
        """Dropping an asset back on the packages unlinks it."""
        action = matrix.apply_drop(
            _payload(matrix, Role.ASSET_ITEM, "bravo"), matrix.collection_for(Role.PACKAGE)
        )

        assert action == DropAction.MOVED
        assert matrix.collection_for(Role.ASSET_ITEM).names() == []
        assert "bravo" in matrix.collection_for(Role.PACKAGE)

    def test_asset_to_plugin_moves_entry(self, matrix: ClassificationMatrix) -> None:
        """Cross-project drops move the entry."""
        matrix.apply_drop(
            _payload(matrix, Role.ASSET_ITEM, "bravo"), matrix.collection_for(Role.PLUGIN_ITEM)
        )

        assert matrix.collection_for(Role.ASSET_ITEM).names() == []
        assert matrix.collection_for(Role.PLUGIN_ITEM).names() == ["bravo", "charlie"]

    def test_package_to_asset_adds_name(self, matrix: ClassificationMatrix) -> None:
        """Packages dropped on assets are linked; the package stays installed."""
        matrix.apply_drop(
            _payload(matrix, Role.PACKAGE, "alpha"), matrix.collection_for(Role.ASSET_ITEM)
        )

        assert matrix.collection_for(Role.ASSET_ITEM).names() == ["alpha", "bravo"]
        assert "alpha" in matrix.collection_for(Role.PACKAGE)

    def test_package_to_asset_takes_name_from_plugins(self, matrix: ClassificationMatrix) -> None:
        """A name is never in both project lists at once."""
        matrix.apply_drop(
            _payload(matrix, Role.PACKAGE, "charlie"), matrix.collection_for(Role.ASSET_ITEM)
        )

        assert "charlie" in matrix.collection_for(Role.ASSET_ITEM)
        assert "charlie" not in matrix.collection_for(Role.PLUGIN_ITEM)

    def test_duplicate_drop_is_silent_noop(self, matrix: ClassificationMatrix) -> None:
        """Dropping a name the destination already has changes nothing."""
        before = _snapshot(matrix)

        matrix.apply_drop(
            _payload(matrix, Role.PACKAGE, "bravo"), matrix.collection_for(Role.ASSET_ITEM)
        )

        assert _snapshot(matrix) == before

    def test_drop_on_own_list_does_nothing(self, matrix: ClassificationMatrix) -> None:
        """Same-list drops are accepted but change nothing."""
        before = _snapshot(matrix)

        action = matrix.apply_drop(
            _payload(matrix, Role.ASSET_ITEM, "bravo"), matrix.collection_for(Role.ASSET_ITEM)
        )

        assert action == DropAction.NONE
        assert _snapshot(matrix) == before

    def test_rejected_drops_never_mutate(self, matrix: ClassificationMatrix) -> None:
        """Every disallowed role pair leaves all collections untouched."""
        names = {
            Role.PACKAGE: "alpha",
            Role.RELEASE: "tool-release",
            Role.ASSET_ITEM: "bravo",
            Role.PLUGIN_ITEM: "charlie",
        }
        for source, dest in itertools.permutations(Role, 2):
            if is_drag_allowed(source, dest):
                continue
            before = _snapshot(matrix)
            payload = _payload(matrix, source, names[source])

            assert not matrix.is_drag_allowed(payload, matrix.collection_for(dest))
            assert matrix.apply_drop(payload, matrix.collection_for(dest)) == DropAction.NONE
            assert _snapshot(matrix) == before
