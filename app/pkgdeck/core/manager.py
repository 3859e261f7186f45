"""Package manager state and workflows.

PackageManager owns the four collections, the selection and the task
scheduler, and implements every user-facing workflow as a routine run on
the scheduler: refreshing, installing releases, deleting and creating
packages, switching project configuration and applying it.
"""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from pathlib import Path
from typing import Any

from pkgdeck.catalog.base import CatalogService
from pkgdeck.core.classification import ClassificationMatrix, DragPayload, DropAction
from pkgdeck.core.collection import Entry, Role, TypedCollection
from pkgdeck.core.errors import InvariantError
from pkgdeck.core.paths import get_project_assets_dir, get_project_plugins_dir
from pkgdeck.core.project import ProjectConfigError, ProjectStore
from pkgdeck.core.prompts import (
    display_error,
    prompt_for_choice,
    prompt_for_input,
    show_release_info,
)
from pkgdeck.core.reconcile import InstallDecision, check_should_install
from pkgdeck.core.relay import process_command, process_command_for_result
from pkgdeck.core.routine import Routine
from pkgdeck.core.scheduler import Task, TaskScheduler
from pkgdeck.core.selection import SelectionManager
from pkgdeck.models.package import PackageInfo, ReleaseInfo
from pkgdeck.models.project import ProjectConfig, ProjectConfigType

logger = logging.getLogger(__name__)

ASSET_STORE_URL = "https://www.assetstore.unity3d.com/#/{link_type}/{link_id}"

DELETE_PACKAGES_QUESTION = (
    "Are you sure you wish to delete the following packages?\n\n{names}\n\n"
    "Please note the following:\n\n"
    "This change is not undoable\n"
    "Any changes that you've made since installing will be lost\n"
    "Any projects or other packages that still depend on this package may be put "
    "in an invalid state by deleting it"
)


class ReleaseSortMethod(str, Enum):
    """Sort orders offered for the release list."""

    NAME = "name"
    SIZE = "size"
    PUBLISH_DATE = "date"


class ContextAction(str, Enum):
    """Actions a context menu can offer for the selection."""

    OPEN_FOLDER = "open-folder"
    MORE_INFO = "more-info"
    OPEN_IN_ASSET_STORE = "open-in-asset-store"
    DELETE = "delete"
    SHOW_IN_PROJECT = "show-in-project"


class PackageManager:
    """Central state of the package manager.

    Args:
        catalog: External package tool.
        store: Project membership store.
        scheduler: Task scheduler; a new one is created if omitted.
        config_type: Initial project configuration type.
    """

    def __init__(
        self,
        catalog: CatalogService,
        store: ProjectStore,
        scheduler: TaskScheduler | None = None,
        config_type: ProjectConfigType = ProjectConfigType.LOCAL_PROJECT,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.scheduler = scheduler if scheduler is not None else TaskScheduler()
        self.project_config_type = config_type

        self.release_sort_method = ReleaseSortMethod.NAME
        self.release_sort_ascending = True

        self.packages = TypedCollection(Role.PACKAGE)
        self.releases = TypedCollection(Role.RELEASE, sort_key=self._release_sort_key)
        self.assets = TypedCollection(Role.ASSET_ITEM)
        self.plugins = TypedCollection(Role.PLUGIN_ITEM)

        self.matrix = ClassificationMatrix(self.packages, self.releases, self.assets, self.plugins)
        self.selection = SelectionManager(self.matrix)

        self.all_packages: list[PackageInfo] = []
        self.all_releases: list[ReleaseInfo] = []

    # ------------------------------------------------------------------
    # Startup and refresh
    # ------------------------------------------------------------------

    def start(self) -> Task:
        """Load the project config and both lists."""
        return self.scheduler.submit(self.refresh_all(), True, "Refreshing Packages")

    def request_refresh_packages(self) -> Task:
        return self.scheduler.submit(self.refresh_packages_async(), True, "Refreshing Packages")

    def request_refresh_releases(self) -> Task:
        return self.scheduler.submit(self.refresh_releases_async(), True, "Refreshing Release List")

    def refresh_all(self) -> Iterator[Any]:
        try:
            self.refresh_project()
        except ProjectConfigError as e:
            logger.error("Failed to load project config: %s", e)
            self.clear_project_lists()
            yield display_error(self.scheduler, f"Could not load project config:\n\n{e}")

        yield self.refresh_packages_async()
        yield self.refresh_releases_async()

    def refresh_packages_async(self) -> Iterator[Any]:
        response = process_command_for_result(
            self.scheduler, "Looking up package list", self.catalog.list_installed_packages()
        )
        yield response

        self.all_packages = list(_require_result(response, "package list"))
        self.update_packages_list()

    def refresh_releases_async(self) -> Iterator[Any]:
        response = process_command_for_result(
            self.scheduler, "Looking up release list", self.catalog.list_available_releases()
        )
        yield response

        self.all_releases = list(_require_result(response, "release list"))
        self.update_releases_list()

    def update_packages_list(self) -> None:
        self.packages.clear()
        for info in self.all_packages:
            self.packages.add(info.name, info)
        self.selection.prune()

    def update_releases_list(self) -> None:
        self.releases.clear()
        for info in self.all_releases:
            self.releases.add(info.name, info)
        self.selection.prune()

    # ------------------------------------------------------------------
    # Project configuration
    # ------------------------------------------------------------------

    def refresh_project(self) -> None:
        """Repopulate the asset and plugin lists from the stored snapshot.

        Raises:
            ProjectConfigError: If the stored snapshot cannot be loaded.
        """
        config = self.store.load(self.project_config_type)
        if config is None:
            self.clear_project_lists()
        else:
            self.populate_lists_from_config(config)

    def clear_project_lists(self) -> None:
        self.plugins.clear()
        self.assets.clear()
        self.update_packages_list()

    def populate_lists_from_config(self, config: ProjectConfig) -> None:
        self.plugins.clear()
        self.assets.clear()

        for name in config.assets:
            self.assets.add(name)

        for name in config.plugins:
            self.plugins.add(name)

        self.update_packages_list()

    def current_project_config(self) -> ProjectConfig:
        """Snapshot of the asset and plugin lists as they are now."""
        return ProjectConfig(assets=self.assets.names(), plugins=self.plugins.names())

    def overwrite_config(self) -> Path:
        """Save the current lists to the selected configuration file.

        Raises:
            ProjectConfigError: If the file cannot be written.
        """
        return self.store.save(self.current_project_config(), self.project_config_type)

    def has_project_config_changed(self) -> bool:
        """Check if the lists differ from the stored snapshot."""
        current = self.current_project_config()
        saved = self.store.load(self.project_config_type)

        if saved is None:
            return not current.is_empty

        return not current.matches(saved)

    def change_project_type(self, config_type: ProjectConfigType) -> Task:
        return self.scheduler.submit(self.try_change_project_type(config_type), False)

    def try_change_project_type(self, config_type: ProjectConfigType) -> Iterator[Any]:
        if self.has_project_config_changed():
            choice = prompt_for_choice(
                self.scheduler,
                None,
                "Do you want to save changes to your project?",
                "Save",
                "Don't Save",
                "Cancel",
            )
            yield choice

            if choice.current == 0:
                try:
                    self.overwrite_config()
                except ProjectConfigError as e:
                    logger.error("Failed to save project config: %s", e)
                    yield display_error(self.scheduler, f"Could not save project config:\n\n{e}")
                    return
            elif choice.current == 2:
                return
            elif choice.current != 1:
                msg = f"Unexpected answer {choice.current!r} to save prompt"
                raise InvariantError(msg)

        self.project_config_type = config_type
        self.refresh_project()

    def apply_project(self) -> Task:
        """Save the project config and re-link the project folders.

        Raises:
            ProjectConfigError: If the config cannot be saved.
        """
        self.overwrite_config()
        links = process_command(
            self.scheduler, "Updating directory links", self.catalog.update_links()
        )
        return self.scheduler.submit(links, True, "Updating Links")

    # ------------------------------------------------------------------
    # Selection and drag/drop
    # ------------------------------------------------------------------

    def select(self, entry: Entry, ctrl: bool = False, shift: bool = False) -> None:
        self.selection.select(entry, ctrl=ctrl, shift=shift)

    def select_all(self) -> None:
        self.selection.select_all()

    def begin_drag(self) -> DragPayload | None:
        return self.selection.begin_drag()

    def is_drag_allowed(self, payload: DragPayload, dest: TypedCollection) -> bool:
        return self.matrix.is_drag_allowed(payload, dest)

    def on_drag_drop(self, payload: DragPayload, dest: TypedCollection) -> DropAction:
        """Handle a drop onto ``dest``.

        Dropping releases onto the package list starts the install workflow.

        Returns:
            What the drop did.
        """
        action = self.matrix.apply_drop(payload, dest)

        if action == DropAction.INSTALL:
            self.request_install([entry.tag for entry in payload.entries])
        elif action == DropAction.MOVED:
            self.selection.prune()

        return action

    # ------------------------------------------------------------------
    # Installing releases
    # ------------------------------------------------------------------

    def request_install(self, releases: Iterable[ReleaseInfo]) -> Task:
        return self.scheduler.submit(
            self.install_releases_async(list(releases)), True, "Installing Releases"
        )

    def install_releases_async(self, releases: list[ReleaseInfo]) -> Iterator[Any]:
        # Up/downgrade decisions need the current package list
        yield self.refresh_packages_async()

        for release in releases:
            decision = self.check_should_install(release)
            yield decision

            if decision.current == InstallDecision.CANCEL:
                logger.info("Install cancelled at release '%s'", release.name)
                return

            if decision.current == InstallDecision.INSTALL:
                yield process_command(
                    self.scheduler,
                    f"Installing release '{release.name}'",
                    self.catalog.install_release(release),
                )
            elif decision.current != InstallDecision.SKIP:
                msg = f"Unexpected install decision {decision.current!r}"
                raise InvariantError(msg)

        yield self.refresh_packages_async()

    def check_should_install(self, release: ReleaseInfo) -> Routine[InstallDecision]:
        return check_should_install(self.scheduler, self.all_packages, release)

    # ------------------------------------------------------------------
    # Deleting and creating packages
    # ------------------------------------------------------------------

    def delete_selected(self) -> Task:
        return self.scheduler.submit(self.delete_selected_async(), True, "Deleting Packages")

    def delete_selected_async(self) -> Iterator[Any]:
        role = self.selection.role
        if role is None:
            return

        if role == Role.PACKAGE:
            infos: list[PackageInfo] = [entry.tag for entry in self.selection.entries]
            choice = prompt_for_choice(
                self.scheduler,
                None,
                DELETE_PACKAGES_QUESTION.format(names="\n".join(info.name for info in infos)),
                "Delete",
                "Cancel",
            )
            yield choice

            if choice.current == 0:
                yield process_command(
                    self.scheduler,
                    "Deleting selected packages",
                    self.catalog.delete_packages(infos),
                )
                yield self.refresh_packages_async()

        elif role.is_project_item:
            to_remove = list(self.selection.entries)
            self.selection.clear()
            for entry in to_remove:
                entry.owner.remove(entry)

    def create_package(self) -> Task:
        return self.scheduler.submit(self.create_package_async(), False, "Creating New Package")

    def create_package_async(self) -> Iterator[Any]:
        user_input = prompt_for_input(self.scheduler, "Enter new package name:", "Untitled")
        yield user_input

        if not user_input.has_result:
            logger.debug("Package creation cancelled")
            return

        name = (user_input.current or "").strip()
        if not name:
            yield display_error(self.scheduler, "Package name cannot be empty")
            return

        self.scheduler.set_show_processing_label(True)
        yield process_command(
            self.scheduler, f"Creating Package '{name}'", self.catalog.create_package(name)
        )
        yield self.refresh_packages_async()

    # ------------------------------------------------------------------
    # Release sorting and search
    # ------------------------------------------------------------------

    def change_release_sort_method(self, method: ReleaseSortMethod) -> None:
        self.release_sort_method = method
        self.releases.force_sort()

    def toggle_release_sort_direction(self) -> None:
        self.release_sort_ascending = not self.release_sort_ascending
        self.releases.set_sort(self._release_sort_key, descending=not self.release_sort_ascending)

    def change_release_search_filter(self, text: str) -> None:
        """Show only releases whose name contains text, ignoring case."""
        self.releases.search_filter = text

    def visible_releases(self) -> list[ReleaseInfo]:
        return [entry.tag for entry in self.releases.visible()]

    def _release_sort_key(self, entry: Entry) -> Any:
        info: ReleaseInfo = entry.tag
        if self.release_sort_method == ReleaseSortMethod.NAME:
            return info.name
        if self.release_sort_method == ReleaseSortMethod.SIZE:
            return info.compressed_size or 0
        if self.release_sort_method == ReleaseSortMethod.PUBLISH_DATE:
            published = info.asset_store_info.publish_timestamp if info.asset_store_info else None
            return published.timestamp() if published is not None else 0.0
        msg = f"Unknown release sort method {self.release_sort_method!r}"
        raise InvariantError(msg)

    # ------------------------------------------------------------------
    # Context actions
    # ------------------------------------------------------------------

    def context_actions(self, collection: TypedCollection) -> dict[ContextAction, bool]:
        """Report which context menu actions are enabled for the selection.

        Args:
            collection: The collection the menu was opened on.

        Returns:
            Mapping of offered actions to whether they are enabled.
        """
        role = self.matrix.classify(collection)
        single = self.selection.only()

        if role == Role.RELEASE:
            info: ReleaseInfo | None = single.tag if single is not None else None
            has_local_path = (
                info is not None and info.local_path is not None and Path(info.local_path).is_file()
            )
            has_store_link = (
                info is not None
                and info.asset_store_info is not None
                and bool(info.asset_store_info.link_id)
            )
            return {
                ContextAction.OPEN_FOLDER: has_local_path,
                ContextAction.MORE_INFO: single is not None,
                ContextAction.OPEN_IN_ASSET_STORE: has_store_link,
            }

        if role == Role.PACKAGE:
            return {
                ContextAction.DELETE: True,
                ContextAction.OPEN_FOLDER: single is not None,
            }

        return {
            ContextAction.SHOW_IN_PROJECT: (
                single is not None and self.find_project_folder(single.name) is not None
            ),
        }

    def show_release_info_for_selected(self) -> Task:
        """Open the details popup for the single selected entry.

        Raises:
            InvariantError: If the selection isn't a single release.
        """
        entry = self._require_single_selected()
        role = self.matrix.classify(entry.owner)

        if role == Role.RELEASE:
            return self.scheduler.submit(show_release_info(self.scheduler, entry.tag), False)

        msg = f"More info is not supported for {role.value} entries"
        raise InvariantError(msg)

    def asset_store_url(self, release: ReleaseInfo) -> str:
        """Build the asset store page URL of a release.

        Raises:
            InvariantError: If the release has no store link.
        """
        store = release.asset_store_info
        if store is None or not store.link_id:
            msg = f"Release '{release.name}' has no asset store link"
            raise InvariantError(msg)
        return ASSET_STORE_URL.format(link_type=store.link_type, link_id=store.link_id)

    def find_project_folder(self, name: str) -> Path | None:
        """Find the folder a project item is linked to, if it exists."""
        for base in (
            get_project_assets_dir(self.store.project_root),
            get_project_plugins_dir(self.store.project_root),
        ):
            candidate = base / name
            if candidate.exists():
                return candidate
        return None

    def show_selected_in_project(self) -> Path | None:
        """Locate the single selected project item in the project.

        Returns:
            The item's folder, or None after reporting it missing to the user.
        """
        entry = self._require_single_selected()
        if not self.matrix.classify(entry.owner).is_project_item:
            msg = "Only asset and plugin items can be shown in the project"
            raise InvariantError(msg)

        folder = self.find_project_folder(entry.name)
        if folder is None:
            self.scheduler.submit(
                display_error(self.scheduler, f"Could not find package '{entry.name}' in project"),
                False,
            )
        return folder

    def folder_for_selected(self) -> Path | None:
        """Locate the folder of the single selected package or release archive.

        Returns:
            The path, or None after reporting it missing to the user.
        """
        entry = self._require_single_selected()
        role = self.matrix.classify(entry.owner)

        if role == Role.RELEASE:
            release: ReleaseInfo = entry.tag
            path = Path(release.local_path) if release.local_path else None
            found = path is not None and path.is_file()
        elif role == Role.PACKAGE:
            package: PackageInfo = entry.tag
            path = Path(package.path)
            found = path.is_dir()
        else:
            msg = f"{role.value} entries have no folder"
            raise InvariantError(msg)

        if not found:
            self.scheduler.submit(
                display_error(self.scheduler, f"Could not find folder for '{entry.name}'"),
                False,
            )
            return None
        return path

    def _require_single_selected(self) -> Entry:
        entry = self.selection.only()
        if entry is None:
            msg = f"Expected exactly one selected entry, got {len(self.selection)}"
            raise InvariantError(msg)
        return entry


def _require_result(response: Routine[Any], what: str) -> Any:
    if not response.has_result:
        msg = f"The package tool returned no {what}"
        raise InvariantError(msg)
    return response.current
