"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules: model
factories, a scripted in-memory catalog service and a helper that drives
the task scheduler while answering popups.
"""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from pkgdeck.catalog.base import CatalogService, CommandResponse, CommandSteps
from pkgdeck.core.manager import PackageManager
from pkgdeck.core.popups import ChoicePopup, InputPopup, Popup, ReleaseInfoPopup
from pkgdeck.core.project import ProjectStore
from pkgdeck.core.scheduler import TaskScheduler
from pkgdeck.core.settings import AppSettings
from pkgdeck.models.package import AssetStoreInfo, InstallInfo, PackageInfo, ReleaseInfo


def _release(
    release_id: str,
    name: str | None = None,
    version: str | None = "1.0.0",
    version_code: int | None = 1,
    size: int | None = 1024,
    published: str | None = None,
    link_id: str | None = None,
    local_path: str | None = None,
) -> ReleaseInfo:
    store = None
    if published is not None or link_id is not None:
        store = AssetStoreInfo(publish_date=published, link_type="content", link_id=link_id)
    return ReleaseInfo(
        id=release_id,
        name=name or release_id,
        version=version,
        version_code=version_code,
        compressed_size=size,
        local_path=local_path,
        asset_store_info=store,
    )


def _package(name: str, release: ReleaseInfo | None = None, path: str | None = None) -> PackageInfo:
    return PackageInfo(
        name=name,
        path=path or f"/packages/{name}",
        install_info=InstallInfo(release_info=release) if release is not None else None,
    )


@pytest.fixture
def make_release() -> Callable[..., ReleaseInfo]:
    """Factory for ReleaseInfo objects."""
    return _release


@pytest.fixture
def make_package() -> Callable[..., PackageInfo]:
    """Factory for PackageInfo objects."""
    return _package


class FakeCatalog(CatalogService):
    """In-memory catalog service that records every command it starts.

    Attributes:
        packages: Installed packages reported by list-packages.
        releases: Releases reported by list-releases.
        calls: One tuple per started command: (verb, *args).
        failures: Verb -> error message for commands that should fail.
        progress: Progress batches every command reports before finishing.
    """

    def __init__(self) -> None:
        self.packages: list[PackageInfo] = []
        self.releases: list[ReleaseInfo] = []
        self.calls: list[tuple[str, ...]] = []
        self.failures: dict[str, str] = {}
        self.progress: list[list[str]] = [["working..."]]

    def verbs(self) -> list[str]:
        return [call[0] for call in self.calls]

    def list_installed_packages(self) -> CommandSteps:
        self.calls.append(("list-packages",))
        return self._respond("list-packages", lambda: list(self.packages))

    def list_available_releases(self) -> CommandSteps:
        self.calls.append(("list-releases",))
        return self._respond("list-releases", lambda: list(self.releases))

    def install_release(self, release: ReleaseInfo) -> CommandSteps:
        self.calls.append(("install-release", release.id))

        def install() -> None:
            self.packages = [
                p
                for p in self.packages
                if p.release_info is None or p.release_info.id != release.id
            ]
            self.packages.append(_package(release.name, release))

        return self._respond("install-release", install)

    def delete_packages(self, packages: list[PackageInfo]) -> CommandSteps:
        names = [p.name for p in packages]
        self.calls.append(("delete-packages", *names))

        def delete() -> None:
            self.packages = [p for p in self.packages if p.name not in names]

        return self._respond("delete-packages", delete)

    def create_package(self, name: str) -> CommandSteps:
        self.calls.append(("create-package", name))
        return self._respond("create-package", lambda: self.packages.append(_package(name)))

    def update_links(self) -> CommandSteps:
        self.calls.append(("update-links",))
        return self._respond("update-links", lambda: None)

    def _respond(self, verb: str, outcome: Callable[[], Any]) -> Iterator[Any]:
        for batch in self.progress:
            yield list(batch)
        yield None
        if verb in self.failures:
            yield CommandResponse.failed(self.failures[verb])
            return
        yield CommandResponse.ok(outcome())


@pytest.fixture
def catalog() -> FakeCatalog:
    """Scripted catalog service with no packages or releases."""
    return FakeCatalog()


@pytest.fixture
def scheduler() -> TaskScheduler:
    return TaskScheduler()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project root nested one level down so shared configs have a parent."""
    root = tmp_path / "workspace" / "MyProject"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def manager(catalog: FakeCatalog, scheduler: TaskScheduler, project_dir: Path) -> PackageManager:
    """PackageManager wired to the fake catalog and a temporary project."""
    return PackageManager(catalog, ProjectStore(project_dir), scheduler)


def _answer(popup: Popup, answer: Any) -> None:
    if isinstance(popup, ChoicePopup):
        if isinstance(answer, str):
            popup.choose_label(answer)
        else:
            popup.choose(answer)
    elif isinstance(popup, InputPopup):
        if answer is None:
            popup.cancel()
        else:
            popup.submit(answer)
    elif isinstance(popup, ReleaseInfoPopup):
        popup.dismiss()
    else:
        msg = f"Unexpected popup {popup!r}"
        raise AssertionError(msg)


def run_answering(
    scheduler: TaskScheduler, answers: list[Any] | None = None, max_ticks: int = 1000
) -> list[Popup]:
    """Tick until idle, answering popups in order.

    Choice popups take a label or index, input popups take text (None
    cancels), release info popups are dismissed regardless of the answer.

    Returns:
        Every popup that was shown, in order.
    """
    pending = list(answers or [])
    shown: list[Popup] = []

    for _ in range(max_ticks):
        popup = scheduler.popup
        if popup is not None and not popup.is_done:
            shown.append(popup)
            if not pending:
                msg = f"No answer left for {popup!r}"
                raise AssertionError(msg)
            _answer(popup, pending.pop(0))
        if not scheduler.tick():
            assert not pending, f"Unused answers: {pending}"
            return shown

    msg = f"Scheduler still busy after {max_ticks} ticks"
    raise AssertionError(msg)


@pytest.fixture
def run_tasks() -> Callable[..., list[Popup]]:
    """Drive a scheduler to idle while answering its popups."""
    return run_answering


@pytest.fixture
def cli_manager(manager: PackageManager) -> Iterator[PackageManager]:
    """Route CLI commands to the fixture manager, polling without delay."""
    with (
        patch("pkgdeck.cli.types.build_manager", return_value=manager),
        patch("pkgdeck.cli.types.load_settings", return_value=AppSettings(poll_interval=0.0)),
    ):
        yield manager
