"""Version reconciliation for release installs.

Decides, per release, whether to install it, skip it or cancel the whole
install batch. Releases that aren't installed yet are installed without
asking; otherwise the user is asked to overwrite, upgrade or downgrade
depending on how the version codes compare.
"""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

from pkgdeck.core.errors import InvariantError
from pkgdeck.core.prompts import prompt_for_choice
from pkgdeck.core.routine import Routine
from pkgdeck.core.scheduler import TaskScheduler
from pkgdeck.models.package import PackageInfo, ReleaseInfo

logger = logging.getLogger(__name__)


class InstallDecision(Enum):
    """Outcome of reconciling one release against the installed packages."""

    CANCEL = "cancel"
    SKIP = "skip"
    INSTALL = "install"


# Prompt answers are always (install-ish, skip, cancel) in this order
_CHOICE_DECISIONS = (InstallDecision.INSTALL, InstallDecision.SKIP, InstallDecision.CANCEL)


def find_package_for_release(
    packages: Iterable[PackageInfo], release: ReleaseInfo
) -> PackageInfo | None:
    """Find the installed package that was installed from ``release``.

    Packages match on release id, so any installed version counts.
    """
    for package in packages:
        installed = package.release_info
        if installed is not None and installed.id == release.id:
            return package
    return None


def build_install_prompt(
    installed: ReleaseInfo, candidate: ReleaseInfo
) -> tuple[str, tuple[str, ...]]:
    """Build the question and choices for installing over an existing release.

    Args:
        installed: Release the package is currently installed from.
        candidate: Release the user wants to install.

    Returns:
        Tuple of (question, choices). The first choice installs.

    Raises:
        InvariantError: If either release lacks a version code, or equal
            version codes carry different version strings.
    """
    if installed.version_code is None or candidate.version_code is None:
        msg = (
            f"Cannot compare versions of '{candidate.name}': "
            f"installed code={installed.version_code}, candidate code={candidate.version_code}"
        )
        raise InvariantError(msg)

    if installed.version_code == candidate.version_code:
        if installed.version != candidate.version:
            msg = (
                f"Release '{candidate.name}' has version code {candidate.version_code} "
                f"for both '{installed.version}' and '{candidate.version}'"
            )
            raise InvariantError(msg)
        question = (
            f"Package '{installed.name}' is already installed with the same version "
            f"('{installed.version}'). Would you like to re-install it anyway? "
            "Note that any local changes you've made to the package will be reverted."
        )
        return question, ("Overwrite", "Skip", "Cancel")

    if candidate.version_code > installed.version_code:
        question = (
            f"Package '{candidate.name}' is already installed with version "
            f"'{installed.version}'. Would you like to UPGRADE it to version "
            f"'{candidate.version}'? Note that any local changes you've made to the "
            "package will be lost."
        )
        return question, ("Upgrade", "Skip", "Cancel")

    question = (
        f"Package '{candidate.name}' is already installed with version "
        f"'{installed.version}'. Would you like to DOWNGRADE it to version "
        f"'{candidate.version}'? Note that any local changes you've made to the "
        "package will be lost."
    )
    return question, ("Downgrade", "Skip", "Cancel")


def check_should_install(
    scheduler: TaskScheduler, packages: Iterable[PackageInfo], release: ReleaseInfo
) -> Routine[InstallDecision]:
    """Decide whether ``release`` should be installed, prompting if needed.

    Args:
        scheduler: Scheduler owning the active task (for the prompt).
        packages: Currently installed packages.
        release: Candidate release.

    Returns:
        Routine whose final value is the InstallDecision.
    """
    return Routine(_check_should_install(scheduler, list(packages), release))


def _check_should_install(
    scheduler: TaskScheduler, packages: list[PackageInfo], release: ReleaseInfo
) -> Iterator[Any]:
    package = find_package_for_release(packages, release)

    if package is None:
        logger.debug("Release '%s' is not installed yet", release.name)
        yield InstallDecision.INSTALL
        return

    installed = package.release_info
    if installed is None:
        msg = f"Package '{package.name}' matched a release but has no release info"
        raise InvariantError(msg)

    question, choices = build_install_prompt(installed, release)

    choice = prompt_for_choice(scheduler, None, question, *choices)
    yield choice

    if choice.current is None or not 0 <= choice.current < len(_CHOICE_DECISIONS):
        msg = f"Unexpected answer {choice.current!r} to install prompt"
        raise InvariantError(msg)

    decision = _CHOICE_DECISIONS[choice.current]
    logger.debug("User chose %s for release '%s'", decision.value, release.name)
    yield decision
