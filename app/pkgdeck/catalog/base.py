"""Abstract base class for the package catalog service.

The catalog service is the external package tool: it lists installed
packages and available releases and installs, deletes and creates packages.
Every operation returns a step sequence instead of blocking. Each step is
either ``None`` (still working), a batch of progress lines (``list[str]``),
or, as the very last step, a CommandResponse.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pkgdeck.models.package import PackageInfo, ReleaseInfo


@dataclass(frozen=True, slots=True)
class CommandResponse:
    """Final outcome of a catalog command.

    Attributes:
        succeeded: Whether the command completed successfully.
        result: Command payload (e.g. a list of PackageInfo), None for commands without one.
        error_message: Error text reported by the tool when the command failed.
    """

    succeeded: bool
    result: Any = None
    error_message: str | None = None

    @classmethod
    def ok(cls, result: Any = None) -> "CommandResponse":
        return cls(succeeded=True, result=result)

    @classmethod
    def failed(cls, error_message: str) -> "CommandResponse":
        return cls(succeeded=False, error_message=error_message)


# A running command: progress batches, then exactly one CommandResponse
CommandSteps = Iterator[list[str] | CommandResponse | None]


class CatalogService(ABC):
    """Abstract base class for package catalog services.

    Example:
        >>> service = CommandCatalogService(settings)
        >>> for step in service.list_installed_packages():
        ...     if isinstance(step, CommandResponse):
        ...         print(step.result)
    """

    @abstractmethod
    def list_installed_packages(self) -> CommandSteps:
        """List installed packages; the response result is ``list[PackageInfo]``."""

    @abstractmethod
    def list_available_releases(self) -> CommandSteps:
        """List available releases; the response result is ``list[ReleaseInfo]``."""

    @abstractmethod
    def install_release(self, release: ReleaseInfo) -> CommandSteps:
        """Install (or re-install) a release into the package folder."""

    @abstractmethod
    def delete_packages(self, packages: list[PackageInfo]) -> CommandSteps:
        """Delete installed packages."""

    @abstractmethod
    def create_package(self, name: str) -> CommandSteps:
        """Create a new empty package."""

    @abstractmethod
    def update_links(self) -> CommandSteps:
        """Re-link the project's asset and plugin folders after a config change."""
