"""Catalog service backed by the external package tool.

Runs the configured tool as a subprocess. Progress lines arrive on stderr
and are relayed while the tool runs; list commands print their result as a
JSON array on stdout.
"""

import json
import logging
from collections.abc import Iterator

from pydantic import TypeAdapter, ValidationError

from pkgdeck.catalog.base import CatalogService, CommandResponse, CommandSteps
from pkgdeck.core.settings import AppSettings
from pkgdeck.models.package import PackageInfo, ReleaseInfo
from pkgdeck.utils.shell import CommandResult, command_exists, stream_command

logger = logging.getLogger(__name__)

_PACKAGE_LIST = TypeAdapter(list[PackageInfo])
_RELEASE_LIST = TypeAdapter(list[ReleaseInfo])


class CommandCatalogService(CatalogService):
    """Catalog service that shells out to the package tool.

    Args:
        settings: Provides the tool command and timeout.
        cwd: Working directory for the tool (normally the project root).
    """

    def __init__(self, settings: AppSettings, cwd: str | None = None) -> None:
        self._command = list(settings.tool_command)
        self._timeout = float(settings.timeout_seconds)
        self._cwd = cwd

    def is_available(self) -> bool:
        """Check if the tool executable can be found."""
        return command_exists(self._command[0])

    def list_installed_packages(self) -> CommandSteps:
        return self._run(["list-packages"], _PACKAGE_LIST)

    def list_available_releases(self) -> CommandSteps:
        return self._run(["list-releases"], _RELEASE_LIST)

    def install_release(self, release: ReleaseInfo) -> CommandSteps:
        args = ["install-release", release.id]
        if release.version_code is not None:
            args.extend(["--version-code", str(release.version_code)])
        return self._run(args)

    def delete_packages(self, packages: list[PackageInfo]) -> CommandSteps:
        return self._run(["delete-packages", *(package.name for package in packages)])

    def create_package(self, name: str) -> CommandSteps:
        return self._run(["create-package", name])

    def update_links(self) -> CommandSteps:
        return self._run(["update-links"])

    def _run(
        self,
        args: list[str],
        parser: TypeAdapter | None = None,
    ) -> Iterator[list[str] | CommandResponse | None]:
        """Run one tool verb and translate its outcome into a CommandResponse.

        Args:
            args: Verb and arguments appended to the tool command.
            parser: Adapter for the JSON result on stdout, None if the verb has none.
        """
        full_args = [*self._command, *args]
        logger.info("Running package tool: %s", " ".join(full_args))

        if not self.is_available():
            yield CommandResponse.failed(f"Package tool '{self._command[0]}' was not found in PATH")
            return

        try:
            for step in stream_command(full_args, timeout=self._timeout, cwd=self._cwd):
                if isinstance(step, CommandResult):
                    yield _to_response(step, parser)
                    return
                yield step or None
        except OSError as e:
            logger.error("Failed to start package tool: %s", e)
            yield CommandResponse.failed(f"Failed to start package tool: {e}")


def _to_response(result: CommandResult, parser: TypeAdapter | None) -> CommandResponse:
    if not result.success:
        error = result.stderr.strip() or f"Package tool exited with code {result.returncode}"
        return CommandResponse.failed(error)

    if parser is None:
        return CommandResponse.ok()

    try:
        return CommandResponse.ok(parser.validate_python(json.loads(result.stdout or "[]")))
    except json.JSONDecodeError as e:
        return CommandResponse.failed(f"Package tool returned invalid JSON: {e}")
    except ValidationError as e:
        return CommandResponse.failed(f"Package tool returned unexpected data: {e}")
