"""Shell execution utilities.

Provides subprocess execution that reports progress without blocking the
caller while the process runs.
"""

import logging
import queue
import shutil
import subprocess
import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO

logger = logging.getLogger(__name__)

# Return code reported when a streamed command exceeds its timeout
TIMEOUT_RETURNCODE = -9


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def _pump_lines(stream: IO[str], sink: "queue.Queue[str]") -> None:
    for line in stream:
        sink.put(line.rstrip("\n"))
    stream.close()


def _drain(source: "queue.Queue[str]") -> list[str]:
    lines: list[str] = []
    while True:
        try:
            lines.append(source.get_nowait())
        except queue.Empty:
            return lines


def stream_command(
    args: list[str],
    *,
    timeout: float | None = 600.0,
    cwd: str | None = None,
) -> Iterator[list[str] | CommandResult]:
    """Execute a command and report its progress without blocking.

    Each step yields the stderr lines that arrived since the previous step
    (possibly none). The last step yields the CommandResult, whose stdout
    holds the complete standard output.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds before the process is killed.
        cwd: Working directory for the command.

    Yields:
        Batches of progress lines, then exactly one CommandResult.

    Raises:
        FileNotFoundError: If command executable is not found.
    """
    process = subprocess.Popen(
        args,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        cwd=cwd,
    )
    stdout_lines: queue.Queue[str] = queue.Queue()
    stderr_lines: queue.Queue[str] = queue.Queue()
    readers = [
        threading.Thread(target=_pump_lines, args=(process.stdout, stdout_lines), daemon=True),
        threading.Thread(target=_pump_lines, args=(process.stderr, stderr_lines), daemon=True),
    ]
    for reader in readers:
        reader.start()

    started = time.monotonic()
    all_stderr: list[str] = []
    timed_out = False

    try:
        while process.poll() is None or any(reader.is_alive() for reader in readers):
            if (
                timeout is not None
                and time.monotonic() - started > timeout
                and process.poll() is None
            ):
                logger.warning("Command %s timed out after %.0fs", args[0], timeout)
                process.kill()
                timed_out = True

            batch = _drain(stderr_lines)
            all_stderr.extend(batch)
            yield batch

        batch = _drain(stderr_lines)
        all_stderr.extend(batch)
        if batch:
            yield batch
    finally:
        # Closed before completion: do not leave the tool running
        if process.poll() is None:
            logger.debug("Killing unfinished command %s", args[0])
            process.kill()
            process.wait()

    stderr = "\n".join(all_stderr)
    if timed_out:
        stderr = f"{stderr}\nCommand timed out after {timeout:.0f} seconds".strip()

    yield CommandResult(
        stdout="\n".join(_drain(stdout_lines)),
        stderr=stderr,
        returncode=TIMEOUT_RETURNCODE if timed_out else process.returncode,
    )
