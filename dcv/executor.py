"""Running the docker command-line tool."""

from __future__ import annotations

import logging
import subprocess
import time

logger = logging.getLogger(__name__)


class DockerCommandError(Exception):
    """Raised when a docker command cannot be started or exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        output: bytes = b"",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.output = output


def docker_command(*args: str) -> list[str]:
    """Return the argument vector that runs ``docker`` with *args*."""
    logger.info("Executing docker command: %s", " ".join(args))
    return ["docker", *args]


def execute_captured(*args: str) -> bytes:
    """Run ``docker`` with *args* and return its combined stdout and stderr."""
    argv = docker_command(*args)
    command_line = " ".join(argv)
    started = time.monotonic()

    try:
        completed = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as exc:
        raise DockerCommandError(f"command execution failed: {exc}\n") from exc

    output = completed.stdout or b""
    returncode = completed.returncode
    if returncode != 0:
        if returncode < 0:
            exit_code = -1
            reason = f"signal: {-returncode}"
        else:
            exit_code = returncode
            reason = f"exit status {returncode}"
        text = output.decode("utf-8", errors="replace")
        raise DockerCommandError(
            f"command failed with exit code {exit_code}: {reason}\n{text}",
            exit_code=exit_code,
            output=output,
        )

    logger.info(
        "Executed command %s in %.3fs: %s",
        command_line,
        time.monotonic() - started,
        output.decode("utf-8", errors="replace"),
    )
    return output