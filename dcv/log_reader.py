"""Streaming output of a log command line by line."""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import IO

from dcv.executor import DockerCommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogLines:
    """New lines of log output."""

    lines: list[str]


@dataclass(frozen=True)
class PollContinue:
    """No new lines yet; poll again later."""


@dataclass(frozen=True)
class CommandExecuted:
    """A log command has been started."""

    command: str


@dataclass(frozen=True)
class StreamError:
    """A log command could not be started."""

    error: Exception


class LogReader:
    """Runs a command and collects its stdout and stderr lines in the background."""

    def __init__(self, argv: Sequence[str]) -> None:
        self.argv = list(argv)
        self._lines: list[str] = []
        self._lock = threading.Lock()
        self._done = False

        command_line = " ".join(self.argv)
        started = time.monotonic()
        try:
            self.process = subprocess.Popen(
                self.argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            logger.error(
                "Failed to start log command %s after %.3fs: %s",
                command_line,
                time.monotonic() - started,
                exc,
            )
            raise DockerCommandError(
                f"failed to start log command '{command_line}': {exc}"
            ) from exc

        logger.info(
            "Log command started: %s (%.3fs)", command_line, time.monotonic() - started
        )
        threading.Thread(target=self._run, daemon=True).start()

    def _append(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    def _read(self, stream: IO[bytes], label: str, prefix: str) -> None:
        try:
            for raw in stream:
                text = raw.decode("utf-8", errors="replace")
                text = text.removesuffix("\n").removesuffix("\r")
                self._append(prefix + text)
        except (OSError, ValueError) as exc:
            self._append(f"[ERROR reading {label}: {exc}]")
        finally:
            stream.close()

    def _run(self) -> None:
        readers = [
            threading.Thread(
                target=self._read, args=(self.process.stdout, "stdout", ""), daemon=True
            ),
            threading.Thread(
                target=self._read,
                args=(self.process.stderr, "stderr", "[STDERR] "),
                daemon=True,
            ),
        ]
        for reader in readers:
            reader.start()
        for reader in readers:
            reader.join()

        returncode = self.process.wait()
        if returncode != 0:
            reason = (
                f"signal: {-returncode}" if returncode < 0 else f"exit status {returncode}"
            )
            self._append(f"[ERROR: Command failed: {reason}]")

        with self._lock:
            self._done = True

    def new_lines(self, last_index: int) -> tuple[list[str], int, bool]:
        """Lines after *last_index*, the new index, and whether the command finished."""
        with self._lock:
            if last_index >= len(self._lines):
                return [], last_index, self._done
            return self._lines[last_index:], len(self._lines), self._done

    def kill(self) -> None:
        """Kill the command without waiting for it."""
        if self.process.poll() is not None:
            return
        try:
            self.process.kill()
        except OSError as exc:
            logger.warning("Failed to kill log reader process: %s", exc)


class LogReaderManager:
    """Owns at most one active log reader and hands out its lines by polling."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.last_index = 0
        self.active: LogReader | None = None

    def stream(self, argv: Sequence[str]) -> CommandExecuted | StreamError:
        """Replace any active reader with one running *argv*."""
        self.stop()
        with self._lock:
            try:
                reader = LogReader(argv)
            except DockerCommandError as exc:
                logger.info("Failed to create log reader for %s: %s", " ".join(argv), exc)
                return StreamError(exc)
            self.active = reader
            self.last_index = 0
            return CommandExecuted(" ".join(reader.argv))

    def stop(self) -> None:
        """Kill and forget the active reader."""
        with self._lock:
            if self.active is not None:
                self.active.kill()
                self.active = None
                self.last_index = 0

    def poll(self) -> LogLines | PollContinue | None:
        """Return new lines, a request to poll again, or None when streaming ended."""
        with self._lock:
            if self.active is None:
                return LogLines(["[Log reader stopped]"])

            lines, self.last_index, done = self.active.new_lines(self.last_index)
            logger.debug("Got %d new log lines", len(lines))
            if lines:
                return LogLines(lines)

            if done:
                self.active = None
                if self.last_index == 0:
                    return LogLines(["[No logs available for this container]"])
                return None

            return PollContinue()