"""High-level docker operations built on the docker command-line tool."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from dcv.executor import DockerCommandError, docker_command, execute_captured
from dcv.models import (
    ComposeContainer,
    ComposeProject,
    ContainerFile,
    ContainerStats,
    DockerContainer,
    DockerImage,
    DockerNetwork,
    DockerVolume,
    parse_ls_output,
)
from dcv.parser import (
    parse_compose_projects_json,
    parse_compose_ps_json,
    parse_images_json,
    parse_network_json,
    parse_ps_json,
    parse_stats_json,
    parse_volume_json,
)

logger = logging.getLogger(__name__)

Runner = Callable[..., bytes]


def _captured(runner: Runner, what: str, args: Sequence[str]) -> bytes:
    """Run docker through *runner*, adding *what* to the message of any failure."""
    try:
        return runner(*args)
    except DockerCommandError as exc:
        raise DockerCommandError(
            f"failed to execute {what}: {exc}",
            exit_code=exc.exit_code,
            output=exc.output,
        ) from exc


@dataclass(frozen=True)
class ComposeClient:
    """Operations on one Docker Compose project."""

    project_name: str
    runner: Runner = field(default=execute_captured, repr=False, compare=False)

    def list_containers(self, show_all: bool) -> list[ComposeContainer]:
        """List the project's containers; a failing command yields an empty list."""
        args = ["compose", "-p", self.project_name, "ps", "--format", "json", "--no-trunc"]
        if show_all:
            args.append("--all")
        try:
            output = self.runner(*args)
        except DockerCommandError as exc:
            logger.info("docker compose ps failed, treating as no containers: %s", exc)
            return []
        logger.info("Parsing docker compose ps output")
        return parse_compose_ps_json(output)

    def top(self, service_name: str) -> str:
        """Return the ``docker compose top`` output for a service."""
        output = _captured(
            self.runner,
            "docker compose top",
            ["compose", "-p", self.project_name, "top", service_name],
        )
        return output.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class DindClient:
    """Operations on the Docker daemon inside a Docker-in-Docker container."""

    host_container_id: str
    runner: Runner = field(default=execute_captured, repr=False, compare=False)

    def list_containers(self) -> list[DockerContainer]:
        """List the containers running inside the host container."""
        output = _captured(
            self.runner,
            "docker ps",
            ["exec", self.host_container_id, "docker", "ps", "--format", "json"],
        )
        return parse_ps_json(output)

    def command(self, *args: str) -> list[str]:
        """Return the argument vector that runs docker inside the host container."""
        return docker_command("exec", self.host_container_id, "docker", *args)


class Client:
    """Entry point for docker operations."""

    def __init__(self, runner: Runner | None = None) -> None:
        self._runner: Runner = runner or execute_captured

    def compose(self, project_name: str) -> ComposeClient:
        """Return a client for a compose project."""
        return ComposeClient(project_name, self._runner)

    def dind(self, host_container_id: str) -> DindClient:
        """Return a client for a Docker-in-Docker host container."""
        return DindClient(host_container_id, self._runner)

    def command(self, *args: str) -> list[str]:
        """Return the argument vector that runs docker with *args*."""
        return docker_command(*args)

    def execute_captured(self, *args: str) -> bytes:
        """Run docker with *args* and return its combined output."""
        return self._runner(*args)

    def list_compose_projects(self) -> list[ComposeProject]:
        """List Docker Compose projects."""
        output = _captured(
            self._runner, "docker compose ls", ["compose", "ls", "--format", "json"]
        )
        return parse_compose_projects_json(output)

    def list_containers(self, show_all: bool) -> list[DockerContainer]:
        """List containers, including stopped ones when *show_all* is set."""
        args = ["ps", "--format", "json", "--no-trunc"]
        if show_all:
            args.append("--all")
        return parse_ps_json(_captured(self._runner, "docker ps", args))

    def list_images(self, show_all: bool) -> list[DockerImage]:
        """List images, including intermediate ones when *show_all* is set."""
        args = ["images", "--format", "json"]
        if show_all:
            args.append("--all")
        return parse_images_json(_captured(self._runner, "docker images", args))

    def list_networks(self) -> list[DockerNetwork]:
        """List networks."""
        output = _captured(
            self._runner, "docker network ls", ["network", "ls", "--format", "json"]
        )
        return parse_network_json(output)

    def list_container_files(self, container_id: str, path: str) -> list[ContainerFile]:
        """List the files in *path* inside a container."""
        output = _captured(
            self._runner,
            "ls in container",
            ["exec", container_id, "ls", "-la", path],
        )
        return parse_ls_output(output.decode("utf-8", errors="replace"))

    def execute_interactive(self, container_id: str, command: Sequence[str]) -> None:
        """Run *command* interactively in a container, attached to this terminal."""
        argv = ["docker", "exec", "-it", container_id, *command]
        logger.info(
            "Executing interactive command in %s: %s", container_id, " ".join(command)
        )
        try:
            completed = subprocess.run(argv, check=False)
        except OSError as exc:
            raise DockerCommandError(f"command execution failed: {exc}") from exc
        if completed.returncode != 0:
            raise DockerCommandError(
                f"exit status {completed.returncode}", exit_code=completed.returncode
            )

    def get_stats(self, show_all: bool) -> list[ContainerStats]:
        """Return a single sample of container resource usage."""
        args = ["stats", "--no-stream", "--format", "json"]
        if show_all:
            args.append("--all")
        try:
            output = self._runner(*args)
        except DockerCommandError as exc:
            raise DockerCommandError(
                f"failed to get stats: {exc}", exit_code=exc.exit_code, output=exc.output
            ) from exc
        return parse_stats_json(output)

    def list_volumes(self) -> list[DockerVolume]:
        """List volumes."""
        output = _captured(
            self._runner, "docker volume ls", ["volume", "ls", "--format", "json"]
        )
        volumes = parse_volume_json(output)
        if not volumes:
            logger.info("No volumes found")
        return volumes