"""Containers that operations such as stop, start or top act upon."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from dcv.executor import DockerCommandError


def _inspect(client: Any, *args: str) -> bytes:
    try:
        return client.execute_captured(*args)
    except DockerCommandError as exc:
        raise DockerCommandError(
            f"failed to execute docker inspect: {exc}",
            exit_code=exc.exit_code,
            output=exc.output,
        ) from exc


class Container(ABC):
    """A container that can be inspected and operated on.

    Concrete containers carry ``container_id``, ``name`` and ``state``.
    """

    container_id: str
    name: str
    state: str

    @abstractmethod
    def inspect(self) -> bytes:
        """Return the output of ``docker inspect`` for the container."""

    @abstractmethod
    def top(self) -> bytes:
        """Return the output of ``docker top`` for the container."""

    @abstractmethod
    def operation_args(self, op: str) -> list[str]:
        """Return the docker arguments that apply *op* to the container."""

    @abstractmethod
    def title(self) -> str:
        """Return a title for the container, used in the interface."""


@dataclass(frozen=True)
class HostContainer(Container):
    """A container running directly on the Docker host."""

    client: Any = field(repr=False, compare=False)
    container_id: str
    name: str
    caption: str
    state: str

    def inspect(self) -> bytes:
        return _inspect(self.client, "inspect", self.container_id)

    def top(self) -> bytes:
        return self.client.execute_captured("top", self.container_id)

    def operation_args(self, op: str) -> list[str]:
        return [op, self.container_id]

    def title(self) -> str:
        return self.caption


@dataclass(frozen=True)
class DindContainer(Container):
    """A container running inside a Docker-in-Docker host container."""

    client: Any = field(repr=False, compare=False)
    host_container_id: str
    host_container_name: str
    container_id: str
    name: str
    state: str

    def inspect(self) -> bytes:
        return _inspect(
            self.client, "exec", self.host_container_id, "docker", "inspect", self.container_id
        )

    def top(self) -> bytes:
        return self.client.execute_captured(
            "exec", self.host_container_id, "docker", "top", self.container_id
        )

    def operation_args(self, op: str) -> list[str]:
        return ["exec", self.host_container_id, "docker", op, self.container_id]

    def title(self) -> str:
        return f"DinD: {self.host_container_id} ({self.name})"