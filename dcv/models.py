"""Data records for what the docker CLI reports in its JSON output."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Self


def _lookup(data: dict[str, Any], key: str) -> Any:
    """Return the value for *key*, matching the key case-insensitively as a fallback."""
    if key in data:
        return data[key]
    folded = key.casefold()
    for name, value in data.items():
        if name.casefold() == folded:
            return value
    return None


def _as_object(data: Any, kind: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"cannot decode {type(data).__name__} into {kind}")
    return data


def _str(data: dict[str, Any], key: str) -> str:
    value = _lookup(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _int(data: dict[str, Any], key: str) -> int:
    value = _lookup(data, key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer, got {type(value).__name__}")
    return value


def _str_map(data: dict[str, Any], key: str) -> dict[str, str]:
    value = _lookup(data, key)
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(
        isinstance(v, str) or v is None for v in value.values()
    ):
        raise ValueError(f"field {key!r} must be a map of strings")
    return {k: (v or "") for k, v in value.items()}


@dataclass
class Publisher:
    """A port published by a compose service."""

    url: str = ""
    target_port: int = 0
    published_port: int = 0
    protocol: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        obj = _as_object(data, "Publisher")
        return cls(
            url=_str(obj, "URL"),
            target_port=_int(obj, "TargetPort"),
            published_port=_int(obj, "PublishedPort"),
            protocol=_str(obj, "Protocol"),
        )


@dataclass
class ComposeContainer:
    """A container as listed by ``docker compose ps --format json``."""

    id: str = ""
    name: str = ""
    image: str = ""
    command: str = ""
    project: str = ""
    service: str = ""
    state: str = ""
    health: str = ""
    exit_code: int = 0
    publishers: list[Publisher] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        obj = _as_object(data, "ComposeContainer")
        raw_publishers = _lookup(obj, "Publishers")
        if raw_publishers is None:
            publishers: list[Publisher] = []
        elif isinstance(raw_publishers, list):
            publishers = [Publisher.from_dict(p) for p in raw_publishers]
        else:
            raise ValueError("field 'Publishers' must be a list")
        return cls(
            id=_str(obj, "ID"),
            name=_str(obj, "Name"),
            image=_str(obj, "Image"),
            command=_str(obj, "Command"),
            project=_str(obj, "Project"),
            service=_str(obj, "Service"),
            state=_str(obj, "State"),
            health=_str(obj, "Health"),
            exit_code=_int(obj, "ExitCode"),
            publishers=publishers,
        )

    def is_dind(self) -> bool:
        """True when the container looks like a Docker-in-Docker host."""
        return "dind" in self.name.lower() or "dockerd" in self.command

    def ports_string(self) -> str:
        """Published ports formatted for display."""
        ports = [
            f"{p.published_port}->{p.target_port}/{p.protocol}"
            if p.published_port > 0
            else f"{p.target_port}/{p.protocol}"
            for p in self.publishers
        ]
        return ", ".join(ports)

    def status(self) -> str:
        """A short status string derived from the state."""
        match self.state:
            case "running":
                return "Up"
            case "exited":
                return f"Exited ({self.exit_code})"
            case _:
                return self.state


@dataclass
class ComposeProject:
    """A project as listed by ``docker compose ls --format json``."""

    name: str = ""
    status: str = ""
    config_files: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        obj = _as_object(data, "ComposeProject")
        return cls(
            name=_str(obj, "Name"),
            status=_str(obj, "Status"),
            config_files=_str(obj, "ConfigFiles"),
        )


@dataclass
class ContainerFile:
    """A file or directory inside a container."""

    name: str = ""
    size: int = 0
    mode: str = ""
    mod_time: datetime | None = None
    is_dir: bool = False
    link_target: str = ""
    permissions: str = ""

    def display_name(self) -> str:
        """The name with a directory slash or a link target appended."""
        if self.is_dir:
            return self.name + "/"
        if self.link_target:
            return f"{self.name} -> {self.link_target}"
        return self.name


def parse_ls_output(output: str) -> list[ContainerFile]:
    """Parse the output of ``ls -la`` into file records."""
    files: list[ContainerFile] = []
    for line in output.strip().split("\n"):
        if not line or line.startswith("total"):
            continue
        parts = line.split()
        if len(parts) < 9:
            continue
        perms = parts[0]
        name = " ".join(parts[8:])
        link_target = ""
        if " -> " in name:
            pieces = name.split(" -> ")
            name = pieces[0]
            link_target = pieces[1]
        files.append(
            ContainerFile(
                name=name,
                mode=perms,
                permissions=perms,
                is_dir=perms.startswith("d"),
                link_target=link_target,
            )
        )
    return files


@dataclass
class ContainerStats:
    """Resource usage of one container from ``docker stats``."""

    container: str = ""
    name: str = ""
    service: str = ""
    cpu_perc: str = ""
    mem_usage: str = ""
    mem_perc: str = ""
    net_io: str = ""
    block_io: str = ""
    pids: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        obj = _as_object(data, "ContainerStats")
        return cls(
            container=_str(obj, "Container"),
            name=_str(obj, "Name"),
            service=_str(obj, "Service"),
            cpu_perc=_str(obj, "CPUPerc"),
            mem_usage=_str(obj, "MemUsage"),
            mem_perc=_str(obj, "MemPerc"),
            net_io=_str(obj, "NetIO"),
            block_io=_str(obj, "BlockIO"),
            pids=_str(obj, "PIDs"),
        )


@dataclass
class DockerContainer:
    """A container as listed by ``docker ps --format json``."""

    command: str = ""
    created_at: str = ""
    id: str = ""
    image: str = ""
    labels: str = ""
    local_volumes: str = ""
    mounts: str = ""
    names: str = ""
    networks: str = ""
    ports: str = ""
    running_for: str = ""
    size: str = ""
    state: str = ""
    status: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        obj = _as_object(data, "DockerContainer")
        return cls(
            command=_str(obj, "Command"),
            created_at=_str(obj, "CreatedAt"),
            id=_str(obj, "ID"),
            image=_str(obj, "Image"),
            labels=_str(obj, "Labels"),
            local_volumes=_str(obj, "LocalVolumes"),
            mounts=_str(obj, "Mounts"),
            names=_str(obj, "Names"),
            networks=_str(obj, "Networks"),
            ports=_str(obj, "Ports"),
            running_for=_str(obj, "RunningFor"),
            size=_str(obj, "Size"),
            state=_str(obj, "State"),
            status=_str(obj, "Status"),
        )

    def is_dind(self) -> bool:
        """True when the container looks like a Docker-in-Docker host."""
        return "dind" in self.names.lower() or "dockerd" in self.command


@dataclass
class DockerImage:
    """An image as listed by ``docker images --format json``."""

    containers: str = ""
    created_at: str = ""
    created_since: str = ""
    digest: str = ""
    id: str = ""
    repository: str = ""
    shared_size: str = ""
    size: str = ""
    tag: str = ""
    unique_size: str = ""
    virtual_size: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        obj = _as_object(data, "DockerImage")
        return cls(
            containers=_str(obj, "Containers"),
            created_at=_str(obj, "CreatedAt"),
            created_since=_str(obj, "CreatedSince"),
            digest=_str(obj, "Digest"),
            id=_str(obj, "ID"),
            repository=_str(obj, "Repository"),
            shared_size=_str(obj, "SharedSize"),
            size=_str(obj, "Size"),
            tag=_str(obj, "Tag"),
            unique_size=_str(obj, "UniqueSize"),
            virtual_size=_str(obj, "VirtualSize"),
        )

    def repo_tag(self) -> str:
        """The ``repository:tag`` reference, or the ID for untagged images."""
        if self.repository == "<none>":
            return self.id
        if self.tag == "<none>":
            return self.repository
        return f"{self.repository}:{self.tag}"


@dataclass
class DockerNetwork:
    """A Docker network.

    ``ipam_config`` holds entries with ``Subnet`` and ``Gateway`` keys;
    ``containers`` maps endpoint IDs to their ``Name``, ``EndpointID``,
    ``MacAddress``, ``IPv4Address`` and ``IPv6Address``.
    """

    name: str = ""
    id: str = ""
    created: str = ""
    scope: str = ""
    driver: str = ""
    enable_ipv6: bool = False
    ipam_driver: str = ""
    ipam_options: dict[str, str] = field(default_factory=dict)
    ipam_config: list[dict[str, str]] = field(default_factory=list)
    internal: bool = False
    attachable: bool = False
    ingress: bool = False
    config_from: str = ""
    config_only: bool = False
    containers: dict[str, dict[str, str]] = field(default_factory=dict)
    options: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)

    def subnet(self) -> str:
        """The first configured subnet, or an empty string."""
        if self.ipam_config:
            return self.ipam_config[0].get("Subnet", "")
        return ""

    def container_count(self) -> int:
        """Number of containers attached to the network."""
        return len(self.containers)


@dataclass
class DockerNetworkList:
    """A network as listed by ``docker network ls --format json``."""

    name: str = ""
    id: str = ""
    created_at: str = ""
    scope: str = ""
    driver: str = ""
    ipv4: str = ""
    ipv6: str = ""
    internal: str = ""
    labels: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        obj = _as_object(data, "DockerNetworkList")
        return cls(
            name=_str(obj, "Name"),
            id=_str(obj, "ID"),
            created_at=_str(obj, "CreatedAt"),
            scope=_str(obj, "Scope"),
            driver=_str(obj, "Driver"),
            ipv4=_str(obj, "IPv4"),
            ipv6=_str(obj, "IPv6"),
            internal=_str(obj, "Internal"),
            labels=_str(obj, "Labels"),
        )

    def to_docker_network(self) -> DockerNetwork:
        """Convert the listing entry into a network record."""
        return DockerNetwork(
            name=self.name,
            id=self.id,
            created=self.created_at,
            scope=self.scope,
            driver=self.driver,
            internal=self.internal == "true",
        )


def _parse_labels(labels: str) -> dict[str, str]:
    result: dict[str, str] = {}
    if not labels:
        return result
    for pair in labels.split(","):
        key, sep, value = pair.partition("=")
        if sep:
            result[key] = value
    return result


@dataclass
class DockerVolume:
    """A volume as listed by ``docker volume ls --format json``."""

    name: str = ""
    driver: str = ""
    mountpoint: str = ""
    scope: str = ""
    labels: str = ""
    options: dict[str, str] = field(default_factory=dict)
    _label_map: dict[str, str] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        obj = _as_object(data, "DockerVolume")
        return cls(
            name=_str(obj, "Name"),
            driver=_str(obj, "Driver"),
            mountpoint=_str(obj, "Mountpoint"),
            scope=_str(obj, "Scope"),
            labels=_str(obj, "Labels"),
            options=_str_map(obj, "Options"),
        )

    def get_label(self, key: str) -> str:
        """The value of a label, or an empty string when it is not set."""
        if not self.labels:
            return ""
        if self._label_map is None:
            self._label_map = _parse_labels(self.labels)
        return self._label_map.get(key, "")

    def is_local(self) -> bool:
        """True when the volume uses the local driver."""
        return self.driver == "local"


@dataclass
class DockerVolumeSize:
    """Size information for a volume from ``docker system df``."""

    name: str = ""
    size: str = ""
    links: str = ""