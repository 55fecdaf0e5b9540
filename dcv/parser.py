"""Parsers for the JSON and size strings the docker CLI prints."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from dcv.models import (
    ComposeContainer,
    ComposeProject,
    ContainerStats,
    DockerContainer,
    DockerImage,
    DockerNetwork,
    DockerNetworkList,
    DockerVolume,
)

T = TypeVar("T")


class ParseError(ValueError):
    """Raised when docker output cannot be parsed."""


def _text(output: bytes | str) -> str:
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def _lines(output: bytes | str) -> Iterator[str]:
    """Yield the non-empty lines of *output*, without line terminators."""
    for line in _text(output).split("\n"):
        line = line.removesuffix("\r")
        if line:
            yield line


def _decode(line: str, factory: Callable[[Any], T]) -> T:
    return factory(json.loads(line))


def _decode_lines(output: bytes | str, factory: Callable[[Any], T]) -> list[T]:
    """Decode each line, skipping lines that are not valid records."""
    records: list[T] = []
    for line in _lines(output):
        try:
            records.append(_decode(line, factory))
        except ValueError:
            continue
    return records


def parse_ps_json(output: bytes | str) -> list[DockerContainer]:
    """Parse ``docker ps --format json`` output, skipping invalid lines."""
    return _decode_lines(output, DockerContainer.from_dict)


def parse_stats_json(output: bytes | str) -> list[ContainerStats]:
    """Parse ``docker stats --format json`` output; any invalid line is an error."""
    stats: list[ContainerStats] = []
    for line in _lines(output):
        try:
            stats.append(_decode(line, ContainerStats.from_dict))
        except ValueError as exc:
            raise ParseError(f"failed to parse stats JSON: {exc}") from exc
    return stats


def parse_network_json(output: bytes | str) -> list[DockerNetwork]:
    """Parse ``docker network ls --format json`` output, skipping invalid lines."""
    listed = _decode_lines(output, DockerNetworkList.from_dict)
    return [entry.to_docker_network() for entry in listed]


def parse_compose_ps_json(output: bytes | str) -> list[ComposeContainer]:
    """Parse ``docker compose ps --format json`` output.

    Invalid lines before the first valid one are an error; later ones are skipped.
    """
    containers: list[ComposeContainer] = []
    for line in _lines(output):
        try:
            container = _decode(line, ComposeContainer.from_dict)
        except ValueError as exc:
            if not containers:
                raise ParseError(f"invalid JSON: {exc}") from exc
            continue
        containers.append(container)
    return containers


def parse_volume_json(output: bytes | str) -> list[DockerVolume]:
    """Parse ``docker volume ls --format json`` output, skipping invalid lines."""
    if _text(output) in ("", "\n"):
        return []
    return _decode_lines(output, DockerVolume.from_dict)


def parse_compose_projects_json(output: bytes | str) -> list[ComposeProject]:
    """Parse ``docker compose ls --format json`` output.

    Newer releases print a JSON array; older ones print one object per line.
    """
    text = _text(output)
    if text in ("", "\n"):
        return []

    try:
        data = json.loads(text)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError("not an array")
        return [ComposeProject.from_dict(item) for item in data]
    except ValueError:
        pass

    projects: list[ComposeProject] = []
    for line in _lines(text):
        try:
            projects.append(_decode(line, ComposeProject.from_dict))
        except ValueError as exc:
            raise ParseError(f"failed to parse project JSON: {exc}") from exc
    return projects


def parse_images_json(output: bytes | str) -> list[DockerImage]:
    """Parse ``docker images --format json`` output, skipping invalid lines."""
    return _decode_lines(output, DockerImage.from_dict)


_UNITS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
    "TB": 1024**4,
    "PB": 1024**5,
    "KiB": 1024,
    "MiB": 1024**2,
    "GiB": 1024**3,
    "TiB": 1024**4,
    "PiB": 1024**5,
}

_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT = re.compile(r"[+-]?\d+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_volume_size(size: str) -> int:
    """Convert a size such as ``1.051GB`` into bytes; unparsable input gives 0."""
    if size in ("", "N/A"):
        return 0

    size = size.strip()

    for unit, multiplier in _UNITS.items():
        if size.endswith(unit):
            number = size[: -len(unit)]
            if _FLOAT.fullmatch(number):
                return int(float(number) * multiplier)

    if _INT.fullmatch(size):
        value = int(size)
        if _INT64_MIN <= value <= _INT64_MAX:
            return value

    return 0