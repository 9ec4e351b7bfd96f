# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Two-stage lookup of data files beside the program or bundled with it.

A logical name such as ``catalog.bin`` is first looked up as a file in the
application directory, then as package data embedded in
:mod:`apiport.data`. Side-by-side files therefore always override the
bundled copy, which lets operators replace data without rebuilding.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import BinaryIO, Final, Protocol, runtime_checkable

from .errors import ResourceNotFoundError

LOGGER = logging.getLogger(__name__)

_IGNORED_SUFFIXES: Final[frozenset[str]] = frozenset({".py", ".pyc", ".pyi"})
_IGNORED_DIRECTORIES: Final[frozenset[str]] = frozenset({"__pycache__"})


@runtime_checkable
class ResourceSource(Protocol):
    """One stage of the resolver: answers existence and opens streams."""

    @property
    def label(self) -> str:
        """Return a short label naming the stage in diagnostics."""
        ...

    def contains(self, logical_name: str) -> bool:
        """Return ``True`` when ``logical_name`` is available from this stage."""
        ...

    def try_open(self, logical_name: str) -> BinaryIO | None:
        """Return an open binary stream or ``None`` when absent."""
        ...


@dataclass(frozen=True, slots=True)
class LocalFileSource:
    """Resolve logical names to files inside ``directory``."""

    directory: Path
    label: str = "file"

    def path_for(self, logical_name: str) -> Path:
        """Return the side-by-side path for ``logical_name``."""

        return self.directory / logical_name

    def contains(self, logical_name: str) -> bool:
        """Return ``True`` when a regular file named ``logical_name`` exists."""

        return self.path_for(logical_name).is_file()

    def try_open(self, logical_name: str) -> BinaryIO | None:
        """Open the side-by-side file, or return ``None`` when it is missing."""

        path = self.path_for(logical_name)
        if not path.is_file():
            return None
        try:
            return path.open("rb")
        except FileNotFoundError:
            LOGGER.debug("Side-by-side file %s vanished before it was opened", path)
            return None


@dataclass(frozen=True, slots=True)
class EmbeddedResource:
    """Package data entry addressed by its dotted resource name."""

    name: str
    entry: Traversable

    @property
    def extension(self) -> str:
        """Return the lower-cased final suffix of the resource name."""

        _, dot, suffix = self.name.rpartition(".")
        return f".{suffix.lower()}" if dot else ""

    def open(self) -> BinaryIO:
        """Open the resource for binary reading."""

        return self.entry.open("rb")


@dataclass(slots=True)
class EmbeddedResourceSource:
    """Resolve logical names against data bundled in a Python package.

    Resource names are the package name followed by the relative path of
    the data file, joined with dots: ``apiport.data.catalog.bin``.
    """

    namespace: str
    root: Traversable | None = None
    label: str = "embedded"
    _entries: tuple[EmbeddedResource, ...] | None = field(default=None, init=False, repr=False)
    _lookup: dict[str, EmbeddedResource] = field(default_factory=dict, init=False, repr=False)

    def resource_name(self, logical_name: str) -> str:
        """Return the namespaced resource name for ``logical_name``."""

        return f"{self.namespace}.{logical_name}"

    def resources(self) -> tuple[EmbeddedResource, ...]:
        """Return every bundled data resource in enumeration order."""

        return self._load_entries()

    def find(self, resource_name: str) -> EmbeddedResource | None:
        """Return the resource called ``resource_name`` ignoring case."""

        self._load_entries()
        return self._lookup.get(resource_name.lower())

    def contains(self, logical_name: str) -> bool:
        """Return ``True`` when ``logical_name`` is bundled."""

        return self.find(self.resource_name(logical_name)) is not None

    def try_open(self, logical_name: str) -> BinaryIO | None:
        """Open the bundled resource, or return ``None`` when absent."""

        resource = self.find(self.resource_name(logical_name))
        if resource is None:
            return None
        return resource.open()

    def _load_entries(self) -> tuple[EmbeddedResource, ...]:
        """Walk the package on first use and index names ignoring case.

        Every resource is enumerated, including names that differ only in
        case. Lookup by folded name resolves to the first such resource.
        """

        if self._entries is None:
            root = self.root if self.root is not None else _package_root(self.namespace)
            entries = tuple(_walk(root, self.namespace)) if root is not None else ()
            for resource in entries:
                self._lookup.setdefault(resource.name.lower(), resource)
            self._entries = entries
        return self._entries


@dataclass(frozen=True, slots=True)
class BinaryResourceResolver:
    """Open data files by trying each :class:`ResourceSource` in order."""

    local: LocalFileSource
    embedded: EmbeddedResourceSource

    @property
    def stages(self) -> Sequence[ResourceSource]:
        """Return the lookup stages, side-by-side files first."""

        return (self.local, self.embedded)

    def has_file(self, logical_name: str) -> bool:
        """Return ``True`` when a side-by-side file exists."""

        return self.local.contains(logical_name)

    def has_resource(self, logical_name: str) -> bool:
        """Return ``True`` when an embedded resource exists."""

        return self.embedded.contains(logical_name)

    def exists(self, logical_name: str) -> bool:
        """Return ``True`` when any stage can supply ``logical_name``."""

        return self.has_file(logical_name) or self.has_resource(logical_name)

    def locate(self, logical_name: str) -> str | None:
        """Return the label of the stage that would serve ``logical_name``."""

        for stage in self.stages:
            if stage.contains(logical_name):
                return stage.label
        return None

    def open(self, logical_name: str) -> BinaryIO:
        """Return a readable stream for ``logical_name``.

        Args:
            logical_name: Data file name such as ``catalog.bin``.

        Returns:
            BinaryIO: Stream owned by the caller, to be closed after use.

        Raises:
            ResourceNotFoundError: If no stage supplies ``logical_name``.
        """

        for stage in self.stages:
            stream = stage.try_open(logical_name)
            if stream is not None:
                LOGGER.debug("Resolved %s from %s", logical_name, stage.label)
                return stream
        raise ResourceNotFoundError(logical_name)


def _package_root(package: str) -> Traversable | None:
    """Return the traversable root of ``package`` or ``None`` if not importable."""

    try:
        return resources.files(package)
    except ModuleNotFoundError:
        LOGGER.debug("Resource package %s is not importable", package)
        return None


def _walk(node: Traversable, prefix: str) -> Iterator[EmbeddedResource]:
    """Yield data resources beneath ``node`` sorted by name at each level."""

    for child in sorted(node.iterdir(), key=lambda item: item.name):
        if child.is_dir():
            if child.name in _IGNORED_DIRECTORIES:
                continue
            yield from _walk(child, f"{prefix}.{child.name}")
            continue
        if Path(child.name).suffix in _IGNORED_SUFFIXES:
            continue
        yield EmbeddedResource(name=f"{prefix}.{child.name}", entry=child)


__all__ = [
    "BinaryResourceResolver",
    "EmbeddedResource",
    "EmbeddedResourceSource",
    "LocalFileSource",
    "ResourceSource",
]
