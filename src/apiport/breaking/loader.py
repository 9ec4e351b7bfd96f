# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load breaking change records from a local directory or bundled data."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Final

from pydantic import TypeAdapter

from ..errors import DataFormatError
from ..resources import EmbeddedResourceSource
from .markdown import parse_markdown_stream
from .models import BreakingChange

LOGGER = logging.getLogger(__name__)

BREAKING_CHANGES_DIRNAME: Final[str] = "BreakingChanges"
CATEGORIES_FILENAME: Final[str] = "BreakingChangeCategories.json"
MARKDOWN_EXTENSION: Final[str] = ".md"
JSON_EXTENSION: Final[str] = ".json"

_CHANGES_ADAPTER: Final[TypeAdapter[list[BreakingChange]]] = TypeAdapter(list[BreakingChange])
_CATEGORIES_ADAPTER: Final[TypeAdapter[list[str]]] = TypeAdapter(list[str])


def parse_breaking_changes(
    stream: BinaryIO,
    extension: str,
    allowed_categories: Collection[str] | None,
    *,
    source: str | None = None,
) -> list[BreakingChange]:
    """Dispatch ``stream`` to the reader registered for ``extension``.

    Markdown honours ``allowed_categories``; JSON does not, and a JSON file
    that fails to deserialize contributes no records. Any other extension
    contributes nothing.

    Args:
        stream: Binary stream holding the file contents.
        extension: File extension including the dot, compared ignoring case.
        allowed_categories: Optional category allow-list for markdown files.
        source: Provenance recorded on the returned records.

    Returns:
        list[BreakingChange]: Records read from ``stream``.
    """

    suffix = extension.lower()
    if suffix == MARKDOWN_EXTENSION:
        return parse_markdown_stream(stream, allowed_categories, source=source)
    if suffix == JSON_EXTENSION:
        try:
            changes = _CHANGES_ADAPTER.validate_json(stream.read())
        except ValueError as exc:
            LOGGER.debug("Ignoring malformed breaking change file %s: %s", source, exc)
            return []
        return [change if change.source else change.model_copy(update={"source": source}) for change in changes]
    return []


@dataclass(frozen=True, slots=True)
class BreakingChangeLoader:
    """Read breaking changes, preferring the operator's local directory.

    When ``directory`` exists every file beneath it is read and bundled data
    is ignored, even if the directory is empty. Otherwise the ``.md`` and
    ``.json`` resources of ``embedded`` are read without a category filter.
    """

    directory: Path
    embedded: EmbeddedResourceSource
    categories_filename: str = CATEGORIES_FILENAME

    @property
    def uses_local_directory(self) -> bool:
        """Return ``True`` when the local override directory is present."""

        return self.directory.is_dir()

    def load_breaking_changes(self) -> list[BreakingChange]:
        """Return breaking changes from exactly one of the two sources."""

        if self.uses_local_directory:
            return self._load_local()
        return self._load_embedded()

    def allowed_categories(self) -> tuple[str, ...] | None:
        """Return the local category allow-list, or ``None`` when absent.

        Raises:
            DataFormatError: If the categories file is not a JSON string array.
        """

        path = self.directory / self.categories_filename
        if not path.is_file():
            return None
        with path.open("rb") as stream:
            try:
                return tuple(_CATEGORIES_ADAPTER.validate_json(stream.read()))
            except ValueError as exc:
                raise DataFormatError(self.categories_filename, "expected a JSON array of category names") from exc

    def _load_local(self) -> list[BreakingChange]:
        allowed = self.allowed_categories()
        changes: list[BreakingChange] = []
        for path in _iter_files(self.directory):
            with path.open("rb") as stream:
                changes.extend(parse_breaking_changes(stream, path.suffix, allowed, source=str(path)))
        LOGGER.debug("Loaded %d breaking changes from %s", len(changes), self.directory)
        return changes

    def _load_embedded(self) -> list[BreakingChange]:
        changes: list[BreakingChange] = []
        for resource in self.embedded.resources():
            if resource.extension not in (MARKDOWN_EXTENSION, JSON_EXTENSION):
                continue
            with resource.open() as stream:
                changes.extend(parse_breaking_changes(stream, resource.extension, None, source=resource.name))
        LOGGER.debug("Loaded %d embedded breaking changes", len(changes))
        return changes


def _iter_files(directory: Path) -> Iterator[Path]:
    """Yield every regular file beneath ``directory`` in a stable order."""

    return iter(sorted(path for path in directory.rglob("*") if path.is_file()))


__all__ = [
    "BREAKING_CHANGES_DIRNAME",
    "CATEGORIES_FILENAME",
    "BreakingChangeLoader",
    "parse_breaking_changes",
]
