# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Discovery of report-writer plugins.

Writers reach the registry two ways: modules named ``apiport_report_*.py``
dropped into the application directory, and classes published under the
``apiport.report_writers`` entry-point group. Both paths are best effort;
a plugin that fails to import or register is skipped and the remaining
plugins still load.
"""

from __future__ import annotations

import importlib
import logging
import sys
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from importlib import metadata
from importlib.metadata import EntryPoint, EntryPoints
from pathlib import Path
from types import ModuleType
from typing import Final, TypeAlias, cast

from .config import DEFAULT_COMPANION_SUFFIX, DEFAULT_PLUGIN_EXTENSION, DEFAULT_PLUGIN_PREFIX
from .reporting import ReportWriterRegistry, is_report_writer_type

LOGGER = logging.getLogger(__name__)

REPORT_WRITER_GROUP: Final[str] = "apiport.report_writers"

ModuleImporter: TypeAlias = Callable[[str], ModuleType]
_EntryPointSource: TypeAlias = EntryPoints | Mapping[str, Sequence[EntryPoint]]


@dataclass(slots=True)
class ReportPluginDiscovery:
    """Scan a directory for writer modules and register their writer types."""

    registry: ReportWriterRegistry
    prefix: str = DEFAULT_PLUGIN_PREFIX
    extension: str = DEFAULT_PLUGIN_EXTENSION
    companion_suffix: str = DEFAULT_COMPANION_SUFFIX
    importer: ModuleImporter = field(default=importlib.import_module)

    def candidates(self, directory: Path) -> tuple[Path, ...]:
        """Return plugin files in ``directory`` that should be imported.

        A generated companion (``<name>_views.py``) is dropped only when its
        primary ``<name>.py`` is also a candidate; an orphaned companion is
        kept.

        Args:
            directory: Directory to scan; a missing directory yields nothing.

        Returns:
            tuple[Path, ...]: Candidate files sorted by name.
        """

        if not directory.is_dir():
            return ()
        prefix = self.prefix.lower()
        extension = self.extension.lower()
        files = sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and path.name.lower().startswith(prefix) and path.name.lower().endswith(extension)
        )
        names = {path.name.lower() for path in files}
        return tuple(path for path in files if not self._is_companion(path.name, names))

    def discover(self, directory: Path) -> None:
        """Import each candidate by module name and register its writers.

        Failures for one candidate are logged at debug level and never stop
        the scan.
        """

        candidates = self.candidates(directory)
        if not candidates:
            return
        _ensure_importable(directory)
        for path in candidates:
            module_name = path.name[: -len(self.extension)]
            try:
                module = self.importer(module_name)
                registered = register_module_writers(self.registry, module)
            except Exception as exc:  # noqa: BLE001 - one bad plugin must not block the others
                LOGGER.debug("Skipping report plugin %s: %s", module_name, exc, exc_info=True)
                continue
            LOGGER.debug("Registered %d writer(s) from %s", registered, module_name)

    def _is_companion(self, name: str, names: set[str]) -> bool:
        """Return ``True`` when ``name`` is a companion whose primary is present.

        Args:
            name: File name of the candidate.
            names: Lower-cased names of every candidate in the directory.

        Returns:
            bool: ``False`` for primaries, orphaned companions, and whenever
            no companion suffix is configured.
        """

        if not self.companion_suffix:
            return False
        marker = f"{self.companion_suffix}{self.extension}".lower()
        lowered = name.lower()
        if not lowered.endswith(marker):
            return False
        primary = f"{lowered[: -len(marker)]}{self.extension.lower()}"
        return primary in names


def register_module_writers(registry: ReportWriterRegistry, module: ModuleType) -> int:
    """Register writer types defined in ``module``; return how many were new."""

    count = 0
    for candidate in vars(module).values():
        if not is_report_writer_type(candidate) or candidate.__module__ != module.__name__:
            continue
        if registry.register(candidate, origin=module.__name__):
            count += 1
    return count


def load_entry_point_writers(registry: ReportWriterRegistry, group: str = REPORT_WRITER_GROUP) -> int:
    """Register writer classes published under the entry-point ``group``.

    Entries that fail to import, or that do not resolve to a writer class,
    are skipped.

    Returns:
        int: Number of new registrations.
    """

    entries = _select_entry_points(cast(_EntryPointSource, metadata.entry_points()), group)
    count = 0
    for entry in entries:
        try:
            writer_type = entry.load()
            if registry.register(writer_type, origin=f"{group}:{entry.name}"):
                count += 1
        except (AttributeError, ImportError, TypeError, ValueError, RuntimeError) as exc:
            LOGGER.debug("Skipping report writer entry point %s: %s", getattr(entry, "name", entry), exc)
    return count


def _select_entry_points(entries: _EntryPointSource, group: str) -> Iterable[EntryPoint]:
    """Return entry points exposed under ``group`` from ``entries``."""

    if isinstance(entries, Mapping):
        return entries.get(group, ())
    if hasattr(entries, "select"):
        return entries.select(group=group)
    return ()


def _ensure_importable(directory: Path) -> None:
    """Make modules in ``directory`` importable by name."""

    location = str(directory.resolve())
    if location not in sys.path:
        sys.path.append(location)
    importlib.invalidate_caches()


__all__ = [
    "REPORT_WRITER_GROUP",
    "ReportPluginDiscovery",
    "load_entry_point_writers",
    "register_module_writers",
]
