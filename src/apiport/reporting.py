# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report-writer capability and the process-wide writer registry."""

from __future__ import annotations

import inspect
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, BinaryIO


@dataclass(frozen=True, slots=True)
class ReportFormat:
    """Describe the output produced by a report writer."""

    display_name: str
    mime_type: str
    file_extension: str


class ReportWriter(ABC):
    """Capability implemented by pluggable report renderers."""

    @property
    @abstractmethod
    def format(self) -> ReportFormat:
        """Return the output format rendered by this writer."""

    @abstractmethod
    def write_stream(self, stream: BinaryIO, report: Any) -> None:
        """Render ``report`` into ``stream``."""


@dataclass(frozen=True, slots=True)
class PluginRegistration:
    """Record of a writer type registered against the writer capability."""

    writer_type: type[ReportWriter]
    capability: type[ReportWriter]
    origin: str


def is_report_writer_type(candidate: object) -> bool:
    """Return ``True`` for concrete classes implementing :class:`ReportWriter`."""

    return (
        inspect.isclass(candidate)
        and issubclass(candidate, ReportWriter)
        and candidate is not ReportWriter
        and not inspect.isabstract(candidate)
    )


class ReportWriterRegistry:
    """Hold one writer instance per registered type for the process lifetime.

    Registration is serialised by a lock so concurrent discovery passes keep
    a single instance per writer type.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._registrations: list[PluginRegistration] = []
        self._instances: dict[type[ReportWriter], ReportWriter] = {}

    def __len__(self) -> int:
        return len(self._registrations)

    def __contains__(self, writer_type: object) -> bool:
        return any(item.writer_type is writer_type for item in self._registrations)

    @property
    def registrations(self) -> tuple[PluginRegistration, ...]:
        """Return registrations in the order they were recorded."""

        return tuple(self._registrations)

    def register(self, writer_type: type[ReportWriter], *, origin: str) -> bool:
        """Register ``writer_type`` unless it is already known.

        Args:
            writer_type: Concrete :class:`ReportWriter` subclass.
            origin: Module or entry point the type was discovered in.

        Returns:
            bool: ``True`` when a new registration was recorded.

        Raises:
            TypeError: If ``writer_type`` does not implement :class:`ReportWriter`.
        """

        if not is_report_writer_type(writer_type):
            raise TypeError(f"{writer_type!r} is not a concrete ReportWriter")
        with self._lock:
            if writer_type in self:
                return False
            self._registrations.append(
                PluginRegistration(writer_type=writer_type, capability=ReportWriter, origin=origin),
            )
            return True

    def get(self, writer_type: type[ReportWriter]) -> ReportWriter:
        """Return the single instance of a registered ``writer_type``.

        Raises:
            KeyError: If ``writer_type`` was never registered.
        """

        with self._lock:
            if writer_type not in self:
                raise KeyError(writer_type.__qualname__)
            instance = self._instances.get(writer_type)
            if instance is None:
                instance = writer_type()
                self._instances[writer_type] = instance
            return instance

    def writers(self) -> tuple[ReportWriter, ...]:
        """Return instances of every registered writer."""

        return tuple(self.get(item.writer_type) for item in self.registrations)

    def formats(self) -> tuple[ReportFormat, ...]:
        """Return the formats offered by registered writers."""

        return tuple(writer.format for writer in self.writers())

    def find(self, display_name: str) -> ReportWriter | None:
        """Return the writer whose format name matches ``display_name``."""

        wanted = display_name.casefold()
        for writer in self.writers():
            if writer.format.display_name.casefold() == wanted:
                return writer
        return None


__all__ = [
    "PluginRegistration",
    "ReportFormat",
    "ReportWriter",
    "ReportWriterRegistry",
    "is_report_writer_type",
]
