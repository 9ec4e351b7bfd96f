# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while resolving offline analyzer data."""

from __future__ import annotations


class PortabilityAnalyzerError(RuntimeError):
    """Base class for failures surfaced to the operator."""


class ResourceNotFoundError(PortabilityAnalyzerError):
    """Raised when a data file is neither beside the program nor embedded."""

    def __init__(self, logical_name: str) -> None:
        """Create the error for the unresolved ``logical_name``."""

        super().__init__(f"Unable to find data file '{logical_name}'")
        self.logical_name = logical_name


class DataFormatError(PortabilityAnalyzerError):
    """Raised when a resolved data file cannot be decoded."""

    def __init__(self, logical_name: str | None, detail: str) -> None:
        """Create the error for ``logical_name`` with a short ``detail``."""

        label = logical_name or "<stream>"
        super().__init__(f"{label}: {detail}")
        self.logical_name = logical_name


__all__ = ("DataFormatError", "PortabilityAnalyzerError", "ResourceNotFoundError")
