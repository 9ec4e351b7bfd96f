# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Dependency filters applied while analysing assembly references."""

from __future__ import annotations

from .framework import (
    DEFAULT_FRAMEWORK,
    DependencyFilter,
    DotNetFrameworkFilter,
    FrameworkDefinition,
    PublicKeyToken,
    is_framework_assembly,
)

__all__ = [
    "DEFAULT_FRAMEWORK",
    "DependencyFilter",
    "DotNetFrameworkFilter",
    "FrameworkDefinition",
    "PublicKeyToken",
    "is_framework_assembly",
]
