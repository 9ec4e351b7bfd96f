# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Breaking change records and their loaders."""

from __future__ import annotations

from .loader import BreakingChangeLoader, parse_breaking_changes
from .markdown import parse_markdown, parse_markdown_stream
from .models import BreakingChange, BreakingChangeImpact

__all__ = [
    "BreakingChange",
    "BreakingChangeImpact",
    "BreakingChangeLoader",
    "parse_breaking_changes",
    "parse_markdown",
    "parse_markdown_stream",
]
