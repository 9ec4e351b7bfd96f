# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Breaking change records shared by the markdown and JSON readers."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal


class BreakingChangeImpact(str, Enum):
    """Enumerate how widely a breaking change is expected to be felt."""

    UNKNOWN = "Unknown"
    MAJOR = "Major"
    MINOR = "Minor"
    EDGE = "Edge"
    TRANSPARENT = "Transparent"

    @classmethod
    def parse(cls, raw: str) -> BreakingChangeImpact:
        """Return the member matching ``raw`` ignoring case, else ``UNKNOWN``."""

        token = raw.strip().lower()
        for member in cls:
            if member.value.lower() == token:
                return member
        return cls.UNKNOWN


class BreakingChange(BaseModel):
    """Recorded incompatibility between platform versions."""

    model_config = ConfigDict(frozen=True, alias_generator=to_pascal, populate_by_name=True, extra="ignore")

    id: str | None = None
    title: str | None = None
    impact_scope: BreakingChangeImpact = BreakingChangeImpact.UNKNOWN
    version_broken: str | None = None
    version_fixed: str | None = None
    details: str | None = None
    suggestion: str | None = None
    applicable_apis: tuple[str, ...] = Field(default_factory=tuple)
    link: str | None = None
    bug_link: str | None = None
    notes: str | None = None
    is_quirked: bool = False
    is_build_time: bool = False
    source_analyzer_status: str | None = None
    categories: tuple[str, ...] = Field(default_factory=tuple)
    source: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        """Accept numeric identifiers emitted by older data files."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("impact_scope", mode="before")
    @classmethod
    def _coerce_impact(cls, value: object) -> object:
        """Map free-text and ordinal impact values onto the enum."""
        if isinstance(value, str):
            return BreakingChangeImpact.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(BreakingChangeImpact)
            return members[value] if 0 <= value < len(members) else BreakingChangeImpact.UNKNOWN
        return value

    @field_validator("applicable_apis", "categories", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        """Treat explicit nulls in JSON as empty sequences."""
        if value is None:
            return ()
        return value

    def in_categories(self, allowed: frozenset[str]) -> bool:
        """Return ``True`` when any category of the change is in ``allowed``."""

        return any(category in allowed for category in self.categories)


__all__ = ["BreakingChange", "BreakingChangeImpact"]
