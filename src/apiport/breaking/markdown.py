# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Parser for breaking changes written as structured markdown.

Each record starts at a level-two heading (``## 42: Title`` or ``## Title``)
and is followed by level-three headings naming its fields::

    ## 42: Uri parsing changed

    ### Scope
    Minor

    ### Version Introduced
    4.5

    ### Change Description
    Uri now escapes reserved characters.

    - [x] Quirked
    - [ ] Build-time break

    ### Affected APIs
    * `M:System.Uri.#ctor(System.String)`

    ### Category
    API
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass, field
from typing import BinaryIO, Final

from .models import BreakingChange, BreakingChangeImpact

_RECORD_HEADING: Final[re.Pattern[str]] = re.compile(r"^##(?!#)\s*(?:(?P<id>\d+)\s*:\s*)?(?P<title>.*?)\s*$")
_SECTION_HEADING: Final[re.Pattern[str]] = re.compile(r"^###(?!#)\s*(?P<name>.*?)\s*:?\s*$")
_CHECKBOX: Final[re.Pattern[str]] = re.compile(r"^\s*[-*]\s*\[(?P<mark>[ xX])\]\s*(?P<label>.*?)\s*$")
_BULLET: Final[re.Pattern[str]] = re.compile(r"^\s*[-*+]\s+")
_HTML_COMMENT: Final[re.Pattern[str]] = re.compile(r"<!--.*?-->", re.DOTALL)

_NOT_DETECTABLE: Final[str] = "not detectable via api analysis"

_SECTION_FIELDS: Final[dict[str, str]] = {
    "scope": "impact_scope",
    "version introduced": "version_broken",
    "version broken": "version_broken",
    "version reverted": "version_fixed",
    "version fixed": "version_fixed",
    "source analyzer status": "source_analyzer_status",
    "change description": "details",
    "details": "details",
    "recommended action": "suggestion",
    "suggestion": "suggestion",
    "affected apis": "applicable_apis",
    "category": "categories",
    "categories": "categories",
    "original bug": "bug_link",
    "link": "link",
    "notes": "notes",
}
_SINGLE_LINE_FIELDS: Final[frozenset[str]] = frozenset(
    {"impact_scope", "version_broken", "version_fixed", "source_analyzer_status", "bug_link", "link"},
)
_CHECKBOX_FLAGS: Final[dict[str, str]] = {
    "quirked": "is_quirked",
    "build-time break": "is_build_time",
    "build time break": "is_build_time",
}


@dataclass(slots=True)
class _Draft:
    """Mutable accumulator for one record while its lines are consumed."""

    identifier: str | None
    title: str
    sections: dict[str, list[str]] = field(default_factory=dict)
    flags: dict[str, bool] = field(default_factory=dict)

    def build(self, source: str | None) -> BreakingChange:
        """Return the validated record for this draft.

        Single-line fields keep their first non-blank line and are omitted
        when the section is empty, so model defaults apply.

        Args:
            source: Provenance stored on the record.

        Returns:
            BreakingChange: Frozen record built from the collected sections.
        """

        values: dict[str, object] = {"id": self.identifier, "title": self.title, "source": source}
        for name, lines in self.sections.items():
            if name == "applicable_apis":
                values[name] = tuple(_affected_apis(lines))
            elif name == "categories":
                values[name] = tuple(_list_items(lines))
            elif name in _SINGLE_LINE_FIELDS:
                first = next((line.strip() for line in lines if line.strip()), None)
                if first is None:
                    continue
                values[name] = BreakingChangeImpact.parse(first) if name == "impact_scope" else first
            else:
                values[name] = _join_text(lines)
        values.update(self.flags)
        return BreakingChange.model_validate(values)


def parse_markdown(
    text: str,
    allowed_categories: Collection[str] | None = None,
    *,
    source: str | None = None,
) -> list[BreakingChange]:
    """Extract breaking changes from markdown ``text``.

    Args:
        text: Markdown document holding one or more records.
        allowed_categories: Optional allow-list. When given, only records with
            at least one listed category are returned; ``None`` keeps all.
        source: Provenance recorded on every returned change.

    Returns:
        list[BreakingChange]: Records in document order.
    """

    allowed = frozenset(allowed_categories) if allowed_categories is not None else None
    drafts: list[_Draft] = []
    current: _Draft | None = None
    section: str | None = None

    for line in _HTML_COMMENT.sub("", text).splitlines():
        record = _RECORD_HEADING.match(line)
        if record is not None:
            current = _Draft(identifier=record.group("id"), title=record.group("title"))
            drafts.append(current)
            section = None
            continue
        if current is None:
            continue
        heading = _SECTION_HEADING.match(line)
        if heading is not None:
            section = _SECTION_FIELDS.get(heading.group("name").lower())
            if section is not None:
                current.sections.setdefault(section, [])
            continue
        checkbox = _CHECKBOX.match(line)
        if checkbox is not None:
            flag = _CHECKBOX_FLAGS.get(checkbox.group("label").lower())
            if flag is not None:
                current.flags[flag] = checkbox.group("mark") in "xX"
                continue
        if section is not None:
            current.sections[section].append(line)

    changes = [draft.build(source) for draft in drafts if draft.title]
    if allowed is None:
        return changes
    return [change for change in changes if change.in_categories(allowed)]


def parse_markdown_stream(
    stream: BinaryIO,
    allowed_categories: Collection[str] | None = None,
    *,
    source: str | None = None,
) -> list[BreakingChange]:
    """Decode ``stream`` as UTF-8 and delegate to :func:`parse_markdown`."""

    text = stream.read().decode("utf-8-sig", errors="replace")
    return parse_markdown(text, allowed_categories, source=source)


def _join_text(lines: list[str]) -> str | None:
    """Return the section text with outer blank lines removed, or ``None``."""

    joined = "\n".join(lines).strip()
    return joined or None


def _list_items(lines: list[str]) -> list[str]:
    """Return non-empty lines with any bullet marker stripped."""

    items: list[str] = []
    for line in lines:
        item = _BULLET.sub("", line).strip()
        if item:
            items.append(item)
    return items


def _affected_apis(lines: list[str]) -> list[str]:
    """Return documentation ids listed under an affected APIs section.

    Backticks around an id are removed and the placeholder for changes that
    API analysis cannot detect contributes nothing.
    """

    apis: list[str] = []
    for item in _list_items(lines):
        api = item.strip("`").strip()
        if not api or api.lower() == _NOT_DETECTABLE:
            continue
        apis.append(api)
    return apis


__all__ = ["parse_markdown", "parse_markdown_stream"]
