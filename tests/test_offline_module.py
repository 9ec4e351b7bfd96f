# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for wiring the offline services from settings."""

from __future__ import annotations

import json
from collections.abc import Callable
from importlib import metadata
from pathlib import Path

import pytest

from apiport.config import OfflineSettings
from apiport.offline import OfflineDataModule
from apiport.resources import EmbeddedResourceSource

WRITER_SOURCE = """\
from apiport.reporting import ReportFormat, ReportWriter


class HtmlWriter(ReportWriter):
    format = ReportFormat("HTML", "text/html", ".html")

    def write_stream(self, stream, report):
        stream.write(b"<html></html>")
"""


@pytest.fixture
def module(app_dir: Path, embedded: EmbeddedResourceSource) -> OfflineDataModule:
    return OfflineDataModule(settings=OfflineSettings(application_directory=app_dir), embedded=embedded)


def test_results_are_loaded_once(
    app_dir: Path,
    module: OfflineDataModule,
    write_gzip_json: Callable[[Path, object], Path],
) -> None:
    write_gzip_json(app_dir / "catalog.bin", {"BuiltBy": "first"})

    first = module.catalog
    write_gzip_json(app_dir / "catalog.bin", {"BuiltBy": "second"})

    assert module.catalog is first
    assert first.built_by == "first"


def test_breaking_changes_and_additional_data(app_dir: Path, module: OfflineDataModule) -> None:
    local = app_dir / "BreakingChanges"
    local.mkdir()
    (local / "changes.json").write_text(json.dumps([{"Title": "Local change"}]), encoding="utf-8")

    assert [change.title for change in module.breaking_changes] == ["Local change"]
    assert module.additional_data.exceptions == ()


@pytest.mark.usefixtures("isolated_imports")
def test_report_writers_come_from_application_directory(
    monkeypatch: pytest.MonkeyPatch,
    app_dir: Path,
    module: OfflineDataModule,
) -> None:
    monkeypatch.setattr(metadata, "entry_points", lambda: {})
    (app_dir / "apiport_report_html.py").write_text(WRITER_SOURCE, encoding="utf-8")

    registry = module.report_writers

    assert [fmt.display_name for fmt in registry.formats()] == ["HTML"]
    assert module.report_writers is registry


def test_dependency_filter_uses_default_definition(module: OfflineDataModule) -> None:
    assert module.dependency_filter.is_framework_assembly("System.Linq", None)
    assert not module.dependency_filter.is_framework_assembly("Newtonsoft.Json", None)


def test_catalog_loader_receives_presentation_flags(app_dir: Path, embedded: EmbeddedResourceSource) -> None:
    settings = OfflineSettings(application_directory=app_dir, use_emoji=True, use_color=False)

    loader = OfflineDataModule(settings=settings, embedded=embedded).catalog_loader

    assert loader.use_emoji is True
    assert loader.use_color is False
