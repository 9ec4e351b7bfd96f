# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for report-writer plugin discovery."""

from __future__ import annotations

import io
import sys
from importlib import metadata
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

from apiport.plugins import (
    REPORT_WRITER_GROUP,
    ReportPluginDiscovery,
    load_entry_point_writers,
    register_module_writers,
)
from apiport.reporting import ReportFormat, ReportWriter, ReportWriterRegistry

pytestmark = pytest.mark.usefixtures("isolated_imports")

WRITER_SOURCE = """\
from apiport.reporting import ReportFormat, ReportWriter


class {cls}(ReportWriter):
    @property
    def format(self):
        return ReportFormat("{name}", "text/plain", ".txt")

    def write_stream(self, stream, report):
        stream.write(b"{name}")
"""


def _write_plugin(directory: Path, module: str, cls: str, name: str) -> Path:
    path = directory / f"{module}.py"
    path.write_text(WRITER_SOURCE.format(cls=cls, name=name), encoding="utf-8")
    return path


class _TextWriter(ReportWriter):
    @property
    def format(self) -> ReportFormat:
        return ReportFormat("Text", "text/plain", ".txt")

    def write_stream(self, stream: Any, report: Any) -> None:
        stream.write(b"text")


class _FakeEntryPoint:
    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self._value = value

    def load(self) -> Any:
        if isinstance(self._value, Exception):
            raise self._value
        return self._value


def test_candidates_exclude_companion_only_when_primary_exists(tmp_path: Path) -> None:
    for name in (
        "apiport_report_foo.py",
        "apiport_report_foo_views.py",
        "apiport_report_bar_views.py",
        "apiport_report_notes.txt",
        "unrelated.py",
    ):
        (tmp_path / name).write_text("", encoding="utf-8")

    candidates = ReportPluginDiscovery(ReportWriterRegistry()).candidates(tmp_path)

    assert [path.name for path in candidates] == ["apiport_report_bar_views.py", "apiport_report_foo.py"]


def test_candidates_without_companion_suffix_keep_every_plugin(tmp_path: Path) -> None:
    for name in ("apiport_report_foo.py", "apiport_report_foo_views.py"):
        (tmp_path / name).write_text("", encoding="utf-8")

    candidates = ReportPluginDiscovery(ReportWriterRegistry(), companion_suffix="").candidates(tmp_path)

    assert [path.name for path in candidates] == ["apiport_report_foo.py", "apiport_report_foo_views.py"]


def test_candidates_for_missing_directory_are_empty(tmp_path: Path) -> None:
    assert ReportPluginDiscovery(ReportWriterRegistry()).candidates(tmp_path / "absent") == ()


def test_discover_registers_writers_and_skips_companion(tmp_path: Path) -> None:
    _write_plugin(tmp_path, "apiport_report_foo", "FooWriter", "Foo")
    _write_plugin(tmp_path, "apiport_report_foo_views", "FooViewsWriter", "FooViews")
    _write_plugin(tmp_path, "apiport_report_bar_views", "BarViewsWriter", "BarViews")
    registry = ReportWriterRegistry()

    ReportPluginDiscovery(registry).discover(tmp_path)

    assert [item.origin for item in registry.registrations] == [
        "apiport_report_bar_views",
        "apiport_report_foo",
    ]
    assert sorted(fmt.display_name for fmt in registry.formats()) == ["BarViews", "Foo"]
    assert "apiport_report_foo_views" not in sys.modules


def test_candidates_are_imported_by_module_name(tmp_path: Path) -> None:
    (tmp_path / "apiport_report_json.py").write_text("", encoding="utf-8")
    imported: list[str] = []

    def _importer(name: str) -> ModuleType:
        imported.append(name)
        module = ModuleType(name)
        module.JsonWriter = type("JsonWriter", (_TextWriter,), {"__module__": name})
        return module

    registry = ReportWriterRegistry()
    ReportPluginDiscovery(registry, importer=_importer).discover(tmp_path)

    assert imported == ["apiport_report_json"]
    assert len(registry) == 1


def test_broken_plugin_does_not_block_others(tmp_path: Path) -> None:
    (tmp_path / "apiport_report_broken.py").write_text("raise ImportError('missing dependency')\n", encoding="utf-8")
    (tmp_path / "apiport_report_syntax.py").write_text("def oops(:\n", encoding="utf-8")
    _write_plugin(tmp_path, "apiport_report_good", "GoodWriter", "Good")
    registry = ReportWriterRegistry()

    ReportPluginDiscovery(registry).discover(tmp_path)

    assert [fmt.display_name for fmt in registry.formats()] == ["Good"]


def test_rediscovery_keeps_single_instance(tmp_path: Path) -> None:
    _write_plugin(tmp_path, "apiport_report_once", "OnceWriter", "Once")
    registry = ReportWriterRegistry()
    discovery = ReportPluginDiscovery(registry)

    discovery.discover(tmp_path)
    discovery.discover(tmp_path)

    assert len(registry) == 1
    writer_type = registry.registrations[0].writer_type
    assert registry.get(writer_type) is registry.get(writer_type)
    stream = io.BytesIO()
    registry.find("once").write_stream(stream, report=None)
    assert stream.getvalue() == b"Once"


def test_module_scan_ignores_abstract_and_imported_types() -> None:
    module = ModuleType("apiport_report_scan")
    module.ReportWriter = ReportWriter
    module.Imported = _TextWriter
    module.Local = type("Local", (_TextWriter,), {"__module__": "apiport_report_scan"})
    module.Partial = type(
        "Partial",
        (ReportWriter,),
        {"__module__": "apiport_report_scan", "write_stream": lambda self, stream, report: None},
    )
    registry = ReportWriterRegistry()

    assert register_module_writers(registry, module) == 1
    assert registry.registrations[0].writer_type is module.Local
    assert registry.registrations[0].capability is ReportWriter


def test_registry_rejects_non_writers() -> None:
    with pytest.raises(TypeError):
        ReportWriterRegistry().register(object, origin="tests")  # type: ignore[arg-type]


def test_registry_lookup_of_unknown_type_fails() -> None:
    registry = ReportWriterRegistry()

    with pytest.raises(KeyError):
        registry.get(_TextWriter)
    assert registry.find("Text") is None


def test_entry_point_writers_are_registered_best_effort(monkeypatch: pytest.MonkeyPatch) -> None:
    entries = {
        REPORT_WRITER_GROUP: (
            _FakeEntryPoint("broken", ImportError("boom")),
            _FakeEntryPoint("not-a-writer", object),
            _FakeEntryPoint("text", _TextWriter),
        ),
    }
    monkeypatch.setattr(metadata, "entry_points", lambda: entries)
    registry = ReportWriterRegistry()

    assert load_entry_point_writers(registry) == 1
    assert registry.registrations[0].origin == f"{REPORT_WRITER_GROUP}:text"


def test_entry_point_select_api(monkeypatch: pytest.MonkeyPatch) -> None:
    class _Container:
        def select(self, *, group: str):
            if group == REPORT_WRITER_GROUP:
                return (_FakeEntryPoint("text", _TextWriter),)
            return ()

    monkeypatch.setattr(metadata, "entry_points", lambda: _Container())
    registry = ReportWriterRegistry()

    load_entry_point_writers(registry)

    assert _TextWriter in registry
