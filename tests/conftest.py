# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import gzip
import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from apiport.resources import BinaryResourceResolver, EmbeddedResourceSource, LocalFileSource

NAMESPACE = "apiport.data"


def _write_gzip_json(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(gzip.compress(json.dumps(payload).encode("utf-8")))
    return path


@pytest.fixture
def write_gzip_json() -> Callable[[Path, object], Path]:
    """Return a helper writing gzip-compressed JSON data files."""
    return _write_gzip_json


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Return an empty directory standing in for the application directory."""
    directory = tmp_path / "app"
    directory.mkdir()
    return directory


@pytest.fixture
def embedded_root(tmp_path: Path) -> Path:
    """Return an empty directory standing in for bundled package data."""
    directory = tmp_path / "embedded"
    directory.mkdir()
    return directory


@pytest.fixture
def embedded(embedded_root: Path) -> EmbeddedResourceSource:
    return EmbeddedResourceSource(namespace=NAMESPACE, root=embedded_root)


@pytest.fixture
def resolver(app_dir: Path, embedded: EmbeddedResourceSource) -> BinaryResourceResolver:
    return BinaryResourceResolver(local=LocalFileSource(app_dir), embedded=embedded)


@pytest.fixture
def isolated_imports(monkeypatch: pytest.MonkeyPatch):
    """Undo ``sys.path`` and ``sys.modules`` changes made by plugin imports."""
    monkeypatch.setattr(sys, "path", list(sys.path))
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        if name.startswith("apiport_report_"):
            del sys.modules[name]
