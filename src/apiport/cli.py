# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostics CLI for inspecting the offline data the analyzer would use."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from .analysis.framework import PublicKeyToken
from .config import ConfigError, OfflineSettings
from .errors import PortabilityAnalyzerError
from .logging import fail, get_console
from .offline import OfflineDataModule

app = typer.Typer(
    name="apiport-offline",
    help="Inspect offline catalog data, breaking changes and report writers.",
    no_args_is_help=True,
    add_completion=False,
)

_HOME_OPTION = typer.Option(
    None,
    "--home",
    help="Application directory holding side-by-side data files and plugins.",
)


def _module(home: Path | None) -> OfflineDataModule:
    overrides: dict[str, object] = {}
    if home is not None:
        overrides["application_directory"] = home.expanduser().resolve()
    try:
        settings = OfflineSettings.from_env(**overrides)
    except ConfigError as exc:
        fail(str(exc))
        raise typer.Exit(code=2) from exc
    return OfflineDataModule(settings=settings)


@app.command("sources")
def show_sources(home: Path | None = _HOME_OPTION) -> None:
    """Show where each data file would be read from."""

    module = _module(home)
    settings = module.settings
    table = Table(title="Offline data sources")
    table.add_column("Data")
    table.add_column("Source")
    for logical_name in (settings.catalog_filename, settings.exceptions_filename):
        table.add_row(logical_name, module.resolver.locate(logical_name) or "missing")
    mode = "file" if module.breaking_change_loader.uses_local_directory else "embedded"
    table.add_row(settings.breaking_changes_dirname, mode)
    get_console(color=settings.use_color, emoji=settings.use_emoji).print(table)


@app.command("breaking-changes")
def list_breaking_changes(home: Path | None = _HOME_OPTION) -> None:
    """List the breaking changes that would be reported."""

    module = _module(home)
    try:
        changes = module.breaking_changes
    except PortabilityAnalyzerError as exc:
        fail(str(exc), use_emoji=module.settings.use_emoji, use_color=module.settings.use_color)
        raise typer.Exit(code=1) from exc
    typer.echo(f"{len(changes)} breaking change(s)")
    for change in changes:
        title = change.title or "(untitled)"
        label = f"{change.id}: {title}" if change.id else title
        categories = f" [{', '.join(change.categories)}]" if change.categories else ""
        typer.echo(f"  • {label}{categories}")


@app.command("writers")
def list_writers(home: Path | None = _HOME_OPTION) -> None:
    """List report writers discovered from plugins and entry points."""

    registry = _module(home).report_writers
    if not len(registry):
        typer.echo("No report writers found")
        return
    for registration, writer in zip(registry.registrations, registry.writers(), strict=True):
        fmt = writer.format
        typer.echo(f"  • {fmt.display_name} ({fmt.mime_type}, {fmt.file_extension}) from {registration.origin}")


@app.command("classify")
def classify(
    name: str = typer.Argument(..., help="Simple assembly name, e.g. System.Collections."),
    token: str = typer.Option("", "--token", "-t", help="Public key token in hex."),
) -> None:
    """Report whether an assembly is treated as part of the framework."""

    try:
        key = PublicKeyToken.from_hex(token)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--token") from exc
    module = OfflineDataModule(settings=OfflineSettings())
    verdict = module.dependency_filter.is_framework_assembly(name, key)
    typer.echo(f"{name}: {'framework' if verdict else 'third-party'}")


__all__ = ["app"]
