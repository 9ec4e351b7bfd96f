# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Wire the offline loaders and plugin discovery from one settings object."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property

from .analysis.framework import DEFAULT_FRAMEWORK, DotNetFrameworkFilter, FrameworkDefinition
from .breaking.loader import BreakingChangeLoader
from .breaking.models import BreakingChange
from .catalog.loader import CatalogLoader
from .catalog.models import AdditionalDataCatalog, ApiCatalog
from .config import OfflineSettings
from .plugins import ReportPluginDiscovery, load_entry_point_writers
from .reporting import ReportWriterRegistry
from .resources import BinaryResourceResolver, EmbeddedResourceSource, LocalFileSource


@dataclass
class OfflineDataModule:
    """Build each offline service once and cache what it loads.

    Results are computed on first access and kept for the lifetime of the
    module instance.
    """

    settings: OfflineSettings = field(default_factory=OfflineSettings.from_env)
    framework: FrameworkDefinition = DEFAULT_FRAMEWORK
    embedded: EmbeddedResourceSource | None = None

    @cached_property
    def resolver(self) -> BinaryResourceResolver:
        """Return the resolver reading the application directory, then bundled data."""

        embedded = self.embedded or EmbeddedResourceSource(namespace=self.settings.resource_package)
        return BinaryResourceResolver(
            local=LocalFileSource(self.settings.application_directory),
            embedded=embedded,
        )

    @cached_property
    def catalog_loader(self) -> CatalogLoader:
        """Return the catalog loader configured from settings."""

        return CatalogLoader(
            self.resolver,
            catalog_filename=self.settings.catalog_filename,
            exceptions_filename=self.settings.exceptions_filename,
            use_emoji=self.settings.use_emoji,
            use_color=self.settings.use_color,
        )

    @cached_property
    def breaking_change_loader(self) -> BreakingChangeLoader:
        """Return the loader reading the local override directory or bundled records."""

        return BreakingChangeLoader(
            directory=self.settings.breaking_changes_directory,
            embedded=self.resolver.embedded,
            categories_filename=self.settings.categories_filename,
        )

    @cached_property
    def catalog(self) -> ApiCatalog:
        """Return the mandatory API catalog; failures propagate."""

        return self.catalog_loader.load_catalog()

    @cached_property
    def additional_data(self) -> AdditionalDataCatalog:
        """Return known exceptions; empty when the data file is absent."""

        return self.catalog_loader.load_additional_data()

    @cached_property
    def breaking_changes(self) -> tuple[BreakingChange, ...]:
        """Return breaking changes in enumeration order."""

        return tuple(self.breaking_change_loader.load_breaking_changes())

    @cached_property
    def dependency_filter(self) -> DotNetFrameworkFilter:
        return DotNetFrameworkFilter(self.framework)

    @cached_property
    def report_writers(self) -> ReportWriterRegistry:
        """Return the registry populated from entry points and plugin files."""

        registry = ReportWriterRegistry()
        load_entry_point_writers(registry)
        ReportPluginDiscovery(
            registry,
            prefix=self.settings.plugin_prefix,
            extension=self.settings.plugin_extension,
            companion_suffix=self.settings.companion_suffix,
        ).discover(self.settings.application_directory)
        return registry


__all__ = ["OfflineDataModule"]
