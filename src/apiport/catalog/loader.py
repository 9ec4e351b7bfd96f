# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load the API catalog and its optional additional data."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from ..errors import ResourceNotFoundError
from ..logging import info
from ..resources import BinaryResourceResolver
from .codec import decompress_to_object
from .models import AdditionalDataCatalog, ApiCatalog, ApiExceptionStorage

LOGGER = logging.getLogger(__name__)

CATALOG_FILENAME: Final[str] = "catalog.bin"
EXCEPTIONS_FILENAME: Final[str] = "exceptions.bin"


@dataclass(frozen=True, slots=True)
class CatalogLoader:
    """Decode catalog data served by a :class:`BinaryResourceResolver`."""

    resolver: BinaryResourceResolver
    catalog_filename: str = CATALOG_FILENAME
    exceptions_filename: str = EXCEPTIONS_FILENAME
    use_emoji: bool = False
    use_color: bool | None = None

    def load_catalog(self) -> ApiCatalog:
        """Return the mandatory API catalog.

        Raises:
            ResourceNotFoundError: If the catalog cannot be resolved.
            DataFormatError: If the catalog cannot be decoded.
        """

        with self.resolver.open(self.catalog_filename) as stream:
            catalog = decompress_to_object(stream, ApiCatalog, logical_name=self.catalog_filename)
        LOGGER.debug("Loaded %d catalog APIs from %s", len(catalog), self.catalog_filename)
        return catalog

    def load_additional_data(self) -> AdditionalDataCatalog:
        """Return known API exceptions, or an empty catalog when absent.

        Absence is probed before opening so that it is reported as a notice
        rather than an error. A not-found failure while opening takes the
        same path; decoding failures propagate.
        """

        name = self.exceptions_filename
        if not self.resolver.has_file(name) and not self.resolver.has_resource(name):
            self._report_missing()
            return AdditionalDataCatalog()

        try:
            with self.resolver.open(name) as stream:
                storage = decompress_to_object(stream, tuple[ApiExceptionStorage, ...], logical_name=name)
        except ResourceNotFoundError:
            self._report_missing()
            return AdditionalDataCatalog()
        return AdditionalDataCatalog.from_storage(storage)

    def _report_missing(self) -> None:
        """Print the notice shown when the exceptions file is unavailable."""

        info(
            f"Unable to find {self.exceptions_filename} so exceptions will not be included in report.",
            use_emoji=self.use_emoji,
            use_color=self.use_color,
        )


__all__ = ["CATALOG_FILENAME", "EXCEPTIONS_FILENAME", "CatalogLoader"]
