# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for catalog loading."""

from __future__ import annotations

from typing import Final

from .codec import decompress_to_object
from .loader import CatalogLoader
from .models import AdditionalDataCatalog, ApiCatalog, ApiDefinition, ApiException, TargetInfo

__all__: Final[tuple[str, ...]] = (
    "AdditionalDataCatalog",
    "ApiCatalog",
    "ApiDefinition",
    "ApiException",
    "CatalogLoader",
    "TargetInfo",
    "decompress_to_object",
)
