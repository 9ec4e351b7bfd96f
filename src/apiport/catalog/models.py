# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Catalog models decoded from the offline data files."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator
from pydantic.alias_generators import to_pascal

_CATALOG_CONFIG = ConfigDict(frozen=True, alias_generator=to_pascal, populate_by_name=True, extra="ignore")


class TargetInfo(BaseModel):
    """Platform name and version pair, e.g. ``.NET Core`` ``3.1``."""

    model_config = _CATALOG_CONFIG

    name: str
    version: str
    is_released: bool = True

    def __str__(self) -> str:
        return f"{self.name},Version=v{self.version}"


class ApiDefinition(BaseModel):
    """Single API entry keyed by its documentation identifier."""

    model_config = _CATALOG_CONFIG

    doc_id: str
    name: str = ""
    type: str = ""
    parent: str | None = None
    targets: tuple[TargetInfo, ...] = Field(default_factory=tuple)


class ApiCatalog(BaseModel):
    """Versioned dataset of platform APIs and the targets supporting them."""

    model_config = _CATALOG_CONFIG

    last_modified: datetime | None = None
    built_by: str | None = None
    supported_targets: tuple[TargetInfo, ...] = Field(default_factory=tuple)
    apis: tuple[ApiDefinition, ...] = Field(default_factory=tuple)
    _by_doc_id: Mapping[str, ApiDefinition] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _index_apis(self) -> ApiCatalog:
        """Index APIs by doc id; the first definition of a duplicate wins."""
        index: dict[str, ApiDefinition] = {}
        for api in self.apis:
            index.setdefault(api.doc_id, api)
        self._by_doc_id = index
        return self

    def __len__(self) -> int:
        return len(self.apis)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._by_doc_id

    def get_api(self, doc_id: str) -> ApiDefinition | None:
        """Return the API registered under ``doc_id`` if present."""

        return self._by_doc_id.get(doc_id)

    def targets_for(self, doc_id: str) -> tuple[TargetInfo, ...]:
        """Return the targets supporting ``doc_id``; empty when unknown."""

        api = self._by_doc_id.get(doc_id)
        return api.targets if api is not None else ()


class ApiExceptionEntry(BaseModel):
    """Known exception note attached to one API on one platform."""

    model_config = _CATALOG_CONFIG

    exception: str
    platform: str | None = None
    version: str | None = None
    rid: str | None = Field(default=None, alias="RID")


class ApiExceptionStorage(BaseModel):
    """Serialized grouping of exception notes for one API."""

    model_config = _CATALOG_CONFIG

    doc_id: str
    exceptions: tuple[ApiExceptionEntry, ...] = Field(default_factory=tuple)


class ApiException(BaseModel):
    """Flattened exception record: API identifier plus its known exception."""

    model_config = ConfigDict(frozen=True)

    doc_id: str
    exception: str
    platform: str | None = None
    version: str | None = None
    rid: str | None = None


class AdditionalDataCatalog(BaseModel):
    """Optional data supplementing the catalog; empty when unavailable."""

    model_config = ConfigDict(frozen=True)

    exceptions: tuple[ApiException, ...] = Field(default_factory=tuple)

    @classmethod
    def from_storage(cls, storage: tuple[ApiExceptionStorage, ...] | list[ApiExceptionStorage]) -> AdditionalDataCatalog:
        """Flatten serialized per-API groupings into exception records."""

        return cls(
            exceptions=tuple(
                ApiException(
                    doc_id=group.doc_id,
                    exception=entry.exception,
                    platform=entry.platform,
                    version=entry.version,
                    rid=entry.rid,
                )
                for group in storage
                for entry in group.exceptions
            ),
        )

    def exceptions_for(self, doc_id: str) -> tuple[ApiException, ...]:
        """Return the exception records known for ``doc_id``."""

        return tuple(item for item in self.exceptions if item.doc_id == doc_id)


__all__ = [
    "AdditionalDataCatalog",
    "ApiCatalog",
    "ApiDefinition",
    "ApiException",
    "ApiExceptionEntry",
    "ApiExceptionStorage",
    "TargetInfo",
]
