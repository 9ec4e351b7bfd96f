# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decode gzip-compressed JSON data files into typed models."""

from __future__ import annotations

import gzip
import zlib
from typing import BinaryIO, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..errors import DataFormatError

_T = TypeVar("_T")


def decompress_to_object(stream: BinaryIO, target: type[_T], *, logical_name: str | None = None) -> _T:
    """Decompress ``stream`` and validate its JSON payload as ``target``.

    Args:
        stream: Binary stream positioned at the start of a gzip member.
        target: Type the JSON document is validated against.
        logical_name: Optional data file name used in error messages.

    Returns:
        _T: Validated object.

    Raises:
        DataFormatError: If the stream is not gzip data or the payload does not
            match ``target``.
    """

    try:
        with gzip.GzipFile(fileobj=stream, mode="rb") as archive:
            payload = archive.read()
    except (OSError, EOFError, zlib.error) as exc:
        raise DataFormatError(logical_name, f"not a gzip stream ({exc})") from exc
    try:
        return TypeAdapter(target).validate_json(payload)
    except ValidationError as exc:
        raise DataFormatError(logical_name, f"invalid payload ({exc.error_count()} errors)") from exc


__all__ = ["decompress_to_object"]
