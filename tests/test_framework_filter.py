# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for classifying assemblies as framework or third-party."""

from __future__ import annotations

import pytest

from apiport.analysis import (
    DotNetFrameworkFilter,
    FrameworkDefinition,
    PublicKeyToken,
    is_framework_assembly,
)

MICROSOFT = PublicKeyToken.from_hex("b03f5f7f11d50a3a")
NEWTONSOFT = PublicKeyToken.from_hex("30ad4fe6b2a6aeed")


@pytest.mark.parametrize("token", [None, PublicKeyToken(), MICROSOFT, NEWTONSOFT])
def test_missing_name_defaults_to_framework(token: PublicKeyToken | None) -> None:
    assert is_framework_assembly(None, token)


def test_known_signing_key_is_framework_regardless_of_name() -> None:
    assert is_framework_assembly("Contoso.Widgets", MICROSOFT)


@pytest.mark.parametrize(
    "name",
    [
        "System.Collections",
        "system.runtime",
        "Microsoft.AspNetCore.Mvc",
        "Microsoft.EntityFrameworkCore.SqlServer",
        "Microsoft.Win32.Registry",
        "Windows.Foundation",
        "mscorlib",
        "MSCORLIB",
    ],
)
def test_framework_names(name: str) -> None:
    assert is_framework_assembly(name, NEWTONSOFT)


@pytest.mark.parametrize("name", ["Newtonsoft.Json", "System", "mscorlib.extensions", "Microsoft.Extensions.Logging"])
def test_third_party_names(name: str) -> None:
    assert not is_framework_assembly(name, NEWTONSOFT)


def test_definition_can_be_replaced() -> None:
    definition = FrameworkDefinition(
        keys=frozenset({NEWTONSOFT}),
        legacy_runtime_name="corlib",
        name_prefixes=("Contoso.",),
    )
    dependency_filter = DotNetFrameworkFilter(definition)

    assert dependency_filter.is_framework_assembly("Newtonsoft.Json", NEWTONSOFT)
    assert dependency_filter.is_framework_member("contoso.core", None)
    assert dependency_filter.is_framework_assembly("CORLIB", None)
    assert not dependency_filter.is_framework_assembly("System.Collections", MICROSOFT)


def test_public_key_token_parsing() -> None:
    assert str(MICROSOFT) == "b03f5f7f11d50a3a"
    assert PublicKeyToken.from_hex("null").is_empty
    assert PublicKeyToken.from_hex("B03F5F7F11D50A3A") == MICROSOFT
    with pytest.raises(ValueError):
        PublicKeyToken.from_hex("abcd")
    with pytest.raises(ValueError):
        PublicKeyToken.from_hex("not-hex!")
