# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Classify assembly references as platform framework or third-party code."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar, Final, Protocol


@dataclass(frozen=True, slots=True)
class PublicKeyToken:
    """Eight-byte identity derived from a strong-name signing key.

    Unsigned assemblies carry the empty token.
    """

    SIZE: ClassVar[int] = 8

    value: bytes = b""

    def __post_init__(self) -> None:
        if len(self.value) not in (0, self.SIZE):
            raise ValueError(f"public key token must be {self.SIZE} bytes, got {len(self.value)}")

    @classmethod
    def from_hex(cls, text: str) -> PublicKeyToken:
        """Parse a hex token such as ``b77a5c561934e089``.

        Raises:
            ValueError: If ``text`` is not hex or has the wrong length.
        """

        cleaned = text.strip()
        if cleaned.lower() in ("", "null"):
            return cls()
        return cls(bytes.fromhex(cleaned))

    @property
    def is_empty(self) -> bool:
        """Return ``True`` for the token of an unsigned assembly."""

        return not self.value

    def __str__(self) -> str:
        return self.value.hex() if self.value else "null"


def _tokens(values: Iterable[str]) -> frozenset[PublicKeyToken]:
    return frozenset(PublicKeyToken.from_hex(value) for value in values)


# Keys used to sign reference assemblies shipped by the platform vendor.
MICROSOFT_KEYS: Final[frozenset[PublicKeyToken]] = _tokens(
    (
        "b77a5c561934e089",
        "b03f5f7f11d50a3a",
        "31bf3856ad364e35",
        "7cec85d7bea7798e",
        "cc7b13ffcd2ddd51",
        "adb9793829ddae60",
        "89845dcd8080cc91",
        "71e9bce111e9429c",
        "24eec0d8c86cda1e",
    ),
)

FRAMEWORK_NAME_PREFIXES: Final[tuple[str, ...]] = (
    "System.",
    "Microsoft.AspNet.",
    "Microsoft.AspNetCore.",
    "Microsoft.CSharp.",
    "Microsoft.EntityFrameworkCore.",
    "Microsoft.Win32.",
    "Microsoft.VisualBasic.",
    "Windows.",
)

LEGACY_RUNTIME_NAME: Final[str] = "mscorlib"


@dataclass(frozen=True, slots=True)
class FrameworkDefinition:
    """Immutable description of what counts as the platform framework."""

    keys: frozenset[PublicKeyToken] = MICROSOFT_KEYS
    legacy_runtime_name: str = LEGACY_RUNTIME_NAME
    name_prefixes: tuple[str, ...] = FRAMEWORK_NAME_PREFIXES
    _folded_prefixes: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_folded_prefixes", tuple(prefix.casefold() for prefix in self.name_prefixes))

    def is_known_key(self, token: PublicKeyToken | None) -> bool:
        """Return ``True`` when ``token`` signs platform assemblies."""

        return token is not None and token in self.keys

    def is_known_name(self, name: str | None) -> bool:
        """Return ``True`` for framework assembly names, ignoring case.

        Args:
            name: Simple assembly name. ``None`` counts as framework so that
                unidentified references stay out of the report.

        Returns:
            bool: ``True`` for the legacy runtime name or a name starting
            with one of the framework prefixes.
        """

        if name is None:
            return True
        folded = name.casefold()
        if folded == self.legacy_runtime_name.casefold():
            return True
        return folded.startswith(self._folded_prefixes)


DEFAULT_FRAMEWORK: Final[FrameworkDefinition] = FrameworkDefinition()


def is_framework_assembly(
    name: str | None,
    public_key_token: PublicKeyToken | None,
    definition: FrameworkDefinition = DEFAULT_FRAMEWORK,
) -> bool:
    """Return ``True`` when the assembly belongs to the platform framework.

    Args:
        name: Simple assembly name, or ``None`` when unavailable.
        public_key_token: Token of the assembly's signing key, if any.
        definition: Platform keys and names to classify against.

    Returns:
        bool: ``True`` for a known signing key, a missing name, the legacy
        runtime library, or a name under a framework namespace prefix.
    """

    return definition.is_known_key(public_key_token) or definition.is_known_name(name)


class DependencyFilter(Protocol):
    """Decide which referenced members are excluded from portability reports."""

    def is_framework_member(self, name: str | None, public_key_token: PublicKeyToken | None) -> bool: ...

    def is_framework_assembly(self, name: str | None, public_key_token: PublicKeyToken | None) -> bool: ...


@dataclass(frozen=True, slots=True)
class DotNetFrameworkFilter:
    """Dependency filter treating platform-published assemblies as framework."""

    definition: FrameworkDefinition = DEFAULT_FRAMEWORK

    def is_framework_member(self, name: str | None, public_key_token: PublicKeyToken | None) -> bool:
        return self.is_framework_assembly(name, public_key_token)

    def is_framework_assembly(self, name: str | None, public_key_token: PublicKeyToken | None) -> bool:
        return is_framework_assembly(name, public_key_token, self.definition)


__all__ = [
    "DEFAULT_FRAMEWORK",
    "FRAMEWORK_NAME_PREFIXES",
    "LEGACY_RUNTIME_NAME",
    "MICROSOFT_KEYS",
    "DependencyFilter",
    "DotNetFrameworkFilter",
    "FrameworkDefinition",
    "PublicKeyToken",
    "is_framework_assembly",
]
