# topmark:header:start
#
#   project      : NTKit
#   file         : rules.py
#   file_relpath : src/ntkit/binding/rules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-type member mapping rules.

A `TypeMappingRules` value describes how the members of one structured type map
to dictionary keys:

    - ``rename``: own member name -> exposed key. Used in both directions.
    - ``ignore``: members never written when dumping.
    - ``ignore_when_null``: members not written when their value is ``None``.

Rules are immutable: collections are frozen on construction, so a configured
instance can be shared across threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def _freeze_rename(value: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(value or {}))


def _freeze_names(value: Iterable[str] | None) -> frozenset[str]:
    if isinstance(value, str):
        # A bare string would otherwise be split into characters
        return frozenset((value,))
    return frozenset(value or ())


@dataclass(frozen=True, slots=True)
class TypeMappingRules:
    """Immutable rename/ignore rules for one structured type.

    Attributes:
        rename (Mapping[str, str]): Own member name -> exposed dictionary key.
        ignore (frozenset[str]): Own member names never dumped.
        ignore_when_null (frozenset[str]): Own member names not dumped when ``None``.

    Raises:
        ValueError: If two members are renamed to the same key.
    """

    rename: Mapping[str, str] = field(default_factory=dict)
    ignore: frozenset[str] = field(default_factory=frozenset)
    ignore_when_null: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        rename: Mapping[str, str] = _freeze_rename(self.rename)
        exposed: list[str] = list(rename.values())
        if len(set(exposed)) != len(exposed):
            raise ValueError(f"rename rules map several members to the same key: {dict(rename)}")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "rename", rename)
        object.__setattr__(self, "ignore", _freeze_names(self.ignore))
        object.__setattr__(self, "ignore_when_null", _freeze_names(self.ignore_when_null))

    def exposed_name(self, member: str) -> str:
        """Return the dictionary key for a member (its own name unless renamed)."""
        return self.rename.get(member, member)

    def member_name(self, exposed: str) -> str:
        """Return the member name for a dictionary key (the reverse of `exposed_name`)."""
        for own, key in self.rename.items():
            if key == exposed:
                return own
        return exposed

    def is_ignored(self, member: str) -> bool:
        """Return True if the member is never dumped."""
        return member in self.ignore

    def skips(self, member: str, value: Any) -> bool:
        """Return True if the member must be left out of a dump for this value."""
        return member in self.ignore or (value is None and member in self.ignore_when_null)


NO_RULES = TypeMappingRules()
