# topmark:header:start
#
#   project      : NTKit
#   file         : introspector.py
#   file_relpath : src/ntkit/binding/introspector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Introspection: arbitrary Python values to value tree nodes.

Values are classified in this order:

    1. ``None`` -> `NULL`; value tree nodes pass through unchanged.
    2. Text, booleans, numbers and enum members -> `TextNode`.
    3. Mappings -> `DictNode` (keys stringified, insertion order kept).
    4. Sequences and sets (not named tuples) -> `ListNode`.
    5. A custom converter registered for the exact runtime type: its ``dump``
       result is introspected again.
    6. Dates, times, durations, UUIDs and paths -> `TextNode`.
    7. Dataclasses and named tuples, member by member, honoring the type's
       rename / ignore / ignore-when-null rules.
    8. Other objects through ``vars()``, public attributes in insertion order.

Anything else raises `DumpError`. Self-referencing containers are rejected.
"""

from __future__ import annotations

import collections.abc
from typing import TYPE_CHECKING, Any

from ntkit.binding.primitives import basic_scalar_text, temporal_scalar_text
from ntkit.binding.registry import EMPTY_REGISTRY
from ntkit.binding.schema import schema_of
from ntkit.binding.shapes import is_namedtuple_class, is_struct_class
from ntkit.config.logging import get_logger
from ntkit.errors import DumpError
from ntkit.tree import NODE_TYPES, NULL, DictNode, ListNode, TextNode
from ntkit.utils.introspection import type_display_name

if TYPE_CHECKING:
    from ntkit.binding.registry import Converter, TypeRegistry
    from ntkit.binding.rules import TypeMappingRules
    from ntkit.binding.schema import Schema
    from ntkit.config.logging import NtkitLogger
    from ntkit.tree import Node

logger: NtkitLogger = get_logger(__name__)


def _is_sequence_like(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, memoryview)):
        return False
    if is_namedtuple_class(type(value)):
        return False
    return isinstance(value, (collections.abc.Sequence, collections.abc.Set))


class Introspector:
    """Turn Python values into value tree nodes.

    Args:
        registry (TypeRegistry | None): Type rules and custom converters.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: TypeRegistry | None = None) -> None:
        self._registry: TypeRegistry = registry if registry is not None else EMPTY_REGISTRY

    @property
    def registry(self) -> TypeRegistry:
        """The type registry consulted while introspecting."""
        return self._registry

    def introspect(self, value: Any) -> Node:
        """Build the value tree for ``value``.

        Args:
            value (Any): Any supported Python value.

        Returns:
            Node: The equivalent node.

        Raises:
            DumpError: If a value cannot be represented, a key collides after
                stringification, or a container contains itself.
        """
        logger.trace("introspect %s", type_display_name(type(value)))
        return self._introspect(value, set())

    def _introspect(self, value: Any, active: set[int]) -> Node:
        if value is None:
            return NULL
        if isinstance(value, NODE_TYPES):
            return value

        text: str | None = basic_scalar_text(value)
        if text is not None:
            return TextNode(text)

        if isinstance(value, collections.abc.Mapping):
            with _Guard(value, active):
                return self._mapping(value, active)
        if _is_sequence_like(value):
            with _Guard(value, active):
                return ListNode(tuple(self._introspect(item, active) for item in value))

        converter: Converter | None = self._registry.converter_for(type(value))
        if converter is not None and converter.dump is not None:
            with _Guard(value, active):
                return self._introspect(converter.dump(value), active)

        text = temporal_scalar_text(value)
        if text is not None:
            return TextNode(text)

        if is_struct_class(type(value)):
            with _Guard(value, active):
                return self._struct(value, active)
        if hasattr(value, "__dict__"):
            with _Guard(value, active):
                return self._plain_object(value, active)

        raise DumpError(
            f"cannot introspect a value of type {type_display_name(type(value))}",
            target=type_display_name(type(value)),
        )

    def _key_text(self, key: Any, owner: Any) -> str:
        if isinstance(key, str):
            return key
        text: str | None = basic_scalar_text(key)
        if text is None:
            text = temporal_scalar_text(key)
        if text is None:
            raise DumpError(
                f"cannot use a {type_display_name(type(key))} as a dictionary key",
                target=type_display_name(type(owner)),
            )
        return text

    def _mapping(self, value: collections.abc.Mapping[Any, Any], active: set[int]) -> DictNode:
        entries: dict[str, Node] = {}
        for key, item in value.items():
            text: str = self._key_text(key, value)
            if text in entries:
                raise DumpError(
                    f"duplicate key after conversion to text: {text!r}",
                    target=type_display_name(type(value)),
                )
            entries[text] = self._introspect(item, active)
        return DictNode(tuple(entries.items()))

    def _member_node(self, owner: Any, name: str, item: Any, active: set[int]) -> Node:
        try:
            return self._introspect(item, active)
        except DumpError as exc:
            target: str = type_display_name(type(owner))
            raise DumpError(
                f"{target}.{name}: {exc.message}", member=name, target=target
            ) from exc

    def _struct(self, value: Any, active: set[int]) -> DictNode:
        cls: type = type(value)
        schema: Schema = schema_of(cls)
        rules: TypeMappingRules = self._registry.rules_for(cls)
        entries: list[tuple[str, Node]] = []
        keys: dict[str, str] = {}
        for member in schema.members:
            if rules.is_ignored(member.name):
                continue
            item: Any = getattr(value, member.name)
            if rules.skips(member.name, item):
                continue
            exposed: str = _claim_key(keys, value, member.name, rules.exposed_name(member.name))
            entries.append((exposed, self._member_node(value, member.name, item, active)))
        return DictNode(tuple(entries))

    def _plain_object(self, value: Any, active: set[int]) -> DictNode:
        rules: TypeMappingRules = self._registry.rules_for(type(value))
        entries: list[tuple[str, Node]] = []
        keys: dict[str, str] = {}
        for name, item in vars(value).items():
            if name.startswith("_") or rules.skips(name, item):
                continue
            exposed: str = _claim_key(keys, value, name, rules.exposed_name(name))
            entries.append((exposed, self._member_node(value, name, item, active)))
        return DictNode(tuple(entries))


def _claim_key(keys: dict[str, str], owner: Any, member: str, exposed: str) -> str:
    """Record ``member`` as the only writer of ``exposed`` and return the key."""
    other: str = keys.setdefault(exposed, member)
    if other != member:
        target: str = type_display_name(type(owner))
        raise DumpError(
            f"{target}: members {other!r} and {member!r} both map to key {exposed!r}",
            member=member,
            target=target,
        )
    return exposed


class _Guard:
    """Context manager marking a container as being introspected."""

    __slots__ = ("_active", "_key", "_value")

    def __init__(self, value: Any, active: set[int]) -> None:
        self._value: Any = value
        self._active: set[int] = active
        self._key: int = id(value)

    def __enter__(self) -> None:
        if self._key in self._active:
            raise DumpError(
                f"cyclic reference in a {type_display_name(type(self._value))}",
                target=type_display_name(type(self._value)),
            )
        self._active.add(self._key)

    def __exit__(self, *exc_info: object) -> None:
        self._active.discard(self._key)
