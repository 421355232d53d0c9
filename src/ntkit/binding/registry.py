# topmark:header:start
#
#   project      : NTKit
#   file         : registry.py
#   file_relpath : src/ntkit/binding/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type mapping registry: per-type rules and custom converters.

The registry is the read-only view the binders consult:

    - `TypeRegistry.rules_for(tp)` returns the `TypeMappingRules` registered for
      a structured type, or `NO_RULES`.
    - `TypeRegistry.converter_for(tp)` returns the `Converter` registered for the
      exact type, or ``None``. Subclasses do not inherit a converter.

Both tables are frozen into ``MappingProxyType`` on construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable

from ntkit.binding.rules import NO_RULES, TypeMappingRules
from ntkit.config.logging import get_logger
from ntkit.utils.introspection import format_callable_pretty, type_display_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ntkit.binding.deserializer import BindingContext
    from ntkit.config.logging import NtkitLogger
    from ntkit.tree import Node

logger: NtkitLogger = get_logger(__name__)

LoadFn = Callable[["Node", "BindingContext"], Any]
DumpFn = Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class Converter:
    """A custom conversion pair for one exact type.

    Attributes:
        load (LoadFn | None): Builds a value from the raw tree node. The second
            argument is a `BindingContext` for converting nested nodes.
        dump (DumpFn | None): Turns a value into something the introspector
            understands (a string, a list, a dict, a node, another object...).
            The result is introspected again.
    """

    load: LoadFn | None = None
    dump: DumpFn | None = None

    def __post_init__(self) -> None:
        if self.load is None and self.dump is None:
            raise ValueError("a Converter needs a load or a dump function")

    def __repr__(self) -> str:
        parts: list[str] = []
        if self.load is not None:
            parts.append(f"load={format_callable_pretty(self.load)}")
        if self.dump is not None:
            parts.append(f"dump={format_callable_pretty(self.dump)}")
        return f"Converter({', '.join(parts)})"


class TypeRegistry:
    """Immutable lookup tables for type rules and converters.

    Args:
        type_rules (Mapping[type, TypeMappingRules] | None): Rules per structured type.
        converters (Mapping[type, Converter] | None): Converters per exact type.

    Raises:
        TypeError: If a key is not a class or a value has the wrong type.
    """

    __slots__ = ("_converters", "_rules")

    def __init__(
        self,
        type_rules: Mapping[type, TypeMappingRules] | None = None,
        converters: Mapping[type, Converter] | None = None,
    ) -> None:
        rules: dict[type, TypeMappingRules] = {}
        for tp, rule in (type_rules or {}).items():
            if not isinstance(tp, type):
                raise TypeError(f"type rules must be keyed by class, got {tp!r}")
            if not isinstance(rule, TypeMappingRules):
                raise TypeError(f"rules for {type_display_name(tp)} must be TypeMappingRules")
            rules[tp] = rule

        convs: dict[type, Converter] = {}
        for tp, conv in (converters or {}).items():
            if not isinstance(tp, type):
                raise TypeError(f"converters must be keyed by class, got {tp!r}")
            if not isinstance(conv, Converter):
                raise TypeError(f"converter for {type_display_name(tp)} must be a Converter")
            convs[tp] = conv

        self._rules: Mapping[type, TypeMappingRules] = MappingProxyType(rules)
        self._converters: Mapping[type, Converter] = MappingProxyType(convs)
        logger.debug(
            "type registry: %d rule set(s), %d converter(s)",
            len(self._rules),
            len(self._converters),
        )

    @property
    def type_rules(self) -> Mapping[type, TypeMappingRules]:
        """Read-only view of the registered rules."""
        return self._rules

    @property
    def converters(self) -> Mapping[type, Converter]:
        """Read-only view of the registered converters."""
        return self._converters

    def rules_for(self, tp: Any) -> TypeMappingRules:
        """Return the rules for ``tp``, or `NO_RULES`."""
        return self._rules.get(tp, NO_RULES)

    def converter_for(self, tp: Any) -> Converter | None:
        """Return the converter registered for exactly ``tp``, or ``None``."""
        return self._converters.get(tp)

    def __repr__(self) -> str:
        return (
            f"TypeRegistry(rules={[type_display_name(t) for t in self._rules]}, "
            f"converters={[type_display_name(t) for t in self._converters]})"
        )


EMPTY_REGISTRY = TypeRegistry()
