# topmark:header:start
#
#   project      : NTKit
#   file         : deserializer.py
#   file_relpath : src/ntkit/binding/deserializer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Deserialization engine: value tree nodes to typed Python values.

`Deserializer.convert(node, hint)` binds a node to the shape described by a type
hint. Rules are applied in this order:

1. ``NULL`` yields ``None`` whatever the target.
2. A custom converter registered for the exact target class wins.
3. Empty text yields an empty container for sequence and mapping targets,
   ``""`` for ``str`` and ``None`` for anything else.
4. Non-empty text goes through the primitive text converter of the target.
5. A dictionary binds to a mapping shape (key and value shapes required) or,
   member by member, to a dataclass / named tuple. Absent members fall back to
   their default, or ``None``.
6. A list binds to a sequence shape with a known element shape.

``Any``/``object`` targets return plain Python values; value tree node targets
return the node unchanged.

Failures raise `BindingError`. Errors from structured members are re-raised with
the member name and target type, chained to the original cause.
"""

from __future__ import annotations

import collections
import collections.abc
from typing import TYPE_CHECKING, Any

from ntkit.binding.primitives import find_text_converter
from ntkit.binding.registry import EMPTY_REGISTRY
from ntkit.binding.schema import schema_of
from ntkit.binding.shapes import Shape, ShapeKind
from ntkit.config.logging import get_logger
from ntkit.errors import BindingError, NestedTextError
from ntkit.tree import DictNode, ListNode, NullNode, TextNode, to_python
from ntkit.utils.introspection import format_callable_pretty

if TYPE_CHECKING:
    from ntkit.binding.registry import Converter, TypeRegistry
    from ntkit.binding.rules import TypeMappingRules
    from ntkit.binding.schema import Schema
    from ntkit.config.logging import NtkitLogger
    from ntkit.tree import Node

logger: NtkitLogger = get_logger(__name__)

# Exceptions raised by user code and constructors that are reported as binding errors
_CONVERSION_ERRORS: tuple[type[BaseException], ...] = (
    ValueError,
    TypeError,
    LookupError,
    ArithmeticError,
)

# Concrete container built for each supported sequence origin
_SEQUENCE_FACTORIES: dict[Any, Any] = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Collection: list,
    collections.abc.Iterable: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}

_MAPPING_FACTORIES: dict[Any, Any] = {
    dict: dict,
    collections.OrderedDict: collections.OrderedDict,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
}


def _node_kind(node: Node) -> str:
    if isinstance(node, DictNode):
        return "a dictionary"
    if isinstance(node, ListNode):
        return "a list"
    return "text"


class BindingContext:
    """Recursion handle given to custom ``load`` functions.

    Args:
        deserializer (Deserializer): The engine performing the current conversion.
    """

    __slots__ = ("_deserializer",)

    def __init__(self, deserializer: Deserializer) -> None:
        self._deserializer: Deserializer = deserializer

    @property
    def registry(self) -> TypeRegistry:
        """Registry of the running engine."""
        return self._deserializer.registry

    def convert(self, node: Node, hint: Any) -> Any:
        """Convert a nested node with the running engine's rules."""
        return self._deserializer.convert(node, hint)


class Deserializer:
    """Bind value tree nodes to typed values.

    Instances hold only the immutable registry and may be shared between threads.

    Args:
        registry (TypeRegistry | None): Type rules and custom converters.
    """

    __slots__ = ("_context", "_registry")

    def __init__(self, registry: TypeRegistry | None = None) -> None:
        self._registry: TypeRegistry = registry if registry is not None else EMPTY_REGISTRY
        self._context: BindingContext = BindingContext(self)

    @property
    def registry(self) -> TypeRegistry:
        """The type registry consulted while binding."""
        return self._registry

    def convert(self, node: Node, hint: Any) -> Any:
        """Convert ``node`` into a value of the type described by ``hint``.

        Args:
            node (Node): Source node.
            hint (Any): Target type hint (a class, ``list[int]``, ``Optional[User]``,
                a `Shape`...).

        Returns:
            Any: The bound value, or ``None`` for ``NULL`` / absent values.

        Raises:
            BindingError: If the node cannot be bound to the target.
        """
        shape: Shape = Shape.of(hint)
        logger.trace("convert %s -> %s", _node_kind(node), shape.name)
        return self._convert(node, shape)

    # -- dispatch -----------------------------------------------------------

    def _convert(self, node: Node, shape: Shape) -> Any:
        if isinstance(node, NullNode):
            return None

        converter: Converter | None = self._registry.converter_for(shape.origin)
        if converter is not None and converter.load is not None:
            return self._run_converter(converter, node, shape)

        if shape.kind is ShapeKind.ANY:
            return to_python(node)
        if shape.kind is ShapeKind.NODE:
            return self._as_node(node, shape)

        if isinstance(node, TextNode):
            return self._from_text(node.text, shape)
        if isinstance(node, DictNode):
            return self._from_dict(node, shape)
        if isinstance(node, ListNode):
            return self._from_list(node, shape)
        raise BindingError(f"unsupported node type: {type(node).__name__}", target=shape.name)

    def _run_converter(self, converter: Converter, node: Node, shape: Shape) -> Any:
        load = converter.load
        assert load is not None
        try:
            return load(node, self._context)
        except NestedTextError:
            raise
        except _CONVERSION_ERRORS as exc:
            raise BindingError(
                f"custom converter {format_callable_pretty(load)} failed for {shape.name}: {exc}",
                target=shape.name,
            ) from exc

    def _as_node(self, node: Node, shape: Shape) -> Node:
        if isinstance(shape.origin, type) and not isinstance(node, shape.origin):
            raise BindingError(
                f"expected {shape.name}, got {_node_kind(node)}", target=shape.name
            )
        return node

    # -- text -----------------------------------------------------------------

    def _from_text(self, text: str, shape: Shape) -> Any:
        if shape.kind is ShapeKind.UNSUPPORTED:
            raise BindingError(f"unsupported collection type: {shape.name}", target=shape.name)

        if text == "":
            # An empty value cannot be told apart from an empty container
            if shape.kind is ShapeKind.SEQUENCE:
                return _SEQUENCE_FACTORIES[shape.origin]()
            if shape.kind is ShapeKind.MAPPING:
                return _MAPPING_FACTORIES[shape.origin]()
            if shape.origin is str:
                return ""
            return None

        if shape.kind is not ShapeKind.SCALAR:
            raise BindingError(f"expected {shape.name}, got text", target=shape.name)

        parse = find_text_converter(shape.origin)
        if parse is None:
            raise BindingError(f"no conversion from text to {shape.name}", target=shape.name)
        try:
            return parse(text)
        except _CONVERSION_ERRORS as exc:
            raise BindingError(
                f"cannot convert {text!r} to {shape.name}: {exc}", target=shape.name
            ) from exc

    # -- dictionaries ---------------------------------------------------------

    def _from_dict(self, node: DictNode, shape: Shape) -> Any:
        if shape.kind is ShapeKind.MAPPING:
            return self._to_mapping(node, shape)
        if shape.kind is ShapeKind.STRUCT:
            return self._to_struct(node, shape)
        if shape.kind is ShapeKind.UNSUPPORTED:
            raise BindingError(f"unsupported collection type: {shape.name}", target=shape.name)
        raise BindingError(f"expected {shape.name}, got a dictionary", target=shape.name)

    def _to_mapping(self, node: DictNode, shape: Shape) -> Any:
        if len(shape.args) != 2:
            raise BindingError(
                f"missing generic argument information for {shape.name}: "
                "key and value types are required",
                target=shape.name,
            )
        key_shape, value_shape = shape.args
        result: Any = _MAPPING_FACTORIES[shape.origin]()
        for key, value in node.entries:
            bound_key: Any = self._convert(TextNode(key), key_shape)
            try:
                hash(bound_key)
            except TypeError as exc:
                raise BindingError(
                    f"keys of {shape.name} must be hashable, got {type(bound_key).__name__}"
                    f" for {key!r}",
                    target=shape.name,
                ) from exc
            if bound_key in result:
                raise BindingError(
                    f"keys of {shape.name} collide after conversion: {key!r}", target=shape.name
                )
            try:
                result[bound_key] = self._convert(value, value_shape)
            except BindingError as exc:
                raise BindingError(
                    f"{shape.name}[{key!r}]: {exc.message}", member=exc.member, target=exc.target
                ) from exc
        return result

    def _to_struct(self, node: DictNode, shape: Shape) -> Any:
        schema: Schema = schema_of(shape.origin)
        rules: TypeMappingRules = self._registry.rules_for(shape.origin)
        typevars: dict[Any, Shape] = shape.typevar_bindings()

        values: dict[str, Any] = {}
        used: set[str] = set()
        for member in schema.members:
            exposed: str = rules.exposed_name(member.name)
            owner: str = rules.member_name(exposed)
            if owner != member.name and schema.member(owner) is not None:
                raise BindingError(
                    f"{shape.name}: members {owner!r} and {member.name!r}"
                    f" both read key {exposed!r}",
                    member=member.name,
                    target=shape.name,
                )
            if exposed not in node:
                if member.init:
                    values[member.name] = member.missing_value()
                continue
            used.add(exposed)
            try:
                values[member.name] = self._convert(node[exposed], Shape.of(member.hint, typevars))
            except BindingError as exc:
                raise BindingError(
                    f"{shape.name}.{member.name}: {exc.message}",
                    member=member.name,
                    target=shape.name,
                ) from exc

        unknown: list[str] = [k for k in node.keys() if k not in used]
        if unknown:
            logger.debug("%s: ignoring unknown key(s) %s", shape.name, ", ".join(unknown))

        try:
            return schema.build(values)
        except _CONVERSION_ERRORS as exc:
            raise BindingError(
                f"cannot construct {shape.name}: {exc}", target=shape.name
            ) from exc

    # -- lists ----------------------------------------------------------------

    def _from_list(self, node: ListNode, shape: Shape) -> Any:
        if shape.kind is ShapeKind.UNSUPPORTED:
            raise BindingError(f"unsupported collection type: {shape.name}", target=shape.name)
        if shape.kind is not ShapeKind.SEQUENCE:
            raise BindingError(f"expected {shape.name}, got a list", target=shape.name)
        if not shape.args:
            raise BindingError(
                f"missing generic argument information for {shape.name}: "
                "the element type is required",
                target=shape.name,
            )

        fixed: bool = shape.origin is tuple and not shape.variadic
        if fixed and len(shape.args) != len(node.items):
            raise BindingError(
                f"expected {len(shape.args)} item(s) for {shape.name}, got {len(node.items)}",
                target=shape.name,
            )

        items: list[Any] = []
        for index, item in enumerate(node.items):
            element: Shape = shape.args[index] if fixed else shape.args[0]
            try:
                items.append(self._convert(item, element))
            except BindingError as exc:
                raise BindingError(
                    f"{shape.name}[{index}]: {exc.message}", member=exc.member, target=exc.target
                ) from exc

        try:
            return _SEQUENCE_FACTORIES[shape.origin](items)
        except TypeError as exc:
            # e.g. unhashable elements for a set target
            raise BindingError(f"cannot construct {shape.name}: {exc}", target=shape.name) from exc
