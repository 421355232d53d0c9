# topmark:header:start
#
#   project      : NTKit
#   file         : shapes.py
#   file_relpath : src/ntkit/binding/shapes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shape descriptors: reified binding targets built from type hints.

A `Shape` is a target type plus the shapes of its generic arguments. Because
Python keeps subscripted hints at runtime (``list[User]``, ``dict[int, float]``),
callers pass the hint itself and the element/key/value information is always at
hand; nothing is recovered from superclasses.

Normalization performed by `Shape.of`:
    - ``Optional[X]`` / ``X | None`` becomes ``X`` with ``optional=True``.
    - ``Annotated[X, ...]`` becomes ``X``.
    - Type variables are replaced by the shapes bound in ``typevars`` (or ``Any``).
    - Unions of several non-None types are rejected, except unions of value tree
      node types (``ntkit.tree.Node``).
"""

from __future__ import annotations

import collections
import collections.abc
import dataclasses
import types
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any, TypeVar, Union, get_args, get_origin

from ntkit.errors import BindingError
from ntkit.tree import NODE_TYPES
from ntkit.utils.introspection import type_display_name

if TYPE_CHECKING:
    from collections.abc import Mapping


class ShapeKind(Enum):
    """How a target is bound."""

    ANY = "any"
    NODE = "node"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STRUCT = "struct"
    UNSUPPORTED = "unsupported"


SEQUENCE_ORIGINS: tuple[type, ...] = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Collection,
    collections.abc.Iterable,
    collections.abc.Set,
    collections.abc.MutableSet,
)

MAPPING_ORIGINS: tuple[type, ...] = (
    dict,
    collections.OrderedDict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)

# Text-like builtins that happen to be collections
_NOT_COLLECTIONS: tuple[type, ...] = (str, bytes, bytearray, memoryview)


def is_namedtuple_class(tp: Any) -> bool:
    """Return True for classes created with ``typing.NamedTuple`` or ``namedtuple``."""
    return isinstance(tp, type) and issubclass(tp, tuple) and hasattr(tp, "_fields")


def is_struct_class(tp: Any) -> bool:
    """Return True for classes bound member by member (dataclasses and named tuples)."""
    return isinstance(tp, type) and (dataclasses.is_dataclass(tp) or is_namedtuple_class(tp))


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def _classify(origin: Any) -> ShapeKind:
    if origin is Any or origin is object:
        return ShapeKind.ANY
    if origin in NODE_TYPES:
        return ShapeKind.NODE
    if is_struct_class(origin):
        return ShapeKind.STRUCT
    if origin in MAPPING_ORIGINS:
        return ShapeKind.MAPPING
    if origin in SEQUENCE_ORIGINS:
        return ShapeKind.SEQUENCE
    if (
        isinstance(origin, type)
        and issubclass(origin, collections.abc.Collection)
        and not issubclass(origin, _NOT_COLLECTIONS)
    ):
        return ShapeKind.UNSUPPORTED
    return ShapeKind.SCALAR


@dataclass(frozen=True, slots=True)
class Shape:
    """A normalized binding target.

    Attributes:
        hint (Any): The hint the shape was built from (after normalization).
        kind (ShapeKind): Binding strategy.
        origin (Any): Runtime class (``list`` for ``list[int]``), or ``Any``.
        args (tuple[Shape, ...]): Shapes of the generic arguments, possibly empty.
        variadic (bool): True for homogeneous tuples (``tuple[int, ...]``).
        optional (bool): True when the hint allowed ``None``.
    """

    hint: Any
    kind: ShapeKind
    origin: Any
    args: tuple[Shape, ...] = ()
    variadic: bool = False
    optional: bool = False

    @classmethod
    def of(cls, hint: Any, typevars: Mapping[Any, Shape] | None = None) -> Shape:
        """Build the shape of a type hint.

        Args:
            hint (Any): A class or a (possibly parameterized) type hint.
            typevars (Mapping[Any, Shape] | None): Bindings for type variables
                of an enclosing generic class.

        Returns:
            Shape: The normalized shape.

        Raises:
            BindingError: For unions of several non-None types.
        """
        if isinstance(hint, Shape):
            return hint
        if isinstance(hint, TypeVar):
            bound: Shape | None = (typevars or {}).get(hint)
            return bound if bound is not None else ANY_SHAPE
        if hint is None or hint is type(None):
            return ANY_SHAPE

        origin: Any = get_origin(hint)
        if origin is Annotated:
            return cls.of(get_args(hint)[0], typevars)

        if _is_union(origin):
            members: tuple[Any, ...] = get_args(hint)
            non_none: list[Any] = [m for m in members if m is not type(None)]
            optional: bool = len(non_none) != len(members)
            if len(non_none) == 1:
                inner: Shape = cls.of(non_none[0], typevars)
                return dataclasses.replace(inner, optional=inner.optional or optional)
            if all(m in NODE_TYPES for m in non_none):
                return cls(hint=hint, kind=ShapeKind.NODE, origin=Any, optional=optional)
            raise BindingError(
                f"unsupported union target: {type_display_name(hint)}",
                target=type_display_name(hint),
            )

        if origin is None:
            return cls(hint=hint, kind=_classify(hint), origin=hint)

        raw_args: tuple[Any, ...] = get_args(hint)
        variadic: bool = origin is tuple and len(raw_args) == 2 and raw_args[1] is Ellipsis
        if variadic:
            raw_args = raw_args[:1]
        args: tuple[Shape, ...] = tuple(cls.of(a, typevars) for a in raw_args)
        return cls(
            hint=hint,
            kind=_classify(origin),
            origin=origin,
            args=args,
            variadic=variadic,
        )

    @property
    def name(self) -> str:
        """Display name used in messages."""
        return type_display_name(self.hint)

    def typevar_bindings(self) -> dict[Any, Shape]:
        """Map the origin's type parameters to this shape's arguments.

        For ``Box[int]`` where ``Box`` is ``Generic[T]``, returns ``{T: Shape(int)}``.
        """
        params: tuple[Any, ...] = getattr(self.origin, "__parameters__", ())
        return dict(zip(params, self.args))


ANY_SHAPE = Shape(hint=Any, kind=ShapeKind.ANY, origin=Any)
