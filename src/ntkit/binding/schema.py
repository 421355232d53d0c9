# topmark:header:start
#
#   project      : NTKit
#   file         : schema.py
#   file_relpath : src/ntkit/binding/schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Member descriptors for structured types.

A `Schema` lists the members of a dataclass or named tuple in declaration order,
with their resolved type hints and defaults. It is computed once per class and
cached; the binders never walk ``__dict__`` or ``__annotations__`` directly.

Type hints are resolved with ``typing.get_type_hints``, so classes using
``from __future__ import annotations`` must be importable at module level for
their annotations to resolve.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any, get_type_hints

from ntkit.binding.shapes import is_namedtuple_class
from ntkit.config.logging import get_logger
from ntkit.errors import BindingError
from ntkit.utils.introspection import type_display_name

if TYPE_CHECKING:
    from collections.abc import Callable

    from ntkit.config.logging import NtkitLogger

logger: NtkitLogger = get_logger(__name__)


class _Missing:
    """Sentinel for members without a default."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True, slots=True)
class Member:
    """One declared member of a structured type.

    Attributes:
        name (str): Attribute name.
        hint (Any): Resolved type hint.
        default (Any): Declared default, or `MISSING`.
        default_factory (Callable[[], Any] | None): Dataclass default factory, if any.
        init (bool): False for dataclass fields excluded from ``__init__``.
    """

    name: str
    hint: Any
    default: Any = MISSING
    default_factory: Callable[[], Any] | None = None
    init: bool = True

    def missing_value(self) -> Any:
        """Value used when the member is absent from the source mapping."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not MISSING:
            return self.default
        return None


@dataclass(frozen=True, slots=True)
class Schema:
    """Ordered members of a structured type plus its constructor."""

    cls: type
    members: tuple[Member, ...]

    def member(self, name: str) -> Member | None:
        """Return the member called ``name``, or ``None``."""
        for m in self.members:
            if m.name == name:
                return m
        return None

    def build(self, values: dict[str, Any]) -> Any:
        """Instantiate the class from member values.

        Members with ``init=False`` are set after construction.

        Args:
            values (dict[str, Any]): Values keyed by member name.

        Returns:
            Any: The new instance.
        """
        kwargs: dict[str, Any] = {}
        late: dict[str, Any] = {}
        for m in self.members:
            if m.name not in values:
                continue
            if m.init:
                kwargs[m.name] = values[m.name]
            else:
                late[m.name] = values[m.name]
        obj: Any = self.cls(**kwargs)
        for name, value in late.items():
            object.__setattr__(obj, name, value)
        return obj


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise BindingError(
            f"cannot resolve type hints of {type_display_name(cls)}: {exc}",
            target=type_display_name(cls),
        ) from exc


@lru_cache(maxsize=None)
def schema_of(cls: type) -> Schema:
    """Return the member schema of a dataclass or named tuple.

    Args:
        cls (type): A dataclass or a ``typing.NamedTuple`` class.

    Returns:
        Schema: The ordered member descriptors.

    Raises:
        BindingError: If ``cls`` is not structured or its hints do not resolve.
    """
    hints: dict[str, Any] = _resolve_hints(cls)
    members: list[Member] = []

    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            factory: Any = f.default_factory
            members.append(
                Member(
                    name=f.name,
                    hint=hints.get(f.name, Any),
                    default=f.default if f.default is not dataclasses.MISSING else MISSING,
                    default_factory=factory if factory is not dataclasses.MISSING else None,
                    init=f.init,
                )
            )
    elif is_namedtuple_class(cls):
        defaults: dict[str, Any] = getattr(cls, "_field_defaults", {})
        for name in cls._fields:  # type: ignore[attr-defined]
            members.append(
                Member(
                    name=name,
                    hint=hints.get(name, Any),
                    default=defaults.get(name, MISSING),
                )
            )
    else:
        raise BindingError(
            f"{type_display_name(cls)} is not a dataclass or named tuple",
            target=type_display_name(cls),
        )

    logger.debug(
        "schema of %s: %s", type_display_name(cls), ", ".join(m.name for m in members)
    )
    return Schema(cls=cls, members=tuple(members))
