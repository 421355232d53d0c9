# topmark:header:start
#
#   project      : NTKit
#   file         : guards.py
#   file_relpath : src/ntkit/config/io/guards.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type guards and normalization helpers for TOML parsing.

This module provides `TypeGuard`-based predicates that help Pyright narrow runtime
values coming from TOML parsing, and small side-effect-free helpers to coerce
parsed values into the plain-Python table shapes used by NTKit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard, cast

from ntkit.config.logging import get_logger

if TYPE_CHECKING:
    from ntkit.config.logging import NtkitLogger

    from .types import TomlTable, TomlTableMap


logger: NtkitLogger = get_logger(__name__)

# --- Type guards / narrowers ---


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``obj`` is a ``dict``.
    """
    return isinstance(obj, dict)


def is_any_list(obj: object) -> TypeGuard[list[Any]]:
    """Type guard for a generic list value (item types are not checked)."""
    return isinstance(obj, list)


def is_str_list(obj: object) -> TypeGuard[list[str]]:
    """Type guard for a ``list[str]`` value."""
    return is_any_list(obj) and all(isinstance(x, str) for x in obj)


# --- Pure dict helpers (unchecked) ---


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def as_toml_table_map(obj: object) -> TomlTableMap:
    """Return a mapping of string keys to TOML subtables.

    Used for ``[tool.ntkit.types]`` where each value must itself be a table.

    Args:
        obj (object): Arbitrary object obtained from parsed TOML.

    Returns:
        TomlTableMap: Only the ``str -> TomlTable`` entries. Other entries are
        dropped with a warning.
    """
    out: TomlTableMap = {}
    if isinstance(obj, dict):
        obj_dict: TomlTable = cast("TomlTable", obj)
        for k, v in obj_dict.items():
            if isinstance(v, dict):
                out[k] = v
            else:
                logger.warning("Ignoring non-table entry for key %s: %r", k, v)
    return out
