# topmark:header:start
#
#   project      : NTKit
#   file         : getters.py
#   file_relpath : src/ntkit/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for TOML config tables.

Each getter returns ``None`` (or an empty collection) when the key is missing and
raises `ConfigError` when the key is present with a value of the wrong shape.
Error messages carry the TOML location, e.g. ``[tool.ntkit].indent``.

`warn_unknown_keys` logs (but tolerates) keys NTKit does not know about.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, TypeVar

from ntkit.config.logging import get_logger
from ntkit.errors import ConfigError

from .guards import is_any_list, is_toml_table

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ntkit.config.logging import NtkitLogger
    from ntkit.core.enum_mixins import KeyedStrEnum

    from .types import RenameTable, TomlTable

logger: NtkitLogger = get_logger(__name__)

KS = TypeVar("KS", bound="KeyedStrEnum")


def get_int_value_checked(table: TomlTable, key: str, *, where: str) -> int | None:
    """Return an optional int value.

    Notes:
        - Missing key -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).

    Raises:
        ConfigError: If the value is present but not an integer.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    loc: Final[str] = f"{where}.{key}"
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"expected an integer in {loc}, got {type(value).__name__}: {value!r}")
    return int(value)


def get_enum_value_checked(
    table: TomlTable,
    key: str,
    enum_cls: type[KS],
    *,
    where: str,
) -> KS | None:
    """Parse a keyed enum value (key, member name or alias) from TOML.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        enum_cls (type[KS]): The `KeyedStrEnum` subclass to parse into.
        where (str): TOML location prefix.

    Returns:
        KS | None: The member, or ``None`` when the key is missing.

    Raises:
        ConfigError: If the value is not a string or names no member.
    """
    raw: Any | None = table.get(key)
    if raw is None:
        return None
    loc: Final[str] = f"{where}.{key}"
    if not isinstance(raw, str):
        raise ConfigError(f"expected a string in {loc}, got {type(raw).__name__}: {raw!r}")
    member: KS | None = enum_cls.parse(raw)
    if member is None:
        allowed: str = ", ".join(m.key for m in enum_cls)
        raise ConfigError(f"invalid value for {loc}: {raw!r} (allowed: {allowed})")
    return member


def get_string_list_value_checked(table: TomlTable, key: str, *, where: str) -> list[str]:
    """Extract a list of strings.

    Raises:
        ConfigError: If the value is not a list, or contains a non-string entry.
    """
    value: Any | None = table.get(key)
    if value is None:
        return []
    loc: Final[str] = f"{where}.{key}"
    if not is_any_list(value):
        raise ConfigError(f"expected a list in {loc}, got {type(value).__name__}: {value!r}")
    for v in value:
        if not isinstance(v, str):
            raise ConfigError(f"expected only strings in {loc}, got {v!r}")
    return list(value)


def get_string_table_checked(table: TomlTable, key: str, *, where: str) -> RenameTable:
    """Extract a ``str -> str`` table, e.g. ``rename = { full_name = "name" }``.

    Raises:
        ConfigError: If the value is not a table or has a non-string value.
    """
    value: Any | None = table.get(key)
    if value is None:
        return {}
    loc: Final[str] = f"{where}.{key}"
    if not is_toml_table(value):
        raise ConfigError(f"expected a table in {loc}, got {type(value).__name__}: {value!r}")
    out: RenameTable = {}
    for k, v in value.items():
        if not isinstance(v, str):
            raise ConfigError(f"expected a string for {loc}.{k}, got {type(v).__name__}: {v!r}")
        out[str(k)] = v
    return out


def warn_unknown_keys(table: TomlTable, known: Iterable[str], *, where: str) -> list[str]:
    """Log a warning for every key of ``table`` not in ``known``.

    Returns:
        list[str]: The unknown keys, in table order.
    """
    allowed: frozenset[str] = frozenset(known)
    unknown: list[str] = [k for k in table if k not in allowed]
    for k in unknown:
        logger.warning("Ignoring unknown key in %s: %s", where, k)
    return unknown
