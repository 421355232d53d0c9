# topmark:header:start
#
#   project      : NTKit
#   file         : loaders.py
#   file_relpath : src/ntkit/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load NTKit configuration from TOML sources.

Sources:
    - ``pyproject.toml``: settings live in ``[tool.ntkit]``; a document with a
      ``[tool]`` table but no ``[tool.ntkit]`` yields the defaults.
    - standalone TOML (e.g. ``ntkit.toml``): settings live at the top level.

Parsing is done with `tomlkit` and unwrapped into plain `dict` structures before
validation. Type rule tables are keyed by ``"module:QualName"`` references,
resolved with `importlib`.

Malformed TOML, unreadable files, invalid values and unresolvable type
references raise `ConfigError`; unknown keys are logged as warnings.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from ntkit.binding.rules import TypeMappingRules
from ntkit.config.keys import Toml
from ntkit.config.logging import get_logger
from ntkit.config.model import DEFAULT_CONFIG, LineEnding
from ntkit.errors import ConfigError

from .getters import (
    get_enum_value_checked,
    get_int_value_checked,
    get_string_list_value_checked,
    get_string_table_checked,
    warn_unknown_keys,
)
from .guards import as_toml_table_map, get_table_value, is_toml_table

if TYPE_CHECKING:
    from pathlib import Path

    from ntkit.config.logging import NtkitLogger
    from ntkit.config.model import Config

    from .types import TomlTable, TomlTableMap

logger: NtkitLogger = get_logger(__name__)


# --- TOML text and file I/O ---


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse TOML text into plain Python values.

    Args:
        text (str): TOML document.
        source (str): Name used in error messages.

    Returns:
        TomlTable: The unwrapped document.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"invalid TOML in {source}: {exc}") from exc
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if is_toml_table(data_any) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file (UTF-8).

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read configuration file {path}: {exc}") from exc
    logger.debug("loaded TOML from %s", path)
    return parse_toml_text(text, source=str(path))


def select_ntkit_table(data: TomlTable) -> tuple[TomlTable, str]:
    """Return the NTKit settings table and its display location.

    Args:
        data (TomlTable): A parsed TOML document.

    Returns:
        tuple[TomlTable, str]: ``[tool.ntkit]`` when the document has a ``[tool]``
        table, otherwise the document itself.
    """
    if Toml.SECTION_TOOL in data:
        tool: TomlTable = get_table_value(data, Toml.SECTION_TOOL)
        return get_table_value(tool, Toml.SECTION_NTKIT), "[tool.ntkit]"
    return data, "[ntkit]"


# --- Type references ---


def resolve_type_ref(ref: str) -> type:
    """Resolve a ``"package.module:Outer.Inner"`` reference to a class.

    Args:
        ref (str): Module path and qualified name separated by a colon.

    Returns:
        type: The referenced class.

    Raises:
        ConfigError: If the reference is malformed, the module cannot be
            imported, or the name does not denote a class.
    """
    module_name, sep, qualname = ref.partition(":")
    if not sep or not module_name or not qualname:
        raise ConfigError(f"type reference must look like 'module:QualName', got {ref!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"cannot import module {module_name!r} for {ref!r}: {exc}") from exc
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigError(f"cannot resolve {ref!r}: no attribute {part!r}") from exc
    if not isinstance(obj, type):
        raise ConfigError(f"{ref!r} does not name a class")
    return obj


def _rules_from_table(table: TomlTable, *, where: str) -> TypeMappingRules:
    warn_unknown_keys(table, Toml.TYPE_KEYS, where=where)
    try:
        return TypeMappingRules(
            rename=get_string_table_checked(table, Toml.KEY_RENAME, where=where),
            ignore=frozenset(get_string_list_value_checked(table, Toml.KEY_IGNORE, where=where)),
            ignore_when_null=frozenset(
                get_string_list_value_checked(table, Toml.KEY_IGNORE_WHEN_NULL, where=where)
            ),
        )
    except ValueError as exc:
        raise ConfigError(f"invalid rules in {where}: {exc}") from exc


# --- Config construction ---


def config_from_table(
    table: TomlTable,
    *,
    base: Config | None = None,
    where: str = "[ntkit]",
) -> Config:
    """Build a `Config` from an NTKit settings table.

    Settings absent from the table keep the value of ``base``; type rules from the
    table replace the rules ``base`` holds for the same type. Converters cannot be
    declared in TOML and are kept from ``base``.

    Args:
        table (TomlTable): The settings table (already selected).
        base (Config | None): Configuration to start from (defaults if None).
        where (str): TOML location used in messages.

    Returns:
        Config: The resulting configuration.

    Raises:
        ConfigError: For invalid values or unresolvable type references.
    """
    start: Config = base if base is not None else DEFAULT_CONFIG
    warn_unknown_keys(table, Toml.ROOT_KEYS, where=where)

    changes: dict[str, Any] = {}
    eol: LineEnding | None = get_enum_value_checked(table, Toml.KEY_EOL, LineEnding, where=where)
    if eol is not None:
        changes["eol"] = eol.chars
    indent: int | None = get_int_value_checked(table, Toml.KEY_INDENT, where=where)
    if indent is not None:
        changes["indent"] = indent

    types_where: str = f"{where}.{Toml.SECTION_TYPES}"
    type_tables: TomlTableMap = as_toml_table_map(table.get(Toml.SECTION_TYPES))
    if type_tables:
        rules: dict[type, TypeMappingRules] = dict(start.type_rules)
        for ref, sub in type_tables.items():
            tp: type = resolve_type_ref(ref)
            rules[tp] = _rules_from_table(sub, where=f"{types_where}.{ref!r}")
            logger.debug("rules for %s: %r", ref, rules[tp])
        changes["type_rules"] = rules

    return start.replace(**changes) if changes else start


def config_from_toml_text(text: str, *, base: Config | None = None) -> Config:
    """Build a `Config` from TOML text (``pyproject.toml`` or standalone).

    Raises:
        ConfigError: For malformed TOML or invalid settings.
    """
    table, where = select_ntkit_table(parse_toml_text(text))
    return config_from_table(table, base=base, where=where)


def load_config_toml(path: Path, *, base: Config | None = None) -> Config:
    """Build a `Config` from a TOML file (``pyproject.toml`` or standalone).

    Raises:
        ConfigError: If the file cannot be read, or for malformed TOML or
            invalid settings.
    """
    table, where = select_ntkit_table(load_toml_dict(path))
    config: Config = config_from_table(table, base=base, where=where)
    logger.info("loaded configuration from %s", path)
    return config
