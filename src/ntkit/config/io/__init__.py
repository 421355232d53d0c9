# topmark:header:start
#
#   project      : NTKit
#   file         : __init__.py
#   file_relpath : src/ntkit/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for NTKit configuration.

This package centralizes the helpers for reading and validating TOML used by the
configuration layer, so the `Config` model stays small and import-light.

TOML parsing:
    NTKit uses `tomlkit` for parsing. Documents are unwrapped into plain dicts
    before validation.

Typical flow:
    1. Parse text or a file (``parse_toml_text`` / ``load_toml_dict``).
    2. Select ``[tool.ntkit]`` or the top-level table (``select_ntkit_table``).
    3. Read values with the checked getters and build a `Config`
       (``config_from_table``).

``config_from_toml_text`` and ``load_config_toml`` run the whole flow.
"""

from __future__ import annotations

from .getters import (
    get_enum_value_checked,
    get_int_value_checked,
    get_string_list_value_checked,
    get_string_table_checked,
    warn_unknown_keys,
)
from .guards import (
    as_toml_table_map,
    get_table_value,
    is_any_list,
    is_str_list,
    is_toml_table,
)
from .loaders import (
    config_from_table,
    config_from_toml_text,
    load_config_toml,
    load_toml_dict,
    parse_toml_text,
    resolve_type_ref,
    select_ntkit_table,
)
from .types import RenameTable, TomlTable, TomlTableMap

# --- Exported symbols ---

__all__: list[str] = [
    "RenameTable",
    "TomlTable",
    "TomlTableMap",
    "as_toml_table_map",
    "config_from_table",
    "config_from_toml_text",
    "get_enum_value_checked",
    "get_int_value_checked",
    "get_string_list_value_checked",
    "get_string_table_checked",
    "get_table_value",
    "is_any_list",
    "is_str_list",
    "is_toml_table",
    "load_config_toml",
    "load_toml_dict",
    "parse_toml_text",
    "resolve_type_ref",
    "select_ntkit_table",
    "warn_unknown_keys",
]
