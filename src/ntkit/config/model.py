# topmark:header:start
#
#   project      : NTKit
#   file         : model.py
#   file_relpath : src/ntkit/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model.

This module defines:
    - `LineEnding`: the line terminators accepted for dumping, parsed from TOML.
    - `Config`: an immutable snapshot of everything the engines consume (line
      terminator, indentation width, per-type rules and custom converters).

Immutability:
    - `Config` is ``frozen=True``; its rule and converter tables are frozen into
      read-only mappings on construction. Use `Config.replace`, `Config.with_rules`
      or `Config.with_converter` to derive a modified copy.
    - A `Config` may be shared freely between threads and engine instances.

TOML loading lives in `ntkit.config.io` to keep this model import-light.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ntkit.binding.registry import TypeRegistry
from ntkit.config.logging import get_logger
from ntkit.constants import DEFAULT_EOL, DEFAULT_INDENT, SUPPORTED_EOLS
from ntkit.core.enum_mixins import KeyedStrEnum
from ntkit.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ntkit.binding.registry import Converter
    from ntkit.binding.rules import TypeMappingRules
    from ntkit.config.logging import NtkitLogger

logger: NtkitLogger = get_logger(__name__)


class LineEnding(KeyedStrEnum):
    """Line terminator written between rendered lines."""

    LF = ("lf", "Line feed (Unix)", ("unix",))
    CRLF = ("crlf", "Carriage return + line feed (Windows)", ("windows", "dos"))
    CR = ("cr", "Carriage return (classic Mac OS)", ("mac",))

    @property
    def chars(self) -> str:
        """The terminator characters."""
        return _EOL_CHARS[self.key]


_EOL_CHARS: dict[str, str] = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


def _normalize_eol(value: Any) -> str:
    if isinstance(value, LineEnding):
        return value.chars
    if isinstance(value, str) and value in SUPPORTED_EOLS:
        return str(value)
    allowed: str = ", ".join(f"{m.chars!r} ({m.label})" for m in LineEnding)
    raise ConfigError(f"eol must be one of {allowed}, got {value!r}")


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable engine configuration.

    Attributes:
        eol (str): Line terminator used when rendering (``"\\n"``, ``"\\r\\n"``
            or ``"\\r"``). A `LineEnding` member is accepted and normalized.
        indent (int): Spaces per nesting level when rendering (positive).
        type_rules (Mapping[type, TypeMappingRules]): Rename/ignore rules per
            structured type.
        converters (Mapping[type, Converter]): Custom converters per exact type.

    Raises:
        ConfigError: If a value is invalid.
    """

    eol: str = DEFAULT_EOL
    indent: int = DEFAULT_INDENT
    type_rules: Mapping[type, TypeMappingRules] = field(default_factory=dict)
    converters: Mapping[type, Converter] = field(default_factory=dict)
    registry: TypeRegistry = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        eol: str = _normalize_eol(self.eol)
        # bool is an int subclass; reject it explicitly
        if isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 1:
            raise ConfigError(f"indent must be a positive integer, got {self.indent!r}")
        try:
            registry = TypeRegistry(self.type_rules, self.converters)
        except TypeError as exc:
            raise ConfigError(str(exc)) from exc

        object.__setattr__(self, "eol", eol)
        object.__setattr__(self, "type_rules", registry.type_rules)
        object.__setattr__(self, "converters", registry.converters)
        object.__setattr__(self, "registry", registry)
        logger.debug("config: eol=%r indent=%d %r", eol, self.indent, registry)

    def replace(self, **changes: Any) -> Config:
        """Return a validated copy with ``changes`` applied.

        Args:
            **changes (Any): Field values to override (``eol``, ``indent``,
                ``type_rules``, ``converters``).

        Returns:
            Config: The new configuration.
        """
        return dataclasses.replace(self, **changes)

    def with_rules(self, tp: type, rules: TypeMappingRules) -> Config:
        """Return a copy with ``rules`` registered for ``tp`` (replacing any previous rules)."""
        return self.replace(type_rules={**self.type_rules, tp: rules})

    def with_converter(self, tp: type, converter: Converter) -> Config:
        """Return a copy with ``converter`` registered for exactly ``tp``."""
        return self.replace(converters={**self.converters, tp: converter})


DEFAULT_CONFIG = Config()
