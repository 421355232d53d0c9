# topmark:header:start
#
#   project      : NTKit
#   file         : primitives.py
#   file_relpath : src/ntkit/binding/primitives.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Conversions between scalar text and primitive Python values.

Loading:
    `find_text_converter(tp)` returns the parse function for a target class, or
    ``None`` when the class is not a supported primitive. Parse functions raise
    ``ValueError`` (or ``ArithmeticError`` for ``Decimal``) on malformed text.

Dumping:
    `basic_scalar_text(value)` stringifies text, booleans, numbers and enum
    members. `temporal_scalar_text(value)` stringifies dates, times, durations,
    UUIDs and paths. Both return ``None`` for anything else.
"""

from __future__ import annotations

import re
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable

from ntkit.core.enum_mixins import enum_from_name

if TYPE_CHECKING:
    from collections.abc import Mapping

TextConverter = Callable[[str], Any]

_ISO_DURATION_RE: re.Pattern[str] = re.compile(
    r"""
    ^(?P<sign>[-+])?P
    (?:(?P<weeks>\d+(?:\.\d+)?)W)?
    (?:(?P<days>\d+(?:\.\d+)?)D)?
    (?:T
        (?:(?P<hours>\d+(?:\.\d+)?)H)?
        (?:(?P<minutes>\d+(?:\.\d+)?)M)?
        (?:(?P<seconds>\d+(?:\.\d+)?)S)?
    )?$
    """,
    re.VERBOSE,
)


def parse_iso_duration(text: str) -> timedelta:
    """Parse an ISO 8601 duration restricted to weeks, days and clock units.

    Accepts an optional sign, e.g. ``P1DT2H``, ``-PT0.5S``, ``P2W``. Years and
    months have no fixed length and are rejected.

    Args:
        text (str): The duration text.

    Returns:
        timedelta: The parsed duration.

    Raises:
        ValueError: If the text is not a supported duration.
    """
    match: re.Match[str] | None = _ISO_DURATION_RE.match(text.strip())
    if match is None or text.strip().endswith(("P", "T")):
        raise ValueError(f"invalid ISO 8601 duration: {text!r}")
    parts: dict[str, float] = {
        unit: float(raw) for unit, raw in match.groupdict().items() if unit != "sign" and raw
    }
    result = timedelta(**parts)
    return -result if match.group("sign") == "-" else result


def format_iso_duration(value: timedelta) -> str:
    """Format a duration as ISO 8601 (``PnDTnHnMnS``), e.g. ``P1DT2H3M4.5S``."""
    if value < timedelta(0):
        return "-" + format_iso_duration(-value)
    hours, rest = divmod(value.seconds, 3600)
    minutes, seconds = divmod(rest, 60)

    clock: str = ""
    if hours:
        clock += f"{hours}H"
    if minutes:
        clock += f"{minutes}M"
    if value.microseconds:
        clock += f"{seconds}.{value.microseconds:06d}".rstrip("0") + "S"
    elif seconds:
        clock += f"{seconds}S"

    out: str = "P"
    if value.days:
        out += f"{value.days}D"
    if clock:
        out += "T" + clock
    return out if out != "P" else "PT0S"


def _parse_bool(text: str) -> bool:
    lowered: str = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"expected 'true' or 'false', got {text!r}")


def _enum_converter(enum_cls: type[Enum]) -> TextConverter:
    def parse(text: str) -> Enum:
        member: Enum | None = enum_from_name(enum_cls, text)
        if member is None:
            names: str = ", ".join(enum_cls.__members__)
            raise ValueError(f"{text!r} is not a member of {enum_cls.__name__} ({names})")
        return member

    return parse


TEXT_CONVERTERS: Mapping[type, TextConverter] = MappingProxyType(
    {
        str: str,
        int: int,
        float: float,
        complex: complex,
        Decimal: Decimal,
        Fraction: Fraction,
        bool: _parse_bool,
        date: date.fromisoformat,
        time: time.fromisoformat,
        datetime: datetime.fromisoformat,
        timedelta: parse_iso_duration,
        uuid.UUID: uuid.UUID,
        Path: Path,
        PurePath: PurePath,
        PurePosixPath: PurePosixPath,
        PureWindowsPath: PureWindowsPath,
    }
)


def find_text_converter(tp: Any) -> TextConverter | None:
    """Return the text parser for a primitive target class.

    Args:
        tp (Any): Target class.

    Returns:
        TextConverter | None: A ``str -> value`` function, or ``None`` if ``tp`` is
        not a supported primitive.
    """
    if isinstance(tp, type) and issubclass(tp, Enum):
        return _enum_converter(tp)
    return TEXT_CONVERTERS.get(tp)


def basic_scalar_text(value: Any) -> str | None:
    """Stringify text, booleans, numbers and enum members; ``None`` otherwise."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return str(value)
    if isinstance(value, (int, float, complex, Decimal, Fraction)):
        return str(value)
    return None


def temporal_scalar_text(value: Any) -> str | None:
    """Stringify dates, times, durations, UUIDs and paths; ``None`` otherwise."""
    # datetime is a date subclass; isoformat covers both
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return format_iso_duration(value)
    if isinstance(value, (uuid.UUID, PurePath)):
        return str(value)
    return None
