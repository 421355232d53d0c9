# topmark:header:start
#
#   project      : NTKit
#   file         : constants.py
#   file_relpath : src/ntkit/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""NTKit Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    NTKIT_VERSION: str = get_version("ntkit")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    NTKIT_VERSION = "0.0.0"

# Dump defaults
DEFAULT_EOL: Final[str] = "\n"
DEFAULT_INDENT: Final[int] = 4

# Line terminators accepted for dumping; loading always accepts all three.
SUPPORTED_EOLS: Final[tuple[str, ...]] = ("\n", "\r\n", "\r")

DEFAULT_ENCODING: Final[str] = "utf-8"
UTF8_BOM: Final[str] = "\ufeff"

LOG_LEVEL_ENV_VAR: Final[str] = "NTKIT_LOG_LEVEL"

# Characters with structural meaning at the start of a line
DASH_CHAR: Final[str] = "-"
GREATER_CHAR: Final[str] = ">"
COMMENT_CHAR: Final[str] = "#"
KEY_TERMINATOR: Final[str] = ":"
RESERVED_KEY_STARTS: Final[tuple[str, ...]] = ("[", "{")
