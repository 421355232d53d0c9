# topmark:header:start
#
#   project      : NTKit
#   file         : types.py
#   file_relpath : src/ntkit/config/io/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type aliases for parsed NTKit settings tables.

``TomlTableMap`` holds the ``[types."module:QualName"]`` tables keyed by their
type reference. ``RenameTable`` maps Python member names to document keys.
"""

from __future__ import annotations

from typing import Any

TomlTable = dict[str, Any]
TomlTableMap = dict[str, TomlTable]
RenameTable = dict[str, str]
