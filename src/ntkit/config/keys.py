# topmark:header:start
#
#   project      : NTKit
#   file         : keys.py
#   file_relpath : src/ntkit/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for NTKit configuration.

Configuration lives in ``[tool.ntkit]`` inside ``pyproject.toml``, or at the top
level of a standalone ``ntkit.toml``:

```toml
[tool.ntkit]
eol = "lf"
indent = 2

[tool.ntkit.types."myapp.models:User"]
rename = { full_name = "name" }
ignore = ["password"]
ignore_when_null = ["email"]
```
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by NTKit configuration.

    Notes:
        - Values must match user-facing TOML keys exactly.
        - Renaming or removing a key is a breaking change.
    """

    # [tool.ntkit]
    SECTION_TOOL: Final[str] = "tool"
    SECTION_NTKIT: Final[str] = "ntkit"

    KEY_EOL: Final[str] = "eol"
    KEY_INDENT: Final[str] = "indent"

    # [tool.ntkit.types."module:QualName"]
    SECTION_TYPES: Final[str] = "types"

    KEY_RENAME: Final[str] = "rename"
    KEY_IGNORE: Final[str] = "ignore"
    KEY_IGNORE_WHEN_NULL: Final[str] = "ignore_when_null"

    ROOT_KEYS: Final[frozenset[str]] = frozenset({KEY_EOL, KEY_INDENT, SECTION_TYPES})
    TYPE_KEYS: Final[frozenset[str]] = frozenset({KEY_RENAME, KEY_IGNORE, KEY_IGNORE_WHEN_NULL})
