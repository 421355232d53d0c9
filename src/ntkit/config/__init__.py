# topmark:header:start
#
#   project      : NTKit
#   file         : __init__.py
#   file_relpath : src/ntkit/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for NTKit.

Submodules:
    - `ntkit.config.model`: the immutable `Config` value and `LineEnding`.
    - `ntkit.config.io`: TOML loading (``[tool.ntkit]`` in ``pyproject.toml``).
    - `ntkit.config.keys`: canonical TOML section and key names.
    - `ntkit.config.logging`: logger class, TRACE level and colored output.

This package module imports nothing eagerly: the binding layer depends on
`ntkit.config.logging`, and the model depends on the binding layer.
"""

from __future__ import annotations
