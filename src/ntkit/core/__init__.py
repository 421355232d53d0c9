# topmark:header:start
#
#   project      : NTKit
#   file         : __init__.py
#   file_relpath : src/ntkit/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core helpers shared across NTKit (enum utilities)."""

from __future__ import annotations
