# topmark:header:start
#
#   project      : NTKit
#   file         : sample_models.py
#   file_relpath : tests/config/sample_models.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Importable types referenced by ``"module:QualName"`` strings in config tests.

Kept outside the test modules so that the test code and `resolve_type_ref`
import the same module object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Profile:
    display_name: str
    bio: Optional[str] = None
    token: str = ""


class Outer:
    @dataclass
    class Inner:
        value: int = 0
