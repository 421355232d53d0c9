# topmark:header:start
#
#   project      : NTKit
#   file         : __init__.py
#   file_relpath : src/ntkit/binding/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Binding between value trees and typed Python values.

- `Deserializer`: value tree -> typed value, driven by a `Shape` built from a type hint.
- `Introspector`: typed value -> value tree.
- `TypeRegistry`: per-type `TypeMappingRules` and custom `Converter` pairs.
"""

from __future__ import annotations

from ntkit.binding.deserializer import BindingContext, Deserializer
from ntkit.binding.introspector import Introspector
from ntkit.binding.registry import Converter, TypeRegistry
from ntkit.binding.rules import NO_RULES, TypeMappingRules
from ntkit.binding.schema import Member, Schema, schema_of
from ntkit.binding.shapes import Shape, ShapeKind

__all__: list[str] = [
    "NO_RULES",
    "BindingContext",
    "Converter",
    "Deserializer",
    "Introspector",
    "Member",
    "Schema",
    "Shape",
    "ShapeKind",
    "TypeMappingRules",
    "TypeRegistry",
    "schema_of",
]
