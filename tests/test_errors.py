# topmark:header:start
#
#   project      : NTKit
#   file         : test_errors.py
#   file_relpath : tests/test_errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error hierarchy and message rendering."""

from __future__ import annotations

import pytest

from ntkit.errors import (
    BindingError,
    ConfigError,
    DecodeError,
    DumpError,
    LexicalError,
    NestedTextError,
    ParseError,
)
from tests.conftest import parametrize


@parametrize(
    "cls", [LexicalError, ParseError, BindingError, DumpError, ConfigError]
)
def test_all_errors_share_a_base(cls: type[NestedTextError]) -> None:
    """Every NTKit error can be caught as `NestedTextError`."""
    with pytest.raises(NestedTextError):
        raise cls("boom")


def test_decode_error_is_a_nestedtext_error() -> None:
    """`DecodeError` carries its offset and encoding."""
    err = DecodeError("bad byte", offset=3, encoding="utf-8")
    assert isinstance(err, NestedTextError)
    assert (err.offset, err.encoding) == (3, "utf-8")
    assert str(err) == "bad byte"


@parametrize(
    "lineno, colno, expected",
    [
        (None, None, "oops"),
        (0, None, "line 1: oops"),
        (4, 2, "line 5, column 3: oops"),
    ],
)
def test_location_rendering(lineno: int | None, colno: int | None, expected: str) -> None:
    """Locations are stored 0-based and rendered 1-based."""
    err = ParseError("oops", lineno=lineno, colno=colno, line="src")
    assert str(err) == expected
    assert err.message == "oops"
    assert err.line == "src"


def test_binding_error_context() -> None:
    """Binding errors name the member and the target type."""
    err = BindingError("Model.port: bad", member="port", target="Model")
    assert (err.member, err.target) == ("port", "Model")
    assert err.lineno is None
    assert str(err) == "Model.port: bad"
