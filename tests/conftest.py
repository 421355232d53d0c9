# topmark:header:start
#
#   project      : NTKit
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the NTKit test suite.

This file sets up global fixtures and helpers, and customizes the logging
configuration for test runs.

Notes:
    Tests should respect the immutable configuration contract:

    - Build a `ntkit.config.model.Config` once (``make_config``) and derive
      variants with ``Config.replace`` / ``Config.with_rules``.
    - Structured test types (dataclasses, named tuples) live at module level so
      ``typing.get_type_hints`` can resolve their postponed annotations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from ntkit.api import NestedText
from ntkit.config import logging
from ntkit.config.model import Config
from ntkit.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from ntkit.tree import Node

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.hypothesis_slow`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_ntkit_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure NTKit's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    NTKIT_LOG_LEVEL in their shell. Individual tests can still raise the level
    via `caplog`.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure logging for the test suite.

    Sets the level to TRACE so token-level output is captured on failures.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Field values passed to `Config`.

    Returns:
        Config: An immutable configuration snapshot.
    """
    return Config(**overrides)


def make_nt(**overrides: Any) -> NestedText:
    """Return a `NestedText` facade over ``make_config(**overrides)``."""
    return NestedText(make_config(**overrides))


def roundtrip(node: Node, **overrides: Any) -> Node:
    """Render ``node`` and parse the result back with the same configuration."""
    nt: NestedText = make_nt(**overrides)
    return nt.parse_tree(nt.render(node))
