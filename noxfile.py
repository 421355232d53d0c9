# topmark:header:start
#
#   project      : NTKit
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""NTKit project automation via Nox.

Sessions:
  - `lint`: Ruff lint on the repository.
  - `format_check`: Verify formatting with Ruff.
  - `format`: Apply Ruff formatting.
  - `qa`: Per-Python session that runs pytest (fast tests) and pyright.
  - `property_test`: Long-running Hypothesis property tests (opt-in).
  - `package_check`: Build sdist/wheel and validate metadata (twine).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
  - `nox -s property_test`
"""

from __future__ import annotations

import pathlib
import sys
import warnings
from typing import TYPE_CHECKING, Any, cast

import nox

if TYPE_CHECKING:
    from collections.abc import Callable

# Handle TOML parsing based on Python version or available libraries

if sys.version_info >= (3, 11):
    # tomllib is available since Python version 3.11
    import tomllib

    _toml_loads = cast("Callable[[str], dict[str, Any]]", tomllib.loads)  # type: ignore[assignment]
else:
    import toml

    _toml_loads = cast("Callable[[str], dict[str, Any]]", toml.loads)  # type: ignore[assignment]

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"

# --- Dynamic Python Version Resolution ---


def _parse_pyproject_toml() -> dict[str, Any]:
    """Parse `pyproject.toml` at noxfile import time (no project dependencies).

    Returns:
        dict[str, Any]: Parsed TOML document, or an empty dict when unavailable.
    """
    path: pathlib.Path = pathlib.Path(__file__).parent / "pyproject.toml"
    if not path.exists():
        return {}
    try:
        return _toml_loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.10", "3.11", ...], sorted.
    """
    project_any: Any = _parse_pyproject_toml().get("project")
    classifiers_any: Any = project_any.get("classifiers") if isinstance(project_any, dict) else None
    if not isinstance(classifiers_any, list):
        warnings.warn(
            "Could not find 'classifiers' in pyproject.toml. "
            f"Falling back to Python {CURRENT_PYTHON_VERSION}.",
            RuntimeWarning,
            stacklevel=2,
        )
        return [CURRENT_PYTHON_VERSION]

    prefix = "Programming Language :: Python :: "
    versions: set[tuple[int, int]] = set()
    for c in cast("list[str]", classifiers_any):
        if not c.startswith(prefix):
            continue
        parts: list[str] = c.removeprefix(prefix).strip().split(".")
        # Accept only X.Y numeric versions.
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            versions.add((int(parts[0]), int(parts[1])))

    if not versions:
        return [CURRENT_PYTHON_VERSION]
    return [f"{major}.{minor}" for major, minor in sorted(versions)]


# Resolve versions once at startup
PYTHONS: list[str] = get_supported_pythons()

# Global options
# Keep defaults fast; run QA (multi-Python) explicitly or in CI.
nox.options.sessions = ["lint", "format_check"]
nox.options.default_venv_backend = "uv|virtualenv"


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run tests + pyright (per Python version)."""
    session.log("Supported Python versions: " + ", ".join(PYTHONS))

    session.install("-e", ".[test,dev]")

    # We add *session.posargs to the end of the command
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)

    py_ver = session.python
    if not isinstance(py_ver, str) or not py_ver:
        raise RuntimeError(f"Unexpected session.python value: {py_ver!r}")

    session.run("pyright", "--pythonversion", py_ver)


@nox.session
def lint(session: nox.Session) -> None:
    """Run Ruff lint checks."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Check formatting without modifying files."""
    session.install("-e", ".[dev]")
    session.run("ruff", "format", "--check", ".")


@nox.session
def format(session: nox.Session) -> None:
    """Apply Ruff formatting."""
    session.install("-e", ".[dev]")
    session.run("ruff", "format", ".")


@nox.session
def property_test(session: nox.Session) -> None:
    """Run the long-running Hypothesis round-trip tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-vv", "-m", "hypothesis_slow", "tests/syntax", *session.posargs)


@nox.session(python=CURRENT_PYTHON_VERSION)
def package_check(session: nox.Session) -> None:
    """Build sdist/wheel and validate metadata."""
    session.install("build", "twine")
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")
