"""
Shared pytest fixtures and configuration for fallible tests.

This module provides:
- Sample leaf errors with distinct (domain, code) pairs
- A handler that fails the test when it is called
- Settings isolation (no FALLIBLE_* variables leak between tests)
"""

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure fallible package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fallible.core.errors import DomainError
from fallible.core.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Run every test with default settings and no stray .env file."""
    import os

    for name in list(os.environ):
        if name.startswith("FALLIBLE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Sample Errors
# =============================================================================


@pytest.fixture
def not_found() -> DomainError:
    return DomainError("No such file", domain="storage.read", code=260)


@pytest.fixture
def corrupt() -> DomainError:
    return DomainError(
        "The data was not saved correctly.",
        domain="storage.read",
        code=259,
        detail={"path": "/tmp/notes.plist"},
    )


@pytest.fixture
def denied() -> DomainError:
    return DomainError("Permission denied", domain="storage.write", code=513)


@pytest.fixture
def never():
    """Handler that must not be invoked."""

    def handler(*args: Any) -> Any:
        pytest.fail(f"handler called unexpectedly with {args!r}")

    return handler
