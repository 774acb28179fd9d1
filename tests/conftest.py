"""Pytest configuration and shared fixtures for beaut tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from hypothesis import HealthCheck, settings

from beaut import Err, Nothing, Ok, Some, clear_log_hooks, reset

# fresh_config is function-scoped and idempotent across hypothesis examples.
settings.register_profile('beaut', suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile('beaut')


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from an unset configuration and no log hooks."""
    for name in ('BEAUT_LOG_LEVEL', 'BEAUT_TRACK_CONSUMPTION', 'BEAUT_JSON_LOGS'):
        monkeypatch.delenv(name, raising=False)
    reset()
    clear_log_hooks()
    root_level = logging.getLogger().level
    yield
    reset()
    clear_log_hooks()
    logging.getLogger().setLevel(root_level)


@pytest.fixture
def sample_some():
    """Sample Some value for testing."""
    return Some('hello')


@pytest.fixture
def sample_nothing():
    """Sample Nothing value for testing."""
    return Nothing()


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    return Err(ValueError('test error'))
