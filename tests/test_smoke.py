"""Smoke tests: the public surface imports and works end to end."""

import pytest

import beaut
from beaut import Err, Nothing, Ok, Some, spawn
from beaut.future import then


def test_all_exports_resolve():
    """Every name in __all__ is importable from the package."""
    for name in beaut.__all__:
        assert hasattr(beaut, name), name


def test_option_round_trip():
    """Some flows through map, filter and ok_or."""
    assert Some(4).map(lambda x: x + 1).filter(lambda x: x > 3).ok_or('small').unwrap() == 5


def test_result_round_trip():
    """Err short-circuits a chain."""
    assert Err('e').map(str).and_then(lambda s: Ok(s * 2)).unwrap_or('fallback') == 'fallback'


def test_nothing_to_object():
    """Nothing has a stable plain form."""
    assert Nothing().to_object() == {'some': False, 'value': None}


@pytest.mark.asyncio
async def test_future_round_trip():
    """A then() pipeline resolves."""
    task = spawn(then(beaut.ready(3), lambda v: beaut.ready(f'Received: {v}')))
    assert await task.use() == 'Received: 3'
