"""Decorators: @safe and @safe_async, plus try_catch()."""

from beaut.decorators.safe import safe, safe_async, try_catch

__all__ = [
    'safe',
    'safe_async',
    'try_catch',
]
