"""Turn raised exceptions into Err values: @safe, @safe_async and try_catch()."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from beaut.result import Err, Ok, Result

__all__ = ['safe', 'safe_async', 'try_catch']

type Catchable = tuple[type[BaseException], ...]


def _catching(exceptions: Catchable | None) -> Catchable:
    return exceptions if exceptions is not None else (Exception,)


def _decorate(wrapper: Any, func: Callable[..., Any] | None) -> Any:
    # Bare @safe gets the function, @safe(...) gets None and returns the decorator.
    return wrapper(func) if func is not None else wrapper


@overload
def safe[**P, T](func: Callable[P, T]) -> Callable[P, Result[T, Exception]]: ...


@overload
def safe[**P, T, E: BaseException](
    func: None = None,
    *,
    exceptions: tuple[type[E], ...] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Result[T, E]]]: ...


def safe(
    func: Callable[..., Any] | None = None,
    *,
    exceptions: Catchable | None = None,
) -> Any:
    """Make a function return a Result instead of raising.

    The wrapped function returns Ok(value) when the call returns, and
    Err(exception) when it raises one of ``exceptions`` (Exception by
    default). Anything else propagates. Works on plain functions and on
    methods, with or without arguments:

        @safe
        def parse(text: str) -> int: ...

        @safe(exceptions=(KeyError,))
        def lookup(key: str) -> str: ...

    Args:
        func: The function, when used as a bare decorator.
        exceptions: Exception types that become Err.

    Example:
        ```python
        @safe
        def parse(text: str) -> int:
            return int(text)


        parse('12').unwrap()        # 12
        parse('twelve').is_err()    # True
        ```
    """
    catch = _catching(exceptions)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[Any, Any]:
        try:
            value = wrapped(*args, **kwargs)
        except catch as exc:
            return Err(exc)
        return Ok(value)

    return _decorate(wrapper, func)


@overload
def safe_async[**P, T](
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[Result[T, Exception]]]: ...


@overload
def safe_async[**P, T, E: BaseException](
    func: None = None,
    *,
    exceptions: tuple[type[E], ...] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[Result[T, E]]]]: ...


def safe_async(
    func: Callable[..., Awaitable[Any]] | None = None,
    *,
    exceptions: Catchable | None = None,
) -> Any:
    """safe() for coroutine functions: the awaited call yields a Result."""
    catch = _catching(exceptions)

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[..., Awaitable[Any]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[Any, Any]:
        try:
            value = await wrapped(*args, **kwargs)
        except catch as exc:
            return Err(exc)
        return Ok(value)

    return _decorate(wrapper, func)


def try_catch[**P, T](f: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> Result[T, Exception]:
    """Call f with the given arguments, returning Ok(result) or Err(exception).

    Examples:
        >>> try_catch(int, '7')
        Ok(7)
        >>> try_catch(int, 'x').is_err()
        True
    """
    try:
        return Ok(f(*args, **kwargs))
    except Exception as e:
        return Err(e)
