"""Cancellable futures: executors, single-owner Task handles and combinators.

A Future is a recipe: an executor called with ``resolve`` and ``reject``
that may return a cancel callback. ``spawn`` runs the executor right away
and hands back a Task, which is owned exactly once: either ``use()`` it to
await the outcome or ``cancel()`` it.

Example:
    ```python
    from beaut.future import Future, spawn


    def executor(resolve, reject):
        resolve(3)


    task = spawn(Future(executor))
    assert task.is_resolved()
    assert await task.use() == 3
    ```
"""

from __future__ import annotations

import threading
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import aiologic
import anyio

from beaut._linear import Linear
from beaut._logging import get_logger
from beaut.core import Mut
from beaut.errors import OwnershipViolationError, Rejected
from beaut.result import Err, Result

if TYPE_CHECKING:
    from anyio.abc import TaskGroup

__all__ = [
    'Canceller',
    'Executor',
    'Future',
    'Reject',
    'Resolve',
    'Task',
    'TaskOutcome',
    'TaskStatus',
    'and_then',
    'delay',
    'failed',
    'from_coroutine',
    'map',
    'ready',
    'ready_with',
    'spawn',
    'then',
]

logger = get_logger(__name__)

type Canceller = Callable[[], Any]
type Executor[T] = Callable[[Resolve[T], Reject], Canceller | None]


class TaskStatus(Enum):
    """Lifecycle of a task: PENDING settles once into RESOLVED or REJECTED."""

    PENDING = 'pending'
    RESOLVED = 'resolved'
    REJECTED = 'rejected'


class _TaskState[T]:
    """Settle-once completion cell shared by a Task, its outcome and its settlers."""

    __slots__ = ('callbacks', 'cancelled', 'canceller', 'event', 'lock', 'outcome', 'status')

    def __init__(self) -> None:
        self.event: aiologic.Event = aiologic.Event()
        self.lock: aiologic.Lock = aiologic.Lock()
        self.status: TaskStatus = TaskStatus.PENDING
        self.outcome: Any = None
        self.canceller: Canceller | None = None
        self.cancelled: bool = False
        self.callbacks: list[Callable[[_TaskState[T]], None]] = []

    def settle(self, status: TaskStatus, outcome: Any) -> bool:
        """Record the terminal status and outcome, then wake waiters and run callbacks.

        Returns:
            False if the task had already settled; the late outcome is dropped.
        """
        with self.lock:
            current = self.status
            if current is TaskStatus.PENDING:
                self.outcome = outcome
                self.status = status
                self.event.set()
                callbacks, self.callbacks = self.callbacks, []

        if current is not TaskStatus.PENDING:
            logger.debug(
                'task.settle_ignored',
                task_id=id(self),
                status=current.value,
                attempted=status.value,
            )
            return False

        logger.debug('task.settled', task_id=id(self), status=status.value)
        for callback in callbacks:
            callback(self)
        return True

    def on_settled(self, callback: Callable[[_TaskState[T]], None]) -> None:
        """Run callback once the task settles (immediately if it already has)."""
        with self.lock:
            if self.status is TaskStatus.PENDING:
                self.callbacks.append(callback)
                return
        callback(self)


class _Settler:
    __slots__ = ('_state',)

    def __init__(self, state: _TaskState[Any]) -> None:
        self._state = state

    @property
    def cancelled(self) -> bool:
        """True once the task has been cancelled; executors may check it before settling."""
        return self._state.cancelled


class Resolve[T](_Settler):
    """Settles a task with a value. Calls after the first settlement are ignored."""

    __slots__ = ()

    def __call__(self, value: T) -> None:
        self._state.settle(TaskStatus.RESOLVED, value)


class Reject(_Settler):
    """Settles a task with a rejection reason. Calls after the first settlement are ignored."""

    __slots__ = ()

    def __call__(self, reason: Any = None) -> None:
        self._state.settle(TaskStatus.REJECTED, reason)


class TaskOutcome[T]:
    """Awaitable view of a task's eventual value.

    ``await outcome`` returns the resolved value, or raises the rejection:
    exception reasons are raised as they are, other reasons are wrapped in
    RejectedError. ``wait()`` blocks the calling thread instead.
    """

    __slots__ = ('_state',)

    def __init__(self, state: _TaskState[T]) -> None:
        self._state = state

    def done(self) -> bool:
        """Return True if the task has settled."""
        return self._state.status is not TaskStatus.PENDING

    def _result(self) -> T:
        state = self._state
        if state.status is TaskStatus.REJECTED:
            reason = state.outcome
            if isinstance(reason, BaseException):
                raise reason
            raise Rejected(reason).to_exception()
        return state.outcome

    async def _wait(self) -> T:
        await self._state.event
        return self._result()

    def __await__(self) -> Any:
        return self._wait().__await__()

    def wait(self, timeout: float | None = None) -> T:
        """Block until the task settles and return its value.

        Args:
            timeout: Seconds to wait. None waits forever.

        Raises:
            TimeoutError: If the task did not settle within ``timeout``.
            RejectedError: If the task was rejected with a non-exception reason.
        """
        if not self._state.event.wait(timeout):
            msg = f'task did not settle within {timeout} seconds'
            raise TimeoutError(msg)
        return self._result()


class Task[T](Linear[_TaskState[T]]):
    """Handle to a spawned future, owned exactly once.

    ``use()`` and ``cancel()`` consume the handle. Status peeks
    (is_pending, is_resolved, is_rejected, status) do not.
    """

    __slots__ = ()

    _kind = 'task'

    def use(self) -> TaskOutcome[T]:
        """Consume the task and return an awaitable for its outcome."""
        return TaskOutcome(self._move())

    def cancel(self) -> None:
        """Consume the task and request cancellation.

        Raises the cancellation flag seen by the executor through
        ``resolve.cancelled`` and calls the executor's cancel callback, if
        it returned one. Cancellation is advisory: the task's status is
        left to the executor. Errors from the callback propagate.
        """
        state = self._move()
        state.cancelled = True
        logger.debug(
            'task.cancel_requested',
            task_id=id(state),
            status=state.status.value,
            has_canceller=state.canceller is not None,
        )
        if state.canceller is not None:
            state.canceller()

    @property
    def status(self) -> TaskStatus:
        """Current status, without consuming the task."""
        return self._live().status

    def is_pending(self) -> bool:
        """Return True if the task has not settled yet."""
        return self._live().status is TaskStatus.PENDING

    def is_resolved(self) -> bool:
        """Return True if the task resolved with a value."""
        return self._live().status is TaskStatus.RESOLVED

    def is_rejected(self) -> bool:
        """Return True if the task was rejected."""
        return self._live().status is TaskStatus.REJECTED

    def _on_settled(self, callback: Callable[[_TaskState[T]], None]) -> None:
        self._live().on_settled(callback)

    def __repr__(self) -> str:
        state = self._slot
        if state is None:
            return '<consumed Task>'
        return f'<Task {state.status.value}>'


@dataclass(slots=True, frozen=True)
class Future[T]:
    """A deferred computation: an executor plus combinators.

    Calling the future runs the executor; use spawn() to get a Task.

    Attributes:
        executor: Called with (resolve, reject). May return a cancel callback.
    """

    executor: Executor[T]

    def __call__(self, resolve: Resolve[T], reject: Reject) -> Canceller | None:
        return self.executor(resolve, reject)

    def spawn(self) -> Task[T]:
        """Run the executor now. Same as ``spawn(self)``."""
        return spawn(self)

    def map[U](self, f: Callable[[T], U]) -> Future[U]:
        """Same as ``map(self, f)``."""
        return map(self, f)

    def then[U](self, f: Callable[[T], Future[U]]) -> Future[U]:
        """Same as ``then(self, f)``."""
        return then(self, f)

    def and_then[U, E](
        self: Future[Result[T, E]],
        f: Callable[[T], Future[Result[U, E]]],
    ) -> Future[Result[U, E]]:
        """Same as ``and_then(self, f)``."""
        return and_then(self, f)


def spawn[T](future: Future[T] | Executor[T]) -> Task[T]:
    """Run a future's executor immediately and return a Task for it.

    The executor receives ``resolve`` and ``reject``. If it returns a
    callable, that becomes the task's cancel callback. If the executor
    raises, the task is rejected with the exception.

    Args:
        future: A Future, or a bare executor function.

    Returns:
        A live Task owning the new computation.
    """
    state: _TaskState[T] = _TaskState()
    executor = getattr(future, 'executor', future)
    logger.debug('task.spawned', task_id=id(state), executor=getattr(executor, '__qualname__', type(executor).__name__))
    try:
        canceller = future(Resolve(state), Reject(state))
    except Exception as exc:
        logger.debug('task.executor_raised', task_id=id(state), error=repr(exc))
        state.settle(TaskStatus.REJECTED, exc)
    else:
        if callable(canceller):
            state.canceller = canceller
    return Task(state)


# --- Combinators ---


def _forward[T](resolve: Resolve[T], reject: Reject) -> Callable[[_TaskState[T]], None]:
    """Build a callback that copies a settled task's outcome onto another task."""

    def forward(state: _TaskState[T]) -> None:
        if state.status is TaskStatus.REJECTED:
            reject(state.outcome)
        else:
            resolve(state.outcome)

    return forward


def _start_stage[U](
    current: Mut[Task[Any]],
    make: Callable[[], Future[U]],
    resolve: Resolve[U],
    reject: Reject,
) -> None:
    """Spawn the follow-up future and retarget cancellation at it."""
    if resolve.cancelled:
        return
    try:
        task = spawn(make())
    except Exception as exc:
        reject(exc)
        return
    current.value = task
    task._on_settled(_forward(resolve, reject))


def map[T, U](fut: Future[T], f: Callable[[T], U]) -> Future[U]:  # noqa: A001
    """Transform the value of a future with f.

    Cancelling the resulting task cancels the source task. A rejection of
    the source, or an exception raised by f, rejects the result.

    Examples:
        >>> task = spawn(map(ready(2), lambda x: x * 10))
        >>> task.use().wait()
        20
    """

    def executor(resolve: Resolve[U], reject: Reject) -> Canceller:
        task = spawn(fut)

        def on_source(state: _TaskState[T]) -> None:
            if state.status is TaskStatus.REJECTED:
                reject(state.outcome)
                return
            try:
                value = f(state.outcome)
            except Exception as exc:
                reject(exc)
                return
            resolve(value)

        task._on_settled(on_source)
        return task.cancel

    return Future(executor)


def then[T, U](fut: Future[T], f: Callable[[T], Future[U]]) -> Future[U]:
    """Chain a future-returning function after fut.

    Once fut resolves, the future returned by f is spawned and its outcome
    becomes the outcome of the result. Cancelling the resulting task cancels
    whichever stage is currently running.
    """

    def executor(resolve: Resolve[U], reject: Reject) -> Canceller:
        current: Mut[Task[Any]] = Mut(spawn(fut))

        def on_source(state: _TaskState[T]) -> None:
            if state.status is TaskStatus.REJECTED:
                reject(state.outcome)
                return
            _start_stage(current, lambda: f(state.outcome), resolve, reject)

        current.value._on_settled(on_source)
        return lambda: current.value.cancel()

    return Future(executor)


def and_then[T, U, E](
    fut: Future[Result[T, E]],
    f: Callable[[T], Future[Result[U, E]]],
) -> Future[Result[U, E]]:
    """Chain a Result-producing future after another, short-circuiting on Err.

    If fut resolves with Ok(v), the future returned by f(v) runs next. If it
    resolves with Err(e), the result resolves with Err(e) and f is never
    called. A source value that is not a Result rejects with TypeError.
    Cancellation follows then().
    """

    def executor(resolve: Resolve[Result[U, E]], reject: Reject) -> Canceller:
        current: Mut[Task[Any]] = Mut(spawn(fut))

        def on_source(state: _TaskState[Result[T, E]]) -> None:
            if state.status is TaskStatus.REJECTED:
                reject(state.outcome)
                return
            result = state.outcome
            if not isinstance(result, Result):
                reject(TypeError(f'and_then expected a Result, got {type(result).__name__}'))
                return
            try:
                obj = result.to_object()
            except OwnershipViolationError as exc:
                reject(exc)
                return
            if not obj['ok']:
                resolve(Err(obj['value']))
                return
            value = obj['value']
            _start_stage(current, lambda: f(value), resolve, reject)

        current.value._on_settled(on_source)
        return lambda: current.value.cancel()

    return Future(executor)


# --- Constructors ---


def _own[T](value: T) -> T:
    """Move a consume-once container into a new handle; other values pass through."""
    if isinstance(value, Linear):
        return value.drop()
    return value


def ready[T](value: T) -> Future[T]:
    """A future that resolves with value as soon as it is spawned.

    An Option, Result or Task value is moved into the first spawned task, so
    spawning the future again rejects with OwnershipViolationError. Use
    ready_with() for a future that can be spawned any number of times.
    """

    def executor(resolve: Resolve[T], reject: Reject) -> None:
        resolve(_own(value))

    return Future(executor)


def ready_with[T](factory: Callable[[], T]) -> Future[T]:
    """A future that resolves with a fresh factory() on every spawn.

    Examples:
        >>> fut = ready_with(lambda: Ok(1))
        >>> spawn(fut).use().wait().unwrap() + spawn(fut).use().wait().unwrap()
        2
    """

    def executor(resolve: Resolve[T], reject: Reject) -> None:
        resolve(factory())

    return Future(executor)


def failed(reason: Any) -> Future[Any]:
    """A future that rejects with reason as soon as it is spawned."""

    def executor(resolve: Resolve[Any], reject: Reject) -> None:
        reject(reason)

    return Future(executor)


def delay[T](
    seconds: float,
    value: T = None,  # type: ignore[assignment]
    *,
    factory: Callable[[], T] | None = None,
) -> Future[T]:
    """A future that resolves with value after a number of seconds.

    The wait runs on a daemon timer thread. Cancelling the task stops the
    timer; a timer that already fired does not resolve a cancelled task.
    A container value is owned as in ready(); pass ``factory`` instead to
    build the value when the timer fires, once per spawn. An exception
    raised by the factory rejects the task.
    """

    def executor(resolve: Resolve[T], reject: Reject) -> Canceller:
        held = value if factory is not None else _own(value)

        def fire() -> None:
            if resolve.cancelled:
                return
            if factory is None:
                resolve(held)
                return
            try:
                produced = factory()
            except Exception as exc:
                reject(exc)
                return
            resolve(produced)

        timer = threading.Timer(seconds, fire)
        timer.daemon = True
        timer.start()
        return timer.cancel

    return Future(executor)


def from_coroutine[T](
    task_group: TaskGroup,
    fn: Callable[..., Awaitable[T]],
    *args: Any,
) -> Future[T]:
    """A future that runs an async function in an anyio task group.

    The coroutine runs inside its own CancelScope; cancelling the task
    cancels the scope. Cancel from the event loop thread that owns the
    task group. An exception raised by fn rejects the task.

    Example:
        ```python
        async with anyio.create_task_group() as tg:
            task = spawn(from_coroutine(tg, fetch, url))
            body = await task.use()
        ```
    """

    def executor(resolve: Resolve[T], reject: Reject) -> Canceller:
        scope = anyio.CancelScope()

        async def run() -> None:
            with scope:
                try:
                    value = await fn(*args)
                except Exception as exc:
                    reject(exc)
                    return
                resolve(value)

        task_group.start_soon(run)
        return scope.cancel

    return Future(executor)
