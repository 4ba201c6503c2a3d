"""Synchronous disposal functions."""

from logging import getLogger
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, overload

from .aio import release_after, try_dispose_async, wait_quietly
from .classify import Shape, is_awaitable
from .reporting import ignore_error
from .traversal import Traversal
from .utils.concurrency import spawn_detached

__all__ = ("dispose", "disposing", "try_dispose", "using")

T = TypeVar("T")
R = TypeVar("R")

log = getLogger(__name__)


def _detach(shape: Optional[Shape], result: Any) -> None:
    """Sends the awaitable parts of a dispatched candidate to the background
    so that the synchronous caller does not have to wait for them.
    """
    if shape is Shape.PENDING:
        log.debug("Disposing awaitable %r in the background", result)
        spawn_detached(try_dispose_async, result)
    elif is_awaitable(result):
        spawn_detached(wait_quietly, result)


def dispose(*candidates: Any) -> None:
    """Disposes the given objects.

    Accepts:

      - objects with a ``dispose()``, ``destroy()``, ``close()`` or
        ``aclose()`` method, or a ``delete()`` method that can be called
        without arguments
      - functions that return any of the other cases; they are called with
        no arguments
      - iterables of any of the other cases
      - awaitables resolving to any of the other cases. These are disposed
        in the background with `try_dispose_async()`; errors raised by them
        are ignored.

    Generators are closed instead of being iterated, so
    ``dispose(r for r in resources)`` does not dispose the resources. Pass a
    list instead. Coroutines are never closed; they are awaited in the
    background like any other awaitable.

    Each object is disposed at most once, no matter how many times it is
    reachable from the arguments. Objects that report themselves as already
    disposed are skipped. When a release method returns an awaitable, it is
    waited for in the background.

    The first error raised by a release method is propagated to the caller
    and the remaining objects are not disposed.

    Parameters:
        candidates: the objects to dispose
    """
    traversal = Traversal(candidates)
    for candidate in traversal:
        _detach(*traversal.step(candidate))


def try_dispose(*candidates: Any) -> None:
    """Disposes the given objects, ignoring any error.

    Accepts the same objects as `dispose()`. Errors are passed to the handler
    of ignored errors and processing continues with the next object.

    Parameters:
        candidates: the objects to dispose
    """
    traversal = Traversal(candidates)
    for candidate in traversal:
        try:
            _detach(*traversal.step(candidate))
        except Exception as ex:
            ignore_error(ex)


@overload
def using(value: T, func: Callable[[T], Awaitable[R]]) -> Awaitable[R]:
    ...


@overload
def using(value: T, func: Awaitable[R]) -> Awaitable[R]:
    ...


@overload
def using(value: T, func: Callable[[T], R]) -> R:
    ...


def using(value, func):
    """Calls a function with the given value and disposes the value after the
    function returns.

    The value is disposed with `dispose()` when the function returns normally
    and with `try_dispose()` when it raises an exception, which is then
    propagated. An error raised while disposing the value therefore never
    replaces the error raised by the function.

    When the function returns an awaitable (e.g., it is an async function),
    or `func` is an awaitable instead of a function, disposal is deferred
    until the awaitable completes. In this case the return value is an
    awaitable that completes after the value was disposed.

    Parameters:
        value: the object to dispose after the function returns
        func: the function to call with the object, or an awaitable to wait
            for before disposing the object

    Returns:
        the result of the function
    """
    if not callable(func):
        return release_after(value, func)

    try:
        result = func(value)
    except BaseException:
        try_dispose(value)
        raise

    if is_awaitable(result):
        return release_after(value, result)

    dispose(value)
    return result


class disposing(Generic[T]):
    """Context manager that disposes an object when the context is exited.

    The object is disposed with `dispose()` when the context is exited
    normally and with `try_dispose()` when it is exited with an exception,
    which is then propagated::

        with disposing(open_connection()) as conn:
            conn.send(...)
    """

    def __init__(self, value: T):
        self._value = value

    def __enter__(self) -> T:
        return self._value

    def __exit__(self, exc_type, exc_value, tb) -> bool:
        if exc_type is None:
            dispose(self._value)
        else:
            try_dispose(self._value)
        return False
