"""Asynchronous disposal functions."""

from anyio import CancelScope, create_task_group
from outcome import Error
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

from .classify import Shape, classify, is_awaitable
from .reporting import ignore_error
from .traversal import Traversal
from .utils.concurrency import OutcomeCollector

__all__ = (
    "adisposing",
    "dispose_async",
    "release_after",
    "try_dispose_async",
    "using_async",
    "wait_quietly",
)

T = TypeVar("T")
R = TypeVar("R")


async def _dispose_all(candidates: Any, *, best_effort: bool) -> None:
    traversal = Traversal(candidates)
    error = None

    async with create_task_group() as group:
        releases = OutcomeCollector(group)

        # Errors must not escape from the body of the task group as that
        # would cancel the releases that are already in progress
        try:
            for candidate in traversal:
                try:
                    shape, result = traversal.step(candidate)
                    if shape is Shape.PENDING:
                        traversal.push(await result)
                    elif is_awaitable(result):
                        releases.start_soon(result)
                except Exception as ex:
                    if not best_effort:
                        raise
                    ignore_error(ex)
        except Exception as ex:
            error = ex

    if error is None and not best_effort:
        failures = [
            outcome for outcome in releases.outcomes if isinstance(outcome, Error)
        ]
        for failure in failures[1:]:
            ignore_error(failure.error)
        if failures:
            failures[0].unwrap()
    else:
        for release_error in releases.errors:
            ignore_error(release_error)
        if error is not None:
            raise error


async def dispose_async(*candidates: Any) -> None:
    """Disposes the given objects, asynchronously.

    Accepts:

      - objects with a ``dispose()``, ``destroy()``, ``close()`` or
        ``aclose()`` method, or a ``delete()`` method that can be called
        without arguments. When the method returns an awaitable, it is
        awaited concurrently with the remaining releases.
      - awaitables; they are awaited and their results are disposed
      - functions that return any of the other cases; they are called with
        no arguments
      - iterables of any of the other cases

    Generators are closed instead of being iterated; coroutines are awaited
    instead of being closed.

    Each object is disposed at most once, no matter how many times it is
    reachable from the arguments. Objects that report themselves as already
    disposed are skipped.

    The first error raised by a release method or an awaitable stops the
    processing of the remaining objects. Releases that were already started
    are waited for, and the error is then re-raised.

    Parameters:
        candidates: the objects to dispose
    """
    await _dispose_all(candidates, best_effort=False)


async def try_dispose_async(*candidates: Any) -> None:
    """Disposes the given objects asynchronously, ignoring any error.

    Accepts the same objects as `dispose_async()`. Errors are passed to the
    handler of ignored errors and processing continues with the next object.
    """
    await _dispose_all(candidates, best_effort=True)


async def wait_quietly(awaitable: Awaitable[Any]) -> None:
    """Waits for the given awaitable, passing its error to the handler of
    ignored errors if it fails.
    """
    try:
        await awaitable
    except Exception as ex:
        ignore_error(ex)


async def _try_dispose_shielded(value: Any) -> None:
    with CancelScope(shield=True):
        await try_dispose_async(value)


async def release_after(value: Any, awaitable: Awaitable[R]) -> R:
    """Waits for the given awaitable and then disposes the given value.

    The value is disposed with `dispose_async()` if the awaitable succeeds
    and with `try_dispose_async()` if it fails, so the original error is
    never replaced by an error of the release.

    Returns:
        the result of the awaitable
    """
    try:
        result = await awaitable
    except BaseException:
        await _try_dispose_shielded(value)
        raise

    await dispose_async(value)
    return result


async def using_async(
    value: Any, func: Union[Callable[[Any], Union[R, Awaitable[R]]], Awaitable[R]]
) -> R:
    """Calls a function with the given value and disposes the value when the
    function completes.

    If the value is awaitable, it is awaited first. If it is a factory, it is
    called with no arguments, and its result is awaited if needed; the
    resulting object is then used in place of the value.

    Parameters:
        value: the object to dispose when the function completes, or an
            awaitable or factory producing the object
        func: the function to call with the object. It may be a regular or
            an async function. It may also be an awaitable that is awaited
            instead of calling a function.

    Returns:
        the result of the function
    """
    if is_awaitable(value):
        value = await value

    if classify(value).shape is Shape.FACTORY:
        value = value()
        if is_awaitable(value):
            value = await value

    try:
        result = func(value) if callable(func) else func
    except BaseException:
        await _try_dispose_shielded(value)
        raise

    if is_awaitable(result):
        return await release_after(value, result)  # type: ignore

    await dispose_async(value)
    return result  # type: ignore


class adisposing(Generic[T]):
    """Asynchronous context manager that disposes an object when the context
    is exited.

    The object is disposed with `dispose_async()` when the context is exited
    normally and with `try_dispose_async()` when it is exited with an
    exception, which is then propagated.
    """

    def __init__(self, value: T):
        self._value = value

    async def __aenter__(self) -> T:
        return self._value

    async def __aexit__(self, exc_type, exc_value, tb) -> bool:
        if exc_type is None:
            await dispose_async(self._value)
        else:
            await _try_dispose_shielded(self._value)
        return False
