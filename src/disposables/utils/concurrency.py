"""Utility functions related to concurrency management."""

from anyio import run
from anyio.abc import TaskGroup
from asyncio import AbstractEventLoop, Task, get_running_loop
from outcome import Error, Outcome, Value
from sniffio import AsyncLibraryNotFoundError, current_async_library
from threading import Thread
from typing import Any, Awaitable, Callable, List, Optional, Set

__all__ = ("OutcomeCollector", "spawn_detached")

#: Detached asyncio tasks; the event loop keeps weak references to its tasks
#: only so we need to hold on to them until they are done
_detached_tasks: Set[Task] = set()


def _get_running_asyncio_loop() -> Optional[AbstractEventLoop]:
    try:
        return get_running_loop()
    except RuntimeError:
        return None


def spawn_detached(func: Callable[..., Awaitable[Any]], *args: Any) -> None:
    """Runs an async function in the background without waiting for it to
    complete.

    When called from a trio task, the function is spawned as a trio system
    task. When an asyncio event loop is running in the current thread, the
    function is wrapped in a new asyncio task. When no event loop is running,
    the function is executed in a new event loop on a daemon thread so the
    caller does not have to wait for it.

    Parameters:
        func: the async function to run. It should not raise exceptions as
            there is nobody who could receive them.
        args: positional arguments to pass to the function
    """
    try:
        library = current_async_library()
    except AsyncLibraryNotFoundError:
        library = None

    if library == "trio":
        from trio.lowlevel import spawn_system_task

        spawn_system_task(func, *args)
        return

    loop = _get_running_asyncio_loop()
    if loop is not None:
        task = loop.create_task(func(*args))
        _detached_tasks.add(task)
        task.add_done_callback(_detached_tasks.discard)
    else:
        Thread(target=run, args=(func, *args), daemon=True).start()


class OutcomeCollector:
    """Object that waits for awaitables in the tasks of a task group and
    collects their outcomes in the order in which they were started.

    Exceptions raised by the awaitables are captured in the outcomes instead
    of being propagated, so they never cancel the task group. Cancellation is
    not captured.
    """

    _group: TaskGroup
    _outcomes: List[Optional[Outcome]]

    def __init__(self, group: TaskGroup):
        """Constructor.

        Parameters:
            group: the task group in which the awaitables will be waited for
        """
        self._group = group
        self._outcomes = []

    @property
    def outcomes(self) -> List[Optional[Outcome]]:
        """The outcomes collected so far, in the order in which the
        corresponding awaitables were started. Awaitables that have not
        settled yet are represented by `None`.
        """
        return self._outcomes

    @property
    def errors(self) -> List[BaseException]:
        """The exceptions raised by the awaitables that have settled so far,
        in the order in which the awaitables were started.
        """
        return [
            outcome.error for outcome in self._outcomes if isinstance(outcome, Error)
        ]

    def start_soon(self, awaitable: Awaitable[Any]) -> None:
        """Starts waiting for the given awaitable in a new task of the task
        group.
        """
        index = len(self._outcomes)
        self._outcomes.append(None)
        self._group.start_soon(self._wait_for, awaitable, index)

    async def _wait_for(self, awaitable: Awaitable[Any], index: int) -> None:
        try:
            value = await awaitable
        except Exception as ex:
            self._outcomes[index] = Error(ex)
        else:
            self._outcomes[index] = Value(value)
