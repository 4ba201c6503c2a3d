"""Work queue shared by the synchronous and asynchronous disposal functions."""

from collections import deque
from typing import Any, Deque, Dict, Iterable, Iterator, Optional, Tuple

from .classify import Shape, classify, elements_of, is_scalar

__all__ = ("Traversal",)


class Traversal:
    """Breadth-first work queue of disposal candidates.

    The queue remembers every object that was dispatched from it, by identity,
    so each object is dispatched at most once during the lifetime of the
    traversal, no matter how many times it is reachable from the candidates.
    This also terminates cycles such as a list that contains itself.

    Iterating over the traversal pops candidates from the queue until it is
    exhausted, including candidates that were added while iterating.
    """

    _queue: Deque[Any]
    _seen: Dict[int, Any]

    def __init__(self, candidates: Iterable[Any] = ()):
        """Constructor.

        Parameters:
            candidates: the initial contents of the queue
        """
        self._queue = deque()

        # Maps object IDs to the objects themselves. Keeping a reference
        # ensures that IDs are not recycled while the traversal is alive.
        self._seen = {}

        self.extend(candidates)

    def __iter__(self) -> Iterator[Any]:
        queue = self._queue
        while queue:
            yield queue.popleft()

    def extend(self, candidates: Iterable[Any]) -> None:
        """Appends multiple candidates to the end of the queue."""
        for candidate in candidates:
            self.push(candidate)

    def has_seen(self, candidate: Any) -> bool:
        """Returns whether the given candidate has already been dispatched."""
        return id(candidate) in self._seen

    def push(self, candidate: Any) -> None:
        """Appends a candidate to the end of the queue unless it is `None`,
        a scalar or an object that has already been dispatched.
        """
        if candidate is None or is_scalar(candidate) or self.has_seen(candidate):
            return
        self._queue.append(candidate)

    def step(self, candidate: Any) -> Tuple[Optional[Shape], Any]:
        """Dispatches a single candidate popped from the queue.

        Releasable objects are released by calling their release method.
        The elements of sequences and the return values of factories are
        appended to the queue. Pending candidates are *not* awaited; they are
        handed back to the caller, which decides whether to wait for them or
        to run them in the background.

        Parameters:
            candidate: the candidate to dispatch

        Returns:
            the shape of the candidate (`None` if it was dispatched earlier)
            and an associated value: the return value of the release method
            for releasable objects, the candidate itself for pending ones and
            `None` otherwise
        """
        if self.has_seen(candidate):
            return None, None

        self._seen[id(candidate)] = candidate
        shape, release = classify(candidate)

        if shape is Shape.RELEASABLE:
            return shape, release()  # type: ignore
        elif shape is Shape.PENDING:
            return shape, candidate
        elif shape is Shape.SEQUENCE:
            self.extend(elements_of(candidate))
        elif shape is Shape.FACTORY:
            self.push(candidate())

        return shape, None
