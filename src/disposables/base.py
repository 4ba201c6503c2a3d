"""Base classes for objects that can be disposed."""

from abc import ABCMeta, abstractmethod

from .aio import adisposing
from .errors import throw_if_disposed
from .sync import disposing

__all__ = ("AsyncDisposable", "Disposable")


class Disposable(metaclass=ABCMeta):
    """Base class for objects that hold resources that must be released
    explicitly.

    Subclasses must implement `_dispose()`, which is called at most once, the
    first time `dispose()` is called. Instances may also be used as context
    managers; they are disposed when the context is exited.
    """

    _disposed: bool = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, tb) -> bool:
        return disposing(self).__exit__(exc_type, exc_value, tb)

    @abstractmethod
    def _dispose(self) -> None:
        """Releases the resources held by this object."""
        raise NotImplementedError

    def _ensure_not_disposed(self) -> None:
        """Raises a `DisposedError` if the object was already disposed."""
        throw_if_disposed(self)

    def dispose(self) -> None:
        """Disposes the object. Calling this method again after the first
        call has no effect.
        """
        if not self._disposed:
            self._disposed = True
            self._dispose()

    @property
    def is_disposed(self) -> bool:
        """Returns whether the object was already disposed."""
        return self._disposed


class AsyncDisposable(metaclass=ABCMeta):
    """Base class for objects that hold resources that must be released
    explicitly and whose release involves waiting.

    Subclasses must implement `_dispose()`, which is awaited at most once, the
    first time `dispose()` is called. Instances may also be used as async
    context managers; they are disposed when the context is exited.
    """

    _disposed: bool = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, tb) -> bool:
        return await adisposing(self).__aexit__(exc_type, exc_value, tb)

    @abstractmethod
    async def _dispose(self) -> None:
        """Releases the resources held by this object."""
        raise NotImplementedError

    def _ensure_not_disposed(self) -> None:
        """Raises a `DisposedError` if the object was already disposed."""
        throw_if_disposed(self)

    async def dispose(self) -> None:
        """Disposes the object. Calling this method again after the first
        call has no effect.
        """
        if not self._disposed:
            self._disposed = True
            await self._dispose()

    @property
    def is_disposed(self) -> bool:
        """Returns whether the object was already disposed."""
        return self._disposed
