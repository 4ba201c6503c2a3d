from typing import Any, Optional

from .classify import is_disposed

__all__ = ("DisposedError", "throw_if_disposed")


class DisposedError(RuntimeError):
    """Error thrown when an object is used after it was disposed, or when an
    object that was expected to be alive is `None`.
    """

    pass


def throw_if_disposed(value: Any, name: Optional[str] = None) -> None:
    """Throws an error if the given object is `None` or reports itself as
    disposed.

    Parameters:
        value: the object to check
        name: the name of the object to use in the error message; defaults to
            the name of the class of the object

    Raises:
        DisposedError: if the object is `None` or it is disposed
    """
    if value is None:
        raise DisposedError("{0} is None".format(name or "object"))

    if is_disposed(value):
        raise DisposedError("{0} is disposed".format(name or type(value).__name__))
