"""Classification of arbitrary values into the shapes that the disposal
functions know how to handle.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from inspect import Parameter, isawaitable, iscoroutine, isroutine, signature
from typing import Any, Callable, NamedTuple, Optional

__all__ = (
    "Classification",
    "DISPOSED_MARKERS",
    "RELEASE_CAPABILITIES",
    "Shape",
    "classify",
    "elements_of",
    "is_awaitable",
    "is_disposable",
    "is_disposed",
    "is_scalar",
)

#: Names of the attributes or methods that mark an object as already released
DISPOSED_MARKERS = ("is_disposed", "closed")

#: Names of the methods that release an object, in order of precedence
RELEASE_CAPABILITIES = ("dispose", "destroy", "delete", "close", "aclose")

#: Types whose instances are never disposed and never tracked by identity
_SCALAR_TYPES = (str, bytes, bytearray, memoryview, int, float, complex)

_REQUIRED_PARAMETER_KINDS = (
    Parameter.POSITIONAL_ONLY,
    Parameter.POSITIONAL_OR_KEYWORD,
    Parameter.KEYWORD_ONLY,
)


class Shape(Enum):
    """Enum representing the possible shapes of a value passed to one of the
    disposal functions.
    """

    NULLISH = "nullish"
    RELEASED = "released"
    RELEASABLE = "releasable"
    PENDING = "pending"
    SEQUENCE = "sequence"
    FACTORY = "factory"
    OPAQUE = "opaque"


class Classification(NamedTuple):
    """Result of classifying a single value."""

    shape: Shape

    #: The bound release method of the value if its shape is `RELEASABLE`
    release: Optional[Callable[[], Any]] = None


def _accepts_no_arguments(func: Callable[..., Any]) -> bool:
    """Returns whether the given callable can be invoked without arguments.

    Callables whose signature cannot be inspected are treated as if they
    required arguments.
    """
    try:
        parameters = signature(func).parameters.values()
    except (TypeError, ValueError):
        return False

    return not any(
        param.kind in _REQUIRED_PARAMETER_KINDS and param.default is Parameter.empty
        for param in parameters
    )


def _find_release_method(value: Any) -> Optional[Callable[[], Any]]:
    # close() on a coroutine abandons the computation instead of releasing it.
    # Generators are released with close() and never iterated
    if iscoroutine(value):
        return None

    for name in RELEASE_CAPABILITIES:
        method = getattr(value, name, None)
        if not callable(method):
            continue
        if name == "delete" and not _accepts_no_arguments(method):
            continue
        return method

    return None


def is_scalar(value: Any) -> bool:
    """Returns whether the given value is a string, a bytes-like object or a
    number. Scalars are never disposed and never tracked by identity.
    """
    return isinstance(value, _SCALAR_TYPES)


def is_awaitable(value: Any) -> bool:
    """Returns whether the given value can be used in an ``await`` expression."""
    return isawaitable(value)


def is_disposable(value: Any) -> bool:
    """Returns whether the given value is a disposable object.

    An object is disposable if it has a ``dispose()``, ``destroy()``,
    ``close()`` or ``aclose()`` method, or a ``delete()`` method that can be
    called without arguments. Classes and plain functions are never disposable.
    """
    if value is None or is_scalar(value):
        return False
    if isinstance(value, type) or isroutine(value):
        return False
    return _find_release_method(value) is not None


def is_disposed(value: Any) -> bool:
    """Returns whether the given value is `None` or reports itself as
    already released.

    An object reports itself as released when it has an ``is_disposed`` or
    ``closed`` attribute that is truthy, or a method with one of these names
    that returns a truthy value when called with no arguments.

    Errors raised by such a method are not masked.
    """
    if value is None:
        return True

    if isinstance(value, type):
        return False

    for name in DISPOSED_MARKERS:
        marker = getattr(value, name, None)
        if marker is None:
            continue
        if callable(marker):
            if marker():
                return True
        elif marker:
            return True

    return False


def elements_of(value: Any) -> Iterable[Any]:
    """Returns the elements of a value classified as a sequence. Mappings
    contribute their values, not their keys.
    """
    return value.values() if isinstance(value, Mapping) else value


def classify(value: Any) -> Classification:
    """Classifies the given value into one of the shapes handled by the
    disposal functions.

    The checks are performed in the following order; the first match wins:

      - ``None`` is `Shape.NULLISH`
      - scalars and classes are `Shape.OPAQUE`
      - objects reporting themselves as released are `Shape.RELEASED`
      - objects with a release method are `Shape.RELEASABLE`; the methods
        are probed in the order given by `RELEASE_CAPABILITIES`
      - awaitables are `Shape.PENDING`
      - iterables are `Shape.SEQUENCE`
      - remaining callables are `Shape.FACTORY`
      - everything else is `Shape.OPAQUE`

    Parameters:
        value: the value to classify

    Returns:
        the shape of the value, along with the bound release method if the
        value is releasable
    """
    if value is None:
        return Classification(Shape.NULLISH)

    if is_scalar(value) or isinstance(value, type):
        return Classification(Shape.OPAQUE)

    if is_disposed(value):
        return Classification(Shape.RELEASED)

    release = _find_release_method(value)
    if release is not None:
        return Classification(Shape.RELEASABLE, release)

    if isawaitable(value):
        return Classification(Shape.PENDING)

    if isinstance(value, Iterable):
        return Classification(Shape.SEQUENCE)

    if callable(value):
        return Classification(Shape.FACTORY)

    return Classification(Shape.OPAQUE)
