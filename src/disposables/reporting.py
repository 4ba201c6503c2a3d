"""Reporting of errors that were swallowed by the best-effort disposal
functions.

The best-effort functions (`try_dispose()`, `try_dispose_async()` and the
error paths of the scoped helpers) never raise errors from release methods.
Instead, they pass the error to a process-wide handler that does nothing by
default. Install a handler with `set_ignored_error_handler()` if you want to
know about these errors, e.g.::

    from disposables import log_ignored_error, set_ignored_error_handler

    set_ignored_error_handler(log_ignored_error)
"""

import sys

from colorama import init, Fore, Style
from contextlib import contextmanager
from logging import getLogger
from typing import Callable, Iterator, Optional

from .utils import nop

__all__ = (
    "IgnoredErrorHandler",
    "get_ignored_error_handler",
    "ignore_error",
    "log_ignored_error",
    "print_ignored_error",
    "reporting_ignored_errors_to",
    "set_ignored_error_handler",
)

#: Type alias for functions that are notified about ignored errors
IgnoredErrorHandler = Callable[[BaseException], None]

#: Name of the attribute that marks errors that were already reported
_REPORTED_MARKER = "__disposables_reported__"

log = getLogger(__name__)

_handler: IgnoredErrorHandler = nop

#: Whether colorama was already set up for the console by `print_ignored_error()`
_colorama_initialized = False


def get_ignored_error_handler() -> IgnoredErrorHandler:
    """Returns the handler that is currently notified about ignored errors."""
    return _handler


def set_ignored_error_handler(
    handler: Optional[IgnoredErrorHandler],
) -> IgnoredErrorHandler:
    """Sets the handler that will be notified about ignored errors.

    The handler is process-wide; the last call wins.

    Parameters:
        handler: the new handler; `None` restores the default handler that
            does nothing

    Returns:
        the previous handler
    """
    global _handler

    previous = _handler
    _handler = handler if handler is not None else nop
    return previous


@contextmanager
def reporting_ignored_errors_to(
    handler: Optional[IgnoredErrorHandler],
) -> Iterator[IgnoredErrorHandler]:
    """Context manager that installs a handler for ignored errors when the
    context is entered and restores the previous handler when the context is
    exited.
    """
    previous = set_ignored_error_handler(handler)
    try:
        yield get_ignored_error_handler()
    finally:
        set_ignored_error_handler(previous)


def ignore_error(error: Optional[BaseException]) -> None:
    """Ignores the given error, notifying the handler of ignored errors
    about it.

    The handler is notified at most once for each error instance, even if the
    same instance is ignored multiple times. Errors raised by the handler
    itself are logged and do not propagate.

    Parameters:
        error: the error to ignore
    """
    handler = _handler
    if error is None or handler is nop:
        return

    if getattr(error, _REPORTED_MARKER, False):
        return

    try:
        setattr(error, _REPORTED_MARKER, True)
    except AttributeError:
        # Exception classes with __slots__ cannot be marked
        pass

    try:
        handler(error)
    except Exception:
        log.exception("Handler of ignored errors raised an exception")


def log_ignored_error(error: BaseException) -> None:
    """Handler for ignored errors that logs the error with its traceback."""
    log.warning("Ignored error while disposing: %r", error, exc_info=error)


def print_ignored_error(error: BaseException) -> None:
    """Handler for ignored errors that prints a single, coloured line about
    the error to the standard error stream.
    """
    global _colorama_initialized

    if not _colorama_initialized:
        init()
        _colorama_initialized = True

    print(
        "{0}✖{1} {2}{3}{4}: {5}".format(
            Fore.RED + Style.BRIGHT,
            Style.RESET_ALL,
            Fore.YELLOW,
            type(error).__name__,
            Style.RESET_ALL,
            error,
        ),
        file=sys.stderr,
    )
