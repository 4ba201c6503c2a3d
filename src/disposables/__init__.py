"""Functions for disposing objects, collections of objects, factories and
awaitables of objects, synchronously or asynchronously.
"""

from .aio import adisposing, dispose_async, try_dispose_async, using_async
from .base import AsyncDisposable, Disposable
from .classify import Shape, classify, is_awaitable, is_disposable, is_disposed
from .errors import DisposedError, throw_if_disposed
from .reporting import (
    get_ignored_error_handler,
    ignore_error,
    log_ignored_error,
    print_ignored_error,
    reporting_ignored_errors_to,
    set_ignored_error_handler,
)
from .sync import dispose, disposing, try_dispose, using
from .version import __version__, __version_info__

__all__ = (
    "AsyncDisposable",
    "Disposable",
    "DisposedError",
    "Shape",
    "adisposing",
    "classify",
    "dispose",
    "dispose_async",
    "disposing",
    "get_ignored_error_handler",
    "ignore_error",
    "is_awaitable",
    "is_disposable",
    "is_disposed",
    "log_ignored_error",
    "print_ignored_error",
    "reporting_ignored_errors_to",
    "set_ignored_error_handler",
    "throw_if_disposed",
    "try_dispose",
    "try_dispose_async",
    "using",
    "using_async",
    "__version__",
    "__version_info__",
)
