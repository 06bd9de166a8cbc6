"""tryutil - Result container for computations that may fail.

Wraps a computation that may raise into a Result holding either its value
(Ok) or the exception it raised (Err), and composes Results without checking
for failure after every step.

Quick Start:
    >>> from tryutil import Result
    >>>
    >>> squared = (
    ...     Result.of(lambda: "100")
    ...     .map(int)
    ...     .flat_map(lambda i: Result.of(lambda: i * i))
    ... )
    >>> squared.get()
    10000
    >>> Result.of(lambda: 10 / 0).get_or_else(-1)
    -1

Selective Recovery:
    >>> from tryutil import Err
    >>> (
    ...     Err(OSError("disk"))
    ...     .recover(TimeoutError, lambda e: "timed out")
    ...     .recover(OSError, lambda e: "io failure")
    ...     .get()
    ... )
    'io failure'

Decorator:
    >>> from tryutil import attempt
    >>>
    >>> @attempt
    ... def load(path: str) -> str:
    ...     with open(path) as fh:
    ...         return fh.read()
    >>>
    >>> load("/nonexistent").is_err()
    True
"""

from .config import (
    LoggingSettings,
    TryutilSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)
from .errors import ResultStateError, WrappedFailureError
from .result import Err, Ok, Result, attempt, sequence, traverse

__version__ = "1.0.0"

__all__ = [
    # Result container
    "Result", "Ok", "Err", "attempt",
    # Collection ops
    "sequence", "traverse",
    # Errors
    "WrappedFailureError", "ResultStateError",
    # Configuration
    "TryutilSettings", "LoggingSettings", "get_settings", "clear_settings_cache", "configure_logging",
]
