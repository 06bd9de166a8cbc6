"""Exceptions raised when leaving the Result algebra.

- WrappedFailureError: raised by get() on an Err, carries the original cause
- ResultStateError: raised when reading the failure side of an Ok
"""

from __future__ import annotations


class WrappedFailureError(RuntimeError):
    """Exception wrapping the cause of a failed Result.

    The wrapped exception is kept as-is (same object) in ``cause`` and is
    chained as ``__cause__`` when raised via ``Result.get()``.

    Example:
        >>> err = ValueError("bad input")
        >>> exc = WrappedFailureError(err)
        >>> exc.cause is err
        True
    """

    __slots__ = ("cause",)

    def __init__(self, cause: BaseException, message: str | None = None) -> None:
        self.cause = cause
        super().__init__(message or f"Result failed with {type(cause).__name__}: {cause}")


class ResultStateError(RuntimeError):
    """Raised when an accessor is called on the wrong Result variant."""
