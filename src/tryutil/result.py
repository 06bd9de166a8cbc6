"""Result container for computations that may raise.

A Result is either Ok (holds the value a computation produced) or Err (holds
the exception it raised). Operators compose Results without checking the
failure state after each step:

- Construction: Result.of, Result.of_checked, attempt, Ok, Err
- Functor: map, map_err
- Monad: flat_map (bind)
- Recovery: get_or_else, recover, recover_with (optionally type-guarded)
- Side effects: on_success, on_failure
- Unwrapping: get, get_cause, get_or_else_throw

Exceptions raised inside callbacks given to of/map/flat_map/map_err/recover/
recover_with are captured into a new Err. Callbacks given to on_success,
on_failure and match are not guarded.
"""

from __future__ import annotations

import copy
import logging
from functools import lru_cache, wraps
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    NoReturn,
    ParamSpec,
    TypeVar,
    final,
    overload,
)

from pydantic import ValidationError

from .config.settings import get_settings
from .errors import ResultStateError, WrappedFailureError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

P = ParamSpec("P")
T = TypeVar("T")  # Success type
U = TypeVar("U")  # Mapped success type
X = TypeVar("X", bound=BaseException)  # Matched failure type

logger = logging.getLogger("tryutil.result")

_OK = True
_ERR = False


@final
class Result(Generic[T]):
    """Outcome of a computation: a value (Ok) or the exception it raised (Err).

    Closed two-variant sum type. The variant is fixed at construction and
    instances are immutable; every operator returns a new Result or the
    receiver itself.

    Examples:
        >>> Result.of(lambda: 10 / 0).get_or_else(-1)
        -1
        >>> Result.of(lambda: "100").map(int).flat_map(lambda i: Result.of(lambda: i * i))
        Ok(10000)
        >>> Err(KeyError("id")).recover(KeyError, lambda e: 0).get()
        0
    """

    __slots__ = ("_value", "_is_ok")

    def __init__(self, value: T | BaseException, is_ok: bool) -> None:
        """Private constructor. Use Ok(), Err() or Result.of() instead."""
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_is_ok", is_ok)

    def __init_subclass__(cls, **kwargs: Any) -> NoReturn:
        raise TypeError("Result has exactly two variants and cannot be subclassed")

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"Result is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"Result is immutable; cannot delete {name!r}")

    # Slot state can't be restored through __setattr__, so rebuild via __init__.
    def __reduce__(self) -> tuple[type[Result[T]], tuple[Any, bool]]:
        return (Result, (self._value, self._is_ok))

    def __copy__(self) -> Result[T]:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Result[T]:
        return Result(copy.deepcopy(self._value, memo), self._is_ok)

    # ─── Construction ──────────────────────────────────────────────────

    @staticmethod
    def of(fn: Callable[[], T]) -> Result[T]:
        """Run fn once. Ok(return value), or Err(exception) if it raises."""
        return _apply("of", fn)

    @staticmethod
    def of_checked(fn: Callable[[], T]) -> Result[T]:
        """Same capture as of(); for call sites documenting a checked failure channel."""
        return _apply("of_checked", fn)

    # ─── Type Checking ─────────────────────────────────────────────────

    def is_ok(self) -> bool:
        """Check if Result is Ok variant."""
        return self._is_ok

    def is_err(self) -> bool:
        """Check if Result is Err variant."""
        return not self._is_ok

    # ─── Functor Operations ────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Apply f to the Ok value. Signature: Result[T] → (T→U) → Result[U]

        A raise from f becomes Err. On Err, f is never called and the same
        cause is carried into the new Result.
        """
        if self._is_ok:
            return _apply("map", f, self._value)
        return Result(self._value, _ERR)

    def map_err(self, f: Callable[[BaseException], BaseException]) -> Result[T]:
        """Replace the cause of an Err with f(cause). Ok passes through."""
        if self._is_ok:
            return self
        try:
            cause = f(self._value)  # type: ignore[arg-type]
        except Exception as exc:
            return _captured("map_err", exc)
        if isinstance(cause, BaseException):
            return Result(cause, _ERR)
        return _captured("map_err", TypeError(f"map_err() callback must return an exception, got {type(cause).__name__}"))

    # ─── Monad Operations ──────────────────────────────────────────────

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Monadic bind (>>=). Chain operations that can fail.

        The Result returned by f is passed through as-is. A raise from f, or
        a return value that is not a Result, becomes Err.

        Example:
            >>> Ok("42").flat_map(lambda s: Result.of(lambda: int(s))).get()
            42
        """
        if self._is_ok:
            return _bind("flat_map", f, self._value)
        return Result(self._value, _ERR)

    # ─── Recovery ──────────────────────────────────────────────────────

    def get_or_else(self, default: T) -> T:
        """Extract Ok value or return default."""
        return self._value if self._is_ok else default  # type: ignore[return-value]

    @overload
    def recover(self, f: Callable[[BaseException], T], /) -> Result[T]: ...

    @overload
    def recover(self, match_type: type[X] | tuple[type[X], ...], f: Callable[[X], T], /) -> Result[T]: ...

    def recover(self, match_type: Any, f: Any = None, /) -> Result[T]:
        """Turn an Err into Ok(f(cause)).

        With a match_type (exception class or tuple of classes), only causes
        that are instances of it are recovered; others pass through so that
        several type-guarded recovers can be chained. A raise from f becomes
        a fresh Err.

        Example:
            >>> (Err(OSError("disk"))
            ...     .recover(TimeoutError, lambda e: "timeout")
            ...     .recover(OSError, lambda e: "io")
            ...     .get())
            'io'
        """
        match_type, f = _recovery_args("recover", match_type, f)
        if self._is_ok or not isinstance(self._value, match_type):
            return self
        return _apply("recover", f, self._value)

    @overload
    def recover_with(self, f: Callable[[BaseException], Result[T]], /) -> Result[T]: ...

    @overload
    def recover_with(self, match_type: type[X] | tuple[type[X], ...], f: Callable[[X], Result[T]], /) -> Result[T]: ...

    def recover_with(self, match_type: Any, f: Any = None, /) -> Result[T]:
        """Like recover(), but f returns a Result that replaces this one."""
        match_type, f = _recovery_args("recover_with", match_type, f)
        if self._is_ok or not isinstance(self._value, match_type):
            return self
        return _bind("recover_with", f, self._value)

    # ─── Side Effects ──────────────────────────────────────────────────

    def on_success(self, action: Callable[[T], object]) -> Result[T]:
        """Call action with Ok value for side effects, return self."""
        if self._is_ok:
            action(self._value)  # type: ignore[arg-type]
        return self

    def on_failure(self, action: Callable[[BaseException], object]) -> Result[T]:
        """Call action with Err cause for side effects, return self."""
        if not self._is_ok:
            action(self._value)  # type: ignore[arg-type]
        return self

    # ─── Value Extraction ──────────────────────────────────────────────

    def get(self) -> T:
        """Extract Ok value.

        Raises:
            WrappedFailureError: On Err, with the original cause attached
        """
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise WrappedFailureError(self._value) from self._value  # type: ignore[arg-type]

    def get_cause(self) -> BaseException:
        """Extract Err cause.

        Raises:
            ResultStateError: On Ok; check is_err() first
        """
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise ResultStateError(f"get_cause() on Ok: {self._value!r}")

    def get_or_else_throw(self, mapper: Callable[[BaseException], BaseException] | None = None) -> T:
        """Extract Ok value, or raise the cause (or mapper(cause)) on Err.

        Without a mapper the original exception object is raised unchanged.
        """
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        cause: BaseException = self._value  # type: ignore[assignment]
        if mapper is None:
            raise cause
        mapped = mapper(cause)
        if mapped is cause:
            raise cause
        raise mapped from cause

    # ─── Inspection & Conversion ───────────────────────────────────────

    def ok(self) -> T | None:
        """Value if Ok, None if Err."""
        return self._value if self._is_ok else None  # type: ignore[return-value]

    def err(self) -> BaseException | None:
        """Cause if Err, None if Ok."""
        return self._value if not self._is_ok else None  # type: ignore[return-value]

    def match(self, *, ok: Callable[[T], U], err: Callable[[BaseException], U]) -> U:
        """Exhaustive pattern match. Forces handling both Ok and Err."""
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]

    # ─── Dunder Methods ────────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __hash__ = lambda self: hash((self._is_ok, self._value))  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields value if Ok, nothing if Err."""
        if self._is_ok:
            yield self._value  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def Ok(value: T) -> Result[T]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(cause: BaseException) -> Result[Any]:  # noqa: N802
    """Construct Err variant (failure). The cause must be an exception instance."""
    if not isinstance(cause, BaseException):
        raise TypeError(f"Err() requires an exception instance, got {type(cause).__name__}")
    return Result(cause, _ERR)


def attempt(fn: Callable[P, T]) -> Callable[P, Result[T]]:
    """Decorator: make fn return a Result instead of raising.

    Example:
        >>> @attempt
        ... def parse(s: str) -> int:
        ...     return int(s)
        >>> parse("7")
        Ok(7)
        >>> parse("x").is_err()
        True
    """
    operation = f"attempt:{getattr(fn, '__qualname__', repr(fn))}"

    @wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
        return _apply(operation, fn, *args, **kwargs)

    return wrapper


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


def sequence(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Iterable[Result[T]] → Result[list[T]]. Fail-fast on first Err."""
    values: list[T] = []
    for r in results:
        if not r._is_ok:
            return Result(r._value, _ERR)
        values.append(r._value)  # type: ignore[arg-type]
    return Result(values, _OK)


def traverse(items: Iterable[T], f: Callable[[T], Result[U]]) -> Result[list[U]]:
    """Map f over items, collecting values. Fail-fast on first Err or raise."""
    values: list[U] = []
    for item in items:
        r = _bind("traverse", f, item)
        if not r._is_ok:
            return r  # type: ignore[return-value]
        values.append(r._value)  # type: ignore[arg-type]
    return Result(values, _OK)


# ═══════════════════════════════════════════════════════════════════════════════
# Capture
# ═══════════════════════════════════════════════════════════════════════════════


def _captured(operation: str, exc: Exception) -> Result[Any]:
    """Wrap a captured exception in Err, tracing it when configured."""
    if logger.isEnabledFor(logging.DEBUG):
        trace, include_traceback = _trace_options()
        if trace:
            logger.debug(
                "%s captured %s: %s",
                operation,
                type(exc).__name__,
                exc,
                exc_info=exc if include_traceback else None,
            )
    return Result(exc, _ERR)


def _trace_options() -> tuple[bool, bool]:
    """(trace_captures, include_traceback); both off when settings fail to load."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        _warn_invalid_settings(str(exc))
        return False, False
    return settings.trace_captures, settings.logging.include_traceback


@lru_cache(maxsize=8)
def _warn_invalid_settings(details: str) -> None:
    logger.warning("invalid tryutil settings, capture tracing disabled: %s", details)


def _apply(operation: str, f: Callable[..., T], /, *args: Any, **kwargs: Any) -> Result[T]:
    try:
        return Result(f(*args, **kwargs), _OK)
    except Exception as exc:
        return _captured(operation, exc)


def _bind(operation: str, f: Callable[[Any], Result[U]], arg: Any) -> Result[U]:
    try:
        out = f(arg)
    except Exception as exc:
        return _captured(operation, exc)
    if isinstance(out, Result):
        return out
    return _captured(operation, TypeError(f"{operation}() callback must return a Result, got {type(out).__name__}"))


def _is_exception_type(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, BaseException)


def _recovery_args(operation: str, match_type: Any, f: Any) -> tuple[Any, Callable[..., Any]]:
    """Normalize recover(f) / recover(match_type, f) call forms."""
    if f is not None:
        return match_type, f
    if _is_exception_type(match_type) or (
        isinstance(match_type, tuple) and match_type and all(map(_is_exception_type, match_type))
    ):
        raise TypeError(f"{operation}() got an exception type but no recovery function")
    return BaseException, match_type
