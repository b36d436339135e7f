"""
Result envelope for operations that may fail.

A ``Result[T]`` is either ``Success(value)`` or ``Failure(error)``: exactly one
variant, immutable after construction. Operations return results instead of
raising, and callers compose them into linear pipelines with chaining
combinators that decide, step by step, what runs on the success path and what
runs on the failure path.

Manifesto:
    - **Failure is a value:** Nothing here is fatal; a failure is inspectable data
    - **Linear pipelines:** Chain steps instead of nesting try/except blocks
    - **Selective handling:** Recovery steps can be restricted to an ``ErrorSet``
    - **Verbatim propagation:** Unhandled failures reach the end of the chain
      untouched, as the very same object

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                          Result[T]                               │
        ├──────────────────────┬──────────────────────┬───────────────────┤
        │     Success[T]       │     Failure[T]       │   Constructors    │
        ├──────────────────────┼──────────────────────┼───────────────────┤
        │ • value: T           │ • error: Exception   │ • succeeded()     │
        │ • then()             │ • recover()          │ • failed()        │
        │ • map_success()      │ • map_failure()      │ • catching()      │
        │ • use_success()      │ • correct()          │ • from_optional() │
        │ • flatten()          │ • use_failure()      │ • from_bool()     │
        │                      │                      │ • from_sentinel() │
        └──────────────────────┴──────────────────────┴───────────────────┘

        Step runs on...   success input         failure input
        ───────────────   ───────────────────   ─────────────────────────
        then(f)           f(v)                  passed through
        map_success(f)    Success(f(v))         passed through
        use_success(f)    f(v); passed through  passed through
        recover(f)        passed through        f(e)
        map_failure(f)    passed through        Failure(f(e))
        correct(f)        passed through        Success(f(e))
        use_failure(f)    passed through        f(e); passed through

    Every failure-side step accepts ``from_=ErrorSet``; errors outside the set
    pass through without calling the handler.

Examples:
    Basic usage with pattern matching:

    >>> def parse_port(text: str) -> Result[int]:
    ...     if not text.isdigit():
    ...         return failed(DomainError("Not a number", domain="config", code=1))
    ...     return succeeded(int(text))
    >>> match parse_port("8080"):
    ...     case Success(value):
    ...         print(f"Port: {value}")
    ...     case Failure(error):
    ...         print(f"Error: {error}")
    Port: 8080

    Chaining:

    >>> parse_port("80").map_success(lambda p: p + 8000).value
    8080
    >>> parse_port("eighty").correct(lambda e: 8080).value
    8080

Guardrails:
    ❌ DON'T: Raise inside map_success/correct to signal failure
    ✅ DO: Use then/recover with a handler that returns failed(...)

    ❌ DON'T: Read .value without checking is_success() when None is a valid value
    ✅ DO: Use pattern matching or unwrap_or()

Tags:
    result-pattern, error-handling, functional-programming, monadic, fallible

Doc-Types:
    - API Reference
    - Result Pattern Guide
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from fallible.core.errors import DomainError, UnwrapError, describe_error, error_key
from fallible.core.logging import get_logger
from fallible.core.settings import get_settings

if TYPE_CHECKING:
    from fallible.core.error_set import ErrorSet


T = TypeVar("T")
U = TypeVar("U")

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """
    Successful result containing a value.

    All failure-side steps (recover, map_failure, correct, use_failure) return
    this same object without calling their handler.

    Examples:
        >>> ok = succeeded(42)
        >>> ok.is_success(), ok.value, ok.error
        (True, 42, None)
        >>> ok.then(lambda x: succeeded(x * 2)).value
        84
        >>> ok.recover(lambda e: succeeded(0)) is ok
        True
    """

    value: T

    @property
    def error(self) -> None:
        """Always ``None`` for a success."""
        return None

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    # ── Extraction ───────────────────────────────────────────────

    def unwrap(self) -> T:
        """Get the value. Safe for Success."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        return self.value

    def unwrap_error(self) -> Exception:
        """Raise UnwrapError; a success has no error."""
        raise UnwrapError(f"Called unwrap_error() on {self!r}")

    # ── Success-side steps ───────────────────────────────────────

    def then(self, operation: Callable[[T], Result[U]]) -> Result[U]:
        """Run the next fallible step with the value."""
        return operation(self.value)

    def map_success(self, transform: Callable[[T], U]) -> Result[U]:
        """Transform the value with a step that cannot fail."""
        return self.then(lambda value: Success(transform(value)))

    def use_success(self, consumer: Callable[[T], Any]) -> Result[T]:
        """Call consumer with the value for its side effect, return self."""
        consumer(self.value)
        return self

    # ── Failure-side steps (pass through) ────────────────────────

    def recover(
        self,
        recovery: Callable[[Exception], Result[T]],
        *,
        from_: ErrorSet | None = None,
    ) -> Result[T]:
        return self

    def map_failure(
        self,
        transform: Callable[[Exception], Exception],
        *,
        from_: ErrorSet | None = None,
    ) -> Result[T]:
        return self

    def correct(
        self,
        correction: Callable[[Exception], T],
        *,
        from_: ErrorSet | None = None,
    ) -> Result[T]:
        return self

    def use_failure(
        self,
        consumer: Callable[[Exception], Any],
        *,
        from_: ErrorSet | None = None,
    ) -> Result[T]:
        return self

    # ── Nesting ──────────────────────────────────────────────────

    def flatten(self) -> Result[Any]:
        """Collapse ``Success(Result)`` one level; other values are left as is."""
        if isinstance(self.value, (Success, Failure)):
            return self.value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True, slots=True)
class Failure(Generic[T]):
    """
    Failed result containing an error.

    Success-side steps (then, map_success, use_success) return this same
    object without calling their function, so the error reaches the end of
    the chain unchanged unless a failure-side step handles it.

    Examples:
        >>> missing = DomainError("No such file", domain="storage.read", code=260)
        >>> oops = failed(missing)
        >>> oops.is_failure(), oops.value, oops.error is missing
        (True, None, True)
        >>> oops.map_success(lambda x: x * 2) is oops
        True
        >>> oops.correct(lambda e: b"").value
        b''
    """

    error: Exception

    @property
    def value(self) -> None:
        """Always ``None`` for a failure."""
        return None

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    # ── Extraction ───────────────────────────────────────────────

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's a Success."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        return f(self.error)

    def unwrap_error(self) -> Exception:
        return self.error

    # ── Success-side steps (pass through) ────────────────────────

    def then(self, operation: Callable[[T], Result[U]]) -> Result[U]:
        return self  # type: ignore[return-value]

    def map_success(self, transform: Callable[[T], U]) -> Result[U]:
        return self  # type: ignore[return-value]

    def use_success(self, consumer: Callable[[T], Any]) -> Result[T]:
        return self

    # ── Failure-side steps ───────────────────────────────────────

    def recover(
        self,
        recovery: Callable[[Exception], Result[T]],
        *,
        from_: ErrorSet | None = None,
    ) -> Result[T]:
        """
        Run a fallible recovery step with the error.

        With ``from_``, only errors matched by the set are handed to
        ``recovery``; every other failure is returned as is.
        """
        if from_ is not None and not from_.matches(self.error):
            return self
        return recovery(self.error)

    def map_failure(
        self,
        transform: Callable[[Exception], Exception],
        *,
        from_: ErrorSet | None = None,
    ) -> Result[T]:
        """Substitute a different error for the current one."""
        return self.recover(lambda error: failed(transform(error)), from_=from_)

    def correct(
        self,
        correction: Callable[[Exception], T],
        *,
        from_: ErrorSet | None = None,
    ) -> Result[T]:
        """Replace the failure with a value computed from the error."""
        return self.recover(lambda error: Success(correction(error)), from_=from_)

    def use_failure(
        self,
        consumer: Callable[[Exception], Any],
        *,
        from_: ErrorSet | None = None,
    ) -> Result[T]:
        """Call consumer with the error for its side effect, return self."""
        if from_ is None or from_.matches(self.error):
            consumer(self.error)
        return self

    def flatten(self) -> Result[Any]:
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, DomainError):
            return {"ok": False, "error": self.error.to_dict()}
        domain, code = error_key(self.error)
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
                "domain": domain,
                "code": code,
            },
        }

    def __repr__(self) -> str:
        detail = getattr(self.error, "detail", None)
        if detail:
            return f"Failure({describe_error(self.error)} {detail!r})"
        return f"Failure({describe_error(self.error)})"


Result = Success[T] | Failure[T]


# =============================================================================
# CONSTRUCTORS
# =============================================================================


def succeeded(value: T = None) -> Success[T]:  # type: ignore[assignment]
    """Construct a successful result. ``succeeded()`` stands for "done, no value"."""
    return Success(value)


def failed(error: Exception) -> Failure[Any]:
    """
    Construct a failed result.

    With ``FALLIBLE_TRACE_FAILURES`` enabled, every call emits a
    ``failure_created`` debug event, which makes it easy to find where a
    failure that surfaced at the end of a long chain was born.

    Raises:
        TypeError: If ``error`` is not an exception instance
    """
    if not isinstance(error, BaseException):
        raise TypeError(f"failed() expects an exception, got {type(error).__name__}")
    if get_settings().trace_failures:
        domain, code = error_key(error)
        logger.debug("failure_created", domain=domain, code=code, error=str(error))
    return Failure(error)


# Shared success for operations that have no useful value to return
SUCCEEDED: Success[None] = Success(None)


def catching(
    operation: Callable[..., T],
    *args: Any,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    **kwargs: Any,
) -> Result[T]:
    """
    Call ``operation`` and capture its outcome as a result.

    This is the bridge between exception-raising code and result pipelines.
    A returned value becomes a success; an exception listed in ``exceptions``
    becomes a failure. Any other exception propagates.

    Examples:
        >>> import json
        >>> catching(json.loads, '{"a": 1}').value
        {'a': 1}
        >>> catching(json.loads, 'invalid').is_failure()
        True
        >>> catching(int, "x", exceptions=(ValueError,)).is_failure()
        True

    Args:
        operation: Callable that may raise
        *args: Positional arguments for ``operation``
        exceptions: Exception types converted into failures
        **kwargs: Keyword arguments for ``operation``
    """
    try:
        return succeeded(operation(*args, **kwargs))
    except exceptions as e:
        return failed(e)


def from_optional(value: T | None, error: Exception) -> Result[T]:
    """``None`` means failure with ``error``; anything else is a success."""
    if value is None:
        return failed(error)
    return Success(value)


def from_bool(condition: bool, error: Exception, value: T = None) -> Result[T]:  # type: ignore[assignment]
    """``False`` means failure with ``error``; ``True`` succeeds with ``value``."""
    if condition:
        return Success(value)
    return failed(error)


def from_sentinel(value: T, failure_value: T, error: Exception) -> Result[T]:
    """
    A value equal to ``failure_value`` means failure with ``error``.

    Suits APIs that report failure with a reserved return value:

    >>> from_sentinel("abc".find("z"), -1, KeyError("z")).is_failure()
    True
    """
    if value == failure_value:
        return failed(error)
    return Success(value)


__all__ = [
    "Result",
    "Success",
    "Failure",
    "SUCCEEDED",
    "succeeded",
    "failed",
    "catching",
    "from_optional",
    "from_bool",
    "from_sentinel",
]
