"""
Structured error types for fallible results.

Every failure carried by a ``Failure`` is an ordinary Python exception. To make
failures matchable by ``ErrorSet``, each exception is reduced to a
``(domain, code)`` pair: a namespace string plus an integer code inside that
namespace. ``DomainError`` carries the pair explicitly along with a structured
``detail`` mapping; plain exceptions get a pair derived from their type.

Manifesto:
    - **Errors are values:** A failure is inspectable data, never control flow
    - **Structural identity:** Two errors "are the same kind" iff their
      ``(domain, code)`` pairs are equal; message text never matters
    - **Rich detail:** Nested errors and any extra metadata live in ``detail``
    - **Error chaining:** Preserve original exceptions as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                         Exception                             │
        ├──────────────────────────────────────────────────────────────┤
        │  error_key(exc) ──> (domain, code)                           │
        │                                                               │
        │  DomainError            (domain, code, detail, cause)        │
        │     ├── AggregateError  (domain="fallible")                  │
        │     │      NONE_SUCCESSFUL = 1                                │
        │     │      MULTIPLE_ERRORS = 1560  detail["detailed_errors"] │
        │     └── UnwrapError     (domain="fallible", code=2)          │
        │                                                               │
        │  OSError(errno)  ──> ("errno", errno)                        │
        │  anything else   ──> ("<module>.<TypeName>", 0)              │
        └──────────────────────────────────────────────────────────────┘

Examples:
    A leaf error with an explicit domain and code:

    >>> err = DomainError("No such file", domain="storage.read", code=260)
    >>> error_key(err)
    ('storage.read', 260)

    Built-in exceptions reduce to their type:

    >>> error_key(KeyError("missing"))
    ('builtins.KeyError', 0)
    >>> error_key(FileNotFoundError(2, "No such file"))
    ('errno', 2)

Guardrails:
    ❌ DON'T: Encode the error kind in the message text
    ✅ DO: Give each distinct failure its own (domain, code) pair

    ❌ DON'T: Nest AggregateError inside another AggregateError
    ✅ DO: Use combine_errors() from fallible.core.aggregate, which flattens

Tags:
    error-handling, error-domain, error-code, fallible, structured-errors

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


# Domain used by the errors this library synthesizes itself
AGGREGATE_DOMAIN = "fallible"

# Detail key holding the flattened leaf errors of a MULTIPLE_ERRORS aggregate
DETAILED_ERRORS_KEY = "detailed_errors"

# Domain reported for OSError instances that carry an errno
ERRNO_DOMAIN = "errno"


class AggregateCode(IntEnum):
    """
    Codes of the synthetic errors produced when combining many results.

    Attributes:
        NONE_SUCCESSFUL: None of the combined operations succeeded
        MULTIPLE_ERRORS: More than one operation failed; the leaf errors are
            listed under ``detail[DETAILED_ERRORS_KEY]``
    """

    NONE_SUCCESSFUL = 1
    MULTIPLE_ERRORS = 1560

    @property
    def description(self) -> str:
        if self is AggregateCode.MULTIPLE_ERRORS:
            return "Several operations failed."
        return "No operations succeeded."


class DomainError(Exception):
    """
    Leaf error identified by a ``(domain, code)`` pair.

    DomainError is the structured failure payload of the library. It carries:

    - **domain:** Namespace string (e.g. ``"storage.read"``)
    - **code:** Integer code within the domain
    - **detail:** Mapping of structured metadata (nested errors, paths, ...)
    - **cause:** Optional underlying exception, also chained as ``__cause__``

    Subclasses set ``default_domain`` and ``default_code`` so callers can raise
    or fail with them without repeating the pair.

    Examples:
        >>> err = DomainError("Corrupt file", domain="storage.read", code=259)
        >>> err.with_detail(path="/tmp/notes.plist").detail
        {'path': '/tmp/notes.plist'}
        >>> err.to_dict()["code"]
        259

    Attributes:
        message: Human readable description
        domain: Error namespace
        code: Error code within ``domain``
        detail: Structured metadata
        cause: Underlying exception, if any
    """

    default_domain: str = "fallible.domain"
    default_code: int = 0

    def __init__(
        self,
        message: str,
        *,
        domain: str | None = None,
        code: int | None = None,
        detail: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.domain = domain if domain is not None else self.default_domain
        self.code = int(code if code is not None else self.default_code)
        self.detail = dict(detail) if detail else {}
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    @property
    def key(self) -> tuple[str, int]:
        """The ``(domain, code)`` pair identifying this error."""
        return (self.domain, self.code)

    def with_detail(self, **kwargs: Any) -> DomainError:
        """
        Add detail entries to this error (fluent API).

        Usage:
            return failed(
                DomainError("Write failed", domain="storage.write", code=640)
                .with_detail(path=str(path))
            )
        """
        self.detail.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "domain": self.domain,
            "code": self.code,
        }
        if self.detail:
            result["detail"] = {
                key: _serialize_detail(value) for key, value in self.detail.items()
            }
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, domain={self.domain!r}, code={self.code})"


class AggregateError(DomainError):
    """
    Synthetic error summarizing the outcome of many fallible operations.

    Only ``fallible.core.aggregate`` should construct these; it guarantees the
    wrapped list holds leaf errors only.
    """

    default_domain = AGGREGATE_DOMAIN

    def __init__(
        self,
        code: AggregateCode,
        errors: list[Exception] | None = None,
        *,
        message: str | None = None,
    ):
        detail: dict[str, Any] = {}
        if errors:
            detail[DETAILED_ERRORS_KEY] = list(errors)
        super().__init__(
            message or code.description,
            domain=AGGREGATE_DOMAIN,
            code=int(code),
            detail=detail,
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # args hold only the message, so rebuild from code and leaf errors
        return (
            self.__class__,
            (self.aggregate_code, self.errors),
            {"message": self.message, "detail": dict(self.detail), "cause": self.cause},
        )

    @property
    def aggregate_code(self) -> AggregateCode:
        return AggregateCode(self.code)

    @property
    def errors(self) -> list[Exception]:
        """Leaf errors wrapped by this aggregate (empty if none were recorded)."""
        return list(self.detail.get(DETAILED_ERRORS_KEY, []))


class UnwrapError(DomainError):
    """Raised when asking a successful result for its error."""

    default_domain = AGGREGATE_DOMAIN
    default_code = 2


def error_key(error: BaseException) -> tuple[str, int]:
    """
    Extract the ``(domain, code)`` pair of any exception.

    Args:
        error: Exception to classify

    Returns:
        ``error.key`` for DomainError, ``("errno", errno)`` for OSError with an
        errno, otherwise the qualified type name with code 0.
    """
    if isinstance(error, DomainError):
        return error.key
    if isinstance(error, OSError) and error.errno is not None:
        return (ERRNO_DOMAIN, int(error.errno))
    error_type = type(error)
    return (f"{error_type.__module__}.{error_type.__qualname__}", 0)


def describe_error(error: BaseException) -> str:
    """Render an error as ``domain/code 'message'`` for reprs and log events."""
    domain, code = error_key(error)
    message = error.message if isinstance(error, DomainError) else str(error)
    return f"{domain}/{code} {message!r}"


def _serialize_detail(value: Any) -> Any:
    if isinstance(value, DomainError):
        return value.to_dict()
    if isinstance(value, BaseException):
        return {"error_type": type(value).__name__, "message": str(value)}
    if isinstance(value, (list, tuple)):
        return [_serialize_detail(item) for item in value]
    return value


__all__ = [
    "AGGREGATE_DOMAIN",
    "DETAILED_ERRORS_KEY",
    "ERRNO_DOMAIN",
    "AggregateCode",
    "DomainError",
    "AggregateError",
    "UnwrapError",
    "error_key",
    "describe_error",
]
