"""
Curried pipeline steps for results.

Each function here takes a handler and returns a one-argument step
``Result -> Result``. Steps are strung together with ``pipe`` when the input
is at hand, or with ``compose`` to build the pipeline first and feed it later
(for instance as a completion callback).

Examples:
    Reading settings with a fallback, then parsing them:

    >>> from fallible.core.errors import DomainError
    >>> from fallible.core.error_set import error
    >>> from fallible.core.result import failed, succeeded
    >>> missing = DomainError("No such file", domain="storage.read", code=260)
    >>> seen = []
    >>> pipe(
    ...     failed(missing),
    ...     recover(lambda e: succeeded("port=8080"), from_=error("storage.read", 260)),
    ...     then(lambda text: succeeded(text.split("=")[1])),
    ...     map_success(int),
    ...     use_success(seen.append),
    ...     use_failure(lambda e: seen.append(e)),
    ... ).value
    8080
    >>> seen
    [8080]

    Building the pipeline before the input exists:

    >>> on_done = compose(map_success(str.upper), correct(lambda e: "FALLBACK"))
    >>> on_done(succeeded("ok")).value, on_done(failed(missing)).value
    ('OK', 'FALLBACK')
"""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from fallible.core.result import Result

if TYPE_CHECKING:
    from fallible.core.error_set import ErrorSet


T = TypeVar("T")
U = TypeVar("U")

Step = Callable[[Result[Any]], Result[Any]]


def pipe(value: Any, *transforms: Callable[[Any], Any]) -> Any:
    """Pass ``value`` through ``transforms`` left to right."""
    for transform in transforms:
        value = transform(value)
    return value


def compose(*transforms: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Build ``x -> transforms[-1](...transforms[0](x))`` without an input."""
    return lambda value: reduce(lambda acc, transform: transform(acc), transforms, value)


def then(operation: Callable[[T], Result[U]]) -> Step:
    """On success, run ``operation`` with the value; failures pass through."""
    return lambda result: result.then(operation)


def map_success(transform: Callable[[T], U]) -> Step:
    """On success, replace the value with ``transform(value)``."""
    return lambda result: result.map_success(transform)


def use_success(consumer: Callable[[T], Any]) -> Step:
    """On success, call ``consumer`` with the value and keep the result."""
    return lambda result: result.use_success(consumer)


def recover(
    recovery: Callable[[Exception], Result[T]],
    *,
    from_: ErrorSet | None = None,
) -> Step:
    """On failure (optionally only errors in ``from_``), run ``recovery``."""
    return lambda result: result.recover(recovery, from_=from_)


def map_failure(
    transform: Callable[[Exception], Exception],
    *,
    from_: ErrorSet | None = None,
) -> Step:
    """On failure, substitute ``transform(error)`` for the error."""
    return lambda result: result.map_failure(transform, from_=from_)


def correct(
    correction: Callable[[Exception], T],
    *,
    from_: ErrorSet | None = None,
) -> Step:
    """On failure, succeed with ``correction(error)`` instead."""
    return lambda result: result.correct(correction, from_=from_)


def use_failure(
    consumer: Callable[[Exception], Any],
    *,
    from_: ErrorSet | None = None,
) -> Step:
    """On failure, call ``consumer`` with the error and keep the result."""
    return lambda result: result.use_failure(consumer, from_=from_)


def flatten(result: Result[Result[T]]) -> Result[T]:
    """Collapse a success holding a result by one level."""
    return result.flatten()


__all__ = [
    "Step",
    "pipe",
    "compose",
    "then",
    "map_success",
    "use_success",
    "recover",
    "map_failure",
    "correct",
    "use_failure",
    "flatten",
]
