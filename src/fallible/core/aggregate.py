"""
Combining many results into one.

Batch operations produce a list of results. The helpers here fold such a list
into a single result, summarizing the failures with a synthetic
``AggregateError`` when there is more than one of them.

Architecture:
    ::

        [Success(1), Failure(a), Success(2), Failure(b)]
                              │
                          classify()
                              ▼
                values: [1, 2]      errors: [a, b]

        all_succeeded   ── no failure ──> Success(values)
                        ── 1 failure ───> Failure(a)
                        ── n failures ──> Failure(AggregateError(MULTIPLE_ERRORS, [a, b]))
                        ── no input ────> Failure(AggregateError(NONE_SUCCESSFUL))

        any_succeeded   ── ≥1 success ──> Success(values)
                        ── otherwise ───> Failure(AggregateError(NONE_SUCCESSFUL, [a, b]))

    Aggregates never nest: before wrapping, every MULTIPLE_ERRORS error is
    replaced by the leaf errors it carries.

Examples:
    >>> from fallible.core.result import succeeded, failed
    >>> all_succeeded([succeeded(1), succeeded(2)]).value
    [1, 2]
    >>> outcome = all_succeeded([failed(KeyError("a")), failed(KeyError("b"))])
    >>> outcome.error.aggregate_code
    <AggregateCode.MULTIPLE_ERRORS: 1560>
    >>> any_succeeded([failed(KeyError("a")), succeeded(5)]).value
    [5]
    >>> filter_failures([failed(KeyError("a")), succeeded(5)])
    [5]

Guardrails:
    ❌ DON'T: Parse an aggregate's message for individual errors
    ✅ DO: Read AggregateError.errors (or leaf_errors()) for the list

Tags:
    result-collector, batch-processing, error-aggregation, fallible

Doc-Types:
    - API Reference
    - Batch Processing Guide
"""

from __future__ import annotations

from typing import Iterable, TypeVar

from fallible.core.errors import (
    AGGREGATE_DOMAIN,
    AggregateCode,
    AggregateError,
    DETAILED_ERRORS_KEY,
    DomainError,
)
from fallible.core.logging import get_logger
from fallible.core.result import Failure, Result, Success, failed
from fallible.core.settings import get_settings


T = TypeVar("T")

logger = get_logger(__name__)


def leaf_errors(error: Exception) -> list[Exception]:
    """
    Unpack one level of aggregation.

    Returns the errors attached to an aggregate (a NONE_SUCCESSFUL aggregate
    built from no failures has none) and ``[error]`` for any other error.
    """
    if (
        isinstance(error, DomainError)
        and error.domain == AGGREGATE_DOMAIN
        and error.code in (AggregateCode.MULTIPLE_ERRORS, AggregateCode.NONE_SUCCESSFUL)
    ):
        return list(error.detail.get(DETAILED_ERRORS_KEY, []))
    return [error]


def flatten_errors(errors: Iterable[Exception]) -> list[Exception]:
    """Replace every aggregate in ``errors`` by its leaf errors, keeping order."""
    return [leaf for error in errors for leaf in leaf_errors(error)]


def combine_errors(errors: Iterable[Exception]) -> Exception:
    """
    Fold a list of errors into one.

    Zero leaf errors gives a fresh NONE_SUCCESSFUL aggregate, exactly one is
    returned verbatim, more than one is wrapped in a MULTIPLE_ERRORS aggregate.
    """
    flat = flatten_errors(errors)
    if not flat:
        return AggregateError(AggregateCode.NONE_SUCCESSFUL)
    if len(flat) == 1:
        return flat[0]
    return AggregateError(
        AggregateCode.MULTIPLE_ERRORS,
        flat,
        message=_summarize(AggregateCode.MULTIPLE_ERRORS, flat),
    )


def _summarize(code: AggregateCode, errors: list[Exception]) -> str:
    limit = get_settings().summary_limit
    if not errors:
        return code.description
    messages = "; ".join(str(e) for e in errors[:limit])
    more = "..." if len(errors) > limit else ""
    return f"{code.description} ({len(errors)}): {messages}{more}"


def classify(results: Iterable[Result[T]]) -> tuple[list[T], list[Exception]]:
    """
    Partition results into success values and failure errors.

    Relative order is preserved within each list.

    Examples:
        >>> from fallible.core.result import succeeded, failed
        >>> values, errors = classify([succeeded(1), failed(KeyError("a")), succeeded(2)])
        >>> values, len(errors)
        ([1, 2], 1)
    """
    values: list[T] = []
    errors: list[Exception] = []
    for result in results:
        match result:
            case Success(value):
                values.append(value)
            case Failure(error):
                errors.append(error)
            case _:
                raise TypeError(f"Expected a Success or Failure, got {type(result).__name__}")
    return values, errors


def _trace(mode: str, values: list, errors: list[Exception]) -> None:
    # Silent unless FALLIBLE_TRACE_AGGREGATES is set
    if not get_settings().trace_aggregates:
        return
    logger.debug(
        "results_aggregated",
        mode=mode,
        total=len(values) + len(errors),
        successes=len(values),
        failures=len(errors),
    )


def all_succeeded(results: Iterable[Result[T]]) -> Result[list[T]]:
    """
    Succeed with every value iff no result failed.

    An empty input is a NONE_SUCCESSFUL failure since nothing succeeded.
    Otherwise a single failure is reported verbatim and several are wrapped
    in one MULTIPLE_ERRORS aggregate.
    """
    results = list(results)
    values, errors = classify(results)
    _trace("all", values, errors)
    if not results:
        return failed(AggregateError(AggregateCode.NONE_SUCCESSFUL))
    if not errors:
        return Success(values)
    return failed(combine_errors(errors))


def any_succeeded(results: Iterable[Result[T]]) -> Result[list[T]]:
    """
    Succeed with the values of the successful results, if there are any.

    When nothing succeeded the failure is always a NONE_SUCCESSFUL aggregate;
    the flattened underlying errors are attached as its detailed errors.
    """
    values, errors = classify(results)
    _trace("any", values, errors)
    if values:
        return Success(values)
    flat = flatten_errors(errors)
    return failed(
        AggregateError(
            AggregateCode.NONE_SUCCESSFUL,
            flat,
            message=_summarize(AggregateCode.NONE_SUCCESSFUL, flat),
        )
    )


def filter_failures(results: Iterable[Result[T]]) -> list[T]:
    """Values of the successful results; failures are discarded."""
    return any_succeeded(results).correct(lambda error: []).unwrap()


__all__ = [
    "leaf_errors",
    "flatten_errors",
    "combine_errors",
    "classify",
    "all_succeeded",
    "any_succeeded",
    "filter_failures",
]
