"""Fallible Core -- result values, chaining steps, and error matching.

Manifesto:
    Operations that may fail return a ``Result``: ``Success(value)`` or
    ``Failure(error)``.  Callers string steps together into a linear pipeline
    where each step runs only on the success path or only on the failure
    path, so error handling reads top to bottom instead of nesting.

    - **Pure values:** No I/O, no threads, no hidden state in the core
    - **Verbatim propagation:** Unhandled failures reach the end unchanged
    - **Selective handling:** ``ErrorSet`` restricts recovery to chosen errors
    - **Batch-friendly:** Many results fold into one with flat aggregates

Module Map (recommended reading order)
--------------------------------------
**Type System & Errors (start here)**
  errors            DomainError, (domain, code) keys, aggregate codes
  result            Success / Failure + constructors and bridges
  error_set         ErrorSet of (domain, code) pairs

**Composition**
  chaining          Curried steps, pipe() and compose()
  aggregate         classify / all_succeeded / any_succeeded

**Cross-Cutting Concerns**
  logging           Structured logging (structlog)
  settings          FallibleSettings (pydantic-settings)

Tags:
    fallible, result-pattern, error-handling, functional-programming

Doc-Types:
    package-overview, module-index
"""

from fallible.core.aggregate import (
    all_succeeded,
    any_succeeded,
    classify,
    combine_errors,
    filter_failures,
    flatten_errors,
    leaf_errors,
)
from fallible.core.chaining import (
    compose,
    correct,
    flatten,
    map_failure,
    map_success,
    pipe,
    recover,
    then,
    use_failure,
    use_success,
)
from fallible.core.error_set import ErrorSet, error, errors
from fallible.core.errors import (
    AGGREGATE_DOMAIN,
    DETAILED_ERRORS_KEY,
    ERRNO_DOMAIN,
    AggregateCode,
    AggregateError,
    DomainError,
    UnwrapError,
    describe_error,
    error_key,
)
from fallible.core.logging import configure_logging, get_logger
from fallible.core.result import (
    SUCCEEDED,
    Failure,
    Result,
    Success,
    catching,
    failed,
    from_bool,
    from_optional,
    from_sentinel,
    succeeded,
)
from fallible.core.settings import FallibleSettings, get_settings

__all__ = [
    # Errors
    "AGGREGATE_DOMAIN",
    "DETAILED_ERRORS_KEY",
    "ERRNO_DOMAIN",
    "AggregateCode",
    "AggregateError",
    "DomainError",
    "UnwrapError",
    "describe_error",
    "error_key",
    # Result
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
    # Chaining
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
    # Error sets
    "ErrorSet",
    "error",
    "errors",
    # Aggregation
    "classify",
    "all_succeeded",
    "any_succeeded",
    "filter_failures",
    "leaf_errors",
    "flatten_errors",
    "combine_errors",
    # Cross-cutting
    "configure_logging",
    "get_logger",
    "FallibleSettings",
    "get_settings",
]
