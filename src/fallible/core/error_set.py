"""
Sets of ``(domain, code)`` pairs for matching errors selectively.

An ``ErrorSet`` names a family of errors, e.g. "file not found or permission
denied", so that a recovery step can handle exactly those and let everything
else through. Membership is structural: an error is in the set iff its
``error_key`` pair is. Message text, exception type and detail play no part.

Architecture:
    ::

        ErrorSet
        ┌──────────────────────────────────────────────┐
        │ "errno"        → {2, 13}                     │
        │ "storage.read" → {259, 260}                  │
        └──────────────────────────────────────────────┘

        error("errno", 2) | errors("storage.read", 259, 260)
                    │
                    ▼
        .matches(exc)  ⇔  error_key(exc) in pairs

    Sets are values. ``|``, ``&``, ``^`` and ``-`` return new sets; the
    ``|=``, ``&=``, ``^=`` forms and ``insert`` mutate the receiver in place.

Examples:
    >>> from fallible.core.errors import DomainError
    >>> not_found = error("storage.read", 260)
    >>> unreadable = not_found | errors("storage.read", 257, 259)
    >>> unreadable.matches(DomainError("gone", domain="storage.read", code=260))
    True
    >>> FileNotFoundError(2, "No such file") in error("errno", 2)
    True
    >>> (error("a", 1) | error("b", 2)) == (error("b", 2) | error("a", 1))
    True

    Dispatching on a set inside ``match``:

    >>> def describe(exc):
    ...     match exc:
    ...         case _ if unreadable.matches(exc):
    ...             return "unreadable"
    ...         case _:
    ...             return "other"
    >>> describe(KeyError("x"))
    'other'

Tags:
    error-set, error-matching, set-algebra, fallible

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from fallible.core.errors import error_key


Pair = tuple[str, int]


class ErrorSet:
    """
    A set of ``(domain, code)`` pairs.

    Internally a mapping of domain to its set of codes; domains never map to
    an empty set, so two sets holding the same pairs always compare equal
    regardless of how they were built.
    """

    __slots__ = ("_codes",)

    def __init__(self, domains: Mapping[str, Iterable[int]] | None = None):
        self._codes: dict[str, set[int]] = {}
        for domain, codes in (domains or {}).items():
            for code in codes:
                self._add(domain, code)

    # ── Construction ─────────────────────────────────────────────

    @classmethod
    def from_pairs(cls, pairs: Iterable[Pair]) -> ErrorSet:
        result = cls()
        for domain, code in pairs:
            result._add(domain, code)
        return result

    @classmethod
    def from_error(cls, error: BaseException) -> ErrorSet:
        """Set holding exactly the pair of ``error``."""
        return cls.from_pairs([error_key(error)])

    @classmethod
    def from_errors(cls, errors: Iterable[BaseException]) -> ErrorSet:
        """Set holding the pairs of every error in ``errors``."""
        return cls.from_pairs(error_key(e) for e in errors)

    def _add(self, domain: str, code: int) -> None:
        if not isinstance(domain, str):
            raise TypeError(f"Error domain must be a str, got {type(domain).__name__}")
        if isinstance(code, bool) or not isinstance(code, int):
            raise TypeError(f"Error code must be an int, got {type(code).__name__}")
        self._codes.setdefault(domain, set()).add(int(code))

    def copy(self) -> ErrorSet:
        return ErrorSet.from_pairs(self)

    # ── Membership ───────────────────────────────────────────────

    def contains_key(self, domain: str, code: int) -> bool:
        return code in self._codes.get(domain, ())

    def contains(self, error: BaseException) -> bool:
        """True iff the ``(domain, code)`` pair of ``error`` is in the set."""
        return self.contains_key(*error_key(error))

    # Guard form used by recovery steps and ``match ... if`` dispatch
    matches = contains

    def __contains__(self, item: object) -> bool:
        if isinstance(item, BaseException):
            return self.contains(item)
        if isinstance(item, tuple) and len(item) == 2:
            return self.contains_key(*item)
        return False

    def insert(self, error: BaseException | Pair) -> None:
        """Add the pair of ``error`` (or a raw pair) in place."""
        if isinstance(error, BaseException):
            self._add(*error_key(error))
        else:
            self._add(*error)

    # ── Set algebra (pure) ───────────────────────────────────────

    def union(self, other: ErrorSet) -> ErrorSet:
        result = self.copy()
        result.update(other)
        return result

    def intersection(self, other: ErrorSet) -> ErrorSet:
        return ErrorSet.from_pairs(pair for pair in self if pair in other)

    def difference(self, other: ErrorSet) -> ErrorSet:
        return ErrorSet.from_pairs(pair for pair in self if pair not in other)

    def symmetric_difference(self, other: ErrorSet) -> ErrorSet:
        return self.difference(other).union(other.difference(self))

    exclusive_or = symmetric_difference

    # ── Set algebra (in place) ───────────────────────────────────

    def update(self, other: ErrorSet) -> None:
        for domain, code in other:
            self._add(domain, code)

    def intersection_update(self, other: ErrorSet) -> None:
        self._codes = self.intersection(other)._codes

    def symmetric_difference_update(self, other: ErrorSet) -> None:
        self._codes = self.symmetric_difference(other)._codes

    # ── Comparisons ──────────────────────────────────────────────

    def issubset(self, other: ErrorSet) -> bool:
        return all(pair in other for pair in self)

    def issuperset(self, other: ErrorSet) -> bool:
        return other.issubset(self)

    def isdisjoint(self, other: ErrorSet) -> bool:
        return not any(pair in other for pair in self)

    def is_empty(self) -> bool:
        return not self._codes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorSet):
            return NotImplemented
        return self.symmetric_difference(other).is_empty()

    def __le__(self, other: ErrorSet) -> bool:
        if not isinstance(other, ErrorSet):
            return NotImplemented
        return self.issubset(other)

    def __ge__(self, other: ErrorSet) -> bool:
        if not isinstance(other, ErrorSet):
            return NotImplemented
        return self.issuperset(other)

    # ── Operators ────────────────────────────────────────────────

    def __or__(self, other: ErrorSet) -> ErrorSet:
        if not isinstance(other, ErrorSet):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: ErrorSet) -> ErrorSet:
        if not isinstance(other, ErrorSet):
            return NotImplemented
        return self.intersection(other)

    def __xor__(self, other: ErrorSet) -> ErrorSet:
        if not isinstance(other, ErrorSet):
            return NotImplemented
        return self.symmetric_difference(other)

    def __sub__(self, other: ErrorSet) -> ErrorSet:
        if not isinstance(other, ErrorSet):
            return NotImplemented
        return self.difference(other)

    def __ior__(self, other: ErrorSet) -> ErrorSet:
        self.update(other)
        return self

    def __iand__(self, other: ErrorSet) -> ErrorSet:
        self.intersection_update(other)
        return self

    def __ixor__(self, other: ErrorSet) -> ErrorSet:
        self.symmetric_difference_update(other)
        return self

    # ── Container protocol ───────────────────────────────────────

    def __iter__(self) -> Iterator[Pair]:
        for domain in sorted(self._codes):
            for code in sorted(self._codes[domain]):
                yield (domain, code)

    def __len__(self) -> int:
        return sum(len(codes) for codes in self._codes.values())

    def __bool__(self) -> bool:
        return bool(self._codes)

    def __repr__(self) -> str:
        body = ", ".join(
            f"{domain!r}: {sorted(codes)}" for domain, codes in sorted(self._codes.items())
        )
        return f"ErrorSet({{{body}}})"


def error(domain: str, code: int) -> ErrorSet:
    """ErrorSet matching a single domain and code."""
    return ErrorSet({domain: [code]})


def errors(domain: str, *codes: int | Iterable[int]) -> ErrorSet:
    """
    ErrorSet matching several codes in a single domain.

    Codes may be passed individually or as one iterable (list, set, range):

    >>> errors("errno", 2, 13) == errors("errno", {13, 2}) == errors("errno", [2, 13])
    True
    """
    if len(codes) == 1 and not isinstance(codes[0], int):
        return ErrorSet({domain: codes[0]})
    return ErrorSet({domain: codes})  # type: ignore[dict-item]


__all__ = [
    "ErrorSet",
    "error",
    "errors",
]
