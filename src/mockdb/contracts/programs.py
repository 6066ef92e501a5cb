# src/mockdb/contracts/programs.py
"""Program shapes for scripted responses.

A program describes how the engine answers a query. Configured values are
classified into one of five variants (plus an Unrecognized marker that
defers the error until the program is actually resolved):

    None                 -> Empty
    an exception class   -> ErrorClass
    list / tuple         -> Sequence (consumed front to back)
    any other callable   -> Dynamic (called with the query text)
    kind-specific value  -> Fixed (int for counters, mapping for rows)

Classification is pure. The only mutable variant is Sequence, whose
remaining items are owned by the resolver that holds it.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Empty:
    """No program configured; resolves to the caller's default."""


@dataclass(frozen=True, slots=True)
class Fixed:
    """A concrete value returned unchanged on every resolution."""

    value: Any


@dataclass(slots=True)
class Sequence:
    """Values handed out one per resolution until exhausted.

    Items are copied at construction so the configured list is never
    mutated. Exhaustion is permanent.
    """

    items: deque[Any]

    def pop(self) -> Any:
        return self.items.popleft()


@dataclass(frozen=True, slots=True)
class Dynamic:
    """A callable invoked with the (annotated) query text."""

    func: Callable[[str], Any]


@dataclass(frozen=True, slots=True)
class ErrorClass:
    """A class that is raised on every resolution.

    Only Exception subclasses are valid; anything else is rejected when
    resolved.
    """

    exc_type: type


@dataclass(frozen=True, slots=True)
class Unrecognized:
    """A configured value that matches no shape."""

    value: Any


type Program = Empty | Fixed | Sequence | Dynamic | ErrorClass | Unrecognized


def is_plain_int(value: Any) -> bool:
    """True for ints, excluding bools."""
    return isinstance(value, int) and not isinstance(value, bool)


def classify(value: Any, is_fixed: Callable[[Any], bool] = is_plain_int) -> Program:
    """Classify a configured value into a program variant.

    Args:
        value: The raw configured value.
        is_fixed: Predicate deciding which plain values count as Fixed for
            the program's kind.

    Returns:
        The matching variant. Never raises; unrecognized values are
        wrapped so the error surfaces at resolution time.
    """
    if value is None:
        return Empty()
    if isinstance(value, type):
        return ErrorClass(value)
    if isinstance(value, (list, tuple)):
        return Sequence(deque(value))
    if callable(value):
        return Dynamic(value)
    if is_fixed(value):
        return Fixed(value)
    return Unrecognized(value)
