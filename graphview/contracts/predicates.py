"""
Attribute Predicates
====================

A predicate decides whether an attribute event is VETOED by a filter.

    matches(attribute, value) -> True   means "filter this out"
    matches(attribute, value) -> False  means "let it through"

`value` is the new value for added/changed events and None for removals.

RULES:
======
- Predicates must be callable repeatedly
- Predicates must not mutate the event
- Errors raised by a predicate propagate to whoever fed the filter
"""

from __future__ import annotations
from typing import Any, Callable, Optional, Protocol, Tuple, Union, runtime_checkable


@runtime_checkable
class AttributePredicate(Protocol):
    """Veto test over (attribute name, value)."""

    def matches(self, attribute: str, value: Any) -> bool:
        ...


PredicateLike = Union[AttributePredicate, Callable[[str, Any], bool]]


class _NeverMatches:
    """Permanently non-matching predicate used for unset filter slots."""

    def matches(self, attribute: str, value: Any) -> bool:
        return False

    def __repr__(self) -> str:
        return "NEVER_MATCHES"


NEVER_MATCHES: AttributePredicate = _NeverMatches()


class FunctionPredicate:
    """Adapts a plain callable `(attribute, value) -> bool`."""

    def __init__(self, function: Callable[[str, Any], bool]):
        self._function = function

    def matches(self, attribute: str, value: Any) -> bool:
        return bool(self._function(attribute, value))

    def __repr__(self) -> str:
        name = getattr(self._function, "__name__", repr(self._function))
        return f"FunctionPredicate({name})"


class AttributeNamePredicate:
    """Matches attributes whose name is one of the given names."""

    def __init__(self, *names: str):
        self._names = frozenset(names)

    def matches(self, attribute: str, value: Any) -> bool:
        return attribute in self._names

    def __repr__(self) -> str:
        return f"AttributeNamePredicate({', '.join(sorted(self._names))})"


class AttributePrefixPredicate:
    """Matches attributes whose name starts with one of the given prefixes."""

    def __init__(self, *prefixes: str):
        self._prefixes: Tuple[str, ...] = tuple(prefixes)

    def matches(self, attribute: str, value: Any) -> bool:
        return attribute.startswith(self._prefixes)

    def __repr__(self) -> str:
        return f"AttributePrefixPredicate({', '.join(self._prefixes)})"


class AnyOfPredicate:
    """Matches when any sub-predicate matches; evaluated in order, short-circuit."""

    def __init__(self, *predicates: PredicateLike):
        self._predicates = tuple(as_predicate(p) for p in predicates)

    def matches(self, attribute: str, value: Any) -> bool:
        return any(p.matches(attribute, value) for p in self._predicates)


def as_predicate(predicate: Optional[PredicateLike]) -> Optional[AttributePredicate]:
    """
    Normalize a filter slot value.

    None stays None (unset slot). Objects with a `matches` method are used
    as-is, plain callables are wrapped in FunctionPredicate.
    """
    if predicate is None:
        return None
    if hasattr(predicate, "matches"):
        return predicate
    if callable(predicate):
        return FunctionPredicate(predicate)
    raise TypeError(
        f"predicate must have a matches() method or be callable, got {type(predicate).__name__}"
    )
