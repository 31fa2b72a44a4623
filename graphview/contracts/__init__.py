"""
Contracts Module

This module defines the explicit interfaces and value types that form
the contracts between layers. Stream stages and graphic elements talk
to each other only through these sink protocols and value types.

DESIGN PRINCIPLES:
==================
1. Value types are immutable (frozen dataclasses)
2. Error states are enumerated (ErrorCode) and carried by exceptions
3. Sinks receive positional arguments that pass-through stages forward verbatim
"""

from .base import (
    ErrorCode, Error, GraphViewError, InvalidPositionError,
    ElementNotFoundError, ElementExistsError,
    ElementKind, AttributeChangeEvent, Units, PositionValue, Bounds,
)
from .sinks import AttributeSink, ElementSink, Sink
from .predicates import (
    AttributePredicate, NEVER_MATCHES, FunctionPredicate,
    AttributeNamePredicate, AttributePrefixPredicate, AnyOfPredicate,
    as_predicate,
)

__all__ = [
    "ErrorCode", "Error", "GraphViewError", "InvalidPositionError",
    "ElementNotFoundError", "ElementExistsError",
    "ElementKind", "AttributeChangeEvent", "Units", "PositionValue", "Bounds",
    "AttributeSink", "ElementSink", "Sink",
    "AttributePredicate", "NEVER_MATCHES", "FunctionPredicate",
    "AttributeNamePredicate", "AttributePrefixPredicate", "AnyOfPredicate",
    "as_predicate",
]
