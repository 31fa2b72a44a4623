"""
Base Contracts and Shared Types

These are the foundational types shared by the stream and graphic layers.
Value types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Layers may import types but MUST NOT modify this module
- Value types are frozen dataclasses for immutability guarantee
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple
from enum import Enum, auto


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for deterministic error handling.
    No silent fallbacks - every error state is enumerated.
    """
    # Position errors
    INVALID_POSITION = auto()

    # Structural errors
    ELEMENT_NOT_FOUND = auto()
    ELEMENT_EXISTS = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data: they travel inside GraphViewError and can be inspected.
    """
    code: ErrorCode
    message: str
    timestamp: datetime
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @staticmethod
    def create(code: ErrorCode, message: str, **context: str) -> Error:
        return Error(
            code=code,
            message=message,
            timestamp=datetime.now(timezone.utc),
            context=tuple((k, str(v)) for k, v in context.items())
        )

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            timestamp=self.timestamp,
            context=self.context + ((key, value),)
        )


class GraphViewError(Exception):
    """
    Base exception; carries the structured Error that caused it.
    Subclasses pin the ErrorCode.
    """

    code: ErrorCode

    def __init__(self, message: str, **context: str):
        super().__init__(message)
        self.error = Error.create(self.code, message, **context)


class InvalidPositionError(GraphViewError, ValueError):
    """Raised when a position value is malformed."""
    code = ErrorCode.INVALID_POSITION


class ElementNotFoundError(GraphViewError, KeyError):
    """Raised when a node, edge or sprite id is unknown."""
    code = ErrorCode.ELEMENT_NOT_FOUND

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.error.message


class ElementExistsError(GraphViewError, ValueError):
    """Raised when a node, edge or sprite id is already taken."""
    code = ErrorCode.ELEMENT_EXISTS


# =============================================================================
# EVENT CLASSIFICATION
# =============================================================================

class ElementKind(Enum):
    """The three entity kinds that carry attributes."""
    GRAPH = "graph"
    NODE = "node"
    EDGE = "edge"


class AttributeChangeEvent(Enum):
    """What happened to an attribute."""
    ADD = "add"
    CHANGE = "change"
    REMOVE = "remove"


# =============================================================================
# POSITION TYPES (Immutable, explicit units)
# =============================================================================

class Units(Enum):
    """Units in which lengths and positions are expressed."""
    GU = "gu"                # Graph units
    PX = "px"                # Pixels
    PERCENTS = "percents"    # Normalized/relative


MAX_POSITION_COMPONENTS = 3


@dataclass(frozen=True)
class PositionValue:
    """
    Immutable tuple of up to three numeric components plus a unit tag.

    Equality is component-wise plus unit equality (dataclass semantics).
    Components are stored as floats so 1 and 1.0 compare equal.
    """
    units: Units = Units.GU
    values: Tuple[float, ...] = (0.0, 0.0, 0.0)

    def __post_init__(self):
        if not isinstance(self.units, Units):
            raise InvalidPositionError(
                f"units must be a Units member, got {self.units!r}"
            )
        if len(self.values) > MAX_POSITION_COMPONENTS:
            raise InvalidPositionError(
                f"position accepts at most {MAX_POSITION_COMPONENTS} components, "
                f"got {len(self.values)}",
                count=str(len(self.values))
            )
        object.__setattr__(self, 'values', tuple(float(v) for v in self.values))

    @staticmethod
    def of(*values: float, units: Units = Units.GU) -> PositionValue:
        return PositionValue(units=units, values=tuple(values))

    @staticmethod
    def zero(units: Units = Units.GU) -> PositionValue:
        return PositionValue(units=units, values=(0.0, 0.0, 0.0))

    @property
    def value_count(self) -> int:
        return len(self.values)

    def get(self, index: int) -> float:
        """Component at index, 0.0 when the tuple is shorter."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return 0.0

    @property
    def x(self) -> float:
        return self.get(0)

    @property
    def y(self) -> float:
        return self.get(1)

    @property
    def z(self) -> float:
        return self.get(2)

    def xyz(self) -> Tuple[float, float, float]:
        return (self.get(0), self.get(1), self.get(2))

    def __str__(self) -> str:
        parts = ", ".join(f"{v:g}" for v in self.values)
        return f"({parts}){self.units.value}"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box in graph units, written by the renderer."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    width: float = 0.0
    height: float = 0.0
    depth: float = 0.0


def optional_units(units: Optional[Units], fallback: Units) -> Units:
    """Resolve a "keep current" None units argument."""
    return fallback if units is None else units
