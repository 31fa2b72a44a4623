"""
Graphic Sprite
==============

A small positioned marker living in a graphic graph, optionally attached to
one node or one edge.

MIRRORING:
==========
- Position is mirrored on the graph at "<prefix>.<id>" (default "ui.sprite.<id>")
- While attached, the host carries a presence attribute at the same key
- Other sprite attributes are re-emitted to the graph's attribute sinks as
  graph attribute events at "<prefix>.<id>.<attribute>", minus echoes

POSITION SEMANTICS:
===================
- Attached to a node: (radius, theta, phi); theta and phi wrap into [0, 2π)
- Attached to an edge: x is a ratio along the edge, clamped into [0, 1]
- Not attached: absolute coordinates, no normalization

INVARIANTS:
===========
1. At most one host at any time (Attachment is a tagged variant)
2. Unchanged positions neither mark the graph dirty nor rewrite the mirror
3. Invalid input is rejected before any state mutation
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union, TYPE_CHECKING
import logging
import math

from ..contracts.base import (
    AttributeChangeEvent, Bounds, InvalidPositionError, PositionValue, Units,
    optional_units
)
from .element import GraphicElement, GraphicNode, GraphicEdge
from .mirror import EchoGuard

if TYPE_CHECKING:
    from .graph import GraphicGraph

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


# =============================================================================
# ATTACHMENT (Tagged variant)
# =============================================================================

class AttachmentKind(Enum):
    NONE = "none"
    NODE = "node"
    EDGE = "edge"


@dataclass(frozen=True)
class Attachment:
    """
    What a sprite is attached to.

    INVARIANT: kind NONE <=> element is None; NODE carries a GraphicNode,
    EDGE carries a GraphicEdge. Being attached to both is not representable.
    """
    kind: AttachmentKind = AttachmentKind.NONE
    element: Optional[GraphicElement] = None

    def __post_init__(self):
        if self.kind is AttachmentKind.NONE:
            if self.element is not None:
                raise TypeError("a NONE attachment carries no element")
        elif self.kind is AttachmentKind.NODE:
            if not isinstance(self.element, GraphicNode):
                raise TypeError(f"expected a GraphicNode, got {type(self.element).__name__}")
        elif not isinstance(self.element, GraphicEdge):
            raise TypeError(f"expected a GraphicEdge, got {type(self.element).__name__}")

    @staticmethod
    def none() -> Attachment:
        return DETACHED

    @staticmethod
    def to_node(node: GraphicNode) -> Attachment:
        return Attachment(AttachmentKind.NODE, node)

    @staticmethod
    def to_edge(edge: GraphicEdge) -> Attachment:
        return Attachment(AttachmentKind.EDGE, edge)

    @property
    def node(self) -> Optional[GraphicNode]:
        return self.element if self.kind is AttachmentKind.NODE else None

    @property
    def edge(self) -> Optional[GraphicEdge]:
        return self.element if self.kind is AttachmentKind.EDGE else None


DETACHED = Attachment()


# =============================================================================
# COORDINATE NORMALIZATION
# =============================================================================

def wrap_angle(angle: float) -> float:
    """
    Normalize an angle in radians into [0, 2π).

    Values >= 2π wrap down by modulo; negative values wrap up to
    2π - (|angle| mod 2π).
    """
    if 0.0 <= angle < TWO_PI:
        return angle
    if angle >= TWO_PI:
        return math.fmod(angle, TWO_PI)
    wrapped = TWO_PI - math.fmod(-angle, TWO_PI)
    # -2π, -4π, ... land exactly on 2π
    return 0.0 if wrapped >= TWO_PI else wrapped


def clamp_ratio(value: float) -> float:
    """Clamp a position along an edge into [0, 1]."""
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


# =============================================================================
# SPRITE
# =============================================================================

class GraphicSprite(GraphicElement):
    """
    A small gentle sprite.

    Owns its position and bounding box. Shares (never owns) its host and
    the graph attribute map, mutating both only through their attribute
    API.
    """

    def __init__(self, sprite_id: str, graph: GraphicGraph):
        super().__init__(sprite_id, graph)
        config = graph.config
        self._key = config.sprite_key(sprite_id)
        self._attachment = DETACHED
        self._bounds = Bounds()
        self._echo = EchoGuard(graph.get_attribute)

        # Seed from some extant node; enumeration order is the graph's
        if graph.node_count() > 0:
            node = next(graph.node_iterator())
            self._position = PositionValue(config.default_units, (node.x, node.y, node.z))
        else:
            self._position = PositionValue.zero(config.default_units)

        if not graph.has_attribute(self._key):
            graph.add_attribute(self._key, self._position)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    @property
    def selector_type(self) -> str:
        return "sprite"

    @property
    def mirror_key(self) -> str:
        """Graph attribute holding this sprite's position."""
        return self._key

    @property
    def position(self) -> PositionValue:
        return self._position

    @property
    def x(self) -> float:
        return self._position.get(0)

    @property
    def y(self) -> float:
        return self._position.get(1)

    @property
    def z(self) -> float:
        return self._position.get(2)

    @property
    def units(self) -> Units:
        return self._position.units

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def attachment(self) -> Attachment:
        return self._attachment

    @property
    def node_attachment(self) -> Optional[GraphicNode]:
        """The node this sprite is attached to, or None."""
        return self._attachment.node

    @property
    def edge_attachment(self) -> Optional[GraphicEdge]:
        """The edge this sprite is attached to, or None."""
        return self._attachment.edge

    def get_attachment(self) -> Optional[GraphicElement]:
        """The host element, or None when not attached."""
        return self._attachment.element

    @property
    def is_attached(self) -> bool:
        return self._attachment.kind is not AttachmentKind.NONE

    @property
    def echo_guard(self) -> EchoGuard:
        return self._echo

    def contains(self, x: float, y: float, z: float = 0.0) -> bool:
        """2-D hit test against the renderer-supplied bounds; z is ignored."""
        b = self._bounds
        return b.x < x < b.x + b.width and b.y < y < b.y + b.height

    # -------------------------------------------------------------------------
    # Attachment
    # -------------------------------------------------------------------------

    def attach_to_node(self, node: GraphicNode) -> None:
        """Attach this sprite to the given node, leaving any previous host."""
        self._attach(Attachment.to_node(node))

    def attach_to_edge(self, edge: GraphicEdge) -> None:
        """Attach this sprite to the given edge, leaving any previous host."""
        self._attach(Attachment.to_edge(edge))

    def _attach(self, attachment: Attachment) -> None:
        host = attachment.element
        if host.graph is not self._graph:
            raise ValueError(f"{host!r} does not belong to graph {self._graph.id!r}")

        previous = self._attachment.element
        if previous is not None and previous is not host:
            previous.remove_attribute(self._key)

        self._attachment = attachment
        if not host.has_attribute(self._key):
            host.add_attribute(self._key)

        self._graph.mark_dirty()
        logger.debug("sprite %r attached to %s %r", self._id, attachment.kind.value, host.id)

    def detach(self) -> None:
        """Detach this sprite from the node or edge it is attached to."""
        host = self._attachment.element
        if host is not None:
            host.remove_attribute(self._key)
            logger.debug("sprite %r detached from %r", self._id, host.id)
        self._attachment = DETACHED
        self._graph.mark_dirty()

    # -------------------------------------------------------------------------
    # Position
    # -------------------------------------------------------------------------

    def set_position(
        self,
        x: Union[float, PositionValue],
        y: float = 0.0,
        z: float = 0.0,
        units: Optional[Units] = None
    ) -> bool:
        """
        Reposition this sprite.

        Coordinates are normalized for the current attachment before being
        compared with the stored position. `units=None` keeps the current
        units. A PositionValue as first argument is delegated to
        set_position_values().

        Returns True when the position changed.
        """
        if isinstance(x, PositionValue):
            return self.set_position_values(x)

        units = optional_units(units, self._position.units)
        x, y, z = float(x), float(y), float(z)
        self._check_finite(x, y, z)

        kind = self._attachment.kind
        if kind is AttachmentKind.NODE:
            y = wrap_angle(y)
            z = wrap_angle(z)
        elif kind is AttachmentKind.EDGE:
            x = clamp_ratio(x)

        current = self._position
        changed = False
        if current.get(0) != x:
            changed = True
        if current.get(1) != y:
            changed = True
        if current.get(2) != z:
            changed = True
        if current.units is not units:
            changed = True

        if not changed:
            return False

        self._position = PositionValue(units, (x, y, z))
        self._graph.mark_dirty()
        self._graph.set_attribute(self._key, self._position)
        logger.debug("sprite %r moved to %s", self._id, self._position)
        return True

    def set_position_values(self, values: PositionValue) -> bool:
        """
        Reposition this sprite from a position tuple.

        Missing trailing components default to 0. A tuple whose three
        components all equal 1 is rejected: producers upstream emit it as a
        malformed value, so it is refused as a compatibility guard, not as a
        rule about valid positions.
        """
        if not isinstance(values, PositionValue):
            raise InvalidPositionError(
                f"expected a PositionValue, got {type(values).__name__}", sprite_id=self._id
            )
        x, y, z = values.get(0), values.get(1), values.get(2)
        if x == 1 and y == 1 and z == 1:
            raise InvalidPositionError(
                "position (1, 1, 1) rejected by compatibility guard", sprite_id=self._id
            )
        return self.set_position(x, y, z, values.units)

    def move(self, x: float, y: float, z: float) -> bool:
        """Reposition in the native (configured default) units."""
        return self.set_position(x, y, z, self._graph.config.default_units)

    def set_bounds(self, x: float, y: float, w: float, h: float) -> None:
        """Renderer entry point; z and depth keep their previous values."""
        self._bounds = replace(self._bounds, x=x, y=y, width=w, height=h)

    # -------------------------------------------------------------------------
    # Attribute mirroring
    # -------------------------------------------------------------------------

    def add_attribute(self, key: str, value: Any = True) -> None:
        self._check_position_attribute(key, value)
        super().add_attribute(key, value)

    def change_attribute(self, key: str, value: Any) -> None:
        self._check_position_attribute(key, value)
        super().change_attribute(key, value)

    def _check_position_attribute(self, key: str, value: Any) -> None:
        if key != self._graph.config.position_attribute:
            return
        if not isinstance(value, PositionValue):
            raise InvalidPositionError(
                f"{key!r} expects a PositionValue, got {type(value).__name__}",
                sprite_id=self._id
            )
        if value.xyz() == (1.0, 1.0, 1.0):
            raise InvalidPositionError(
                "position (1, 1, 1) rejected by compatibility guard", sprite_id=self._id
            )
        self._check_finite(*value.xyz())

    def _check_finite(self, x: float, y: float, z: float) -> None:
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            raise InvalidPositionError(
                f"position components must be finite, got ({x}, {y}, {z})",
                sprite_id=self._id
            )

    def attribute_changed(self, attribute, event, old_value, new_value) -> None:
        config = self._graph.config
        if attribute == config.position_attribute:
            if event is not AttributeChangeEvent.REMOVE:
                self.set_position_values(new_value)
            return

        graph = self._graph
        key = config.sprite_attribute_key(self._id, attribute)

        if event is AttributeChangeEvent.REMOVE:
            graph.send_graph_attribute_removed(graph.id, key)
            return

        if not self._echo.should_emit(key, new_value):
            logger.debug(
                "echo of %r suppressed (%d so far)", key, self._echo.suppressed_count
            )
            return

        if event is AttributeChangeEvent.ADD:
            graph.send_graph_attribute_added(graph.id, key, new_value)
        else:
            graph.send_graph_attribute_changed(graph.id, key, old_value, new_value)

    def removed(self) -> None:
        """Called by the graph once the sprite has been taken out of it."""
        self._attachment = DETACHED
        logger.debug("sprite %r released", self._id)

    def __repr__(self) -> str:
        return f"GraphicSprite({self._id!r}, position={self._position}, attached={self._attachment.kind.value})"
