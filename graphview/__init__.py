"""
graphview: attribute event filtering and attached sprites for live graph views

This package implements the part of a graph viewer that sits between the
mutation stream of a graph and its renderer.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Value types (PositionValue, Units, Bounds), error codes and exceptions
   - Sink protocols (attribute and element notifications)
   - Attribute predicates

2. STREAM (stream/)
   - Responsibility: Deliver sink calls along chains of stages
   - SourceBase: sink registries with snapshot fan-out
   - IdentityFilter / AttributesFilter: pass-through and veto stages
   - MUST NOT: Modify, reorder or buffer events

3. GRAPHIC MODEL (graphic/)
   - Responsibility: Graph, nodes, edges and sprites as seen by a viewer
   - Outputs: Stream events to the graph's sinks, dirty flag for the renderer
   - MUST NOT: Render, lay out, or interpret stylesheets

4. OBSERVABILITY (observability/)
   - Logging setup, recording sink for inspection

CONSTRAINTS ENFORCED:
=====================
- Synchronous: every call runs to completion, fan-out included
- Single writer: one logical thread drives mutation and dispatch
- Explicit errors: invalid input raises before any state mutation
"""

from .config import ViewConfig
from .contracts import (
    Units, PositionValue, Bounds, ElementKind, AttributeChangeEvent,
    GraphViewError, InvalidPositionError, ElementNotFoundError, ElementExistsError,
    AttributePredicate, NEVER_MATCHES,
)
from .stream import SourceBase, IdentityFilter, AttributesFilter
from .graphic import (
    GraphicElement, GraphicNode, GraphicEdge, GraphicGraph, GraphicSprite,
    Attachment, AttachmentKind, EchoGuard,
)
from .observability import EventCollector, setup_logging

__version__ = "0.1.0"

__all__ = [
    "ViewConfig",
    "Units", "PositionValue", "Bounds", "ElementKind", "AttributeChangeEvent",
    "GraphViewError", "InvalidPositionError", "ElementNotFoundError", "ElementExistsError",
    "AttributePredicate", "NEVER_MATCHES",
    "SourceBase", "IdentityFilter", "AttributesFilter",
    "GraphicElement", "GraphicNode", "GraphicEdge", "GraphicGraph", "GraphicSprite",
    "Attachment", "AttachmentKind", "EchoGuard",
    "EventCollector", "setup_logging",
]
