"""
Graphic Model Layer

RESPONSIBILITY: Graph, nodes, edges and sprites as seen by a viewer
ALLOWED INPUTS: Mutation calls (attributes, structure, sprite positions)
OUTPUTS: Stream events to the graph's sinks, the dirty flag for the renderer

WHAT THIS LAYER MUST NOT DO:
============================
- Render, lay out, or compute shapes (bounds are supplied by the renderer)
- Interpret stylesheets
- Serialize attribute values
"""

from .element import GraphicElement, GraphicNode, GraphicEdge
from .mirror import EchoGuard
from .sprite import (
    GraphicSprite, Attachment, AttachmentKind, wrap_angle, clamp_ratio
)
from .graph import GraphicGraph

__all__ = [
    "GraphicElement", "GraphicNode", "GraphicEdge",
    "EchoGuard",
    "GraphicSprite", "Attachment", "AttachmentKind", "wrap_angle", "clamp_ratio",
    "GraphicGraph",
]
