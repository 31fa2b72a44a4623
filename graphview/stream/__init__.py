"""
Event Stream Layer

RESPONSIBILITY: Deliver graph mutation notifications through chains of sinks
ALLOWED INPUTS: Sink calls from any source (graphic graph, other filters)
OUTPUTS: The same sink calls, forwarded or vetoed

WHAT THIS LAYER MUST NOT DO:
============================
- Modify event arguments
- Reorder events
- Buffer or delay events (delivery is synchronous)
"""

from .source import SourceBase
from .filters import IdentityFilter, AttributesFilter

__all__ = ["SourceBase", "IdentityFilter", "AttributesFilter"]
