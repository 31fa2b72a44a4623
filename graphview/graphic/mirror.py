"""
Mirror Echo Guard
=================

Anti-echo rule for attributes mirrored into the graph namespace.

A sprite re-emits its attribute changes as graph attribute events at a
derived key. When the graph already stores the same value at that key the
event is an ECHO of a change that has already travelled through the
stream, and must not be sent again.

RULE:
=====
emit  <=>  last observed value is absent  OR  last observed value != new value

The last observed value is whatever the lookup returns for the key (the
owning graph's attribute store). Removals are not subject to the rule.
"""

from __future__ import annotations
from typing import Any, Callable


class EchoGuard:
    """Decides whether a mirrored add/change must be re-emitted."""

    def __init__(self, lookup: Callable[[str], Any]):
        self._lookup = lookup
        self._suppressed = 0

    def last_observed(self, key: str) -> Any:
        """Value the graph currently stores at key, None when absent."""
        return self._lookup(key)

    def should_emit(self, key: str, new_value: Any) -> bool:
        current = self.last_observed(key)
        if current is None or current != new_value:
            return True
        self._suppressed += 1
        return False

    @property
    def suppressed_count(self) -> int:
        """Number of echoes swallowed so far."""
        return self._suppressed
