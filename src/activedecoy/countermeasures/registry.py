"""Collection of live decoys, queryable by any seeker."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from activedecoy.countermeasures.decoy import DecoyEntity

logger = logging.getLogger(__name__)


class DecoyRegistry:
    """Insertion-ordered set of registered decoys.

    Owned by the countermeasure system and passed by reference to the
    decoys (which register and deregister themselves) and to the radar
    comparison engine. Traversal works on a snapshot, so entries can be
    removed mid-iteration. Queries evict entries whose decoy has gone
    inactive, so a decoy is only ever observed here while it is active.
    """

    def __init__(self):
        self._entries: dict[str, DecoyEntity] = {}

    def add(self, decoy: DecoyEntity) -> bool:
        """Register *decoy*. Returns False if it was already registered."""
        if decoy.decoy_id in self._entries:
            return False
        self._entries[decoy.decoy_id] = decoy
        return True

    def remove(self, decoy: DecoyEntity) -> None:
        """Deregister *decoy*; raises KeyError if it is not registered."""
        del self._entries[decoy.decoy_id]

    def discard(self, decoy: DecoyEntity) -> bool:
        """Deregister *decoy* if present. Returns True if it was removed."""
        return self._entries.pop(decoy.decoy_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def live(self) -> Iterator[DecoyEntity]:
        """Yield active decoys in registration order, evicting stale ones."""
        for decoy in list(self._entries.values()):
            if not decoy.active:
                if self.discard(decoy):
                    logger.debug("Evicted inactive decoy %s", decoy.decoy_id)
                continue
            yield decoy

    def evict_inactive(self) -> int:
        """Drop every inactive entry. Returns the number evicted."""
        before = len(self._entries)
        for _ in self.live():
            pass
        return before - len(self._entries)

    def __contains__(self, decoy: object) -> bool:
        decoy_id = getattr(decoy, "decoy_id", None)
        if decoy_id is None or self._entries.get(decoy_id) is not decoy:
            return False
        return decoy.active

    def __iter__(self) -> Iterator[DecoyEntity]:
        return iter(list(self.live()))

    def __len__(self) -> int:
        self.evict_inactive()
        return len(self._entries)

    def __bool__(self) -> bool:
        return len(self) > 0
