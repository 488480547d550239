"""Lazy depth-first traversal of the zone hierarchy.

``ZoneTreeIterator`` is the single recursive-descent primitive of the
engine.  Every query configures it with a pair of predicates:

- ``accept(zone)``  — emit ``mapper(zone)`` for this zone;
- ``descend(zone)`` — push this zone's children for later visiting.

The two are independent: a zone may be accepted, descended, both or
neither.  Work happens only as values are pulled; a consumer that stops
early leaves the rest of the tree untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from dggs_query.models.zone import Zone
    from dggs_query.providers.base import GridProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ZoneTreeIterator(Generic[T]):
    """Forward-only iterator over the zones selected by a predicate pair.

    Traversal is depth-first: seeds in their given order, children in
    ascending digit order within a parent.  Each instance owns its stack;
    instances are not thread-safe and cannot be restarted.

    Args:
        provider: Grid session used to resolve seeds and expand children.
        descend: Whether to visit a zone's children.
        accept: Whether to emit a zone.
        mapper: Converts an accepted zone to the emitted value.
        seeds: Zones or zone ids to start from.  ``None`` starts from every
            resolution 0 face.

    Attributes:
        visited: Number of zones popped so far.
    """

    def __init__(
        self,
        provider: GridProvider,
        descend: Callable[[Zone], bool],
        accept: Callable[[Zone], bool],
        mapper: Callable[[Zone], T],
        seeds: Sequence[Zone | str] | None = None,
    ) -> None:
        self._provider = provider
        self._descend = descend
        self._accept = accept
        self._mapper = mapper
        # Entries are zones or not-yet-resolved ids.  Reversed so the
        # first seed (or child 0) is popped first.
        self._stack: list[Zone | str] = []
        if seeds is None:
            self._stack.extend(reversed(provider.root_zone_ids()))
        else:
            self._stack.extend(reversed(list(seeds)))
        self.visited = 0
        self._walker = self._walk()

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        return next(self._walker)

    def _walk(self) -> Iterator[T]:
        while self._stack:
            entry = self._stack.pop()
            zone = self._provider.zone_by_id(entry) if isinstance(entry, str) else entry
            self.visited += 1

            if self._accept(zone):
                yield self._mapper(zone)

            if self._descend(zone):
                self._stack.extend(reversed(self._provider.children_of(zone)))

        logger.debug("Zone traversal exhausted | visited=%d", self.visited)
