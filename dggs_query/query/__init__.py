"""Traversal and geometric query operations.

Each module answers one kind of question on top of a ``GridProvider``:
- relations: Antimeridian-aware overlap / containment / disjointness tests
- iterator: Lazy depth-first descend/accept traversal of the hierarchy
- envelope: Zones meeting a bounding box, and their analytic count
- polygon: Compact polygon cover with lazy expansion to a resolution
- hierarchy: Descendants at a resolution and the ancestor chain
- neighbors: Radius-bounded adjacency balls
"""

from dggs_query.query.envelope import count_zones_from_envelope, zones_from_envelope
from dggs_query.query.hierarchy import children, parents
from dggs_query.query.iterator import ZoneTreeIterator
from dggs_query.query.neighbors import neighbors
from dggs_query.query.polygon import compact_polygon_zones, polygon_zones

__all__ = [
    "ZoneTreeIterator",
    "children",
    "compact_polygon_zones",
    "count_zones_from_envelope",
    "neighbors",
    "parents",
    "polygon_zones",
    "zones_from_envelope",
]
