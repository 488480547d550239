"""DGGS traversal and geometric query engine.

Answers region and hierarchy questions over a hierarchical discrete
global grid (rHEALPix): which zones meet a bounding box or polygon, how
many there are, a zone's descendants, ancestors and neighbors.  Every
multi-zone result is produced lazily by one depth-first descend/accept
traversal.
"""

__version__ = "0.1.0"
