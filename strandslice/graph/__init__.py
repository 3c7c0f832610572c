"""
StrandSlice v0.1.0

GFA graph access for StrandSlice.

Module structure:
1. byte_index.py - single-pass S/P byte-offset indexes (build-then-freeze)
2. path_record.py - parsed P-lines and oriented segment steps
3. gfa_accessor.py - segment/path lookup and path sequence assembly

Only S and P records are indexed; H, L, C, W and other lines are skipped.
"""

from .byte_index import GraphIndex, GraphIndexBuilder, scan_gfa
from .path_record import OrientedSegmentRef, PathRecord, FORWARD, REVERSE
from .gfa_accessor import GraphAccessor

__all__ = [
    # Indexing
    "GraphIndex",
    "GraphIndexBuilder",
    "scan_gfa",

    # Paths
    "OrientedSegmentRef",
    "PathRecord",
    "FORWARD",
    "REVERSE",

    # Access
    "GraphAccessor",
]
