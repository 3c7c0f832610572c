"""
StrandSlice v0.1.0

Sequence file I/O for StrandSlice.

Module structure:
1. byte_range.py - ByteRange and 1-based GenomicInterval primitives
2. layout_index.py - faidx-style line-layout index (parse, build, write)
3. sequence_accessor.py - random access to line-wrapped FASTA files
4. fasta_io.py - FASTA output via Biopython
"""

from .byte_range import ByteRange, GenomicInterval
from .layout_index import (
    LayoutEntry,
    LineLayoutIndex,
    build_layout_index,
    write_layout_index,
    default_index_path,
    load_or_build,
)
from .sequence_accessor import SequenceFileAccessor
from .fasta_io import make_record, write_fasta

__all__ = [
    # Primitives
    "ByteRange",
    "GenomicInterval",

    # Layout index
    "LayoutEntry",
    "LineLayoutIndex",
    "build_layout_index",
    "write_layout_index",
    "default_index_path",
    "load_or_build",

    # Random access
    "SequenceFileAccessor",

    # FASTA output
    "make_record",
    "write_fasta",
]
