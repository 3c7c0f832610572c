"""
StrandSlice v0.1.0

Annotation coordinate reconciliation for StrandSlice.

Module structure:
1. gtf.py - GTF records and gene lookup
2. offset_resolver.py - reference-to-path offset resolution and translation
3. rewrite.py - gene-scoped GTF rewriting
"""

from .gtf import GtfRecord, extract_attribute, parse_gtf_line, iter_gtf_records, find_gene
from .offset_resolver import CoordinateOffsetResolver, find_offset, translate
from .rewrite import RewriteSummary, default_output_path, rewrite_gtf_for_subgraph

__all__ = [
    # GTF
    "GtfRecord",
    "extract_attribute",
    "parse_gtf_line",
    "iter_gtf_records",
    "find_gene",

    # Offsets
    "CoordinateOffsetResolver",
    "find_offset",
    "translate",

    # Rewriting
    "RewriteSummary",
    "default_output_path",
    "rewrite_gtf_for_subgraph",
]
