"""
Utilities module for StrandSlice.

This module provides shared helpers:
- Nucleotide operations (reverse complement, GC content)
"""

from .sequence_utils import (
    reverse_complement,
    calculate_gc_content,
)

__all__ = [
    "reverse_complement",
    "calculate_gc_content",
]
