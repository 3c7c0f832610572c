"""
StrandSlice v0.1.0

Sequence utility functions for StrandSlice.

Provides the nucleotide operations used by path assembly and reporting.
"""

from ..errors import UnsupportedBaseError


# Soft-masked (lowercase) bases keep their case. Ambiguity codes such as N
# have no defined complement here and are rejected.
COMPLEMENT_MAP = {
    'A': 'T', 'T': 'A',
    'G': 'C', 'C': 'G',
    'a': 't', 't': 'a',
    'g': 'c', 'c': 'g',
}


def reverse_complement(sequence: str) -> str:
    """
    Generate reverse complement of DNA sequence.
    
    Args:
        sequence: DNA sequence string over A, C, G, T (either case)
        
    Returns:
        Reverse complement sequence
        
    Raises:
        UnsupportedBaseError: If any base lies outside A, C, G, T
        
    Example:
        >>> reverse_complement("ATCG")
        'CGAT'
    """
    try:
        return ''.join(COMPLEMENT_MAP[base] for base in reversed(sequence))
    except KeyError:
        for position, base in enumerate(sequence):
            if base not in COMPLEMENT_MAP:
                raise UnsupportedBaseError(base, position) from None
        raise


def calculate_gc_content(sequence: str) -> float:
    """
    Calculate GC content of a DNA sequence.
    
    Args:
        sequence: DNA sequence string
        
    Returns:
        GC content as fraction (0.0 to 1.0)
        
    Example:
        >>> calculate_gc_content("ATGC")
        0.5
    """
    if not sequence:
        return 0.0
    
    sequence = sequence.upper()
    gc_count = sequence.count('G') + sequence.count('C')
    
    return gc_count / len(sequence)


__all__ = [
    'COMPLEMENT_MAP',
    'reverse_complement',
    'calculate_gc_content',
]
