#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Coordinate offset resolution between a reference genome and a gene-scoped
subgraph.

The gene's bases are cut from the reference FASTA and searched for in the
sequence spelled by one path of the subgraph. Where they first occur fixes a
single integer offset; subtracting it from reference coordinates gives
coordinates along the path sequence.

Matching is exact string equality: no mismatches, indels or case folding
are tolerated, and a miss is an error rather than a guess.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from typing import Iterable, Iterator

from ..errors import SequenceNotFoundError
from ..graph.gfa_accessor import GraphAccessor
from ..io.sequence_accessor import SequenceFileAccessor
from .gtf import GtfRecord

logger = logging.getLogger(__name__)


def find_offset(gene_sequence: str, path_sequence: str, gene_start: int) -> int:
    """
    Offset translating reference coordinates into path coordinates.

    Args:
        gene_sequence: Gene bases from the reference genome
        path_sequence: Sequence of the subgraph path
        gene_start: 1-based reference start of the gene

    Returns:
        ``gene_start - match_position - 1`` where ``match_position`` is the
        0-based index of the first occurrence of the gene in the path.

    Raises:
        SequenceNotFoundError: If the gene does not occur in the path

    Example:
        >>> find_offset('ATTAGC', 'GGGGGATTAGC', 100)
        94
    """
    if not gene_sequence:
        raise SequenceNotFoundError("Gene sequence is empty")
    match_position = path_sequence.find(gene_sequence)
    if match_position < 0:
        raise SequenceNotFoundError(
            f"Gene sequence ({len(gene_sequence)} bp) not found in path "
            f"sequence ({len(path_sequence)} bp)"
        )
    return gene_start - match_position - 1


def translate(records: Iterable[GtfRecord], gene_id: str, offset: int,
              attribute: str = 'gene_id') -> Iterator[GtfRecord]:
    """
    Shift every record of ``gene_id`` by ``offset``.

    Records belonging to other genes are dropped.
    """
    for record in records:
        if record.attribute(attribute) == gene_id:
            yield record.shifted(offset)


class CoordinateOffsetResolver:
    """
    Resolve per-gene offsets against one subgraph and one reference.

    Args:
        graph: Accessor on the gene-scoped GFA
        sequences: Accessor on the reference FASTA
    """

    def __init__(self, graph: GraphAccessor, sequences: SequenceFileAccessor):
        self.graph = graph
        self.sequences = sequences

    def resolve(self, gene: GtfRecord, path_name: str) -> int:
        """
        Offset for ``gene`` along ``path_name``.

        The reference bases are taken as written in the FASTA for both
        strands; the path sequence is assembled in path orientation.

        Raises:
            RecordNotFoundError: If the chromosome, path or a segment is missing
            SequenceNotFoundError: If the gene does not occur in the path
        """
        gene_sequence = self.sequences.extract(gene.seqname, gene.start, gene.end)
        path_sequence = self.graph.path_sequence(path_name)
        try:
            offset = find_offset(gene_sequence, path_sequence, gene.start)
        except SequenceNotFoundError as e:
            raise SequenceNotFoundError(
                f"Gene {gene.gene_id} ({gene.seqname}:{gene.start}-{gene.end}, "
                f"strand {gene.strand}) not found in path {path_name}: {e}"
            ) from e

        logger.info(
            f"Gene {gene.gene_id} found at position {gene.start - offset} of path "
            f"{path_name}; offset {offset}"
        )
        return offset

    def translate(self, records: Iterable[GtfRecord], gene_id: str, offset: int,
                  attribute: str = 'gene_id') -> Iterator[GtfRecord]:
        """Shift the records of ``gene_id`` by a resolved offset."""
        return translate(records, gene_id, offset, attribute)


__all__ = [
    'find_offset',
    'translate',
    'CoordinateOffsetResolver',
]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
