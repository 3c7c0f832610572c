#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Tests for coordinate offset resolution and GTF coordinate translation.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from strandslice.annotation.gtf import GtfRecord, find_gene, parse_gtf_line
from strandslice.annotation.offset_resolver import (
    CoordinateOffsetResolver,
    find_offset,
    translate,
)
from strandslice.errors import RecordNotFoundError, SequenceNotFoundError
from strandslice.graph.gfa_accessor import GraphAccessor
from strandslice.io.sequence_accessor import SequenceFileAccessor


def _record(start, end, gene_id='G1', feature='exon'):
    return GtfRecord('chr1', 'test', feature, start, end, '.', '+', '.',
                     f'gene_id "{gene_id}";')


class TestFindOffset:
    """Offset arithmetic from the first exact match."""

    def test_offset_from_match_position(self):
        """ATTAGC at 0-based position 5 with GTF start 100 gives 94."""
        path_sequence = 'GGGGG' + 'ATTAGC' + 'C' * 39
        assert len(path_sequence) == 50

        assert find_offset('ATTAGC', path_sequence, 100) == 94

    def test_match_at_path_start(self):
        """A gene at the very start of the path lands on path position 1."""
        offset = find_offset('ACGT', 'ACGTTT', 1000)

        assert offset == 999
        assert 1000 - offset == 1

    def test_first_occurrence_used(self):
        assert find_offset('AC', 'TTACGGAC', 10) == 10 - 2 - 1

    def test_not_found(self):
        with pytest.raises(SequenceNotFoundError):
            find_offset('ATTAGC', 'GGGGGGGG', 100)

    def test_match_is_case_sensitive(self):
        with pytest.raises(SequenceNotFoundError):
            find_offset('attagc', 'GGGATTAGC', 100)

    def test_reverse_complement_is_not_a_match(self):
        """Strand mismatches are reported, never guessed."""
        with pytest.raises(SequenceNotFoundError):
            find_offset('AACG', 'TTCGTT', 10)

    def test_empty_gene_sequence(self):
        with pytest.raises(SequenceNotFoundError):
            find_offset('', 'ACGT', 10)

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            find_offset('A', 'C', 1)


class TestTranslate:
    """Shifting records by a resolved offset."""

    def test_every_record_of_gene_shifted(self):
        records = [_record(100, 200, feature='gene'), _record(120, 140), _record(150, 160)]

        shifted = list(translate(records, 'G1', 94))

        assert [(r.start, r.end) for r in shifted] == [(6, 106), (26, 46), (56, 66)]

    def test_other_genes_dropped(self):
        records = [_record(100, 200), _record(300, 400, gene_id='G2')]

        shifted = list(translate(records, 'G2', 250))

        assert len(shifted) == 1
        assert (shifted[0].start, shifted[0].end) == (50, 150)

    def test_other_columns_untouched(self):
        line = 'chr7\thavana\tCDS\t1000\t1099\t0.5\t-\t2\tgene_id "G9"; transcript_id "T9";'
        record = parse_gtf_line(line)

        shifted = next(translate([record], 'G9', 900))

        assert shifted.to_line() == line.replace('\t1000\t1099\t', '\t100\t199\t')

    def test_custom_attribute(self):
        record = GtfRecord('chr1', 't', 'exon', 10, 20, '.', '+', '.',
                           'gene_id "ENSG1"; gene_name "ABC";')

        assert list(translate([record], 'ABC', 5, attribute='gene_name'))[0].start == 5


class TestCoordinateOffsetResolver:
    """End to end against a subgraph and a reference FASTA."""

    def test_resolve_gene(self, gene_subgraph):
        gene = find_gene(gene_subgraph['gtf'], 'G1')

        with GraphAccessor(gene_subgraph['gfa']) as graph, \
                SequenceFileAccessor.open(gene_subgraph['reference']) as sequences:
            offset = CoordinateOffsetResolver(graph, sequences).resolve(gene, 'ref#chr1')

        # The path starts at chr1:81
        assert offset == 80

    def test_translated_records_point_at_gene(self, gene_subgraph, reference_sequences):
        """After translation the gene's bases sit at its new path coordinates."""
        gene = find_gene(gene_subgraph['gtf'], 'G1')

        with GraphAccessor(gene_subgraph['gfa']) as graph, \
                SequenceFileAccessor.open(gene_subgraph['reference']) as sequences:
            resolver = CoordinateOffsetResolver(graph, sequences)
            offset = resolver.resolve(gene, 'ref#chr1')
            path_sequence = graph.path_sequence('ref#chr1')
            shifted = next(resolver.translate([gene], 'G1', offset))

        assert (shifted.start, shifted.end) == (21, 50)
        assert path_sequence[shifted.start - 1:shifted.end] == \
            reference_sequences['chr1'][gene.start - 1:gene.end]

    def test_gene_absent_from_path(self, gene_subgraph):
        """alt#1 skips the segment that holds most of G1."""
        gene = find_gene(gene_subgraph['gtf'], 'G1')

        with GraphAccessor(gene_subgraph['gfa']) as graph, \
                SequenceFileAccessor.open(gene_subgraph['reference']) as sequences:
            with pytest.raises(SequenceNotFoundError) as excinfo:
                CoordinateOffsetResolver(graph, sequences).resolve(gene, 'alt#1')

        assert 'G1' in str(excinfo.value)

    def test_unknown_path(self, gene_subgraph):
        gene = find_gene(gene_subgraph['gtf'], 'G1')

        with GraphAccessor(gene_subgraph['gfa']) as graph, \
                SequenceFileAccessor.open(gene_subgraph['reference']) as sequences:
            with pytest.raises(RecordNotFoundError):
                CoordinateOffsetResolver(graph, sequences).resolve(gene, 'missing#path')

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
