#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Tests for the byte-offset GFA segment and path indexes.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from strandslice.errors import (
    DuplicateIdentifierError,
    MalformedRecordError,
    RecordNotFoundError,
)
from strandslice.graph.byte_index import GraphIndexBuilder, scan_gfa
from strandslice.io.byte_range import ByteRange


class TestScan:
    """Single-pass scan of a GFA file."""

    def test_segment_ranges_point_at_sequence(self, simple_gfa):
        """Reading each recorded range from the raw file gives the sequence field."""
        index = scan_gfa(simple_gfa)
        raw = simple_gfa.read_bytes()

        assert set(index.segments) == {'A', 'B'}
        for name, expected in [('A', b'ATG'), ('B', b'GGT')]:
            byte_range = index.segment_range(name)
            assert raw[byte_range.offset:byte_range.end] == expected

    def test_first_segment_offset(self, simple_gfa):
        # "H\tVN:Z:1.0\n" is 11 bytes, then "S\tA\t" is 4 more
        assert scan_gfa(simple_gfa).segment_range('A') == ByteRange(15, 3)

    def test_path_ranges_cover_whole_line(self, simple_gfa):
        index = scan_gfa(simple_gfa)
        raw = simple_gfa.read_bytes()

        assert set(index.paths) == {'P1', 'P2'}
        byte_range = index.path_range('P1')
        assert raw[byte_range.offset:byte_range.end] == b'P\tP1\tA+,B-\t*'

    def test_other_record_types_skipped(self, temp_output_dir):
        gfa = temp_output_dir / "mixed.gfa"
        gfa.write_text(
            "H\tVN:Z:1.1\n"
            "L\tA\t+\tB\t+\t0M\n"
            "W\tsample\t1\tchr1\t0\t3\t>A\n"
            "C\tA\t+\tB\t+\t0\t3M\n"
            "#\tcomment\n"
            "SX\tnot\ta segment\n"
            "S\tA\tACG\n"
        )

        index = scan_gfa(gfa)

        assert list(index.segments) == ['A']
        assert len(index.paths) == 0

    def test_crlf_offsets(self, temp_output_dir):
        gfa = temp_output_dir / "crlf.gfa"
        gfa.write_bytes(b"H\tVN:Z:1.0\r\nS\tA\tACGT\r\nS\tB\tTT\r\nP\tp\tA+,B-\t*\r\n")
        raw = gfa.read_bytes()

        index = scan_gfa(gfa)

        for name, expected in [('A', b'ACGT'), ('B', b'TT')]:
            byte_range = index.segment_range(name)
            assert raw[byte_range.offset:byte_range.end] == expected
        path_range = index.path_range('p')
        assert raw[path_range.offset:path_range.end] == b'P\tp\tA+,B-\t*'

    def test_last_line_without_terminator(self, temp_output_dir):
        gfa = temp_output_dir / "noeol.gfa"
        gfa.write_bytes(b"S\tA\tAC\nS\tB\tGGGG")

        index = scan_gfa(gfa)

        assert index.segment_range('B') == ByteRange(7 + 4, 4)

    def test_empty_sequence_field(self, temp_output_dir):
        gfa = temp_output_dir / "empty_seq.gfa"
        gfa.write_text("S\tA\t\tLN:i:0\n")

        assert scan_gfa(gfa).segment_range('A').length == 0

    def test_malformed_segment_line(self, temp_output_dir):
        gfa = temp_output_dir / "bad.gfa"
        gfa.write_text("S\tA\tACGT\nS\tB\n")

        with pytest.raises(MalformedRecordError) as excinfo:
            scan_gfa(gfa)
        assert excinfo.value.line_no == 2

    def test_malformed_path_line(self, temp_output_dir):
        gfa = temp_output_dir / "bad_path.gfa"
        gfa.write_text("S\tA\tACGT\nP\tp1\n")

        with pytest.raises(MalformedRecordError):
            scan_gfa(gfa)

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            scan_gfa(temp_output_dir / "absent.gfa")

    def test_unknown_names(self, simple_gfa):
        index = scan_gfa(simple_gfa)

        with pytest.raises(RecordNotFoundError):
            index.segment_range('Z')
        with pytest.raises(RecordNotFoundError):
            index.path_range('P9')


class TestDuplicates:
    """Repeated segment or path names."""

    @pytest.fixture
    def duplicate_gfa(self, temp_output_dir):
        gfa = temp_output_dir / "dup.gfa"
        gfa.write_text("S\tA\tAAAA\nS\tA\tCC\nP\tp\tA+\t*\n")
        return gfa

    def test_last_definition_wins(self, duplicate_gfa):
        index = scan_gfa(duplicate_gfa)
        raw = duplicate_gfa.read_bytes()

        byte_range = index.segment_range('A')
        assert raw[byte_range.offset:byte_range.end] == b'CC'

    def test_strict_mode_rejects(self, duplicate_gfa):
        with pytest.raises(DuplicateIdentifierError) as excinfo:
            scan_gfa(duplicate_gfa, strict=True)
        assert excinfo.value.line_no == 2

    def test_duplicate_is_malformed_record(self, duplicate_gfa):
        with pytest.raises(MalformedRecordError):
            scan_gfa(duplicate_gfa, strict=True)


class TestBuilder:
    """Build-then-freeze lifecycle."""

    def test_add_line_offsets(self):
        builder = GraphIndexBuilder('mini.gfa')
        builder.add_line(b'S\tseg10\tACGTA', cursor=100)
        builder.add_line(b'P\tp\tseg10+\t*', cursor=114)

        index = builder.freeze()

        assert index.segments['seg10'] == ByteRange(100 + 1 + 5 + 2, 5)
        assert index.paths['p'] == ByteRange(114, 12)

    def test_blank_line_ignored(self):
        builder = GraphIndexBuilder('mini.gfa')
        builder.add_line(b'', cursor=0)

        assert len(builder.freeze().segments) == 0

    def test_frozen_index_is_read_only(self, simple_gfa):
        index = scan_gfa(simple_gfa)

        with pytest.raises(TypeError):
            index.segments['C'] = ByteRange(0, 1)

    def test_add_after_freeze_rejected(self):
        builder = GraphIndexBuilder('mini.gfa')
        builder.freeze()

        with pytest.raises(RuntimeError):
            builder.add_line(b'S\tA\tA', cursor=0)

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
