#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Random access to line-wrapped FASTA files.

Converts 1-based inclusive (chrom, start, end) coordinates into the exact
byte range covering those bases, line terminators included, reads that range
with one seek and one read, and returns the bases with terminators removed.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..errors import InvalidCoordinateError
from .byte_range import ByteRange, GenomicInterval
from .layout_index import LayoutEntry, LineLayoutIndex, load_or_build

logger = logging.getLogger(__name__)

_TERMINATOR_TABLE = bytes.maketrans(b'', b'')


# ============================================================================
#                           BYTE ARITHMETIC
# ============================================================================

def calculate_start_byte(start: int, entry: LayoutEntry) -> int:
    """
    File offset of a 1-based position.

    Every full line before the position contributes its terminator bytes on
    top of the base count.

    Example:
        60 bases/line, 61 bytes/line, data at byte 10: base 61 is the first
        base of the second line, at byte 10 + 1 + 60 = 71.
    """
    s = start - 1
    lines_before_start = s // entry.line_bases
    return entry.offset + lines_before_start * entry.terminator_width + s


def calculate_bytes_to_extract(start: int, end: int, entry: LayoutEntry) -> int:
    """Number of bytes spanning 1-based ``start..end`` including terminators."""
    s = start - 1
    e = end - 1
    newlines_spanned = e // entry.line_bases - s // entry.line_bases
    return (e - s) + newlines_spanned * entry.terminator_width + 1


def strip_terminators(data: bytes) -> bytes:
    """Remove every CR and LF byte."""
    return data.translate(_TERMINATOR_TABLE, b'\r\n')


# ============================================================================
#                           ACCESSOR
# ============================================================================

class SequenceFileAccessor:
    """
    Extract subsequences from a wrapped FASTA using its layout index.

    The accessor owns one binary file handle. Seek-then-read on that handle
    is not atomic, so threads must not share an accessor without external
    locking; open one accessor per thread over the same index instead.

    Example:
        >>> with SequenceFileAccessor.open('genome.fa') as ref:
        ...     ref.extract('chr1', 61, 61)
        'A'
    """

    def __init__(self, fasta_path: Union[str, Path], index: LineLayoutIndex):
        self.fasta_path = Path(fasta_path)
        if not self.fasta_path.exists():
            raise FileNotFoundError(f"FASTA file not found: {self.fasta_path}")
        self.index = index
        self._handle: Optional[BinaryIO] = open(self.fasta_path, 'rb')

    @classmethod
    def open(
        cls,
        fasta_path: Union[str, Path],
        index_path: Optional[Union[str, Path]] = None,
        write_index: bool = False,
    ) -> 'SequenceFileAccessor':
        """
        Open a FASTA, loading ``<fasta>.fai`` (or ``index_path``) or building
        the layout index when it is missing.
        """
        index = load_or_build(fasta_path, index_path, write=write_index)
        return cls(fasta_path, index)

    def byte_range(self, chrom: str, start: int, end: int) -> ByteRange:
        """
        Byte range holding bases ``start..end`` (1-based, inclusive).

        Raises:
            RecordNotFoundError: If ``chrom`` is not in the index
            InvalidCoordinateError: If the interval is empty, starts before 1
                or runs past the recorded length
        """
        interval = GenomicInterval(chrom, start, end)
        entry = self.index.entry(chrom)
        if entry.length is not None and interval.end > entry.length:
            raise InvalidCoordinateError(
                f"{interval} extends past the end of {chrom} (length {entry.length})"
            )
        return ByteRange(
            calculate_start_byte(interval.start, entry),
            calculate_bytes_to_extract(interval.start, interval.end, entry),
        )

    def extract(self, chrom: str, start: int, end: int) -> str:
        """
        Return bases ``start..end`` (1-based, inclusive) of ``chrom``.

        Args:
            chrom: Record name
            start: First base, 1-based
            end: Last base, 1-based, inclusive

        Returns:
            Dewrapped sequence of length ``end - start + 1``
        """
        byte_range = self.byte_range(chrom, start, end)
        data = self._read(byte_range)
        if len(data) != byte_range.length:
            raise InvalidCoordinateError(
                f"{chrom}:{start}-{end} runs past the end of {self.fasta_path}"
            )
        sequence = strip_terminators(data).decode('ascii')
        logger.debug(f"Extracted {chrom}:{start}-{end} ({len(sequence)} bp) from bytes "
                     f"{byte_range.offset}-{byte_range.end}")
        return sequence

    def extract_interval(self, interval: GenomicInterval) -> str:
        """Extract a GenomicInterval."""
        return self.extract(interval.chrom, interval.start, interval.end)

    def fetch_chromosome(self, chrom: str) -> str:
        """Return a whole record; requires the length column in the index."""
        entry = self.index.entry(chrom)
        if entry.length is None:
            raise InvalidCoordinateError(f"Length of {chrom} is not recorded in the index")
        if entry.length == 0:
            return ''
        return self.extract(chrom, 1, entry.length)

    def _read(self, byte_range: ByteRange) -> bytes:
        if self._handle is None:
            raise ValueError(f"Accessor for {self.fasta_path} is closed")
        self._handle.seek(byte_range.offset)
        return self._handle.read(byte_range.length)

    def close(self):
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> 'SequenceFileAccessor':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


__all__ = [
    'SequenceFileAccessor',
    'calculate_start_byte',
    'calculate_bytes_to_extract',
    'strip_terminators',
]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
