#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Segment lookup, path lookup and path sequence assembly on top of the
byte-offset GFA indexes.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from ..errors import MalformedRecordError, RecordNotFoundError
from ..io.byte_range import ByteRange
from ..utils.sequence_utils import reverse_complement
from .byte_index import GraphIndex, scan_gfa
from .path_record import OrientedSegmentRef, PathRecord

logger = logging.getLogger(__name__)


class GraphAccessor:
    """
    Random access to the segments and paths of one GFA file.

    Construction scans the file once; afterwards every lookup is a single
    seek and read on the accessor's own file handle. The handle is not safe
    for concurrent use. To read from several threads, open one accessor per
    thread with ``GraphAccessor.from_index`` over the same frozen index.

    Iterating an accessor yields a PathRecord per path.

    Example:
        >>> with GraphAccessor('gene.gfa') as graph:
        ...     graph.path_sequence('GRCh38#chr1')
    """

    def __init__(self, gfa_path: Union[str, Path], strict: bool = False):
        """
        Args:
            gfa_path: Path to the GFA file
            strict: Reject duplicate segment/path names instead of keeping
                the last definition
        """
        self._init_from_index(scan_gfa(gfa_path, strict=strict))

    @classmethod
    def from_index(cls, index: GraphIndex) -> 'GraphAccessor':
        """Open a new handle on an already indexed GFA file."""
        accessor = cls.__new__(cls)
        accessor._init_from_index(index)
        return accessor

    def _init_from_index(self, index: GraphIndex):
        self.index = index
        self.gfa_path = index.source
        self._handle: Optional[BinaryIO] = open(self.gfa_path, 'rb')

    # ------------------------------------------------------------------
    # Segments
    # ------------------------------------------------------------------

    def sequence_of(self, segment_id: str) -> str:
        """
        Sequence of a segment, read straight from the file.

        Raises:
            RecordNotFoundError: If the segment is not defined
            MalformedRecordError: If the sequence holds non-ASCII bytes
        """
        byte_range = self.index.segment_range(segment_id)
        try:
            return self._read(byte_range).decode('ascii')
        except UnicodeDecodeError as e:
            raise MalformedRecordError(
                f"Segment {segment_id} at byte {byte_range.offset} of {self.gfa_path} "
                f"holds a non-ASCII byte at position {e.start}"
            ) from e

    def length_of(self, segment_id: str) -> int:
        """Length of a segment's sequence field (no I/O)."""
        return self.index.segment_range(segment_id).length

    def segment_names(self) -> List[str]:
        return list(self.index.segments)

    def has_segment(self, segment_id: str) -> bool:
        return segment_id in self.index.segments

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def record_of(self, path_id: str) -> PathRecord:
        """
        Re-read and parse the P-line of a path.

        Raises:
            RecordNotFoundError: If the path is not defined
        """
        line = self._read(self.index.path_range(path_id)).decode('utf-8')
        return PathRecord.from_line(line)

    def path_sequence(self, path_id: str) -> str:
        """
        Nucleotide sequence spelled by a path.

        Segments are concatenated in step order without separators; reverse
        steps contribute the reverse complement of the segment.

        Raises:
            RecordNotFoundError: If the path or one of its segments is missing
            MalformedRecordError: If a step has no '+'/'-' orientation
            UnsupportedBaseError: If a reverse segment holds a non-ACGT base
        """
        record = self.record_of(path_id)
        pieces = []
        for index, ref in self._steps(record):
            try:
                sequence = self.sequence_of(ref.segment_id)
            except RecordNotFoundError as e:
                raise RecordNotFoundError(
                    'Segment', ref.segment_id, f"path {path_id} step {index}"
                ) from e
            if ref.is_reverse:
                sequence = reverse_complement(sequence)
            pieces.append(sequence)

        sequence = ''.join(pieces)
        logger.debug(f"Assembled path {path_id}: {len(record)} steps, {len(sequence)} bp")
        return sequence

    def path_length(self, path_id: str) -> int:
        """Length of the path sequence, from segment lengths only."""
        record = self.record_of(path_id)
        total = 0
        for index, ref in self._steps(record):
            try:
                total += self.length_of(ref.segment_id)
            except RecordNotFoundError as e:
                raise RecordNotFoundError(
                    'Segment', ref.segment_id, f"path {path_id} step {index}"
                ) from e
        return total

    @staticmethod
    def _steps(record: PathRecord) -> Iterator[Tuple[int, OrientedSegmentRef]]:
        """(index, OrientedSegmentRef) for every step, all parsed before any lookup."""
        refs = []
        for index in range(len(record)):
            try:
                refs.append((index, record.ref_at(index)))
            except MalformedRecordError as e:
                raise MalformedRecordError(f"Path {record.name}, step {index}: {e}") from e
        return iter(refs)

    def path_names(self) -> List[str]:
        return list(self.index.paths)

    def has_path(self, path_id: str) -> bool:
        return path_id in self.index.paths

    @property
    def num_paths(self) -> int:
        return len(self.index.paths)

    # ------------------------------------------------------------------
    # File handling
    # ------------------------------------------------------------------

    def _read(self, byte_range: ByteRange) -> bytes:
        if self._handle is None:
            raise ValueError(f"Accessor for {self.gfa_path} is closed")
        self._handle.seek(byte_range.offset)
        data = self._handle.read(byte_range.length)
        if len(data) != byte_range.length:
            raise MalformedRecordError(
                f"Short read at byte {byte_range.offset} of {self.gfa_path}: "
                f"expected {byte_range.length} bytes, got {len(data)} "
                f"(file changed since indexing?)"
            )
        return data

    def close(self):
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> 'GraphAccessor':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __len__(self) -> int:
        return self.num_paths

    def __iter__(self) -> Iterator[PathRecord]:
        for path_id in self.path_names():
            yield self.record_of(path_id)


__all__ = ['GraphAccessor']

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
