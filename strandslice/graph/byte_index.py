#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Byte-offset indexes over GFA segment (S) and path (P) records.

One sequential pass over the graph file records, for every segment, where
its sequence field lives and, for every path, where its whole line lives.
Lookups later seek straight to those bytes instead of holding sequences in
memory.

Index lifecycle is build-then-freeze: ``GraphIndexBuilder`` collects ranges
while the file is scanned and ``freeze()`` turns it into a read-only
``GraphIndex`` that can be shared between accessors.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from ..errors import DuplicateIdentifierError, MalformedRecordError, RecordNotFoundError
from ..io.byte_range import ByteRange

logger = logging.getLogger(__name__)

SEGMENT_TAG = b'S'
PATH_TAG = b'P'


# ============================================================================
#                           FROZEN INDEX
# ============================================================================

@dataclass(frozen=True)
class GraphIndex:
    """
    Read-only segment and path byte ranges for one GFA file.

    Attributes:
        source: GFA file the ranges point into
        segments: segment name -> range of the sequence field
        paths: path name -> range of the whole P-line (no terminator)
    """
    source: Path
    segments: Mapping[str, ByteRange]
    paths: Mapping[str, ByteRange]

    def segment_range(self, name: str) -> ByteRange:
        try:
            return self.segments[name]
        except KeyError:
            raise RecordNotFoundError('Segment', name, self.source) from None

    def path_range(self, name: str) -> ByteRange:
        try:
            return self.paths[name]
        except KeyError:
            raise RecordNotFoundError('Path', name, self.source) from None


# ============================================================================
#                           BUILDER
# ============================================================================

class GraphIndexBuilder:
    """
    Collect S/P byte ranges line by line.

    Duplicate identifiers overwrite the earlier entry (last write wins)
    unless ``strict`` is set, in which case DuplicateIdentifierError is
    raised.

    Example:
        >>> builder = GraphIndexBuilder('mini.gfa')
        >>> builder.add_line(b'S\\tA\\tATG', cursor=0)
        >>> builder.freeze().segments['A']
        ByteRange(offset=4, length=3)
    """

    def __init__(self, source: Union[str, Path], strict: bool = False):
        self.source = Path(source)
        self.strict = strict
        self._segments: Dict[str, ByteRange] = {}
        self._paths: Dict[str, ByteRange] = {}
        self._frozen = False

    def add_line(self, line: bytes, cursor: int, line_no: Optional[int] = None):
        """
        Index one line that starts at byte ``cursor``.

        Args:
            line: Line content without its terminator
            cursor: Byte offset of the first byte of the line
            line_no: 1-based line number for error messages

        Raises:
            MalformedRecordError: If an S/P line has fewer than 3 fields
            DuplicateIdentifierError: On a repeated name in strict mode
        """
        if self._frozen:
            raise RuntimeError("GraphIndexBuilder already frozen")
        if not line:
            return

        fields = line.split(b'\t')
        tag = fields[0]
        if tag == SEGMENT_TAG:
            if len(fields) < 3:
                raise MalformedRecordError(
                    f"S-line has {len(fields)} fields, expected at least 3", line_no
                )
            name = fields[1].decode('utf-8')
            # Sequence starts after "S<TAB>name<TAB>"
            byte_range = ByteRange(cursor + len(tag) + len(fields[1]) + 2, len(fields[2]))
            self._store(self._segments, 'Segment', name, byte_range, line_no)
        elif tag == PATH_TAG:
            if len(fields) < 3:
                raise MalformedRecordError(
                    f"P-line has {len(fields)} fields, expected at least 3", line_no
                )
            name = fields[1].decode('utf-8')
            self._store(self._paths, 'Path', name, ByteRange(cursor, len(line)), line_no)

    def _store(self, table: Dict[str, ByteRange], kind: str, name: str,
               byte_range: ByteRange, line_no: Optional[int]):
        if name in table:
            if self.strict:
                raise DuplicateIdentifierError(f"{kind} {name} defined more than once", line_no)
            logger.debug(f"{self.source}: {kind.lower()} {name} redefined at line {line_no}, keeping last")
        table[name] = byte_range

    def freeze(self) -> GraphIndex:
        """Finish construction and return the immutable index."""
        self._frozen = True
        return GraphIndex(
            source=self.source,
            segments=MappingProxyType(self._segments),
            paths=MappingProxyType(self._paths),
        )


def scan_gfa(gfa_path: Union[str, Path], strict: bool = False) -> GraphIndex:
    """
    Build the segment and path indexes of a GFA file in one pass.

    The file is read in binary mode and the cursor advances by the raw line
    length, terminator included, so offsets stay exact for LF and CRLF files
    and for a last line without terminator.

    Args:
        gfa_path: Path to the GFA file
        strict: Raise on duplicate segment/path names

    Returns:
        Frozen GraphIndex

    Raises:
        FileNotFoundError: If the file does not exist
        MalformedRecordError: On a truncated S/P line (no partial index is
            returned)
    """
    gfa_path = Path(gfa_path)
    if not gfa_path.exists():
        raise FileNotFoundError(f"GFA file not found: {gfa_path}")

    builder = GraphIndexBuilder(gfa_path, strict=strict)
    cursor = 0
    with open(gfa_path, 'rb') as f:
        for line_no, raw_line in enumerate(f, 1):
            builder.add_line(raw_line.rstrip(b'\r\n'), cursor, line_no)
            cursor += len(raw_line)

    index = builder.freeze()
    logger.info(
        f"Indexed {len(index.segments)} segments and {len(index.paths)} paths from {gfa_path}"
    )
    return index


__all__ = [
    'GraphIndex',
    'GraphIndexBuilder',
    'scan_gfa',
    'SEGMENT_TAG',
    'PATH_TAG',
]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
