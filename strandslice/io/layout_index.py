#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Line-layout index for wrapped FASTA files (samtools faidx ``.fai`` format).

Each record maps a sequence name to the byte offset of its first base, the
number of bases per line and the number of bytes per line including the line
terminator. With those three numbers any 1-based coordinate can be turned
into a file offset without reading the sequence.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Union

from ..errors import MalformedIndexError, RecordNotFoundError

logger = logging.getLogger(__name__)

LAYOUT_INDEX_SUFFIX = '.fai'


# ============================================================================
#                           DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class LayoutEntry:
    """
    Layout of one wrapped sequence record.

    Attributes:
        name: Record identifier (e.g. chromosome name)
        length: Number of bases in the record, None when not recorded
        offset: Byte offset of the first base
        line_bases: Bases per full line
        line_bytes: Bytes per full line including the terminator
    """
    name: str
    length: Optional[int]
    offset: int
    line_bases: int
    line_bytes: int

    def __post_init__(self):
        if self.line_bases < 1:
            raise MalformedIndexError(
                f"{self.name}: bases per line must be >= 1, got {self.line_bases}"
            )
        if self.line_bytes < self.line_bases:
            raise MalformedIndexError(
                f"{self.name}: bytes per line ({self.line_bytes}) is smaller "
                f"than bases per line ({self.line_bases})"
            )
        if self.offset < 0:
            raise MalformedIndexError(f"{self.name}: negative data offset {self.offset}")

    @property
    def terminator_width(self) -> int:
        """Bytes of line terminator after every full line."""
        return self.line_bytes - self.line_bases

    def to_line(self) -> str:
        """Format as a tab-separated ``.fai`` line (no newline)."""
        length = '' if self.length is None else str(self.length)
        return f"{self.name}\t{length}\t{self.offset}\t{self.line_bases}\t{self.line_bytes}"


class LineLayoutIndex:
    """
    Immutable mapping of record name -> LayoutEntry.

    The entries are copied at construction and exposed read-only, so one
    index can back several accessors at once.
    """

    def __init__(self, entries: Mapping[str, LayoutEntry], source: Optional[Path] = None):
        self._entries = MappingProxyType(dict(entries))
        self.source = source

    @classmethod
    def from_file(cls, index_path: Union[str, Path]) -> 'LineLayoutIndex':
        """
        Parse a tab-separated layout index.

        Each line supplies ``name, length, offset, line_bases, line_bytes``.
        The length column is kept when numeric and ignored otherwise.

        Args:
            index_path: Path to the ``.fai`` file

        Returns:
            LineLayoutIndex

        Raises:
            FileNotFoundError: If the file does not exist
            MalformedIndexError: On missing or non-numeric layout fields
        """
        index_path = Path(index_path)
        if not index_path.exists():
            raise FileNotFoundError(f"Layout index not found: {index_path}")

        entries: Dict[str, LayoutEntry] = {}
        with open(index_path, 'r') as f:
            for line_no, raw_line in enumerate(f, 1):
                line = raw_line.rstrip('\r\n')
                if not line:
                    continue
                entry = parse_layout_line(line, line_no)
                if entry.name in entries:
                    logger.debug(f"{index_path}:{line_no}: duplicate record {entry.name}, keeping last")
                entries[entry.name] = entry

        logger.info(f"Loaded layout index with {len(entries)} records from {index_path}")
        return cls(entries, source=index_path)

    def entry(self, name: str) -> LayoutEntry:
        """Return the layout of ``name`` or raise RecordNotFoundError."""
        try:
            return self._entries[name]
        except KeyError:
            raise RecordNotFoundError('Sequence record', name, self.source) from None

    def names(self) -> List[str]:
        """Record names in index order."""
        return list(self._entries)

    @property
    def entries(self) -> Mapping[str, LayoutEntry]:
        return self._entries

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LayoutEntry]:
        return iter(self._entries.values())


def parse_layout_line(line: str, line_no: Optional[int] = None) -> LayoutEntry:
    """
    Parse one ``.fai`` line into a LayoutEntry.

    Raises:
        MalformedIndexError: If fewer than five fields are present or the
            offset/line fields are not integers.
    """
    fields = line.split('\t')
    if len(fields) < 5:
        raise MalformedIndexError(
            f"expected 5 tab-separated fields, found {len(fields)}", line_no
        )
    name = fields[0]
    try:
        offset = int(fields[2])
        line_bases = int(fields[3])
        line_bytes = int(fields[4])
    except ValueError as e:
        raise MalformedIndexError(f"non-numeric layout field for {name}: {e}", line_no) from e

    length = int(fields[1]) if fields[1].strip().isdigit() else None
    try:
        return LayoutEntry(name, length, offset, line_bases, line_bytes)
    except MalformedIndexError as e:
        raise MalformedIndexError(str(e), line_no) from e


# ============================================================================
#                           INDEX CONSTRUCTION
# ============================================================================

def build_layout_index(fasta_path: Union[str, Path]) -> LineLayoutIndex:
    """
    Scan a FASTA file and compute its layout index.

    Produces the same records as ``samtools faidx``. Every line of a record
    except the last must have the same width.

    Args:
        fasta_path: Path to an uncompressed FASTA file

    Returns:
        LineLayoutIndex

    Raises:
        FileNotFoundError: If the FASTA does not exist
        MalformedIndexError: On sequence data before the first header, on
            repeated record names, or on uneven line widths
    """
    fasta_path = Path(fasta_path)
    if not fasta_path.exists():
        raise FileNotFoundError(f"FASTA file not found: {fasta_path}")

    entries: Dict[str, LayoutEntry] = {}
    name = None
    length = offset = line_bases = line_bytes = 0
    ended = False
    cursor = 0

    def _close_record():
        if name is None:
            return
        if name in entries:
            raise MalformedIndexError(f"Duplicate sequence name in {fasta_path}: {name}")
        # Empty records still need a valid layout
        entries[name] = LayoutEntry(
            name, length, offset, max(line_bases, 1), max(line_bytes, line_bases, 1)
        )

    with open(fasta_path, 'rb') as f:
        for line_no, raw in enumerate(f, 1):
            cursor += len(raw)
            if raw.startswith(b'>'):
                _close_record()
                header = raw[1:].strip().split()
                if not header:
                    raise MalformedIndexError("empty FASTA header", line_no)
                name = header[0].decode('ascii')
                length = line_bases = line_bytes = 0
                offset = cursor
                ended = False
                continue

            seq = raw.rstrip(b'\r\n')
            if name is None:
                if seq.strip():
                    raise MalformedIndexError("sequence data before first header", line_no)
                continue
            if not seq:
                ended = True
                continue
            if ended:
                raise MalformedIndexError(
                    f"record {name} has lines of differing length", line_no
                )

            has_terminator = len(raw) != len(seq)
            if line_bases == 0:
                line_bases = len(seq)
                line_bytes = len(raw) if has_terminator else len(seq) + 1
            elif len(seq) > line_bases or (has_terminator and len(seq) == line_bases and len(raw) != line_bytes):
                raise MalformedIndexError(
                    f"record {name} has lines of differing length", line_no
                )
            elif len(seq) < line_bases:
                ended = True
            length += len(seq)

    _close_record()
    logger.info(f"Built layout index for {len(entries)} records from {fasta_path}")
    return LineLayoutIndex(entries, source=fasta_path)


def write_layout_index(index: LineLayoutIndex, output_path: Union[str, Path]) -> Path:
    """Write an index in ``.fai`` format and return the output path."""
    output_path = Path(output_path)
    with open(output_path, 'w') as f:
        for entry in index:
            f.write(entry.to_line() + '\n')
    logger.info(f"Wrote layout index ({len(index)} records): {output_path}")
    return output_path


def default_index_path(fasta_path: Union[str, Path]) -> Path:
    """``genome.fa`` -> ``genome.fa.fai``"""
    fasta_path = Path(fasta_path)
    return fasta_path.with_name(fasta_path.name + LAYOUT_INDEX_SUFFIX)


def load_or_build(
    fasta_path: Union[str, Path],
    index_path: Optional[Union[str, Path]] = None,
    write: bool = False,
) -> LineLayoutIndex:
    """
    Load the layout index of a FASTA, building it when no index file exists.

    Args:
        fasta_path: FASTA file
        index_path: Explicit index path (default: ``<fasta>.fai``)
        write: Write a freshly built index next to the FASTA
    """
    index_path = Path(index_path) if index_path else default_index_path(fasta_path)
    if index_path.exists():
        return LineLayoutIndex.from_file(index_path)

    logger.info(f"No layout index at {index_path}, scanning {fasta_path}")
    index = build_layout_index(fasta_path)
    if write:
        write_layout_index(index, index_path)
    return index


__all__ = [
    'LayoutEntry',
    'LineLayoutIndex',
    'parse_layout_line',
    'build_layout_index',
    'write_layout_index',
    'default_index_path',
    'load_or_build',
    'LAYOUT_INDEX_SUFFIX',
]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
