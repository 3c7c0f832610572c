#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Minimal GTF records: parse, shift and format the nine GTF columns, and
look genes up by their ``gene_id`` attribute.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional, Union

from ..errors import MalformedRecordError, RecordNotFoundError

logger = logging.getLogger(__name__)

GENE_FEATURE = 'gene'
HEADER_PREFIX = '#!'
COMMENT_PREFIX = '#'


@lru_cache(maxsize=None)
def _attribute_pattern(key: str) -> 're.Pattern[str]':
    return re.compile(rf'(?:^|;)\s*{re.escape(key)} "([^"]+)"')


def extract_attribute(attributes: str, key: str = 'gene_id') -> Optional[str]:
    """
    Value of a quoted GTF attribute.

    Example:
        >>> extract_attribute('gene_id "ENSG01"; gene_name "ABC";')
        'ENSG01'
    """
    match = _attribute_pattern(key).search(attributes)
    return match.group(1) if match else None


@dataclass(frozen=True)
class GtfRecord:
    """
    One GTF feature line. Coordinates are 1-based inclusive.
    """
    seqname: str
    source: str
    feature: str
    start: int
    end: int
    score: str
    strand: str
    frame: str
    attributes: str

    @property
    def gene_id(self) -> Optional[str]:
        return extract_attribute(self.attributes, 'gene_id')

    def attribute(self, key: str) -> Optional[str]:
        return extract_attribute(self.attributes, key)

    def shifted(self, offset: int) -> 'GtfRecord':
        """Copy with ``offset`` subtracted from start and end."""
        return replace(self, start=self.start - offset, end=self.end - offset)

    def to_line(self) -> str:
        return '\t'.join([
            self.seqname, self.source, self.feature,
            str(self.start), str(self.end),
            self.score, self.strand, self.frame, self.attributes,
        ])


def parse_gtf_line(line: str, line_no: Optional[int] = None) -> GtfRecord:
    """
    Parse a tab-separated GTF feature line.

    Raises:
        MalformedRecordError: On fewer than nine columns or non-integer
            coordinates.
    """
    fields = line.rstrip('\r\n').split('\t')
    if len(fields) < 9:
        raise MalformedRecordError(
            f"GTF line has {len(fields)} columns, expected 9", line_no
        )
    try:
        start = int(fields[3])
        end = int(fields[4])
    except ValueError as e:
        raise MalformedRecordError(f"Non-integer GTF coordinate: {e}", line_no) from e
    # Extra tab-separated columns are folded back into the attributes
    return GtfRecord(
        fields[0], fields[1], fields[2], start, end,
        fields[5], fields[6], fields[7], '\t'.join(fields[8:]),
    )


def iter_gtf_records(gtf_path: Union[str, Path]) -> Iterator[GtfRecord]:
    """Yield every feature of a GTF file, skipping comments and blank lines."""
    gtf_path = Path(gtf_path)
    if not gtf_path.exists():
        raise FileNotFoundError(f"GTF file not found: {gtf_path}")

    with open(gtf_path, 'r') as f:
        for line_no, raw_line in enumerate(f, 1):
            line = raw_line.rstrip('\r\n')
            if not line or line.startswith(COMMENT_PREFIX):
                continue
            yield parse_gtf_line(line, line_no)


def find_gene(gtf_path: Union[str, Path], gene_id: str,
              attribute: str = 'gene_id') -> GtfRecord:
    """
    First ``gene`` feature whose ``attribute`` equals ``gene_id``.

    Raises:
        RecordNotFoundError: If the GTF has no such gene
    """
    for record in iter_gtf_records(gtf_path):
        if record.feature == GENE_FEATURE and record.attribute(attribute) == gene_id:
            logger.debug(f"Found gene {gene_id} at {record.seqname}:{record.start}-{record.end}")
            return record
    raise RecordNotFoundError('Gene', gene_id, gtf_path)


__all__ = [
    'GtfRecord',
    'extract_attribute',
    'parse_gtf_line',
    'iter_gtf_records',
    'find_gene',
    'GENE_FEATURE',
    'HEADER_PREFIX',
]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
