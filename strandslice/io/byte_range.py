#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Shared primitives: file byte ranges and 1-based genomic intervals.

All genomic positions handled by StrandSlice are 1-based and inclusive on
both ends. Byte arithmetic works on 0-based positions; the conversion
happens only through ``GenomicInterval.to_zero_based`` and
``GenomicInterval.from_zero_based``.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Tuple

from ..errors import InvalidCoordinateError


@dataclass(frozen=True)
class ByteRange:
    """
    Immutable slice of a file.

    Attributes:
        offset: Byte position of the first byte (0-based)
        length: Number of bytes in the slice
    """
    offset: int
    length: int

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError(f"ByteRange offset must be >= 0, got {self.offset}")
        if self.length < 0:
            raise ValueError(f"ByteRange length must be >= 0, got {self.length}")

    @property
    def end(self) -> int:
        """Exclusive end offset."""
        return self.offset + self.length

    def __len__(self) -> int:
        return self.length


_REGION_RE = re.compile(r'^(?P<chrom>.+):(?P<start>[\d,]+)-(?P<end>[\d,]+)$')


@dataclass(frozen=True)
class GenomicInterval:
    """
    1-based, inclusive genomic interval on one chromosome.

    Attributes:
        chrom: Chromosome / sequence record name
        start: First base (1-based)
        end: Last base (1-based, inclusive)

    Example:
        >>> GenomicInterval('chr1', 61, 61).to_zero_based()
        (60, 60)
    """
    chrom: str
    start: int
    end: int

    def __post_init__(self):
        if self.start < 1:
            raise InvalidCoordinateError(
                f"Start must be >= 1 (1-based), got {self.start} on {self.chrom}"
            )
        if self.end < self.start:
            raise InvalidCoordinateError(
                f"End ({self.end}) is before start ({self.start}) on {self.chrom}"
            )

    def to_zero_based(self) -> Tuple[int, int]:
        """Return (start, end) as 0-based inclusive positions."""
        return self.start - 1, self.end - 1

    @classmethod
    def from_zero_based(cls, chrom: str, start: int, end: int) -> 'GenomicInterval':
        """Build an interval from 0-based inclusive positions."""
        return cls(chrom, start + 1, end + 1)

    @classmethod
    def parse(cls, region: str) -> 'GenomicInterval':
        """
        Parse a samtools-style region string.

        Args:
            region: ``chrom:start-end`` with 1-based inclusive coordinates;
                thousands separators are allowed.

        Raises:
            InvalidCoordinateError: If the string is not a region.

        Example:
            >>> GenomicInterval.parse('chr2:1,000-2,000')
            GenomicInterval(chrom='chr2', start=1000, end=2000)
        """
        match = _REGION_RE.match(region.strip())
        if not match:
            raise InvalidCoordinateError(
                f"Invalid region {region!r} (expected chrom:start-end)"
            )
        return cls(
            match.group('chrom'),
            int(match.group('start').replace(',', '')),
            int(match.group('end').replace(',', '')),
        )

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"{self.chrom}:{self.start}-{self.end}"


__all__ = ['ByteRange', 'GenomicInterval']

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
