#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Path records: parsed GFA P-lines as ordered, oriented segment steps.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from ..errors import MalformedRecordError

FORWARD = '+'
REVERSE = '-'

PATH_TAG = 'P'


@dataclass(frozen=True)
class OrientedSegmentRef:
    """
    One step of a path: a segment traversed forward or reverse.

    Attributes:
        segment_id: Segment name as it appears on the S-line
        is_reverse: True for '-' traversal (reverse complement)
    """
    segment_id: str
    is_reverse: bool

    @classmethod
    def parse(cls, step: str) -> 'OrientedSegmentRef':
        """
        Parse a step string such as ``'12+'`` or ``'chr1_seg-'``.

        Raises:
            MalformedRecordError: If the step has no name or does not end in
                '+' or '-'.
        """
        if len(step) < 2:
            raise MalformedRecordError(f"Malformed path step {step!r}")
        orient = step[-1]
        if orient not in (FORWARD, REVERSE):
            raise MalformedRecordError(
                f"Invalid orientation {orient!r} in step {step!r} (must be '+' or '-')"
            )
        return cls(step[:-1], orient == REVERSE)

    @property
    def orientation(self) -> str:
        return REVERSE if self.is_reverse else FORWARD

    def __str__(self) -> str:
        return f"{self.segment_id}{self.orientation}"


@dataclass(frozen=True)
class PathRecord:
    """
    Ordered list of oriented segment steps for one path.

    Steps are kept exactly as written in the GFA file; orientation is parsed
    per access. A segment may occur several times in either orientation.

    Attributes:
        name: Path name (P-line field 2)
        steps: Raw step strings in path order, e.g. ``('1+', '2-')``
    """
    name: str
    steps: Tuple[str, ...]

    @classmethod
    def from_line(cls, line: str, line_no: Optional[int] = None) -> 'PathRecord':
        """
        Parse a full P-line.

        Args:
            line: ``P<TAB>name<TAB>step,step,...[<TAB>...]`` without terminator

        Raises:
            MalformedRecordError: If the line is not a P-line with at least
                three fields.
        """
        fields = line.rstrip('\r\n').split('\t')
        if len(fields) < 3:
            raise MalformedRecordError(
                f"P-line has {len(fields)} fields, expected at least 3", line_no
            )
        if fields[0] != PATH_TAG:
            raise MalformedRecordError(f"Not a path line: {fields[0]!r}", line_no)
        steps = tuple(fields[2].split(',')) if fields[2] else ()
        return cls(fields[1], steps)

    def step_at(self, index: int) -> str:
        """Raw oriented step string at ``index``."""
        return self.steps[index]

    def orientation_at(self, index: int) -> bool:
        """
        True if the step at ``index`` is traversed in reverse.

        Raises:
            MalformedRecordError: If the step does not end in '+' or '-'.
        """
        step = self.steps[index]
        if step.endswith(REVERSE):
            return True
        if step.endswith(FORWARD):
            return False
        raise MalformedRecordError(
            f"Path {self.name}: step {index} ({step!r}) has no orientation"
        )

    def segment_id_at(self, index: int) -> str:
        """Segment name at ``index`` with the orientation symbol removed."""
        return self.steps[index][:-1]

    def ref_at(self, index: int) -> OrientedSegmentRef:
        return OrientedSegmentRef.parse(self.steps[index])

    def positions_by_step(self) -> Dict[str, List[int]]:
        """
        Map each distinct oriented step to the indices where it occurs.

        ``'3+'`` and ``'3-'`` are separate keys. Used to find repeated
        segments (cycles) along a path.

        Example:
            >>> PathRecord('p', ('1+', '2+', '1+', '1-')).positions_by_step()
            {'1+': [0, 2], '2+': [1], '1-': [3]}
        """
        positions: Dict[str, List[int]] = defaultdict(list)
        for index, step in enumerate(self.steps):
            positions[step].append(index)
        return dict(positions)

    def segment_ids(self) -> List[str]:
        """Segment names in path order (orientation dropped)."""
        return [step[:-1] for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[OrientedSegmentRef]:
        for step in self.steps:
            yield OrientedSegmentRef.parse(step)


__all__ = [
    'OrientedSegmentRef',
    'PathRecord',
    'FORWARD',
    'REVERSE',
    'PATH_TAG',
]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
