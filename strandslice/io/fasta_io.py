#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
FASTA output for extracted regions and assembled path sequences.
"""

import sys
from pathlib import Path
from typing import Iterable, Optional, Union

from Bio.Seq import Seq
from Bio.SeqIO.FastaIO import FastaWriter
from Bio.SeqRecord import SeqRecord


def make_record(name: str, sequence: str, description: str = '') -> SeqRecord:
    """Wrap a plain sequence string as a SeqRecord."""
    return SeqRecord(Seq(sequence), id=name, description=description)


def write_fasta(
    records: Iterable[SeqRecord],
    filepath: Optional[Union[str, Path]] = None,
    line_width: int = 60
) -> int:
    """
    Write SeqRecords as FASTA.

    Args:
        records: Records to write
        filepath: Output FASTA path (None = stdout)
        line_width: Number of bases per line (0 = no wrapping)

    Returns:
        Number of sequences written
    """
    wrap = line_width if line_width > 0 else None

    if filepath is None:
        return FastaWriter(sys.stdout, wrap=wrap).write_file(records)

    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, 'w') as handle:
        return FastaWriter(handle, wrap=wrap).write_file(records)


__all__ = ['make_record', 'write_fasta']
