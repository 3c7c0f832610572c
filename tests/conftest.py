#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Pytest configuration and shared fixtures.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import random
import shutil
import tempfile
from pathlib import Path

import pytest

from strandslice.utils.sequence_utils import reverse_complement


def random_dna(length, seed):
    """Deterministic A/C/G/T sequence."""
    rng = random.Random(seed)
    return ''.join(rng.choice('ACGT') for _ in range(length))


def write_wrapped_fasta(path, records, width=60, newline='\n', description=''):
    """
    Write (name, sequence) pairs as FASTA wrapped at ``width``.

    Written by hand so the tests do not depend on the code under test for
    their fixtures.
    """
    with open(path, 'w', newline='') as f:
        for name, sequence in records:
            header = f">{name} {description}" if description else f">{name}"
            f.write(header + newline)
            for i in range(0, len(sequence), width):
                f.write(sequence[i:i + width] + newline)
    return Path(path)


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="strandslice_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def reference_sequences():
    """Two chromosomes of fixed random sequence."""
    return {
        'chr1': random_dna(300, seed=1),
        'chr2': random_dna(137, seed=2),
    }


@pytest.fixture
def wrapped_reference(temp_output_dir, reference_sequences):
    """Reference FASTA wrapped at 60 bases per line (no index file)."""
    path = temp_output_dir / "genome.fa"
    write_wrapped_fasta(path, reference_sequences.items())
    return path


@pytest.fixture
def simple_gfa(temp_output_dir):
    """
    GFA with segments A (ATG) and B (GGT) and a path P1 = A+,B-.

    Also carries header, link and a second path so that skipped record
    types and multiple paths are exercised.
    """
    content = (
        "H\tVN:Z:1.0\n"
        "S\tA\tATG\n"
        "S\tB\tGGT\tLN:i:3\n"
        "L\tA\t+\tB\t-\t0M\n"
        "\n"
        "P\tP1\tA+,B-\t*\n"
        "P\tP2\tB+,A+,B+\t*\n"
    )
    path = temp_output_dir / "simple.gfa"
    path.write_text(content)
    return path


@pytest.fixture
def gene_subgraph(temp_output_dir, wrapped_reference, reference_sequences):
    """
    Gene-scoped subgraph covering chr1:81-160 plus a matching GTF.

    The reference path is split into three segments, the middle one stored
    reverse-complemented and traversed '-'. Gene G1 spans chr1:101-130, so
    it starts 20 bases into the path sequence and its offset is 80.
    """
    chrom = reference_sequences['chr1']
    s1 = chrom[80:110]
    s2 = reverse_complement(chrom[110:140])
    s3 = chrom[140:160]
    gfa = temp_output_dir / "gene.gfa"
    gfa.write_text(
        "H\tVN:Z:1.0\n"
        f"S\ts1\t{s1}\n"
        f"S\ts2\t{s2}\n"
        f"S\ts3\t{s3}\n"
        "L\ts1\t+\ts2\t-\t0M\n"
        "L\ts2\t-\ts3\t+\t0M\n"
        "P\tref#chr1\ts1+,s2-,s3+\t*\n"
        "P\talt#1\ts1+,s3+\t*\n"
    )

    gtf = temp_output_dir / "genes.gtf"
    gtf.write_text(
        "#!genome-build test\n"
        "# free-form comment\n"
        'chr1\ttest\tgene\t101\t130\t.\t+\t.\tgene_id "G1"; gene_name "ONE";\n'
        'chr1\ttest\ttranscript\t101\t130\t.\t+\t.\tgene_id "G1"; transcript_id "T1";\n'
        'chr1\ttest\texon\t105\t120\t.\t+\t.\tgene_id "G1"; transcript_id "T1";\n'
        "\n"
        'chr1\ttest\tgene\t200\t250\t.\t-\t.\tgene_id "G2";\n'
        'chr1\ttest\texon\t210\t220\t.\t-\t.\tgene_id "G2"; transcript_id "T2";\n'
    )
    return {'gfa': gfa, 'gtf': gtf, 'reference': wrapped_reference, 'path': 'ref#chr1'}

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
