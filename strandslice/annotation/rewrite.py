#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

GTF rewriting for gene-scoped subgraphs ("mini GFA").

Resolves the offset of one gene between the reference genome and a path of
the subgraph, then writes that gene's GTF records in path coordinates.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config.schema import load_config
from ..graph.gfa_accessor import GraphAccessor
from ..io.sequence_accessor import SequenceFileAccessor
from .gtf import COMMENT_PREFIX, HEADER_PREFIX, find_gene, parse_gtf_line
from .offset_resolver import CoordinateOffsetResolver, translate

logger = logging.getLogger(__name__)


@dataclass
class RewriteSummary:
    """
    Outcome of one GTF rewrite.

    Attributes:
        gene_id: Gene that was rewritten
        output_path: Written GTF file
        offset: Value subtracted from every start and end
        records_written: Number of feature lines written
    """
    gene_id: str
    output_path: Path
    offset: int
    records_written: int


def default_output_path(gtf_path: Union[str, Path], gene_id: str,
                        suffix_template: str = '_{gene_id}_mini') -> Path:
    """
    Output path next to the input GTF with a gene suffix before the extension.

    Example:
        >>> default_output_path('/data/genes.gtf', 'ENSG01')
        PosixPath('/data/genes_ENSG01_mini.gtf')
    """
    gtf_path = Path(gtf_path)
    suffix = suffix_template.format(gene_id=gene_id)
    return gtf_path.with_name(f"{gtf_path.stem}{suffix}{gtf_path.suffix}")


def rewrite_gtf_for_subgraph(
    gene_id: str,
    gfa_path: Union[str, Path],
    path_name: str,
    gtf_path: Union[str, Path],
    reference_path: Union[str, Path],
    index_path: Optional[Union[str, Path]] = None,
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[Dict[str, Any]] = None,
) -> RewriteSummary:
    """
    Rewrite the GTF records of one gene into subgraph path coordinates.

    The output keeps '#!' header lines and holds only the records of
    ``gene_id``, each shifted by the resolved offset. Nothing is written when
    the offset cannot be resolved or a GTF line fails to parse.

    Args:
        gene_id: Gene to rewrite
        gfa_path: Gene-scoped GFA
        path_name: Path of the GFA that carries the reference haplotype
        gtf_path: Reference-coordinate GTF
        reference_path: Reference genome FASTA
        index_path: Layout index of the FASTA (default ``<fasta>.fai``,
            built when missing)
        output_path: Output GTF (default: input name plus gene suffix)
        config: Configuration dictionary (default: built-in defaults)

    Returns:
        RewriteSummary

    Raises:
        RecordNotFoundError: If the gene, chromosome, path or a segment is
            missing
        SequenceNotFoundError: If the gene does not occur in the path
        MalformedRecordError: If a GTF feature line cannot be parsed
        OSError: If the output file cannot be written
    """
    config = config or load_config()
    annotation_cfg = config['annotation']
    attribute = annotation_cfg['gene_id_attribute']
    gtf_path = Path(gtf_path)
    output_path = Path(output_path) if output_path else default_output_path(
        gtf_path, gene_id, annotation_cfg['output_suffix']
    )

    logger.info(f"Rewriting {gene_id} from {gtf_path} onto path {path_name} of {gfa_path}")
    gene = find_gene(gtf_path, gene_id, attribute)

    with GraphAccessor(gfa_path, strict=config['graph']['strict_duplicates']) as graph, \
            SequenceFileAccessor.open(reference_path, index_path,
                                      write_index=config['sequence']['write_index']) as sequences:
        offset = CoordinateOffsetResolver(graph, sequences).resolve(gene, path_name)

    # The whole input is parsed before the output is opened
    output_lines = []
    records_written = 0
    with open(gtf_path, 'r') as src:
        for line_no, raw_line in enumerate(src, 1):
            line = raw_line.rstrip('\r\n')
            if not line:
                continue
            if line.startswith(HEADER_PREFIX):
                if annotation_cfg['keep_header_lines']:
                    output_lines.append(line)
                continue
            if line.startswith(COMMENT_PREFIX):
                continue
            for record in translate([parse_gtf_line(line, line_no)], gene_id, offset, attribute):
                output_lines.append(record.to_line())
                records_written += 1

    with open(output_path, 'w') as dst:
        for line in output_lines:
            dst.write(line + '\n')

    logger.info(f"Wrote {records_written} records for {gene_id} to {output_path}")
    return RewriteSummary(gene_id, output_path, offset, records_written)


__all__ = [
    'RewriteSummary',
    'default_output_path',
    'rewrite_gtf_for_subgraph',
]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
