#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for StrandSlice.

This module provides the main CLI entry point and all subcommands for
indexing reference FASTA files, reading GFA segments and paths, and
rewriting GTF annotations into subgraph coordinates.
"""

import logging
import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import load_config, save_config_template, validate_config
from .errors import StrandSliceError


def _setup_logging(config, verbose, quiet):
    """Configure root logging from config and CLI flags."""
    log_cfg = config['output']['logging']
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.WARNING
    else:
        log_level = getattr(logging, str(log_cfg['level']).upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if log_cfg.get('log_file'):
        handlers.append(logging.FileHandler(log_cfg['log_file']))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def _fail(error):
    """Report an error and exit with status 1."""
    click.echo(f"✗ Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='YAML configuration file')
@click.pass_context
def main(ctx, verbose, quiet, config_file):
    """
    StrandSlice: byte-indexed access to GFA graphs and wrapped FASTA files

    Extracts reference regions and subgraph path sequences without loading
    whole files, and moves GTF annotations from reference coordinates onto
    gene-scoped subgraphs.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    try:
        config = load_config(Path(config_file) if config_file else None)
    except yaml.YAMLError as e:
        _fail(f"Invalid YAML in {config_file}: {e}")
    errors = validate_config(config)
    if errors:
        _fail(f"Invalid configuration in {config_file}: {'; '.join(errors)}")
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet
    ctx.obj['CONFIG'] = config
    _setup_logging(config, verbose, quiet)


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='strandslice_config.yaml',
              help='Output configuration file path')
def config_init(output):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating configuration template: {output}")

    try:
        save_config_template(Path(output))
    except OSError as e:
        _fail(f"creating configuration: {e}")
    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except (OSError, yaml.YAMLError) as e:
        _fail(f"validating configuration: {e}")

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)
    click.echo("✓ Configuration is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except (OSError, yaml.YAMLError) as e:
        _fail(f"reading configuration: {e}")

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo("\nGraph:")
    click.echo(f"  Duplicate names: {'error' if config['graph']['strict_duplicates'] else 'last wins'}")
    click.echo("\nSequence:")
    click.echo(f"  Write built .fai: {config['sequence']['write_index']}")
    click.echo("\nAnnotation:")
    click.echo(f"  Gene attribute: {config['annotation']['gene_id_attribute']}")
    click.echo(f"  Output suffix: {config['annotation']['output_suffix']}")
    click.echo(f"  Keep '#!' headers: {config['annotation']['keep_header_lines']}")
    click.echo("\nOutput:")
    click.echo(f"  FASTA line width: {config['output']['fasta_line_width']}")
    click.echo(f"  Log level: {config['output']['logging']['level']}")


# ============================================================================
# Reference Sequence Commands
# ============================================================================

@main.command()
@click.argument('fasta', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(),
              help='Output index path (default: <fasta>.fai)')
def faidx(fasta, output):
    """
    Build the line-layout index (.fai) of a FASTA file.

    The index lists, per record: name, length, offset of the first base,
    bases per line and bytes per line.
    """
    from .io.layout_index import build_layout_index, default_index_path, write_layout_index

    output = Path(output) if output else default_index_path(fasta)
    try:
        index = build_layout_index(fasta)
        write_layout_index(index, output)
    except (StrandSliceError, OSError) as e:
        _fail(e)
    click.echo(f"✓ Indexed {len(index)} sequence(s): {output}")


@main.command()
@click.argument('fasta', type=click.Path(exists=True, dir_okay=False))
@click.argument('regions', nargs=-1, required=True)
@click.option('--index', '-i', 'index_path', type=click.Path(exists=True),
              help='Layout index (default: <fasta>.fai, built if missing)')
@click.option('--output', '-o', type=click.Path(),
              help='Output FASTA (default: stdout)')
@click.pass_context
def extract(ctx, fasta, regions, index_path, output):
    """
    Extract regions (chrom:start-end, 1-based inclusive) from a FASTA.

    Examples:
        strandslice extract genome.fa chr1:61-61

        strandslice extract genome.fa chr2:1,000-2,000 chrX:5-80 -o out.fa
    """
    from .io.byte_range import GenomicInterval
    from .io.fasta_io import make_record, write_fasta
    from .io.sequence_accessor import SequenceFileAccessor

    config = ctx.obj['CONFIG']
    try:
        intervals = [GenomicInterval.parse(region) for region in regions]
        with SequenceFileAccessor.open(fasta, index_path,
                                       write_index=config['sequence']['write_index']) as ref:
            records = [make_record(str(iv), ref.extract_interval(iv)) for iv in intervals]
        write_fasta(records, output, config['output']['fasta_line_width'])
    except (StrandSliceError, OSError) as e:
        _fail(e)


# ============================================================================
# Graph Commands
# ============================================================================

@main.command()
@click.argument('gfa', type=click.Path(exists=True, dir_okay=False))
@click.argument('name')
@click.option('--reverse', '-r', is_flag=True, help='Print the reverse complement')
@click.pass_context
def segment(ctx, gfa, name, reverse):
    """Print the sequence of one GFA segment."""
    from .graph.gfa_accessor import GraphAccessor
    from .utils.sequence_utils import reverse_complement

    try:
        with GraphAccessor(gfa, strict=ctx.obj['CONFIG']['graph']['strict_duplicates']) as graph:
            sequence = graph.sequence_of(name)
        if reverse:
            sequence = reverse_complement(sequence)
    except (StrandSliceError, OSError) as e:
        _fail(e)
    click.echo(sequence)


@main.command()
@click.argument('gfa', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def paths(ctx, gfa):
    """List the paths of a GFA with step counts and lengths."""
    from .graph.gfa_accessor import GraphAccessor

    try:
        with GraphAccessor(gfa, strict=ctx.obj['CONFIG']['graph']['strict_duplicates']) as graph:
            click.echo("path\tsteps\tlength\trepeated_steps")
            for record in graph:
                repeated = sum(1 for hits in record.positions_by_step().values() if len(hits) > 1)
                length = graph.path_length(record.name)
                click.echo(f"{record.name}\t{len(record)}\t{length}\t{repeated}")
    except (StrandSliceError, OSError) as e:
        _fail(e)


@main.command('path-seq')
@click.argument('gfa', type=click.Path(exists=True, dir_okay=False))
@click.argument('names', nargs=-1, required=True)
@click.option('--output', '-o', type=click.Path(),
              help='Output FASTA (default: stdout)')
@click.pass_context
def path_seq(ctx, gfa, names, output):
    """
    Write the sequences spelled by GFA paths as FASTA.

    Reverse steps contribute the reverse complement of their segment.
    """
    from .graph.gfa_accessor import GraphAccessor
    from .io.fasta_io import make_record, write_fasta
    from .utils.sequence_utils import calculate_gc_content

    config = ctx.obj['CONFIG']
    logger = logging.getLogger(__name__)
    try:
        with GraphAccessor(gfa, strict=config['graph']['strict_duplicates']) as graph:
            records = []
            for name in names:
                sequence = graph.path_sequence(name)
                logger.info(f"Path {name}: {len(sequence)} bp, GC {calculate_gc_content(sequence):.3f}")
                records.append(make_record(name, sequence))
        write_fasta(records, output, config['output']['fasta_line_width'])
    except (StrandSliceError, OSError) as e:
        _fail(e)


# ============================================================================
# Annotation Commands
# ============================================================================

@main.command('rewrite-gtf')
@click.option('--gene-id', '-g', required=True, help='Gene to rewrite')
@click.option('--gfa', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Gene-scoped GFA (mini GFA)')
@click.option('--path', '-p', 'path_name', required=True,
              help='GFA path carrying the reference haplotype')
@click.option('--gtf', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Annotation in reference coordinates')
@click.option('--reference', '-r', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Reference genome FASTA')
@click.option('--index', '-i', 'index_path', type=click.Path(exists=True),
              help='Layout index of the reference (default: <reference>.fai)')
@click.option('--output', '-o', type=click.Path(),
              help='Output GTF (default: <gtf stem>_<gene>_mini.gtf)')
@click.pass_context
def rewrite_gtf(ctx, gene_id, gfa, path_name, gtf, reference, index_path, output):
    """
    Rewrite one gene's GTF records into subgraph path coordinates.

    The gene's reference sequence is located in the path sequence and the
    resulting offset is subtracted from every start and end of the gene.

    Examples:
        strandslice rewrite-gtf -g ENSG00000139618 --gfa brca2.gfa \\
            -p GRCh38#chr13 --gtf genes.gtf -r GRCh38.fa
    """
    from .annotation.rewrite import rewrite_gtf_for_subgraph

    try:
        summary = rewrite_gtf_for_subgraph(
            gene_id, gfa, path_name, gtf, reference,
            index_path=index_path, output_path=output, config=ctx.obj['CONFIG'],
        )
    except (StrandSliceError, OSError) as e:
        _fail(e)

    click.echo(f"✓ Offset for {gene_id}: {summary.offset}")
    click.echo(f"✓ Wrote {summary.records_written} record(s): {summary.output_path}")


# ============================================================================
# Utility Commands
# ============================================================================

@main.command()
def version():
    """Show version information."""
    click.echo(f"StrandSlice v{__version__}")
    click.echo("\nDependencies:")

    import Bio
    click.echo(f"  BioPython: {Bio.__version__}")
    click.echo(f"  PyYAML: {yaml.__version__}")


if __name__ == '__main__':
    sys.exit(main())
