#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for ContigWeaver.

This module provides the main CLI entry point and all subcommands for
the ContigWeaver assembly engine.
"""

import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import (
    TEMPLATES,
    VALID_STRATEGIES,
    apply_overrides,
    load_config,
    save_config_template,
    validate_config,
)


def _setup_logging(ctx, level: str):
    """Configure logging; --verbose/--quiet take precedence over the config."""
    from .utils.pipeline import setup_logging

    if ctx.obj.get('VERBOSE'):
        level = 'DEBUG'
    elif ctx.obj.get('QUIET'):
        level = 'ERROR'
    setup_logging(level)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    ContigWeaver: Read Assembly Engine

    Assembles short, overlapping reads into contigs by overlap-layout-consensus
    or de Bruijn graph walking, and joins contigs into scaffolds from link
    evidence.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='contigweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(list(TEMPLATES)),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
        click.echo(f"✓ Configuration file created: {output}")
        click.echo("\nEdit this file to customize your assembly.")
    except Exception as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except Exception as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  Strategy: {config['assembly']['strategy']}")
    click.echo(f"  Min overlap: {config['assembly']['min_overlap']}")
    click.echo(f"  Threads: {config['execution']['threads']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except Exception as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    assembly = config['assembly']
    trim = config['preprocessing']['trim']
    correction = config['preprocessing']['correction']

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)

    click.echo("\nAssembly:")
    click.echo(f"  Strategy: {assembly['strategy']}")
    click.echo(f"  Min overlap: {assembly['min_overlap']}")
    click.echo(f"  Min identity: {assembly['min_identity']}")
    click.echo(f"  K-mer size: {assembly['kmer_size']}")
    click.echo(f"  Min contig length: {assembly['min_contig_length']}")

    click.echo("\nPreprocessing:")
    click.echo(f"  Trimming: {'ENABLED' if trim['enabled'] else 'DISABLED'}"
               f" (Q{trim['min_quality']}, min length {trim['min_length']})")
    click.echo(f"  Correction: {'ENABLED' if correction['enabled'] else 'DISABLED'}"
               f" (k={correction['kmer_size']}, min frequency {correction['min_kmer_frequency']})")

    click.echo("\nExecution:")
    click.echo(f"  Threads: {config['execution']['threads']}")
    click.echo(f"  Gap character: {config['scaffolding']['gap_char']}")


# ============================================================================
# Assembly Commands
# ============================================================================

@main.command()
@click.argument('reads', type=click.Path(exists=True))
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output FASTA for contigs (or scaffolds when --links is given)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--strategy', '-s', type=click.Choice(list(VALID_STRATEGIES)), default=None,
              help='Assembly strategy: olc (overlap graph) or dbg (de Bruijn)')
@click.option('--min-overlap', type=int, default=None,
              help='Minimum suffix/prefix overlap length')
@click.option('--min-identity', type=float, default=None,
              help='Minimum overlap identity (0-1)')
@click.option('--kmer-size', '-k', type=int, default=None,
              help='K-mer size for the de Bruijn strategy')
@click.option('--min-contig-length', type=int, default=None,
              help='Drop contigs shorter than this')
@click.option('--links', '-l', type=click.Path(exists=True),
              help='Scaffold link file (contig_a contig_b gap per line)')
@click.option('--trim-quality', type=int, default=None,
              help='Enable quality trimming with this Phred threshold')
@click.option('--correct', is_flag=True,
              help='Enable k-mer error correction before assembly')
@click.option('--threads', '-t', type=int, default=None,
              help='Worker processes for overlap detection')
@click.pass_context
def assemble(ctx, reads, output, config_file, strategy, min_overlap, min_identity, kmer_size,
             min_contig_length, links, trim_quality, correct, threads):
    """
    Assemble reads from a FASTA/FASTQ file.

    Writes contigs, or scaffolds when a link file is supplied, to OUTPUT.
    """
    from .errors import ContigWeaverError
    from .io_utils import read_links, read_sequences, write_fasta
    from .utils.pipeline import AssemblyPipeline

    try:
        cfg = load_config(Path(config_file) if config_file else None)
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    overrides = {
        'assembly.strategy': strategy,
        'assembly.min_overlap': min_overlap,
        'assembly.min_identity': min_identity,
        'assembly.kmer_size': kmer_size,
        'assembly.min_contig_length': min_contig_length,
        'execution.threads': threads,
    }
    if trim_quality is not None:
        overrides['preprocessing.trim.enabled'] = True
        overrides['preprocessing.trim.min_quality'] = trim_quality
    if correct:
        overrides['preprocessing.correction.enabled'] = True
    cfg = apply_overrides(cfg, overrides)

    errors = validate_config(cfg)
    if errors:
        click.echo("❌ Configuration validation failed:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    _setup_logging(ctx, cfg['output']['logging']['level'])

    try:
        read_set = list(read_sequences(reads))
        link_set = read_links(links) if links else None

        click.echo(f"Assembling {len(read_set):,} reads ({cfg['assembly']['strategy'].upper()})")
        result = AssemblyPipeline(cfg).run(read_set, links=link_set)

        if link_set is not None:
            records = [(f"scaffold_{i + 1}", s.sequence) for i, s in enumerate(result.scaffolds)]
        else:
            records = [(f"contig_{i + 1}", c.sequence) for i, c in enumerate(result.assembly.contigs)]
        count = write_fasta(records, output, line_width=cfg['output']['line_width'])
    except (ContigWeaverError, FileNotFoundError, ValueError) as e:
        click.echo(f"\n❌ Assembly failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Wrote {count} sequences to {output}")
    click.echo(result.assembly.summary())
    if result.correction_stats is not None:
        click.echo(result.correction_stats.summary())


@main.command()
@click.argument('fasta', type=click.Path(exists=True))
@click.option('--nx-curve', is_flag=True, help='Also print N10..N90')
def stats(fasta, nx_curve):
    """
    Compute contiguity statistics (N50, L50, etc.) for a FASTA file.
    """
    from .assembly_utils import calculate_aun, calculate_nx_curve, calculate_stats, gap_summary
    from .io_utils import read_sequences

    try:
        sequences = [r.sequence for r in read_sequences(fasta)]
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    lengths = [len(s) for s in sequences]
    summary = calculate_stats(lengths)
    gaps = gap_summary(sequences)

    click.echo(summary.summary())
    click.echo(f"  auN: {calculate_aun(lengths):,.1f}")
    click.echo(f"  Gaps: {gaps['num_gaps']:,} ({gaps['total_gap_length']:,} bp)")

    if nx_curve:
        click.echo("\nNx curve:")
        for point in calculate_nx_curve(lengths):
            click.echo(f"  N{point.threshold:g}: {point.nx:,} bp (L{point.threshold:g}: {point.lx:,})")


@main.command()
@click.argument('reference', type=click.Path(exists=True))
@click.argument('reads', type=click.Path(exists=True))
@click.option('--min-overlap', type=int, default=20,
              help='Minimum aligned span for a read placement')
@click.option('--min-identity', type=float, default=1.0,
              help='Minimum identity for a read placement (0-1)')
@click.option('--output', '-o', type=click.Path(),
              help='Write per-base depth (position<TAB>depth) to this file')
def coverage(reference, reads, min_overlap, min_identity, output):
    """
    Per-base read coverage of the first sequence in REFERENCE.
    """
    from .assembly_utils import calculate_coverage
    from .io_utils import read_sequences

    try:
        ref_record = next(iter(read_sequences(reference)), None)
        if ref_record is None:
            raise ValueError(f"No sequences in {reference}")
        read_set = [r.sequence for r in read_sequences(reads)]
        profile = calculate_coverage(ref_record.sequence, read_set, min_overlap, min_identity)
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Reference: {ref_record.id} ({len(profile):,} bp)")
    if len(profile):
        click.echo(f"  Mean depth: {profile.mean():.2f}")
        click.echo(f"  Min/Max depth: {profile.min()}/{profile.max()}")
        click.echo(f"  Uncovered bases: {int((profile == 0).sum()):,}")

    if output:
        with open(output, 'w') as f:
            for pos, depth in enumerate(profile):
                f.write(f"{pos}\t{depth}\n")
        click.echo(f"✓ Depth profile written to {output}")


# ============================================================================
# Utility Commands
# ============================================================================

@main.command()
def version():
    """Show version information."""
    click.echo(f"ContigWeaver v{__version__}")
    click.echo("\nDependencies:")

    import Bio
    import numpy
    click.echo(f"  BioPython: {Bio.__version__}")
    click.echo(f"  NumPy: {numpy.__version__}")
    click.echo(f"  PyYAML: {yaml.__version__}")


if __name__ == '__main__':
    sys.exit(main())
