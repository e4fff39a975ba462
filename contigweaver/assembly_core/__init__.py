"""
Assembly Core module for ContigWeaver.

This module provides the read assembly algorithms:
- Suffix/prefix overlap detection between reads
- Contig building by overlap-layout-consensus (OLC)
- De Bruijn graph construction and non-branching path extraction
- Column-wise majority consensus
"""

from .data_structures import Contig, AssemblyResult

from .overlap_module import (
    Overlap,
    calculate_identity,
    find_overlap,
    find_all_overlaps
)

from .consensus_module import compute_consensus, build_layout

from .olc_contig_module import (
    ContigBuilder,
    OverlapGraph,
    merge_contigs,
    assemble_olc
)

from .dbg_engine_module import (
    DeBruijnGraphBuilder,
    KmerGraph,
    KmerEdge,
    assemble_de_bruijn
)

__all__ = [
    'Contig',
    'AssemblyResult',
    'Overlap',
    'calculate_identity',
    'find_overlap',
    'find_all_overlaps',
    'compute_consensus',
    'build_layout',
    'ContigBuilder',
    'OverlapGraph',
    'merge_contigs',
    'assemble_olc',
    'DeBruijnGraphBuilder',
    'KmerGraph',
    'KmerEdge',
    'assemble_de_bruijn',
]
