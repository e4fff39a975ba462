"""
ContigWeaver v0.1.0

Contig builder using an overlap-layout-consensus (OLC) approach.

This module assembles reads into contigs by building a directed overlap graph
over all reads and greedily walking chains of overlapping reads.

Key Features:
- Exhaustive suffix/prefix overlap detection (optionally multi-process)
- Flat arena graph: reads and overlap edges addressed by integer index
- Greedy layout: each chain follows its best unused outgoing edge
- Consensus over the gap-padded layout resolves the merged regions

The greedy walk does not attempt an optimal tiling; when repeats create
ambiguous overlaps it may not recover the longest possible assembly.

Author: ContigWeaver Development Team
Date: 2026-10-19
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from .consensus_module import build_layout, compute_consensus
from .data_structures import AssemblyResult, Contig
from .overlap_module import Overlap, find_all_overlaps
from ..assembly_utils.assembly_stats import calculate_stats
from ..config.parameters import AssemblyParameters
from ..io_utils import SeqRead, as_sequences
from ..utils.sequence_utils import normalize_sequence

logger = logging.getLogger(__name__)


def merge_contigs(contig_a: str, contig_b: str, overlap_length: int) -> str:
    """
    Merge two sequences that overlap by *overlap_length* bases.

    Returns ``contig_a + contig_b[overlap_length:]``. When the overlap length
    is zero, negative, or longer than either sequence, no overlap is assumed
    and the sequences are concatenated.

    Example:
        >>> merge_contigs("ACGTAC", "TACGG", 3)
        'ACGTACGG'
    """
    if overlap_length <= 0 or overlap_length > min(len(contig_a), len(contig_b)):
        return contig_a + contig_b

    return contig_a + contig_b[overlap_length:]


class OverlapGraph:
    """
    Overlap graph for organizing read overlaps.

    Nodes = read indices
    Edges = Overlap records, stored in a flat list and referenced by index
    """

    def __init__(self, reads: Sequence[str]):
        """Initialize a graph with one node per read and no edges."""
        self.reads: List[str] = list(reads)
        self.edges: List[Overlap] = []
        self.out_edges: List[List[int]] = [[] for _ in self.reads]
        self.in_edges: List[List[int]] = [[] for _ in self.reads]

    @classmethod
    def from_overlaps(cls, reads: Sequence[str], overlaps: Sequence[Overlap]) -> "OverlapGraph":
        """Build a graph from reads and their detected overlaps."""
        graph = cls(reads)
        for overlap in overlaps:
            graph.add_overlap(overlap)
        return graph

    @property
    def num_reads(self) -> int:
        return len(self.reads)

    @property
    def num_overlaps(self) -> int:
        return len(self.edges)

    def add_overlap(self, overlap: Overlap):
        """Add an overlap edge to the graph."""
        edge_id = len(self.edges)
        self.edges.append(overlap)
        self.out_edges[overlap.read_a].append(edge_id)
        self.in_edges[overlap.read_b].append(edge_id)

    def get_outgoing(self, read_id: int) -> List[Overlap]:
        """Get all outgoing overlaps from a read, in discovery order."""
        return [self.edges[e] for e in self.out_edges[read_id]]

    def get_incoming(self, read_id: int) -> List[Overlap]:
        """Get all incoming overlaps to a read, in discovery order."""
        return [self.edges[e] for e in self.in_edges[read_id]]

    def get_best_extension(self, read_id: int, used: Sequence[bool]) -> Optional[Overlap]:
        """
        Get the best outgoing overlap to an unused read.

        Highest identity wins, then the longer overlap; remaining ties keep
        the first overlap found.
        """
        best = None
        for overlap in self.get_outgoing(read_id):
            if used[overlap.read_b]:
                continue
            if best is None or (overlap.identity, overlap.length) > (best.identity, best.length):
                best = overlap
        return best

    def next_chain_start(self, used: Sequence[bool]) -> Optional[int]:
        """
        Pick the read that starts the next chain.

        Prefers the lowest-index unused read with no incoming edge from an
        unused read. If every unused read has one (the rest of the graph is
        cyclic), falls back to the lowest-index unused read.
        """
        first_unused = None
        for read_id in range(self.num_reads):
            if used[read_id]:
                continue
            if first_unused is None:
                first_unused = read_id
            if not any(not used[o.read_a] for o in self.get_incoming(read_id)):
                return read_id
        return first_unused


class ContigBuilder:
    """
    Build contigs from reads using OLC assembly.

    Process:
    1. Detect all suffix/prefix overlaps
    2. Build overlap graph
    3. Walk greedy chains from chain starts, laying reads out by offset
    4. Generate consensus sequences for each layout
    """

    def __init__(self, params: Optional[AssemblyParameters] = None, num_workers: int = 1):
        """
        Initialize contig builder.

        Args:
            params: Assembly parameters (default: AssemblyParameters())
            num_workers: Worker processes for overlap detection
        """
        self.params = params or AssemblyParameters()
        self.num_workers = num_workers
        self.graph: Optional[OverlapGraph] = None

        # Statistics
        self.stats = {
            'reads_input': 0,
            'overlaps_found': 0,
            'chains_built': 0,
            'singleton_contigs': 0,
        }

    def build_contigs(self, reads: Sequence[str]) -> List[Contig]:
        """
        Build contigs from a list of read sequences.

        Returns every contig, including single-read ones; length filtering
        is left to the caller.
        """
        reads = [normalize_sequence(r) for r in reads]
        self.stats['reads_input'] = len(reads)
        logger.info(f"Building contigs (OLC) from {len(reads)} reads")

        overlaps = find_all_overlaps(
            reads,
            min_overlap=self.params.min_overlap,
            min_identity=self.params.min_identity,
            num_workers=self.num_workers,
        )
        self.stats['overlaps_found'] = len(overlaps)

        self.graph = OverlapGraph.from_overlaps(reads, overlaps)
        return self._assemble_contigs()

    def _assemble_contigs(self) -> List[Contig]:
        """Walk chains until every read has been placed in a contig."""
        graph = self.graph
        used = [False] * graph.num_reads
        contigs = []

        while True:
            start = graph.next_chain_start(used)
            if start is None:
                break

            path, offsets = self._walk_chain(start, used)
            contigs.append(Contig(sequence=self._build_consensus(path, offsets), source_reads=tuple(path)))

            if len(path) == 1:
                self.stats['singleton_contigs'] += 1
            else:
                self.stats['chains_built'] += 1
                logger.debug(f"Chain from read {start}: {len(path)} reads, {len(contigs[-1])}bp")

        logger.info(
            f"Assembled {len(contigs)} contigs "
            f"({self.stats['chains_built']} chains, {self.stats['singleton_contigs']} singletons)"
        )
        return contigs

    def _walk_chain(self, start: int, used: List[bool]) -> Tuple[List[int], List[int]]:
        """
        Extend a chain from *start* along best unused extensions.

        Marks every visited read as used. Bounded by the read count, since
        each step consumes one unused read.

        Returns:
            (read indices in layout order, layout offset of each read)
        """
        graph = self.graph
        path = [start]
        offsets = [0]
        used[start] = True
        draft = graph.reads[start]
        current = start

        while True:
            best = graph.get_best_extension(current, used)
            if best is None:
                break

            next_id = best.read_b
            offsets.append(len(draft) - best.length)
            draft = merge_contigs(draft, graph.reads[next_id], best.length)
            path.append(next_id)
            used[next_id] = True
            current = next_id

        return path, offsets

    def _build_consensus(self, path: List[int], offsets: List[int]) -> str:
        """Build consensus sequence from a laid-out path of reads."""
        if len(path) == 1:
            return self.graph.reads[path[0]]

        rows = build_layout([self.graph.reads[i] for i in path], offsets)
        return compute_consensus(rows)


def assemble_olc(
    reads: Sequence[Union[str, SeqRead]],
    params: Optional[AssemblyParameters] = None,
    num_workers: int = 1,
) -> AssemblyResult:
    """
    Assemble reads with the overlap-layout-consensus strategy.

    Args:
        reads: Read sequences (strings or SeqRead)
        params: Assembly parameters (default: AssemblyParameters())
        num_workers: Worker processes for overlap detection

    Returns:
        AssemblyResult with contigs of at least params.min_contig_length
    """
    params = params or AssemblyParameters()
    sequences = as_sequences(reads or [])

    if not sequences:
        return AssemblyResult()

    builder = ContigBuilder(params, num_workers=num_workers)
    contigs = [c for c in builder.build_contigs(sequences) if c.length >= params.min_contig_length]

    stats = calculate_stats([c.length for c in contigs], len(sequences))
    assembled = {i for c in contigs for i in c.source_reads}

    return AssemblyResult(
        contigs=contigs,
        total_reads=len(sequences),
        total_length=stats.total_length,
        longest_contig=stats.longest_contig,
        n50=stats.n50,
        assembled_reads=len(assembled),
    )
