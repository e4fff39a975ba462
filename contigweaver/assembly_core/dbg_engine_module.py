#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ContigWeaver v0.1.0

De Bruijn Graph (DBG) Engine for ContigWeaver.
- Decomposes reads into k-mers (windows with non-ACGT symbols are skipped)
- Builds a k-mer graph: (k-1)-mers as nodes, k-mers as edges
- Tracks edge multiplicity as observed k-mer frequency
- Extracts contigs by walking maximal non-branching paths

Every edge is consumed at most once across all walks, so extraction is
bounded by the edge count even when repeats create cycles. Repeats are
fragmented into several contigs rather than resolved by an Eulerian path.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union
import logging

from .data_structures import AssemblyResult, Contig
from ..assembly_utils.assembly_stats import calculate_stats
from ..config.parameters import AssemblyParameters, check_kmer_size
from ..io_utils import SeqRead, as_sequences
from ..utils.sequence_utils import iter_kmers, normalize_sequence

logger = logging.getLogger(__name__)


# ============================================================================
# Core Data Structures
# ============================================================================

@dataclass
class KmerEdge:
    """
    Edge in the de Bruijn graph.

    Represents one distinct k-mer, connecting its prefix (k-1)-mer to its
    suffix (k-1)-mer.
    """
    id: int
    from_id: int  # Source node ID
    to_id: int  # Target node ID
    kmer: str
    multiplicity: int = 1  # Number of times this k-mer was seen


@dataclass
class KmerGraph:
    """
    De Bruijn graph held as flat arrays.

    Node ids index ``nodes``; edge ids index ``edges``. Ids are assigned in
    order of first appearance, which fixes the traversal order.
    """
    k: int
    nodes: List[str] = field(default_factory=list)
    node_index: Dict[str, int] = field(default_factory=dict)
    edges: List[KmerEdge] = field(default_factory=list)
    edge_index: Dict[str, int] = field(default_factory=dict)
    out_edges: List[List[int]] = field(default_factory=list)
    in_edges: List[List[int]] = field(default_factory=list)

    def add_node(self, seq: str) -> int:
        """Return the id for a (k-1)-mer, creating the node if needed."""
        node_id = self.node_index.get(seq)
        if node_id is None:
            node_id = len(self.nodes)
            self.nodes.append(seq)
            self.node_index[seq] = node_id
            self.out_edges.append([])
            self.in_edges.append([])
        return node_id

    def add_kmer(self, kmer: str) -> int:
        """Add one observation of a k-mer; returns its edge id."""
        edge_id = self.edge_index.get(kmer)
        if edge_id is not None:
            self.edges[edge_id].multiplicity += 1
            return edge_id

        from_id = self.add_node(kmer[:-1])
        to_id = self.add_node(kmer[1:])
        edge_id = len(self.edges)
        self.edges.append(KmerEdge(id=edge_id, from_id=from_id, to_id=to_id, kmer=kmer))
        self.edge_index[kmer] = edge_id
        self.out_edges[from_id].append(edge_id)
        self.in_edges[to_id].append(edge_id)
        return edge_id

    def out_degree(self, node_id: int) -> int:
        """Number of outgoing edges."""
        return len(self.out_edges[node_id])

    def in_degree(self, node_id: int) -> int:
        """Number of incoming edges."""
        return len(self.in_edges[node_id])

    def is_linear(self, node_id: int) -> bool:
        """Check if node has exactly one in-edge and one out-edge (linear path)."""
        return self.in_degree(node_id) == 1 and self.out_degree(node_id) == 1

    def multiplicity(self, kmer: str) -> int:
        """Observed frequency of a k-mer (0 if absent)."""
        edge_id = self.edge_index.get(kmer)
        return self.edges[edge_id].multiplicity if edge_id is not None else 0


# ============================================================================
# De Bruijn Graph Builder
# ============================================================================

class DeBruijnGraphBuilder:
    """
    Builder class for constructing de Bruijn graphs from reads.

    Supports:
    - Fixed k-mer size per graph
    - Edge multiplicity tracking
    - Non-branching path extraction into contigs
    """

    def __init__(self, k: int = 31):
        """
        Initialize DBG builder.

        Args:
            k: K-mer size for graph construction
        """
        check_kmer_size(k)
        self.k = k

    def build(self, reads: Sequence[str]) -> KmerGraph:
        """
        Build a de Bruijn graph from read sequences.

        Reads shorter than k contribute nothing.
        """
        graph = KmerGraph(k=self.k)
        kmers_seen = 0

        for read in reads:
            for _, kmer in iter_kmers(normalize_sequence(read), self.k):
                graph.add_kmer(kmer)
                kmers_seen += 1

        logger.info(
            f"Built DBG (k={self.k}): {len(graph.nodes)} nodes, {len(graph.edges)} edges "
            f"from {kmers_seen} k-mers"
        )
        return graph

    def extract_contigs(self, graph: KmerGraph) -> List[Contig]:
        """
        Extract contigs by walking maximal non-branching paths.

        Every node that is not 1-in/1-out starts a walk along each of its
        unvisited out-edges. A second pass picks up isolated cycles, whose
        nodes are all 1-in/1-out.
        """
        visited = [False] * len(graph.edges)
        contigs = []

        for node_id in range(len(graph.nodes)):
            if graph.is_linear(node_id):
                continue
            for edge_id in graph.out_edges[node_id]:
                if not visited[edge_id]:
                    contigs.append(self._walk(graph, edge_id, visited))

        cycles = 0
        for edge_id in range(len(graph.edges)):
            if not visited[edge_id]:
                contigs.append(self._walk(graph, edge_id, visited))
                cycles += 1

        logger.info(f"Extracted {len(contigs)} contigs ({cycles} from isolated cycles)")
        return contigs

    def _walk(self, graph: KmerGraph, first_edge: int, visited: List[bool]) -> Contig:
        """
        Walk from *first_edge* until a branch node, a dead end, or a visited edge.

        The contig is the start node's (k-1)-mer plus the last base of every
        traversed edge.
        """
        edge = graph.edges[first_edge]
        parts = [graph.nodes[edge.from_id]]
        path = []
        edge_id = first_edge

        while True:
            visited[edge_id] = True
            edge = graph.edges[edge_id]
            parts.append(edge.kmer[-1])
            path.append(edge_id)

            node_id = edge.to_id
            if not graph.is_linear(node_id):
                break
            edge_id = graph.out_edges[node_id][0]
            if visited[edge_id]:
                break

        return Contig(sequence=''.join(parts), kmer_path=tuple(path))


def assemble_de_bruijn(
    reads: Sequence[Union[str, SeqRead]],
    params: Optional[AssemblyParameters] = None,
) -> AssemblyResult:
    """
    Assemble reads with the de Bruijn graph strategy.

    Args:
        reads: Read sequences (strings or SeqRead)
        params: Assembly parameters; kmer_size and min_contig_length apply

    Returns:
        AssemblyResult with contigs of at least params.min_contig_length
    """
    params = params or AssemblyParameters()
    sequences = as_sequences(reads or [])

    if not sequences:
        return AssemblyResult()

    builder = DeBruijnGraphBuilder(k=params.kmer_size)
    graph = builder.build(sequences)
    contigs = [c for c in builder.extract_contigs(graph) if c.length >= params.min_contig_length]

    stats = calculate_stats([c.length for c in contigs], len(sequences))
    assembled = sum(1 for s in sequences if any(True for _ in iter_kmers(s, params.kmer_size)))

    return AssemblyResult(
        contigs=contigs,
        total_reads=len(sequences),
        total_length=stats.total_length,
        longest_contig=stats.longest_contig,
        n50=stats.n50,
        assembled_reads=assembled,
    )
