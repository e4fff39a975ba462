#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Core data structures for assembly results.

Contig records carry their provenance (source read indices for the overlap
assembler, k-mer edge path for the de Bruijn assembler); AssemblyResult
bundles the surviving contigs with their summary statistics.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Contig:
    """
    Assembled contiguous sequence.

    Attributes:
        sequence: Merged sequence
        source_reads: Indices of reads laid out in this contig (OLC)
        kmer_path: Edge ids walked to build this contig (de Bruijn)
    """
    sequence: str
    source_reads: Tuple[int, ...] = ()
    kmer_path: Tuple[int, ...] = ()

    @property
    def length(self) -> int:
        """Contig length in bases."""
        return len(self.sequence)

    def __len__(self) -> int:
        return len(self.sequence)


@dataclass
class AssemblyResult:
    """
    Ordered contigs plus summary statistics.

    Attributes:
        contigs: Contigs that survived length filtering
        total_reads: Number of reads given to the assembler
        total_length: Sum of contig lengths
        longest_contig: Length of the longest contig
        n50: N50 of contig lengths
        assembled_reads: Reads that contributed to at least one contig
    """
    contigs: List[Contig] = field(default_factory=list)
    total_reads: int = 0
    total_length: int = 0
    longest_contig: int = 0
    n50: int = 0
    assembled_reads: int = 0

    @property
    def sequences(self) -> List[str]:
        """Plain contig strings, in assembly order."""
        return [c.sequence for c in self.contigs]

    @property
    def num_contigs(self) -> int:
        return len(self.contigs)

    def summary(self) -> str:
        """Return human-readable summary."""
        return (
            f"Assembly Summary:\n"
            f"  Reads: {self.total_reads:,} ({self.assembled_reads:,} assembled)\n"
            f"  Contigs: {self.num_contigs:,}\n"
            f"  Total length: {self.total_length:,} bp\n"
            f"  Longest contig: {self.longest_contig:,} bp\n"
            f"  N50: {self.n50:,} bp"
        )

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
