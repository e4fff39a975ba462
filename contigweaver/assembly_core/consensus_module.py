#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Column-wise majority consensus over aligned or overlapping fragments.

Algorithm:
  1. Rows may be ragged; the consensus spans the longest row.
  2. At each column, gap symbols and unknown bases (N) are skipped; the
     remaining bases are tallied.
  3. The most frequent base wins; ties go to the lexicographically smallest
     base so the result does not depend on row order.
  4. A column with no votes emits N; a gap symbol is never emitted.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from collections import Counter
from typing import List, Sequence

DEFAULT_GAP_CHARS = "-."
UNKNOWN_BASE = "N"


def compute_consensus(aligned_reads: Sequence[str], gap_chars: str = DEFAULT_GAP_CHARS) -> str:
    """
    Compute the per-column majority consensus of aligned reads.

    Args:
        aligned_reads: Aligned rows (may differ in length)
        gap_chars: Symbols treated as alignment gaps

    Returns:
        Consensus sequence (empty for empty input)

    Example:
        >>> compute_consensus(["ACGT", "ACCT", "AC-T"])
        'ACCT'
    """
    if not aligned_reads:
        return ""

    width = max(len(row) for row in aligned_reads)
    consensus: List[str] = []

    for col in range(width):
        votes = Counter()
        for row in aligned_reads:
            if col >= len(row):
                continue
            base = row[col].upper()
            if base in gap_chars or base == UNKNOWN_BASE:
                continue
            votes[base] += 1

        if not votes:
            consensus.append(UNKNOWN_BASE)
            continue

        # Highest count first, then lexicographic order
        best_base = min(votes, key=lambda b: (-votes[b], b))
        consensus.append(best_base)

    return ''.join(consensus)


def build_layout(sequences: Sequence[str], offsets: Sequence[int], gap_char: str = "-") -> List[str]:
    """
    Pad sequences into aligned rows using their layout offsets.

    Each row is left-padded with *gap_char* up to its offset and
    right-padded to the layout width.

    Example:
        >>> build_layout(["ACGT", "GTTA"], [0, 2])
        ['ACGT--', '--GTTA']
    """
    if len(sequences) != len(offsets):
        raise ValueError(
            f"Layout needs one offset per sequence ({len(sequences)} sequences, {len(offsets)} offsets)"
        )
    if not sequences:
        return []

    width = max(offset + len(seq) for seq, offset in zip(sequences, offsets))
    rows = []
    for seq, offset in zip(sequences, offsets):
        if offset < 0:
            raise ValueError(f"Layout offsets must be non-negative, got {offset}")
        rows.append(gap_char * offset + seq + gap_char * (width - offset - len(seq)))

    return rows
