#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Suffix/prefix overlap detection between reads.

Overlap notation: Read A overlaps Read B
    A: --------------->
    B:       ---------------->
         <--overlap-->

For each candidate length, from the longest possible down to the minimum,
the suffix of A is compared position-by-position with the prefix of B. The
first length whose identity meets the threshold is reported, so the detector
always returns the longest qualifying overlap.

The all-pairs search is the one embarrassingly parallel step of the engine;
rows of the pair matrix can be spread over a process pool, and results are
always aggregated in (read_a, read_b) order.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..config.parameters import check_min_identity, check_min_overlap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Overlap:
    """
    Represents a suffix/prefix overlap between two reads.

    Attributes:
        read_a: Index of the read whose suffix overlaps
        read_b: Index of the read whose prefix is overlapped
        length: Overlap length in bases
        identity: Matching positions / overlap length
        position_a: Start of the overlapping suffix in read A
        position_b: Start of the overlapping prefix in read B (always 0)
    """
    read_a: int
    read_b: int
    length: int
    identity: float
    position_a: int = 0
    position_b: int = 0

    def __str__(self) -> str:
        return f"{self.read_a} -> {self.read_b} ({self.length}bp, identity={self.identity:.2f})"


def calculate_identity(seq_a: str, seq_b: str) -> float:
    """
    Fraction of matching positions between two equal-length sequences.

    Comparison is case-insensitive. Two empty sequences are identical (1.0);
    sequences of different length score 0.0 rather than a partial credit.
    """
    if len(seq_a) != len(seq_b):
        return 0.0
    if not seq_a:
        return 1.0

    matches = sum(1 for x, y in zip(seq_a.upper(), seq_b.upper()) if x == y)
    return matches / len(seq_a)


def find_overlap(
    seq_a: str,
    seq_b: str,
    min_overlap: int = 20,
    min_identity: float = 1.0,
    index_a: int = 0,
    index_b: int = 1,
) -> Optional[Overlap]:
    """
    Find the longest suffix(A)/prefix(B) overlap meeting the thresholds.

    Args:
        seq_a: Sequence whose suffix is tested
        seq_b: Sequence whose prefix is tested
        min_overlap: Shortest overlap length considered
        min_identity: Minimum identity of the overlapping windows
        index_a: Read index recorded in the result for seq_a
        index_b: Read index recorded in the result for seq_b

    Returns:
        Overlap for the longest qualifying length, or None

    Example:
        >>> find_overlap("ACGTACGTACGT", "ACGTACGTTTT", 8, 1.0).length
        8
    """
    check_min_overlap(min_overlap)
    check_min_identity(min_identity)

    max_overlap = min(len(seq_a), len(seq_b))

    for overlap_len in range(max_overlap, min_overlap - 1, -1):
        a_suffix = seq_a[len(seq_a) - overlap_len:]
        b_prefix = seq_b[:overlap_len]

        identity = calculate_identity(a_suffix, b_prefix)
        if identity >= min_identity:
            return Overlap(
                read_a=index_a,
                read_b=index_b,
                length=overlap_len,
                identity=identity,
                position_a=len(seq_a) - overlap_len,
                position_b=0,
            )

    return None


def _overlaps_for_rows(
    reads: Sequence[str],
    rows: Sequence[int],
    min_overlap: int,
    min_identity: float,
) -> List[Overlap]:
    """Overlaps for every (i, j) with i in *rows* (process-pool worker)."""
    overlaps = []
    for i in rows:
        for j in range(len(reads)):
            if i == j:
                continue
            overlap = find_overlap(reads[i], reads[j], min_overlap, min_identity, i, j)
            if overlap is not None:
                overlaps.append(overlap)
    return overlaps


def find_all_overlaps(
    reads: Sequence[str],
    min_overlap: int = 20,
    min_identity: float = 1.0,
    num_workers: int = 1,
    progress: Optional[Callable[[float], None]] = None,
) -> List[Overlap]:
    """
    Evaluate find_overlap over every ordered pair of distinct reads.

    Args:
        reads: Read sequences
        min_overlap: Minimum overlap length
        min_identity: Minimum overlap identity
        num_workers: Worker processes (1 = run in-process)
        progress: Optional callback receiving the completed fraction (0.0 to 1.0)

    Returns:
        All qualifying overlaps, ordered by (read_a, read_b)
    """
    check_min_overlap(min_overlap)
    check_min_identity(min_identity)
    if num_workers < 1:
        raise ValueError(f"num_workers must be >= 1, got {num_workers}")

    reads = [str(r) for r in reads]
    n = len(reads)
    overlaps: List[Overlap] = []

    if n < 2:
        if progress:
            progress(1.0)
        return overlaps

    if num_workers == 1:
        for i in range(n):
            overlaps.extend(_overlaps_for_rows(reads, [i], min_overlap, min_identity))
            if progress:
                progress((i + 1) / n)
    else:
        chunk_size = max(1, n // (num_workers * 4))
        chunks = [list(range(start, min(start + chunk_size, n))) for start in range(0, n, chunk_size)]
        logger.debug(f"Overlap search: {num_workers} workers, {len(chunks)} chunks")

        done = 0
        with ProcessPoolExecutor(max_workers=num_workers) as executor:
            futures = [
                executor.submit(_overlaps_for_rows, reads, chunk, min_overlap, min_identity)
                for chunk in chunks
            ]
            # Collect in submission order so the result is scheduling-independent
            for chunk, future in zip(chunks, futures):
                overlaps.extend(future.result())
                done += len(chunk)
                if progress:
                    progress(done / n)

    logger.info(f"Found {len(overlaps)} overlaps among {n} reads (min_overlap={min_overlap})")
    return overlaps
