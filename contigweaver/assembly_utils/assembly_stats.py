#!/usr/bin/env python3
"""
ContigWeaver Assembly Statistics Module.

Contiguity metrics over any set of contig or scaffold lengths, plus a
per-base coverage profile of reads placed on a reference.

1. calculate_stats: total length, N50/L50, N90/L90 and length summary
2. Nx family: calculate_nx, calculate_nx_curve, calculate_aun
3. Gap reporting for scaffolds: find_gaps, gap_summary
4. calculate_coverage: read pileup depth over a reference (numpy array)

Every function is pure and accepts empty input, returning zeros.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..config.parameters import check_min_identity, check_min_overlap

logger = logging.getLogger(__name__)

DEFAULT_NX_THRESHOLDS = (10, 20, 30, 40, 50, 60, 70, 80, 90)


@dataclass
class AssemblyStats:
    """Contiguity statistics for a set of sequences."""
    total_length: int = 0
    longest_contig: int = 0
    n50: int = 0
    l50: int = 0
    n90: int = 0
    l90: int = 0
    shortest_contig: int = 0
    mean_length: float = 0.0
    median_length: float = 0.0
    num_contigs: int = 0
    total_reads: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        """Return human-readable summary."""
        return (
            f"Assembly Statistics:\n"
            f"  Sequences: {self.num_contigs:,}\n"
            f"  Total length: {self.total_length:,} bp\n"
            f"  Longest: {self.longest_contig:,} bp\n"
            f"  Shortest: {self.shortest_contig:,} bp\n"
            f"  Mean length: {self.mean_length:,.1f} bp\n"
            f"  Median length: {self.median_length:,.1f} bp\n"
            f"  N50: {self.n50:,} bp (L50: {self.l50:,})\n"
            f"  N90: {self.n90:,} bp (L90: {self.l90:,})\n"
            f"  Reads: {self.total_reads:,}"
        )


@dataclass(frozen=True)
class NxStatistics:
    """Nx / Lx at a single percentage threshold."""
    threshold: float
    nx: int
    lx: int
    cumulative: int  # Bases covered by the first lx sequences


def _sorted_lengths(lengths: Iterable[int]) -> np.ndarray:
    """Lengths as an int64 array sorted longest first."""
    arr = np.asarray(list(lengths), dtype=np.int64)
    if arr.size and arr.min() < 0:
        raise ValueError("Sequence lengths must be non-negative")
    return np.sort(arr)[::-1]


def _nx_from_sorted(sorted_lengths: np.ndarray, threshold: float) -> NxStatistics:
    total = int(sorted_lengths.sum())
    if total == 0:
        return NxStatistics(threshold=threshold, nx=0, lx=0, cumulative=0)

    cumsum = np.cumsum(sorted_lengths)
    # Target stays a float so odd totals are not rounded down
    target = total * threshold / 100.0
    idx = int(np.searchsorted(cumsum, target, side='left'))
    return NxStatistics(
        threshold=threshold,
        nx=int(sorted_lengths[idx]),
        lx=idx + 1,
        cumulative=int(cumsum[idx]),
    )


def calculate_nx(lengths: Iterable[int], threshold: float) -> NxStatistics:
    """
    Compute Nx and Lx for a percentage *threshold* in (0, 100].

    Nx is the length of the sequence at which the cumulative length of the
    longest-first ordering first reaches threshold% of the total; Lx is how
    many sequences that takes.

    Example:
        >>> calculate_nx([14, 10, 5], 50).nx
        10
    """
    if not 0 < threshold <= 100:
        raise ValueError(f"Nx threshold must be in (0, 100], got {threshold}")
    return _nx_from_sorted(_sorted_lengths(lengths), threshold)


def calculate_nx_curve(
    lengths: Iterable[int],
    thresholds: Sequence[float] = DEFAULT_NX_THRESHOLDS,
) -> List[NxStatistics]:
    """Nx statistics for each threshold, in the order given."""
    sorted_lengths = _sorted_lengths(lengths)
    curve = []
    for threshold in thresholds:
        if not 0 < threshold <= 100:
            raise ValueError(f"Nx threshold must be in (0, 100], got {threshold}")
        curve.append(_nx_from_sorted(sorted_lengths, threshold))
    return curve


def calculate_aun(lengths: Iterable[int]) -> float:
    """
    Area under the Nx curve (auN): sum(L^2) / sum(L).

    Less sensitive than N50 to small changes around the median contig.
    """
    arr = _sorted_lengths(lengths)
    total = int(arr.sum())
    if total == 0:
        return 0.0
    return float(np.sum(arr * arr) / total)


def calculate_stats(contig_lengths: Iterable[int], total_reads: int = 0) -> AssemblyStats:
    """
    Calculate contiguity statistics over contig lengths.

    Args:
        contig_lengths: Lengths of assembled sequences
        total_reads: Number of input reads, carried into the result

    Returns:
        AssemblyStats (all zeros for empty input)

    Example:
        >>> calculate_stats([14, 10, 5]).n50
        10
    """
    sorted_lengths = _sorted_lengths(contig_lengths)
    if sorted_lengths.size == 0:
        return AssemblyStats(total_reads=total_reads)

    n50 = _nx_from_sorted(sorted_lengths, 50)
    n90 = _nx_from_sorted(sorted_lengths, 90)

    return AssemblyStats(
        total_length=int(sorted_lengths.sum()),
        longest_contig=int(sorted_lengths[0]),
        n50=n50.nx,
        l50=n50.lx,
        n90=n90.nx,
        l90=n90.lx,
        shortest_contig=int(sorted_lengths[-1]),
        mean_length=float(sorted_lengths.mean()),
        median_length=float(np.median(sorted_lengths)),
        num_contigs=int(sorted_lengths.size),
        total_reads=total_reads,
    )


# ============================================================================
# Scaffold gaps
# ============================================================================

def find_gaps(sequence: str, gap_char: str = "N") -> List[Tuple[int, int]]:
    """
    Locate runs of *gap_char* in a sequence.

    Returns:
        Half-open (start, end) intervals, left to right

    Example:
        >>> find_gaps("ACNNNGTN")
        [(2, 5), (7, 8)]
    """
    gap_char = gap_char.upper()
    gaps = []
    start = None

    for i, base in enumerate(sequence.upper()):
        if base == gap_char:
            if start is None:
                start = i
        elif start is not None:
            gaps.append((start, i))
            start = None

    if start is not None:
        gaps.append((start, len(sequence)))
    return gaps


def gap_summary(sequences: Iterable[str], gap_char: str = "N") -> Dict[str, int]:
    """Count and total length of gap runs over a set of scaffolds."""
    runs = [end - start for seq in sequences for start, end in find_gaps(seq, gap_char)]
    return {
        'num_gaps': len(runs),
        'total_gap_length': sum(runs),
        'largest_gap': max(runs) if runs else 0,
    }


# ============================================================================
# Coverage
# ============================================================================

def _encode(sequence: str) -> np.ndarray:
    # Non-ASCII symbols become '?' and never match a base
    return np.frombuffer(sequence.upper().encode('ascii', errors='replace'), dtype=np.uint8)


def _best_placement(
    ref: np.ndarray,
    read: np.ndarray,
    min_overlap: int,
    min_identity: float,
) -> Tuple[int, int]:
    """
    Best window for one read on the reference.

    Offsets run from read-overhanging-the-left-end to
    read-overhanging-the-right-end. Best = most matching bases, then the
    longest aligned span, then the leftmost offset.

    Returns:
        (start, end) on the reference, or (-1, -1) if nothing qualifies
    """
    ref_len = ref.size
    read_len = read.size
    best_key = None
    best_span = (-1, -1)

    for offset in range(min_overlap - read_len, ref_len - min_overlap + 1):
        start = max(0, offset)
        end = min(ref_len, offset + read_len)
        span = end - start
        if span < min_overlap:
            continue

        matches = int(np.count_nonzero(ref[start:end] == read[start - offset:end - offset]))
        if matches / span < min_identity:
            continue

        key = (matches, span)
        if best_key is None or key > best_key:
            best_key = key
            best_span = (start, end)

    return best_span


def calculate_coverage(
    reference: str,
    reads: Sequence[str],
    min_overlap: int,
    min_identity: float = 1.0,
) -> np.ndarray:
    """
    Per-base read depth over a reference sequence.

    Each read is placed at its single best window (see _best_placement);
    every reference position inside that window gains one unit of depth.
    Reads with no qualifying window are not counted.

    Args:
        reference: Reference sequence (e.g. an assembled contig)
        reads: Read sequences
        min_overlap: Minimum aligned span
        min_identity: Minimum fraction of matching bases in the span

    Returns:
        int64 array with one depth value per reference base
    """
    check_min_overlap(min_overlap)
    check_min_identity(min_identity)

    profile = np.zeros(len(reference), dtype=np.int64)
    if not reference:
        return profile

    ref = _encode(reference)
    placed = 0
    for read in reads:
        start, end = _best_placement(ref, _encode(getattr(read, "sequence", read)), min_overlap, min_identity)
        if start < 0:
            continue
        profile[start:end] += 1
        placed += 1

    logger.info(f"Coverage: placed {placed}/{len(reads)} reads on {len(reference)}bp reference")
    return profile
