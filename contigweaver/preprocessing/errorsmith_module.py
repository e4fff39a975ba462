"""
ContigWeaver v0.1.0

ErrorSmith: read preprocessing for ContigWeaver.

Two pure transforms run on reads before assembly:
- Quality trimming of low-quality read ends (Phred+33 qualities)
- K-mer spectrum error correction by single-base substitution

Architecture:
    Section 1: Correction Statistics
    Section 2: K-mer Spectrum and Corrector
    Section 3: Read-level Transforms

Usage:
    from contigweaver.preprocessing import quality_trim, error_correct

    trimmed = quality_trim(reads, min_quality=20, min_length=30)
    corrected = error_correct(trimmed, kmer_size=15, min_kmer_frequency=2)

Neither transform mutates its input; new SeqRead values are returned.
"""

from __future__ import annotations
from typing import Optional, Dict, List, Sequence, Tuple, Union
from dataclasses import dataclass, field, replace
from collections import defaultdict
import logging

from ..errors import ConfigValidationError
from ..io_utils import SeqRead, as_reads
from ..utils.sequence_utils import NUCLEOTIDES, is_acgt, iter_kmers

logger = logging.getLogger(__name__)


# ============================================================================
# SECTION 1: CORRECTION STATISTICS
# ============================================================================


@dataclass
class CorrectionStats:
    """
    Statistics for error correction operations.

    Tracks how many reads and bases were touched, and where in the reads
    substitutions landed.
    """

    # Read-level statistics
    reads_processed: int = 0
    reads_corrected: int = 0  # Reads with at least one correction

    # Base-level statistics
    bases_corrected: int = 0
    total_bases: int = 0

    # Position tracking
    corrections_by_position: Dict[int, int] = field(default_factory=lambda: defaultdict(int))

    def record_correction(self, position: int):
        """Record a single substitution at *position* of a read."""
        self.bases_corrected += 1
        self.corrections_by_position[position] += 1

    def record_read(self, was_corrected: bool, num_bases: int):
        """
        Record processing of a read.

        Args:
            was_corrected: Whether the read had any corrections
            num_bases: Number of bases in the read
        """
        self.reads_processed += 1
        self.total_bases += num_bases
        if was_corrected:
            self.reads_corrected += 1

    def get_correction_rate(self) -> float:
        """
        Get the correction rate (percentage of bases corrected).

        Returns:
            Correction rate as percentage (0-100)
        """
        if self.total_bases == 0:
            return 0.0
        return (self.bases_corrected / self.total_bases) * 100

    def summary(self) -> str:
        """Human-readable summary of correction statistics."""
        if self.reads_processed > 0:
            corrected_line = (
                f"Reads corrected:       {self.reads_corrected:,} "
                f"({self.reads_corrected / self.reads_processed * 100:.1f}%)"
            )
        else:
            corrected_line = "Reads corrected:       0"

        lines = [
            "=" * 60,
            "CORRECTION STATISTICS SUMMARY",
            "=" * 60,
            f"Reads processed:       {self.reads_processed:,}",
            corrected_line,
            f"Total bases:           {self.total_bases:,}",
            f"Bases corrected:       {self.bases_corrected:,} ({self.get_correction_rate():.3f}%)",
            "=" * 60,
        ]
        return "\n".join(lines)


# ============================================================================
# SECTION 2: K-MER SPECTRUM AND CORRECTOR
# ============================================================================


class KmerSpectrum:
    """
    K-mer spectrum for identifying solid (correct) vs error k-mers.

    Solid k-mers appear at least ``min_freq`` times in the read set and are
    likely correct. Rare k-mers likely contain sequencing errors. Only
    ACGT-only windows are counted.
    """

    def __init__(self, k_size: int = 21, min_freq: int = 2):
        """
        Initialize k-mer spectrum.

        Args:
            k_size: Length of k-mers
            min_freq: Minimum frequency for a k-mer to be considered solid
        """
        if k_size < 1:
            raise ConfigValidationError(f"kmer_size must be >= 1, got {k_size}")
        if min_freq < 1:
            raise ConfigValidationError(f"min_kmer_frequency must be >= 1, got {min_freq}")

        self.k_size = k_size
        self.min_freq = min_freq
        self.kmer_counts: Dict[str, int] = defaultdict(int)

    def add_sequence(self, sequence: str):
        """Add every k-mer of *sequence* to the spectrum."""
        for _, kmer in iter_kmers(sequence.upper(), self.k_size):
            self.kmer_counts[kmer] += 1

    def is_solid(self, kmer: str) -> bool:
        """Check if a k-mer is solid (high frequency)."""
        return self.get_count(kmer) >= self.min_freq

    def get_count(self, kmer: str) -> int:
        """Get count of a k-mer."""
        return self.kmer_counts.get(kmer, 0)

    def __len__(self) -> int:
        return len(self.kmer_counts)


class KmerCorrector:
    """
    K-mer based error correction strategy.

    Windows are visited left to right. A window whose k-mer is not solid is
    replaced by its most frequent single-substitution neighbour that is
    solid; ties go to the earliest position in the window, then to base
    order A < C < G < T. A window with no solid neighbour is left alone.
    """

    def __init__(self, spectrum: KmerSpectrum, stats: Optional[CorrectionStats] = None):
        self.spectrum = spectrum
        self.k_size = spectrum.k_size
        self.stats = stats if stats is not None else CorrectionStats()

    @classmethod
    def from_sequences(cls, sequences: Sequence[str], k_size: int, min_freq: int) -> "KmerCorrector":
        """Build a corrector with a spectrum counted over *sequences*."""
        spectrum = KmerSpectrum(k_size, min_freq)
        for seq in sequences:
            spectrum.add_sequence(seq)
        logger.debug(f"K-mer spectrum (k={k_size}): {len(spectrum)} distinct k-mers")
        return cls(spectrum)

    def correct_sequence(self, sequence: str) -> Tuple[str, List[Tuple[int, str, str]]]:
        """
        Correct errors in a sequence using the k-mer spectrum.

        Returns:
            Tuple of (corrected_sequence, corrections_list)
            where corrections_list contains (position, original_base, new_base)
        """
        corrected = list(sequence.upper())
        corrections = []
        k = self.k_size

        for i in range(len(corrected) - k + 1):
            kmer = ''.join(corrected[i:i + k])
            if not is_acgt(kmer) or self.spectrum.is_solid(kmer):
                continue

            fix = self._best_substitution(kmer)
            if fix is None:
                continue

            offset, new_base = fix
            pos = i + offset
            corrections.append((pos, corrected[pos], new_base))
            corrected[pos] = new_base

        self.stats.record_read(bool(corrections), len(corrected))
        for pos, _, _ in corrections:
            self.stats.record_correction(pos)

        return ''.join(corrected), corrections

    def _best_substitution(self, kmer: str) -> Optional[Tuple[int, str]]:
        """
        Find the best solid single-substitution neighbour of *kmer*.

        Returns:
            (offset within the k-mer, replacement base), or None
        """
        best = None
        best_count = 0

        for offset, original in enumerate(kmer):
            for base in NUCLEOTIDES:
                if base == original:
                    continue
                count = self.spectrum.get_count(kmer[:offset] + base + kmer[offset + 1:])
                if count >= self.spectrum.min_freq and count > best_count:
                    best = (offset, base)
                    best_count = count

        return best


# ============================================================================
# SECTION 3: READ-LEVEL TRANSFORMS
# ============================================================================


def _trim_bounds(scores: List[int], min_quality: int) -> Tuple[int, int]:
    """Half-open [start, end) span left after trimming low-quality ends."""
    start = 0
    end = len(scores)
    while start < end and scores[start] < min_quality:
        start += 1
    while end > start and scores[end - 1] < min_quality:
        end -= 1
    return start, end


def quality_trim(
    reads: Sequence[Union[str, SeqRead]],
    min_quality: int,
    min_length: int,
) -> List[SeqRead]:
    """
    Trim low-quality bases from both ends of each read.

    Leading and trailing bases with a decoded Phred score below
    *min_quality* are removed; trimmed reads shorter than *min_length* are
    dropped. Reads without quality strings pass through unchanged.

    Args:
        reads: Reads to trim (strings are wrapped as quality-less reads)
        min_quality: Minimum Phred score to keep an end base
        min_length: Minimum length of a kept read

    Returns:
        New list of trimmed reads, in input order
    """
    if min_length < 0:
        raise ConfigValidationError(f"min_length must be >= 0, got {min_length}")

    reads = as_reads(reads)
    kept = []
    bases_trimmed = 0

    for read in reads:
        if read.quality is None:
            kept.append(read)
            continue

        start, end = _trim_bounds(read.phred_scores(), min_quality)
        if end - start < min_length:
            logger.debug(f"Dropping {read.id}: {end - start}bp after trimming")
            continue

        bases_trimmed += read.length - (end - start)
        if start == 0 and end == read.length:
            kept.append(read)
        else:
            kept.append(replace(read, sequence=read.sequence[start:end], quality=read.quality[start:end]))

    logger.info(
        f"Quality trimming (Q{min_quality}): kept {len(kept)}/{len(reads)} reads, "
        f"trimmed {bases_trimmed} bases"
    )
    return kept


def error_correct(
    reads: Sequence[Union[str, SeqRead]],
    kmer_size: int,
    min_kmer_frequency: int,
    stats: Optional[CorrectionStats] = None,
) -> List[SeqRead]:
    """
    Correct substitution errors using a k-mer spectrum of the read set.

    The spectrum is counted fresh on every call over the reads given.
    Corrected reads keep their id, quality and length.

    Args:
        reads: Reads to correct (strings are wrapped as reads)
        kmer_size: K-mer length
        min_kmer_frequency: Count at which a k-mer is considered solid
        stats: Optional CorrectionStats to accumulate into

    Returns:
        New list of reads, in input order
    """
    if kmer_size < 1:
        raise ConfigValidationError(f"kmer_size must be >= 1, got {kmer_size}")
    if min_kmer_frequency < 1:
        raise ConfigValidationError(f"min_kmer_frequency must be >= 1, got {min_kmer_frequency}")

    reads = as_reads(reads)
    corrector = KmerCorrector.from_sequences([r.sequence for r in reads], kmer_size, min_kmer_frequency)
    if stats is not None:
        corrector.stats = stats

    corrected_reads = []
    for read in reads:
        sequence, corrections = corrector.correct_sequence(read.sequence)
        if corrections:
            logger.debug(f"{read.id}: {len(corrections)} substitutions")
            corrected_reads.append(replace(read, sequence=sequence))
        else:
            corrected_reads.append(read)

    logger.info(
        f"Error correction (k={kmer_size}): corrected {corrector.stats.bases_corrected} bases "
        f"in {corrector.stats.reads_corrected}/{corrector.stats.reads_processed} reads"
    )
    return corrected_reads
