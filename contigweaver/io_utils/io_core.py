#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for ContigWeaver.

Consolidated module containing:
- Core read data structure (SeqRead)
- FASTA/FASTQ reading via Biopython
- FASTA writing for contigs and scaffolds
- Scaffold link file parsing

The assembly engine itself never touches files; this module is the boundary
the CLI and pipeline use to materialize reads before assembly.
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, TextIO, Tuple, Union

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqIO.FastaIO import FastaWriter
from Bio.SeqRecord import SeqRecord

from ..utils.sequence_utils import decode_phred, encode_phred, normalize_sequence

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 2: CORE READ DATA STRUCTURE
# =============================================================================

@dataclass(frozen=True)
class SeqRead:
    """
    Sequencing read with optional per-base quality.

    Attributes:
        id: Read identifier
        sequence: DNA sequence (normalized to uppercase)
        quality: Quality scores (Phred+33 encoding), same length as sequence
        metadata: Additional metadata
    """
    id: str
    sequence: str
    quality: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        """Normalize the sequence and check the quality string."""
        object.__setattr__(self, 'sequence', normalize_sequence(self.sequence))
        if self.quality is not None and len(self.quality) != len(self.sequence):
            raise ValueError(
                f"Read {self.id}: quality length {len(self.quality)} "
                f"!= sequence length {len(self.sequence)}"
            )

    @property
    def length(self) -> int:
        """Get read length."""
        return len(self.sequence)

    def phred_scores(self) -> List[int]:
        """Decoded quality scores (empty if the read carries no quality)."""
        if self.quality is None:
            return []
        return decode_phred(self.quality)


def as_reads(reads: Iterable[Union[str, SeqRead]], prefix: str = "read") -> List[SeqRead]:
    """
    Coerce plain strings into SeqRead values.

    Strings receive synthetic ids ``{prefix}_{index}``; SeqRead values are
    passed through untouched.
    """
    result = []
    for i, read in enumerate(reads):
        if isinstance(read, SeqRead):
            result.append(read)
        else:
            result.append(SeqRead(id=f"{prefix}_{i}", sequence=read))
    return result


def as_sequences(reads: Iterable[Union[str, SeqRead]]) -> List[str]:
    """Plain uppercase sequences from strings or SeqRead values."""
    return [r.sequence if isinstance(r, SeqRead) else normalize_sequence(r) for r in reads]


# =============================================================================
# SECTION 3: FILE HELPERS
# =============================================================================

_FASTQ_SUFFIXES = ('.fastq', '.fq')


def is_gzipped(filepath: Union[str, Path]) -> bool:
    """Check whether a file path points to gzip-compressed data."""
    return Path(filepath).suffix in ('.gz', '.gzip')


def open_file(filepath: Union[str, Path], mode: str = 'r') -> TextIO:
    """Open a plain or gzipped text file."""
    if is_gzipped(filepath):
        return gzip.open(filepath, mode + 't')
    return open(filepath, mode)


def detect_format(filepath: Union[str, Path]) -> str:
    """Return 'fastq' or 'fasta' based on the file extension."""
    path = Path(filepath)
    suffixes = path.suffixes
    if suffixes and suffixes[-1] in ('.gz', '.gzip'):
        suffixes = suffixes[:-1]
    if suffixes and suffixes[-1].lower() in _FASTQ_SUFFIXES:
        return 'fastq'
    return 'fasta'


# =============================================================================
# SECTION 4: READING
# =============================================================================

def read_sequences(
    filepath: Union[str, Path],
    file_format: Optional[str] = None,
    sample_size: Optional[int] = None,
) -> Iterator[SeqRead]:
    """
    Read a FASTA or FASTQ file and yield SeqRead objects.

    Args:
        filepath: Path to input file (can be gzipped)
        file_format: 'fasta' or 'fastq' (None = detect from extension)
        sample_size: Maximum number of reads to yield (None = all)

    Yields:
        SeqRead objects; FASTQ records carry Phred+33 quality strings
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Sequence file not found: {filepath}")

    file_format = file_format or detect_format(filepath)
    count = 0

    with open_file(filepath) as handle:
        for record in SeqIO.parse(handle, file_format):
            quality = None
            if 'phred_quality' in record.letter_annotations:
                quality = encode_phred(record.letter_annotations['phred_quality'])

            yield SeqRead(id=record.id, sequence=str(record.seq), quality=quality)

            count += 1
            if sample_size and count >= sample_size:
                break

    logger.debug(f"Read {count} records from {filepath}")


def read_links(filepath: Union[str, Path]) -> List[Tuple[int, int, int]]:
    """
    Parse a scaffold link file.

    Each non-empty, non-comment line holds three whitespace-separated
    integers: ``contig_a contig_b gap_length``.
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Link file not found: {filepath}")

    links = []
    with open_file(filepath) as handle:
        for line_no, line in enumerate(handle, start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            fields = line.split()
            if len(fields) != 3:
                raise ValueError(f"{filepath}:{line_no}: expected 3 fields, got {len(fields)}")
            a, b, gap = (int(x) for x in fields)
            links.append((a, b, gap))

    return links


# =============================================================================
# SECTION 5: WRITING
# =============================================================================

def write_fasta(
    records: Iterable[Tuple[str, str]],
    filepath: Union[str, Path],
    line_width: int = 80,
) -> int:
    """
    Write (id, sequence) pairs to a FASTA file.

    Args:
        records: Iterable of (identifier, sequence) tuples
        filepath: Output FASTA file path (.gz suffix compresses)
        line_width: Number of bases per line (0 = no wrapping)

    Returns:
        Number of sequences written
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    seq_records = [
        SeqRecord(Seq(sequence), id=record_id, description="")
        for record_id, sequence in records
    ]

    with open_file(filepath, 'w') as handle:
        writer = FastaWriter(handle, wrap=line_width if line_width > 0 else None)
        count = writer.write_file(seq_records)

    logger.info(f"Wrote {count} sequences to {filepath}")
    return count
