"""
ContigWeaver v0.1.0

Sequence utility functions for ContigWeaver.

Provides the small string helpers shared by the preprocessing, assembly and
statistics modules.
"""

from typing import Iterator, List, Tuple

NUCLEOTIDES = "ACGT"
PHRED_OFFSET = 33


def normalize_sequence(sequence: str) -> str:
    """
    Normalize a nucleotide sequence to uppercase.

    Example:
        >>> normalize_sequence("acgtN")
        'ACGTN'
    """
    return sequence.upper()


def is_acgt(sequence: str) -> bool:
    """Return True if *sequence* contains only A, C, G and T."""
    return all(base in NUCLEOTIDES for base in sequence)


def iter_kmers(sequence: str, k: int) -> Iterator[Tuple[int, str]]:
    """
    Yield (position, k-mer) pairs for every ACGT-only window of *sequence*.

    Windows containing N, gap symbols or other unknown markers are skipped.
    """
    for i in range(len(sequence) - k + 1):
        kmer = sequence[i:i + k]
        if is_acgt(kmer):
            yield i, kmer


def extract_kmers(sequence: str, k: int) -> List[str]:
    """
    Extract all assemblable k-mers from a sequence.

    Args:
        sequence: DNA sequence string
        k: K-mer size

    Returns:
        List of k-mer strings (uppercase, ACGT only)

    Example:
        >>> extract_kmers("ATCGATCG", 3)
        ['ATC', 'TCG', 'CGA', 'GAT', 'ATC', 'TCG']
    """
    if k > len(sequence):
        return []

    return [kmer for _, kmer in iter_kmers(normalize_sequence(sequence), k)]


def decode_phred(quality: str) -> List[int]:
    """
    Decode a Phred+33 ASCII quality string into integer scores.

    Example:
        >>> decode_phred("I5!")
        [40, 20, 0]
    """
    return [ord(c) - PHRED_OFFSET for c in quality]


def encode_phred(scores: List[int]) -> str:
    """Encode integer Phred scores as a Phred+33 ASCII string."""
    return ''.join(chr(q + PHRED_OFFSET) for q in scores)
