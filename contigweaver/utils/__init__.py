"""
Utilities module for ContigWeaver.

This module provides shared helpers for the assembly engine:
- Sequence normalization, k-mer windows and Phred decoding

The end-to-end pipeline lives in ``contigweaver.utils.pipeline`` and is not
re-exported here, since it depends on the assembly modules that import these
helpers.
"""

from .sequence_utils import (
    normalize_sequence,
    is_acgt,
    iter_kmers,
    extract_kmers,
    decode_phred,
    encode_phred,
)

__all__ = [
    "normalize_sequence",
    "is_acgt",
    "iter_kmers",
    "extract_kmers",
    "decode_phred",
    "encode_phred",
]
