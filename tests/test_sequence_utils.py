#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for sequence manipulation utilities.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from contigweaver.utils.sequence_utils import (
    decode_phred,
    encode_phred,
    extract_kmers,
    is_acgt,
    iter_kmers,
    normalize_sequence,
)


class TestKmerExtraction:
    """Test k-mer extraction functions."""

    def test_basic_kmer_extraction(self):
        """Test extraction of k-mers from sequence."""
        kmers = extract_kmers("ATCGATCG", 3)

        assert kmers == ["ATC", "TCG", "CGA", "GAT", "ATC", "TCG"]

    def test_kmer_count_correct(self):
        """Number of k-mers is length - k + 1 for clean sequence."""
        sequence = "ATCGATCG"

        assert len(extract_kmers(sequence, 3)) == len(sequence) - 3 + 1

    def test_kmer_larger_than_sequence(self):
        assert extract_kmers("ATG", 5) == []

    def test_lowercase_normalized(self):
        assert extract_kmers("acgt", 4) == ["ACGT"]

    def test_windows_with_n_skipped(self):
        """Windows containing unknown bases yield nothing."""
        assert list(iter_kmers("ACNGTA", 2)) == [(0, "AC"), (3, "GT"), (4, "TA")]


class TestBaseHelpers:
    """Test normalization and alphabet checks."""

    def test_normalize(self):
        assert normalize_sequence("acgtN") == "ACGTN"

    @pytest.mark.parametrize("sequence, expected", [
        ("ACGT", True),
        ("", True),
        ("ACGN", False),
        ("acgt", False),
    ])
    def test_is_acgt(self, sequence, expected):
        assert is_acgt(sequence) is expected


class TestPhred:
    """Test Phred+33 quality helpers."""

    def test_decode(self):
        assert decode_phred("I5!") == [40, 20, 0]

    def test_encode(self):
        assert encode_phred([40, 20, 0]) == "I5!"

    def test_empty(self):
        assert decode_phred("") == []
        assert encode_phred([]) == ""

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
