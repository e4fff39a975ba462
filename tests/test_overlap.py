#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for suffix/prefix overlap detection.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from contigweaver.assembly_core.overlap_module import (
    Overlap,
    calculate_identity,
    find_overlap,
    find_all_overlaps,
)
from contigweaver.errors import ConfigValidationError


class TestCalculateIdentity:
    """Test equal-length identity scoring."""

    def test_identical(self):
        assert calculate_identity("ACGT", "ACGT") == 1.0

    def test_partial(self):
        assert calculate_identity("ACGT", "ACGA") == 0.75

    def test_case_insensitive(self):
        assert calculate_identity("acgt", "ACGT") == 1.0

    def test_empty_is_identical(self):
        assert calculate_identity("", "") == 1.0

    def test_unequal_lengths_score_zero(self):
        assert calculate_identity("AC", "ACG") == 0.0


class TestFindOverlap:
    """Test single-pair overlap detection."""

    def test_longest_exact_overlap(self):
        overlap = find_overlap("ACGTACGTACGT", "ACGTACGTTTT", 8, 1.0)

        assert overlap is not None
        assert overlap.length == 8
        assert overlap.identity == 1.0
        assert overlap.position_a == 4
        assert overlap.position_b == 0

    def test_no_overlap(self):
        assert find_overlap("AAAA", "CCCC", 2, 1.0) is None

    def test_relaxed_identity(self):
        overlap = find_overlap("AAAAACGT", "ACGAAAAA", 4, 0.75)

        assert overlap.length == 4
        assert overlap.identity == 0.75

    def test_strict_identity_rejects_mismatch(self):
        assert find_overlap("AAAAACGT", "ACGAAAAA", 4, 1.0) is None

    def test_case_insensitive(self):
        overlap = find_overlap("acgtAC", "ACgg", 2, 1.0)
        assert overlap.length == 2

    def test_overlap_bounded_by_shorter_read(self):
        overlap = find_overlap("TTTTACGT", "ACGT", 2, 1.0)
        assert overlap.length == 4

    def test_records_indices(self):
        overlap = find_overlap("AACC", "CCGG", 2, 1.0, index_a=5, index_b=7)
        assert (overlap.read_a, overlap.read_b) == (5, 7)

    def test_invalid_min_overlap(self):
        with pytest.raises(ConfigValidationError):
            find_overlap("ACGT", "ACGT", 0, 1.0)

    def test_invalid_min_identity(self):
        with pytest.raises(ConfigValidationError):
            find_overlap("ACGT", "ACGT", 2, 1.5)


class TestFindAllOverlaps:
    """Test all-pairs overlap search."""

    def test_all_ordered_pairs(self, overlapping_reads):
        overlaps = find_all_overlaps(overlapping_reads, min_overlap=4)
        pairs = [(o.read_a, o.read_b, o.length) for o in overlaps]

        assert pairs == [(0, 1, 8), (1, 2, 4), (2, 0, 8), (2, 1, 8)]

    def test_no_self_pairs(self):
        overlaps = find_all_overlaps(["ACGTACGT", "ACGTACGT"], min_overlap=4)
        assert all(o.read_a != o.read_b for o in overlaps)
        assert len(overlaps) == 2

    def test_parallel_matches_serial(self, tiled_reads):
        serial = find_all_overlaps(tiled_reads, min_overlap=20, num_workers=1)
        parallel = find_all_overlaps(tiled_reads, min_overlap=20, num_workers=2)

        assert parallel == serial

    def test_progress_reaches_one(self, overlapping_reads):
        seen = []
        find_all_overlaps(overlapping_reads, min_overlap=4, progress=seen.append)

        assert seen[-1] == 1.0
        assert seen == sorted(seen)

    def test_single_read(self):
        assert find_all_overlaps(["ACGT"], min_overlap=2) == []

    def test_invalid_workers(self):
        with pytest.raises(ValueError):
            find_all_overlaps(["ACGT", "CGTA"], min_overlap=2, num_workers=0)

    def test_overlap_str(self):
        overlap = Overlap(read_a=0, read_b=1, length=8, identity=1.0)
        assert str(overlap) == "0 -> 1 (8bp, identity=1.00)"

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
