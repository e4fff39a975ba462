#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for link-based contig scaffolding.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging

import pytest

from contigweaver.assembly_core.data_structures import Contig
from contigweaver.assembly_utils.scaffolder import Scaffold, scaffold_contigs
from contigweaver.errors import ConfigValidationError

CONTIGS = ["AAA", "CCC", "GGG"]
SCAFFOLDER_LOGGER = "contigweaver.assembly_utils.scaffolder"


def _layout(scaffolds):
    return [s.contig_indices for s in scaffolds]


class TestScaffoldContigs:
    """Test link acceptance and scaffold assembly."""

    def test_no_links_identity(self):
        scaffolds = scaffold_contigs(CONTIGS, [])

        assert [s.sequence for s in scaffolds] == CONTIGS
        assert _layout(scaffolds) == [(0,), (1,), (2,)]
        assert all(s.gaps == () for s in scaffolds)

    def test_single_link(self):
        scaffolds = scaffold_contigs(CONTIGS, [(0, 1, 3)])

        assert scaffolds[0] == Scaffold(contig_indices=(0, 1), gaps=(3,), sequence="AAANNNCCC")
        assert scaffolds[1].sequence == "GGG"

    def test_chain_of_three(self):
        scaffolds = scaffold_contigs(CONTIGS, [(1, 2, 1), (0, 1, 2)])

        assert len(scaffolds) == 1
        assert scaffolds[0].sequence == "AAANNCCCNGGG"
        assert scaffolds[0].gaps == (2, 1)

    def test_zero_gap(self):
        scaffolds = scaffold_contigs(CONTIGS, [(0, 1, 0)])
        assert scaffolds[0].sequence == "AAACCC"

    def test_first_successor_wins(self):
        scaffolds = scaffold_contigs(CONTIGS, [(0, 1, 2), (0, 2, 5)])
        assert _layout(scaffolds) == [(0, 1), (2,)]

    def test_first_predecessor_wins(self):
        scaffolds = scaffold_contigs(CONTIGS, [(0, 2, 1), (1, 2, 1)])
        assert _layout(scaffolds) == [(0, 2), (1,)]

    def test_cycle_rejected(self):
        scaffolds = scaffold_contigs(CONTIGS, [(0, 1, 0), (1, 2, 0), (2, 0, 0)])
        assert _layout(scaffolds) == [(0, 1, 2)]

    def test_scaffolds_ordered_by_head(self):
        scaffolds = scaffold_contigs(CONTIGS, [(2, 0, 1)])
        assert _layout(scaffolds) == [(1,), (2, 0)]

    def test_every_contig_used_once(self):
        scaffolds = scaffold_contigs(CONTIGS, [(2, 0, 1), (0, 1, 4), (1, 2, 1)])
        used = sorted(i for s in scaffolds for i in s.contig_indices)
        assert used == [0, 1, 2]

    def test_length_at_least_contigs(self):
        for scaffold in scaffold_contigs(CONTIGS, [(0, 1, 7)]):
            assert scaffold.length >= sum(len(CONTIGS[i]) for i in scaffold.contig_indices)
            assert len(scaffold.gaps) == scaffold.num_contigs - 1

    def test_custom_gap_char(self):
        scaffolds = scaffold_contigs(CONTIGS, [(0, 1, 2)], gap_char="-")
        assert scaffolds[0].sequence == "AAA--CCC"

    def test_invalid_gap_char(self):
        with pytest.raises(ConfigValidationError):
            scaffold_contigs(CONTIGS, [], gap_char="NN")

    def test_accepts_contig_objects(self):
        contigs = [Contig(sequence=s) for s in CONTIGS]
        scaffolds = scaffold_contigs(contigs, [(0, 1, 1)])
        assert scaffolds[0].sequence == "AAANCCC"

    def test_empty_input(self):
        assert scaffold_contigs([], []) == []


class TestInvalidLinks:
    """Test that malformed links are skipped with a warning."""

    @pytest.mark.parametrize("link", [(0, 5, 1), (-1, 0, 1), (1, 1, 0), (0, 1, -2)])
    def test_skipped_with_warning(self, link, caplog):
        with caplog.at_level(logging.WARNING, logger=SCAFFOLDER_LOGGER):
            scaffolds = scaffold_contigs(CONTIGS, [link])

        assert _layout(scaffolds) == [(0,), (1,), (2,)]
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_rejected_link_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=SCAFFOLDER_LOGGER):
            scaffold_contigs(CONTIGS, [(0, 1, 1), (0, 2, 1)])

        assert any("Rejected link 0 -> 2" in r.getMessage() for r in caplog.records)

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
