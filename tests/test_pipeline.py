#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for the end-to-end assembly pipeline.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy

import pytest

from contigweaver.config.schema import DEFAULT_CONFIG, apply_overrides
from contigweaver.errors import ConfigValidationError
from contigweaver.io_utils import SeqRead
from contigweaver.utils.pipeline import AssemblyPipeline


def make_config(**overrides):
    """Default configuration with dotted-key overrides (use __ for dots)."""
    return apply_overrides(
        DEFAULT_CONFIG,
        {key.replace('__', '.'): value for key, value in overrides.items()},
    )


class TestPipelineSetup:
    """Test pipeline construction."""

    def test_defaults(self):
        pipeline = AssemblyPipeline()

        assert pipeline.strategy == 'olc'
        assert pipeline.params.min_overlap == 20
        assert pipeline.threads == 1

    def test_config_not_mutated(self):
        config = copy.deepcopy(DEFAULT_CONFIG)
        pipeline = AssemblyPipeline(config)
        pipeline.config['assembly']['strategy'] = 'dbg'

        assert config['assembly']['strategy'] == 'olc'

    def test_invalid_config_raises(self):
        with pytest.raises(ConfigValidationError, match="strategy"):
            AssemblyPipeline(make_config(assembly__strategy='greedy'))


class TestPipelineRun:
    """Test full pipeline runs."""

    def test_olc_run(self, random_genome, tiled_reads):
        result = AssemblyPipeline().run(tiled_reads)

        assert result.assembly.sequences == [random_genome]
        assert result.scaffold_sequences == [random_genome]
        assert result.reads_in == len(tiled_reads)
        assert result.reads_after_trim == len(tiled_reads)
        assert result.correction_stats is None
        assert result.stats.n50 == len(random_genome)
        assert 'assemble' in result.timings

    def test_dbg_run(self, random_genome, tiled_reads):
        config = make_config(assembly__strategy='dbg', assembly__kmer_size=15)
        result = AssemblyPipeline(config).run(tiled_reads)

        assert result.assembly.sequences == [random_genome]
        assert result.assembly.contigs[0].kmer_path

    def test_trimming(self):
        config = make_config(
            assembly__min_overlap=4,
            preprocessing__trim__enabled=True,
            preprocessing__trim__min_length=4,
        )
        reads = [
            SeqRead(id="r1", sequence="AAAAAAAAGG", quality="IIIIIIII!!"),
            SeqRead(id="r2", sequence="CCCC", quality="!!!!"),
        ]
        result = AssemblyPipeline(config).run(reads)

        assert result.reads_in == 2
        assert result.reads_after_trim == 1
        assert result.assembly.sequences == ["AAAAAAAA"]
        assert 'trim' in result.timings

    def test_correction(self, random_genome, tiled_reads):
        config = make_config(
            preprocessing__correction__enabled=True,
            preprocessing__correction__kmer_size=15,
            preprocessing__correction__min_kmer_frequency=1,
        )
        result = AssemblyPipeline(config).run(tiled_reads)

        assert result.correction_stats.reads_processed == len(tiled_reads)
        assert result.correction_stats.bases_corrected == 0
        assert result.assembly.sequences == [random_genome]

    def test_links_build_scaffolds(self):
        config = make_config(assembly__min_overlap=4)
        result = AssemblyPipeline(config).run(["AAAAAAAA", "CCCCCCCC"], links=[(0, 1, 3)])

        assert result.assembly.num_contigs == 2
        assert result.scaffold_sequences == ["AAAAAAAANNNCCCCCCCC"]
        assert result.stats.total_length == 19
        assert result.stats.num_contigs == 1

    def test_to_dict(self):
        config = make_config(assembly__min_overlap=4)
        report = AssemblyPipeline(config).run(["AAAAAAAA", "CCCCCCCC"]).to_dict()

        assert report['reads_in'] == 2
        assert report['contigs'] == 2
        assert report['scaffolds'] == 2
        assert report['bases_corrected'] == 0
        assert report['stats']['total_length'] == 16

    def test_empty_reads(self):
        result = AssemblyPipeline().run([])

        assert result.assembly.contigs == []
        assert result.scaffolds == []
        assert result.stats.total_length == 0

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
