#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import random

import pytest
from pathlib import Path
import tempfile
import shutil


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="contigweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def overlapping_reads():
    """Three reads whose overlaps form a cycle (0->1->2->0)."""
    return ["ACGTACGT", "ACGTACGTTTTT", "TTTTACGTACGT"]


@pytest.fixture
def random_genome():
    """Deterministic 200bp random genome (no repeats at k >= 15 in practice)."""
    rng = random.Random(1322)
    return ''.join(rng.choice("ACGT") for _ in range(200))


@pytest.fixture
def tiled_reads(random_genome):
    """50bp reads every 25bp across the genome (25bp exact overlaps)."""
    return [random_genome[i:i + 50] for i in range(0, len(random_genome) - 49, 25)]


@pytest.fixture
def simple_fasta():
    """Generate simple FASTA records for testing."""
    return ">read1\nACGTACGT\n>read2\nacgtacgttttt\n>read3\nTTTTACGTACGT\n"


@pytest.fixture
def simple_fastq():
    """Generate simple FASTQ reads for testing."""
    return """@read1
ATCGATCGATCG
+
IIIIIIIIIIII
@read2
GCTAGCTAGCTA
+
!!IIIIIIII!!
"""

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
