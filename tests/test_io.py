#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for FASTA/FASTQ reading, FASTA writing and link files.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import gzip

import pytest

from contigweaver.io_utils import (
    SeqRead,
    as_reads,
    as_sequences,
    detect_format,
    read_links,
    read_sequences,
    write_fasta,
)


class TestSeqRead:
    """Test the read value type."""

    def test_sequence_uppercased(self):
        assert SeqRead(id="r", sequence="acgtn").sequence == "ACGTN"

    def test_quality_length_checked(self):
        with pytest.raises(ValueError):
            SeqRead(id="r", sequence="ACGT", quality="II")

    def test_phred_scores(self):
        read = SeqRead(id="r", sequence="ACG", quality="I5!")

        assert read.phred_scores() == [40, 20, 0]
        assert read.length == 3

    def test_no_quality(self):
        assert SeqRead(id="r", sequence="ACG").phred_scores() == []

    def test_as_reads(self):
        existing = SeqRead(id="keep", sequence="AC")
        reads = as_reads(["acgt", existing])

        assert reads[0].id == "read_0"
        assert reads[0].sequence == "ACGT"
        assert reads[1] is existing

    def test_as_sequences(self):
        assert as_sequences(["acgn", SeqRead(id="r", sequence="tt")]) == ["ACGN", "TT"]


class TestReadSequences:
    """Test sequence file parsing."""

    def test_fasta(self, temp_output_dir, simple_fasta):
        path = temp_output_dir / "reads.fasta"
        path.write_text(simple_fasta)

        reads = list(read_sequences(path))

        assert [r.id for r in reads] == ["read1", "read2", "read3"]
        assert reads[1].sequence == "ACGTACGTTTTT"
        assert reads[0].quality is None

    def test_fastq(self, temp_output_dir, simple_fastq):
        path = temp_output_dir / "reads.fastq"
        path.write_text(simple_fastq)

        reads = list(read_sequences(path))

        assert len(reads) == 2
        assert reads[1].quality == "!!IIIIIIII!!"
        assert reads[1].phred_scores()[:3] == [0, 0, 40]

    def test_gzipped_fastq(self, temp_output_dir, simple_fastq):
        path = temp_output_dir / "reads.fq.gz"
        with gzip.open(path, 'wt') as f:
            f.write(simple_fastq)

        assert [r.id for r in read_sequences(path)] == ["read1", "read2"]

    def test_sample_size(self, temp_output_dir, simple_fasta):
        path = temp_output_dir / "reads.fa"
        path.write_text(simple_fasta)

        assert len(list(read_sequences(path, sample_size=2))) == 2

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            list(read_sequences(temp_output_dir / "missing.fasta"))

    @pytest.mark.parametrize("name, expected", [
        ("reads.fastq", "fastq"),
        ("reads.FQ", "fastq"),
        ("reads.fq.gz", "fastq"),
        ("reads.fasta", "fasta"),
        ("reads.fa.gz", "fasta"),
        ("reads", "fasta"),
    ])
    def test_detect_format(self, name, expected):
        assert detect_format(name) == expected


class TestLinksAndWriting:
    """Test link parsing and FASTA output."""

    def test_read_links(self, temp_output_dir):
        path = temp_output_dir / "links.txt"
        path.write_text("# a b gap\n0 1 10\n\n1  2\t5\n")

        assert read_links(path) == [(0, 1, 10), (1, 2, 5)]

    def test_bad_link_line(self, temp_output_dir):
        path = temp_output_dir / "links.txt"
        path.write_text("0 1\n")

        with pytest.raises(ValueError):
            read_links(path)

    def test_missing_links(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            read_links(temp_output_dir / "none.txt")

    def test_write_fasta_wraps(self, temp_output_dir):
        path = temp_output_dir / "out" / "contigs.fasta"
        count = write_fasta([("contig_1", "ACGT" * 30)], path, line_width=60)

        lines = path.read_text().splitlines()
        assert count == 1
        assert lines[0] == ">contig_1"
        assert [len(line) for line in lines[1:]] == [60, 60]

    def test_write_fasta_unwrapped_round_trip(self, temp_output_dir):
        path = temp_output_dir / "contigs.fasta"
        write_fasta([("c1", "ACGT" * 30), ("c2", "GG")], path, line_width=0)

        lines = path.read_text().splitlines()
        assert len(lines) == 4
        assert [r.sequence for r in read_sequences(path)] == ["ACGT" * 30, "GG"]

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
