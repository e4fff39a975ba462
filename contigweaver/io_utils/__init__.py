"""
ContigWeaver v0.1.0

I/O Module for ContigWeaver.

Module structure:
1. io_core.py - Core read structure, FASTA/FASTQ reading, FASTA writing,
   scaffold link parsing
"""

from .io_core import (
    SeqRead,
    as_reads,
    as_sequences,
    read_sequences,
    read_links,
    write_fasta,
    detect_format,
)

__all__ = [
    "SeqRead",
    "as_reads",
    "as_sequences",
    "read_sequences",
    "read_links",
    "write_fasta",
    "detect_format",
]
