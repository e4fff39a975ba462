#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Preprocessing Module for ContigWeaver.

Read cleanup applied before assembly.

Main Components:
    - quality_trim: Phred-based trimming of read ends
    - error_correct: K-mer spectrum substitution correction
    - KmerSpectrum / KmerCorrector: building blocks of error_correct
    - CorrectionStats: Statistics tracking for corrections
"""

from .errorsmith_module import (
    CorrectionStats,
    KmerSpectrum,
    KmerCorrector,
    quality_trim,
    error_correct,
)

__all__ = [
    "CorrectionStats",
    "KmerSpectrum",
    "KmerCorrector",
    "quality_trim",
    "error_correct",
]
