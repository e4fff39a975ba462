#!/usr/bin/env python3
"""
ContigWeaver assembly utilities.

Post-assembly helpers: contig scaffolding and assembly statistics.
"""

from .assembly_stats import (
    AssemblyStats,
    NxStatistics,
    calculate_stats,
    calculate_nx,
    calculate_nx_curve,
    calculate_aun,
    calculate_coverage,
    find_gaps,
    gap_summary,
)
from .scaffolder import Scaffold, scaffold_contigs

__all__ = [
    "AssemblyStats",
    "NxStatistics",
    "calculate_stats",
    "calculate_nx",
    "calculate_nx_curve",
    "calculate_aun",
    "calculate_coverage",
    "find_gaps",
    "gap_summary",
    "Scaffold",
    "scaffold_contigs",
]
