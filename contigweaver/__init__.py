#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Package initialization and version metadata.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .version import __version__
from .errors import ContigWeaverError, ConfigValidationError
from .config import AssemblyParameters
from .assembly_core import AssemblyResult, Contig, assemble_de_bruijn, assemble_olc
from .assembly_utils import Scaffold, calculate_stats, scaffold_contigs

__all__ = [
    "__version__",
    "ContigWeaverError",
    "ConfigValidationError",
    "AssemblyParameters",
    "AssemblyResult",
    "Contig",
    "assemble_olc",
    "assemble_de_bruijn",
    "Scaffold",
    "scaffold_contigs",
    "calculate_stats",
]

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
