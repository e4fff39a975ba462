#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Assembly parameters shared by the OLC and de Bruijn assemblers.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..errors import ConfigValidationError


def check_min_overlap(min_overlap: int):
    """Reject overlap lengths below 1."""
    if min_overlap < 1:
        raise ConfigValidationError(f"min_overlap must be >= 1, got {min_overlap}")


def check_min_identity(min_identity: float):
    """Reject identity thresholds outside [0, 1]."""
    if not 0.0 <= min_identity <= 1.0:
        raise ConfigValidationError(f"min_identity must be in [0, 1], got {min_identity}")


def check_kmer_size(kmer_size: int):
    """Reject k-mer sizes below 1."""
    if kmer_size < 1:
        raise ConfigValidationError(f"kmer_size must be >= 1, got {kmer_size}")


@dataclass(frozen=True)
class AssemblyParameters:
    """
    Immutable assembly configuration.

    Attributes:
        min_overlap: Minimum suffix/prefix overlap length (>= 1)
        min_identity: Minimum overlap identity in [0, 1]; 1.0 requires exact matches
        kmer_size: K-mer size for the de Bruijn assembler (>= 1)
        min_contig_length: Contigs shorter than this are dropped (>= 0)
    """
    min_overlap: int = 20
    min_identity: float = 1.0
    kmer_size: int = 31
    min_contig_length: int = 0

    def __post_init__(self):
        """Validate configuration."""
        check_min_overlap(self.min_overlap)
        check_min_identity(self.min_identity)
        check_kmer_size(self.kmer_size)
        if self.min_contig_length < 0:
            raise ConfigValidationError(
                f"min_contig_length must be >= 0, got {self.min_contig_length}"
            )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "AssemblyParameters":
        """
        Build parameters from a configuration dictionary.

        Accepts either the full configuration (reads the ``assembly``
        section) or the ``assembly`` section itself. Missing keys fall back
        to the dataclass defaults.
        """
        section = config.get('assembly', config)
        kwargs = {
            key: section[key]
            for key in ('min_overlap', 'min_identity', 'kmer_size', 'min_contig_length')
            if section.get(key) is not None
        }
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Export as a plain dictionary."""
        return {
            'min_overlap': self.min_overlap,
            'min_identity': self.min_identity,
            'kmer_size': self.kmer_size,
            'min_contig_length': self.min_contig_length,
        }

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
