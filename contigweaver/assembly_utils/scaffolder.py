#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Scaffolder: orders contigs into scaffolds using external link evidence.

Algorithm:
  1. Links (a, b, gap) state that contig b follows contig a with an
     estimated gap of *gap* unknown bases.
  2. Links are taken in input order. A link is accepted only when a has no
     successor yet, b has no predecessor yet, and it would not close a cycle;
     the first link seen for either end wins.
  3. Accepted links form chains. Each chain becomes one scaffold: contig
     sequences joined by runs of exactly *gap* gap characters.
  4. Contigs without accepted links stay as single-contig scaffolds.

Scaffolds are emitted in the order of their first contig's index, so with no
links the output equals the input contigs.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..errors import ConfigValidationError

logger = logging.getLogger(__name__)

Link = Tuple[int, int, int]


@dataclass(frozen=True)
class Scaffold:
    """
    Ordered contigs joined by gaps.

    Attributes:
        contig_indices: Contig indices in scaffold order
        gaps: Gap length between consecutive contigs (one fewer than contigs)
        sequence: Joined scaffold sequence
    """
    contig_indices: Tuple[int, ...]
    gaps: Tuple[int, ...]
    sequence: str

    @property
    def length(self) -> int:
        return len(self.sequence)

    @property
    def num_contigs(self) -> int:
        return len(self.contig_indices)


def _contig_sequence(contig) -> str:
    """Sequence of a plain string or Contig-like value."""
    return getattr(contig, 'sequence', contig)


def _reaches(successor: List[Optional[int]], start: int, target: int) -> bool:
    """True if following successors from *start* arrives at *target*."""
    node = start
    while node is not None:
        if node == target:
            return True
        node = successor[node]
    return False


def scaffold_contigs(
    contigs: Sequence,
    links: Sequence[Link],
    gap_char: str = "N",
) -> List[Scaffold]:
    """
    Join contigs into scaffolds following accepted links.

    Args:
        contigs: Contig sequences (strings or Contig values)
        links: (a, b, gap) tuples; contig b follows contig a after *gap* bases
        gap_char: Single character used to fill gaps

    Returns:
        Scaffolds ordered by their first contig index
    """
    if not isinstance(gap_char, str) or len(gap_char) != 1:
        raise ConfigValidationError(f"gap_char must be a single character, got {gap_char!r}")

    sequences = [_contig_sequence(c) for c in contigs]
    n = len(sequences)
    successor: List[Optional[int]] = [None] * n
    predecessor: List[Optional[int]] = [None] * n
    gap_after: List[int] = [0] * n
    accepted = 0

    for a, b, gap in links or []:
        if not (0 <= a < n and 0 <= b < n):
            logger.warning(f"Skipping link {a} -> {b}: contig index out of range (0..{n - 1})")
            continue
        if a == b:
            logger.warning(f"Skipping self-link on contig {a}")
            continue
        if gap < 0:
            logger.warning(f"Skipping link {a} -> {b}: negative gap {gap}")
            continue

        if successor[a] is not None:
            logger.debug(f"Rejected link {a} -> {b}: contig {a} already linked to {successor[a]}")
            continue
        if predecessor[b] is not None:
            logger.debug(f"Rejected link {a} -> {b}: contig {b} already follows {predecessor[b]}")
            continue
        if _reaches(successor, b, a):
            logger.debug(f"Rejected link {a} -> {b}: would close a cycle")
            continue

        successor[a] = b
        predecessor[b] = a
        gap_after[a] = gap
        accepted += 1

    scaffolds = []
    for head in range(n):
        if predecessor[head] is not None:
            continue

        indices = [head]
        gaps = []
        parts = [sequences[head]]
        node = head
        while successor[node] is not None:
            gaps.append(gap_after[node])
            parts.append(gap_char * gap_after[node])
            node = successor[node]
            indices.append(node)
            parts.append(sequences[node])

        scaffolds.append(Scaffold(contig_indices=tuple(indices), gaps=tuple(gaps), sequence=''.join(parts)))

    logger.info(f"Scaffolding: {n} contigs -> {len(scaffolds)} scaffolds ({accepted} links accepted)")
    return scaffolds
