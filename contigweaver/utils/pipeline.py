"""
ContigWeaver Pipeline Runner.

Runs the complete in-memory assembly pipeline for one read set:
- Preprocessing: optional quality trimming, optional k-mer error correction
- Assembly: overlap-layout-consensus or de Bruijn graph, per configuration
- Scaffolding: joins contigs when link evidence is supplied
- Statistics: contiguity metrics over the final sequences

Reads are materialized by the caller (see contigweaver.io_utils); the
pipeline itself never touches files.
"""

from typing import Optional, Dict, Any, List, Sequence, Tuple, Union
import copy
import logging
import time
from dataclasses import dataclass, field

from ..assembly_core import AssemblyResult, assemble_de_bruijn, assemble_olc
from ..assembly_utils import AssemblyStats, Scaffold, calculate_stats, scaffold_contigs
from ..config.parameters import AssemblyParameters
from ..config.schema import DEFAULT_CONFIG, check_config
from ..io_utils import SeqRead, as_reads
from ..preprocessing import CorrectionStats, error_correct, quality_trim

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'INFO'):
    """Configure root logging for command-line use."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


@dataclass
class PipelineResult:
    """
    Result of one pipeline run.

    Attributes:
        assembly: Contigs and their statistics
        scaffolds: Scaffolds (one per contig when no links were given)
        stats: Statistics over the scaffold sequences
        correction_stats: Error correction statistics (None if disabled)
        reads_in: Reads given to the pipeline
        reads_after_trim: Reads surviving quality trimming
        timings: Seconds spent per stage
    """
    assembly: AssemblyResult
    scaffolds: List[Scaffold] = field(default_factory=list)
    stats: AssemblyStats = field(default_factory=AssemblyStats)
    correction_stats: Optional[CorrectionStats] = None
    reads_in: int = 0
    reads_after_trim: int = 0
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def scaffold_sequences(self) -> List[str]:
        return [s.sequence for s in self.scaffolds]

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for reporting."""
        return {
            'reads_in': self.reads_in,
            'reads_after_trim': self.reads_after_trim,
            'contigs': self.assembly.num_contigs,
            'assembled_reads': self.assembly.assembled_reads,
            'scaffolds': len(self.scaffolds),
            'stats': self.stats.to_dict(),
            'bases_corrected': self.correction_stats.bases_corrected if self.correction_stats else 0,
            'timing': dict(self.timings),
        }


class AssemblyPipeline:
    """
    End-to-end assembly for one in-memory read set.

    Steps (each logged with its timing):
      trim -> correct -> assemble -> scaffold -> stats
    Trim and correct run only when enabled in the configuration.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize pipeline.

        Args:
            config: Configuration dictionary (see config.schema); validated here

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        self.config = copy.deepcopy(config) if config is not None else copy.deepcopy(DEFAULT_CONFIG)
        check_config(self.config)

        self.params = AssemblyParameters.from_config(self.config)
        self.strategy = self.config['assembly']['strategy']
        self.threads = self.config['execution']['threads']

    def run(
        self,
        reads: Sequence[Union[str, SeqRead]],
        links: Optional[Sequence[Tuple[int, int, int]]] = None,
    ) -> PipelineResult:
        """
        Run the pipeline.

        Args:
            reads: Input reads
            links: Optional (a, b, gap) scaffold links over contig indices

        Returns:
            PipelineResult
        """
        logger.info("=" * 60)
        logger.info(f"Starting ContigWeaver pipeline ({self.strategy.upper()})")
        logger.info("=" * 60)

        timings = {}
        reads = as_reads(reads)
        reads_in = len(reads)

        trim_cfg = self.config['preprocessing']['trim']
        if trim_cfg['enabled']:
            start = time.time()
            reads = quality_trim(reads, trim_cfg['min_quality'], trim_cfg['min_length'])
            timings['trim'] = time.time() - start
        reads_after_trim = len(reads)

        correction_stats = None
        corr_cfg = self.config['preprocessing']['correction']
        if corr_cfg['enabled']:
            start = time.time()
            correction_stats = CorrectionStats()
            reads = error_correct(reads, corr_cfg['kmer_size'], corr_cfg['min_kmer_frequency'], stats=correction_stats)
            timings['correct'] = time.time() - start

        start = time.time()
        if self.strategy == 'dbg':
            assembly = assemble_de_bruijn(reads, self.params)
        else:
            assembly = assemble_olc(reads, self.params, num_workers=self.threads)
        timings['assemble'] = time.time() - start
        logger.info(f"Assembly: {assembly.num_contigs} contigs, N50={assembly.n50:,}bp")

        start = time.time()
        scaffolds = scaffold_contigs(
            assembly.contigs,
            links or [],
            gap_char=self.config['scaffolding']['gap_char'],
        )
        timings['scaffold'] = time.time() - start

        stats = calculate_stats([s.length for s in scaffolds], reads_in)

        for stage, seconds in timings.items():
            logger.info(f"  {stage}: {seconds:.2f}s")
        logger.info("Pipeline complete")

        return PipelineResult(
            assembly=assembly,
            scaffolds=scaffolds,
            stats=stats,
            correction_stats=correction_stats,
            reads_in=reads_in,
            reads_after_trim=reads_after_trim,
            timings=timings,
        )
