"""
ContigWeaver v0.1.0

Configuration management for ContigWeaver.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .parameters import AssemblyParameters
from .schema import (
    DEFAULT_CONFIG,
    load_config,
    apply_overrides,
    save_config_template,
    validate_config,
    check_config,
)

__all__ = [
    "AssemblyParameters",
    "DEFAULT_CONFIG",
    "load_config",
    "apply_overrides",
    "save_config_template",
    "validate_config",
    "check_config",
]
