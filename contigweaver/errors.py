#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Exception types shared across the assembly engine.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""


class ContigWeaverError(Exception):
    """Base class for all ContigWeaver errors."""
    pass


class ConfigValidationError(ContigWeaverError, ValueError):
    """Raised when configuration or assembly parameters fail validation."""
    pass

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
