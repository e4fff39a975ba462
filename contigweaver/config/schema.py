"""
ContigWeaver v0.1.0

Configuration schema for ContigWeaver.

Defines all available configuration parameters with defaults and validation.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
import os
import re
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml

from ..errors import ConfigValidationError


VALID_STRATEGIES = ('olc', 'dbg')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')
TEMPLATES = ('default', 'short_reads', 'noisy')


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Assembly
    # ========================================================================
    'assembly': {
        'strategy': 'olc',  # 'olc' (overlap graph) or 'dbg' (de Bruijn)
        'min_overlap': 20,
        'min_identity': 1.0,  # Exact overlaps unless relaxed
        'kmer_size': 31,  # Used by the de Bruijn strategy only
        'min_contig_length': 0,
    },

    # ========================================================================
    # Preprocessing
    # ========================================================================
    'preprocessing': {
        'trim': {
            'enabled': False,
            'min_quality': 20,
            'min_length': 50,
        },
        'correction': {
            'enabled': False,
            'kmer_size': 21,
            'min_kmer_frequency': 3,
        },
    },

    # ========================================================================
    # Scaffolding
    # ========================================================================
    'scaffolding': {
        'gap_char': 'N',
    },

    # ========================================================================
    # Execution
    # ========================================================================
    'execution': {
        'threads': 1,  # Worker processes for all-pairs overlap search
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'line_width': 80,

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    ``${VAR}`` and ``${VAR:-default}`` references in string values are
    substituted from the environment.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in config file {config_path}: {e}")

        if user_config:
            if not isinstance(user_config, dict):
                raise ConfigValidationError(
                    f"Config file {config_path} must contain a mapping at the top level"
                )
            # Deep merge user config into defaults
            config = _deep_merge(config, _substitute_env_vars(user_config))

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        # An empty YAML section (`assembly:`) keeps the defaults
        if value is None and isinstance(result.get(key), dict):
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _substitute_env_vars(config: Any) -> Any:
    """Recursively substitute ${VAR} and ${VAR:-default} in string values."""
    if isinstance(config, dict):
        return {k: _substitute_env_vars(v) for k, v in config.items()}

    elif isinstance(config, list):
        return [_substitute_env_vars(item) for item in config]

    elif isinstance(config, str):
        pattern = r'\$\{([^}:]+)(?::-(.*?))?\}'

        def replace_var(match):
            return os.environ.get(match.group(1), match.group(2) or '')

        return re.sub(pattern, replace_var, config)

    return config


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply dotted-key overrides (e.g. from CLI options) to a configuration.

    Keys use dotted notation (``'assembly.min_overlap'``); ``None`` values
    are ignored so unset CLI options keep the configured value.
    """
    result = copy.deepcopy(config)

    for key, value in overrides.items():
        if value is None:
            continue

        keys = key.split('.')
        target = result
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'short_reads', 'noisy')
    """
    if template not in TEMPLATES:
        raise ConfigValidationError(f"Unknown template: {template}")

    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'short_reads':
        config['assembly']['strategy'] = 'olc'
        config['assembly']['min_overlap'] = 30
        config['assembly']['min_contig_length'] = 100
        config['preprocessing']['trim']['enabled'] = True

    elif template == 'noisy':
        config['assembly']['strategy'] = 'dbg'
        config['assembly']['kmer_size'] = 21
        config['assembly']['min_identity'] = 0.9
        config['preprocessing']['trim']['enabled'] = True
        config['preprocessing']['correction']['enabled'] = True

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


_SECTIONS = (
    'assembly',
    'preprocessing',
    'preprocessing.trim',
    'preprocessing.correction',
    'scaffolding',
    'execution',
    'output',
    'output.logging',
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_int(errors: List[str], name: str, value: Any, minimum: int):
    """Append an error unless *value* is an integer >= *minimum*."""
    if not _is_int(value) or value < minimum:
        errors.append(f"{name} must be an integer >= {minimum}, got {value!r}")


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Section structure is checked first; value checks only run once every
    section is a mapping.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    for dotted in _SECTIONS:
        parent_key, _, key = dotted.rpartition('.')
        parent = config.get(parent_key, {}) if parent_key else config
        if not isinstance(parent, dict):
            continue  # reported at the parent
        section = parent.get(key, {})
        if not isinstance(section, dict):
            errors.append(f"{dotted} must be a mapping, got {section!r}")
    if errors:
        return errors

    assembly = config.get('assembly', {})
    if assembly.get('strategy') not in VALID_STRATEGIES:
        errors.append(f"Invalid assembly strategy: {assembly.get('strategy')}")

    # Parameter ranges are owned by AssemblyParameters
    from .parameters import AssemblyParameters
    try:
        AssemblyParameters.from_config(config)
    except ConfigValidationError as e:
        errors.append(str(e))
    except TypeError:
        errors.append(f"assembly parameters must be numeric, got {assembly!r}")

    trim = config.get('preprocessing', {}).get('trim', {})
    _check_int(errors, 'preprocessing.trim.min_quality', trim.get('min_quality', 0), 0)
    _check_int(errors, 'preprocessing.trim.min_length', trim.get('min_length', 0), 0)

    correction = config.get('preprocessing', {}).get('correction', {})
    _check_int(errors, 'preprocessing.correction.kmer_size', correction.get('kmer_size', 1), 1)
    _check_int(errors, 'preprocessing.correction.min_kmer_frequency', correction.get('min_kmer_frequency', 1), 1)

    gap_char = config.get('scaffolding', {}).get('gap_char', 'N')
    if not isinstance(gap_char, str) or len(gap_char) != 1:
        errors.append(f"scaffolding.gap_char must be a single character, got {gap_char!r}")

    threads = config.get('execution', {}).get('threads', 1)
    if not _is_int(threads) or threads < 1:
        errors.append(f"execution.threads must be a positive integer, got {threads}")

    level = config.get('output', {}).get('logging', {}).get('level', 'INFO')
    if level not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors


def check_config(config: Dict[str, Any]):
    """Raise ConfigValidationError listing every problem found by validate_config."""
    errors = validate_config(config)
    if errors:
        raise ConfigValidationError("; ".join(errors))
