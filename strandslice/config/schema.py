"""
StrandSlice v0.1.0

Configuration schema for StrandSlice.

Defines all available configuration parameters with defaults and validation.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Graph Indexing
    # ========================================================================
    'graph': {
        'strict_duplicates': False,  # Raise on repeated S/P names instead of last-write-wins
    },

    # ========================================================================
    # Reference Sequence Access
    # ========================================================================
    'sequence': {
        'write_index': True,  # Save a built .fai next to the FASTA
    },

    # ========================================================================
    # Annotation Rewriting
    # ========================================================================
    'annotation': {
        'gene_id_attribute': 'gene_id',
        'output_suffix': '_{gene_id}_mini',  # Inserted before the file extension
        'keep_header_lines': True,  # Copy '#!' header lines to the output
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'fasta_line_width': 60,  # 0 writes each sequence on one line

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,  # Also log to this file when set
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        with open(config_path) as f:
            user_config = yaml.safe_load(f)

        # Deep merge user config into defaults
        if user_config:
            config = _deep_merge(config, user_config)

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
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path):
    """
    Save the default configuration to file.

    Args:
        output_path: Output file path
    """
    with open(output_path, 'w') as f:
        yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not isinstance(config.get('graph', {}).get('strict_duplicates', False), bool):
        errors.append("graph.strict_duplicates must be true or false")

    annotation = config.get('annotation', {})
    if not annotation.get('gene_id_attribute'):
        errors.append("annotation.gene_id_attribute must not be empty")
    suffix = annotation.get('output_suffix', '')
    if not isinstance(suffix, str):
        errors.append("annotation.output_suffix must be a string")
    elif '{gene_id}' not in suffix:
        errors.append("annotation.output_suffix must contain '{gene_id}'")
    else:
        try:
            suffix.format(gene_id='x')
        except (KeyError, IndexError, ValueError) as e:
            errors.append(f"annotation.output_suffix is not a valid template: {suffix!r} ({e!r})")

    width = config.get('output', {}).get('fasta_line_width', 60)
    if not isinstance(width, int) or isinstance(width, bool) or width < 0:
        errors.append(f"Invalid output.fasta_line_width: {width} (must be 0 for no wrapping or a positive integer)")

    level = config.get('output', {}).get('logging', {}).get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors


__all__ = [
    'DEFAULT_CONFIG',
    'load_config',
    'save_config_template',
    'validate_config',
]
