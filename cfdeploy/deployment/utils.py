#!/usr/bin/env python3
"""
Deployment utilities - shared helper functions.
"""

import os
from pathlib import Path

import yaml

PACKAGE_ROOT = Path(__file__).parent.parent
DEFAULT_CONFIG_FILE = PACKAGE_ROOT / "config" / "deployment-config.yaml"


def load_yaml(file_path):
    with open(file_path, 'r') as f:
        return yaml.safe_load(f)


def deep_merge(base, override):
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config(config_file=None):
    """
    Load configuration with optional local overrides.
    - Default: the packaged deployment-config.yaml, or CFDEPLOY_CONFIG if set
    - DEPLOYMENT_ENV=local: merges deployment-config.local.yaml (next to the base file)
    """
    base_path = Path(config_file or os.environ.get('CFDEPLOY_CONFIG') or DEFAULT_CONFIG_FILE)
    base_config = load_yaml(base_path) or {}

    # The packaged defaults always apply underneath a user supplied file
    if base_path != DEFAULT_CONFIG_FILE:
        base_config = deep_merge(load_yaml(DEFAULT_CONFIG_FILE), base_config)

    env = os.environ.get('DEPLOYMENT_ENV', '').strip()
    if env == 'local':
        override_path = base_path.parent / "deployment-config.local.yaml"
        if override_path.exists():
            override_config = load_yaml(override_path) or {}
            return deep_merge(base_config, override_config)

    return base_config


def print_phase(title):
    """Print a phase banner."""
    print(f"\n{'='*60}")
    print(title)
    print(f"{'='*60}")
