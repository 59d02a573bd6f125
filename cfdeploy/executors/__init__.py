#!/usr/bin/env python3
"""
Executor factory and package exports.
"""

from .base import BaseExecutor
from .cf import CfExecutor
from .dryrun import DryRunExecutor

EXECUTORS = ('cf', 'dry-run')


def get_executor(config, dry_run=False):
    """
    Factory function to create appropriate executor.

    Args:
        config: Deployment configuration dict
        dry_run: Force the dry-run executor regardless of configuration

    Returns:
        CfExecutor or DryRunExecutor instance
    """
    platform = config.get('platform') or {}
    name = 'dry-run' if dry_run else platform.get('executor', 'cf')

    if name == 'cf':
        return CfExecutor(
            cf_binary=platform.get('cf_binary', 'cf'),
            timeout=platform.get('timeout', 600),
            default_domain=platform.get('default_domain'),
            space_guid=platform.get('space_guid'),
        )
    elif name == 'dry-run':
        return DryRunExecutor(default_domain=platform.get('default_domain'))
    else:
        raise ValueError(f"Unknown platform executor: {name} (must be one of {', '.join(EXECUTORS)})")


# Package exports
__all__ = ['BaseExecutor', 'CfExecutor', 'DryRunExecutor', 'get_executor']
