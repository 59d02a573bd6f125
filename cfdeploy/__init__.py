"""
Cloud Foundry deployment tooling.

This package replaces the ad-hoc deploy.sh scripts: it pushes applications
from a manifest, binds marketplace services, sets environment variables,
starts applications and cleans up orphaned routes.
"""

__version__ = '0.3.0'

__all__ = ['config', 'deployment', 'executors', 'errors']
