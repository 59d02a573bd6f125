"""
Deployment and orchestration package.

This package contains modules for parsing application manifests, pushing
applications and managing marketplace services and routes.
"""

__all__ = ['orchestrator', 'manifest', 'push_request', 'marketplace', 'retry', 'utils']
