"""
Configuration and manifest validation package.

This package holds the default deployment configuration and the
JSON schema validation applied to application manifests.
"""

__all__ = ['validation']
