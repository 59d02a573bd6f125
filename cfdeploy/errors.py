#!/usr/bin/env python3
"""
Exception types raised by the deployment tooling.
"""


class DeploymentError(Exception):
    """Base class for deployment failures."""


class ParseError(DeploymentError):
    """Manifest is malformed or does not match the manifest schema."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])

    def __str__(self):
        if not self.errors:
            return self.args[0]
        details = '\n'.join(f"  - {error}" for error in self.errors)
        return f"{self.args[0]}\n{details}"


class PlatformError(DeploymentError):
    """A platform operation failed (network, auth, quota, not found...)."""

    def __init__(self, operation, message, transient=False):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.transient = transient
