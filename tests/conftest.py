"""
Shared fixtures for deployment tests.
"""

import itertools

import pytest
import yaml

from cfdeploy.deployment.retry import RetryPolicy
from cfdeploy.executors import DryRunExecutor


class FlakyExecutor(DryRunExecutor):
    """
    Dry-run executor that raises queued errors for chosen operations.

    A None in the queue lets that call succeed.
    """

    def __init__(self, failures=None, **kwargs):
        super().__init__(**kwargs)
        self.failures = {operation: list(errors) for operation, errors in (failures or {}).items()}

    def _record(self, operation, *args):
        super()._record(operation, *args)
        pending = self.failures.get(operation)
        if pending:
            error = pending.pop(0)
            if error is not None:
                raise error


@pytest.fixture
def write_manifest(tmp_path):
    """Write a manifest (dict or raw YAML text) into tmp_path and return its path."""
    def _write(manifest, name='manifest.yml'):
        path = tmp_path / name
        if isinstance(manifest, str):
            path.write_text(manifest)
        else:
            path.write_text(yaml.safe_dump(manifest, sort_keys=False))
        return path
    return _write


@pytest.fixture
def fixed_tokens():
    counter = itertools.count(1)
    return lambda: f"token-{next(counter)}"


@pytest.fixture
def no_wait_retry():
    return RetryPolicy(max_attempts=3, backoff='fixed', wait_seconds=0)


@pytest.fixture
def executor():
    return DryRunExecutor()


@pytest.fixture
def flaky_executor():
    return FlakyExecutor
