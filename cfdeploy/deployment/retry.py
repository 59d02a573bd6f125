#!/usr/bin/env python3
"""
Retry policy for platform calls.

Every platform operation the deployment issues goes through
RetryPolicy.call(). Only errors accepted by the ``retryable`` predicate are
retried; once the attempts are used up the last error is re-raised.
"""

from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential, wait_fixed

from ..errors import PlatformError

BACKOFF_STRATEGIES = ('fixed', 'exponential')


def is_transient(error):
    """Default predicate: retry platform errors flagged as transient."""
    return isinstance(error, PlatformError) and error.transient


class RetryPolicy:
    """
    Wraps a blocking call with retries.

    Args:
        max_attempts: total attempts including the first one
        backoff: 'fixed' waits wait_seconds between attempts, 'exponential'
            doubles it every attempt up to max_wait_seconds
        retryable: predicate deciding whether an exception is worth retrying
    """

    def __init__(self, max_attempts=3, backoff='exponential', wait_seconds=1.0,
                 max_wait_seconds=10.0, retryable=is_transient):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if backoff not in BACKOFF_STRATEGIES:
            raise ValueError(f"Unknown backoff strategy: {backoff} (must be one of {', '.join(BACKOFF_STRATEGIES)})")

        self.max_attempts = max_attempts
        self.backoff = backoff
        self.wait_seconds = wait_seconds
        self.max_wait_seconds = max_wait_seconds
        self.retryable = retryable

    @classmethod
    def from_config(cls, config):
        """Build the policy from the ``retry`` section of the deployment config."""
        retry_config = (config or {}).get('retry') or {}
        return cls(
            max_attempts=int(retry_config.get('max_attempts', 3)),
            backoff=retry_config.get('backoff', 'exponential'),
            wait_seconds=float(retry_config.get('wait_seconds', 1.0)),
            max_wait_seconds=float(retry_config.get('max_wait_seconds', 10.0)),
        )

    def _wait(self):
        if self.backoff == 'fixed':
            return wait_fixed(self.wait_seconds)
        return wait_exponential(multiplier=self.wait_seconds, max=self.max_wait_seconds)

    def _announce(self, retry_state):
        error = retry_state.outcome.exception()
        print(f"  {error} - retrying in {retry_state.next_action.sleep:.1f}s "
              f"(attempt {retry_state.attempt_number + 1}/{self.max_attempts})")

    def call(self, fn, *args, **kwargs):
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait(),
            retry=retry_if_exception(self.retryable),
            before_sleep=self._announce,
            reraise=True,
        )
        return retrying(fn, *args, **kwargs)

    def __repr__(self):
        return (f"RetryPolicy(max_attempts={self.max_attempts}, backoff={self.backoff!r}, "
                f"wait_seconds={self.wait_seconds}, max_wait_seconds={self.max_wait_seconds})")


NO_RETRY = RetryPolicy(max_attempts=1)
