"""
http_retry - Retry Logic.

Backoff policy, wait primitives and the per-request retry hooks.
"""

from .config import RetryConfig, RetryStrategy
from .backoff import BackoffPolicy, calculate_backoff, parse_retry_after
from .sleeper import Sleeper, TimeSleeper, InterruptibleSleeper, RecordingSleeper
from .handlers import (
    AttemptState,
    RetryDecision,
    TransportFailureHandler,
    ResponseFailureHandler,
    RetryHandler,
    RETRYABLE_TRANSPORT_ERRORS,
    NON_RETRYABLE_TRANSPORT_ERRORS,
)

__all__ = [
    "RetryConfig",
    "RetryStrategy",
    "BackoffPolicy",
    "calculate_backoff",
    "parse_retry_after",
    "Sleeper",
    "TimeSleeper",
    "InterruptibleSleeper",
    "RecordingSleeper",
    "AttemptState",
    "RetryDecision",
    "TransportFailureHandler",
    "ResponseFailureHandler",
    "RetryHandler",
    "RETRYABLE_TRANSPORT_ERRORS",
    "NON_RETRYABLE_TRANSPORT_ERRORS",
]
