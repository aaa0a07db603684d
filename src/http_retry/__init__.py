"""
http_retry - Retry and Backoff for httpx.

Decides whether a failed request attempt is retried, how long to wait first,
and how a credential refresh fits into that decision.
"""

from .exceptions import (
    HttpRetryError,
    HttpResponseError,
    RetryCancelledError,
    InvalidRetryConfigError,
)
from .credentials import CredentialRefresher, NoCredentialRefresh, BearerTokenRefresher
from .retry import (
    RetryConfig,
    RetryStrategy,
    BackoffPolicy,
    calculate_backoff,
    Sleeper,
    TimeSleeper,
    InterruptibleSleeper,
    RecordingSleeper,
    AttemptState,
    TransportFailureHandler,
    ResponseFailureHandler,
    RetryHandler,
)
from .clients import RetryingClient, AsyncRetryingClient

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Clients
    "RetryingClient",
    "AsyncRetryingClient",
    # Exceptions
    "HttpRetryError",
    "HttpResponseError",
    "RetryCancelledError",
    "InvalidRetryConfigError",
    # Credentials
    "CredentialRefresher",
    "NoCredentialRefresh",
    "BearerTokenRefresher",
    # Retry
    "RetryConfig",
    "RetryStrategy",
    "BackoffPolicy",
    "calculate_backoff",
    "Sleeper",
    "TimeSleeper",
    "InterruptibleSleeper",
    "RecordingSleeper",
    "AttemptState",
    "TransportFailureHandler",
    "ResponseFailureHandler",
    "RetryHandler",
]
