"""
Retry configuration and strategy definitions.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet

from ..exceptions import InvalidRetryConfigError


class RetryStrategy(str, Enum):
    """Available backoff shapes."""

    EXPONENTIAL = "exponential"  # delay = initial * (multiplier ** attempt)
    LINEAR = "linear"  # delay = initial * (attempt + 1)
    CONSTANT = "constant"  # delay = initial


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for retry behavior.

    Built once and shared by every request a client sends.

    Attributes:
        max_retries: Backoff retries allowed per logical request (default: 5)
        retry_status_codes: HTTP status codes that trigger a backoff retry
            (default: none; credential retries are still possible)
        initial_interval: First wait in seconds (default: 0.5)
        multiplier: Growth factor for exponential backoff (default: 2.0)
        max_interval: Cap on a single wait in seconds (default: 120.0)
        max_elapsed_time: Cap on the sum of computed backoff intervals in
            seconds, or None for no cap (default: 900.0). Waits taken from a
            Retry-After header do not count toward it
        strategy: Backoff shape (default: exponential)
        jitter: Jitter factor as fraction of delay (default: 0.0 = none)
        respect_retry_after: Use the Retry-After header of a retryable
            response as the wait, within max_interval
            (default: True)
    """

    max_retries: int = 5
    retry_status_codes: FrozenSet[int] = field(default_factory=frozenset)
    initial_interval: float = 0.5
    multiplier: float = 2.0
    max_interval: float = 120.0
    max_elapsed_time: float | None = 900.0
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL
    jitter: float = 0.0
    respect_retry_after: bool = True

    def __post_init__(self) -> None:
        # Accept any iterable of ints, store a frozenset
        object.__setattr__(self, "retry_status_codes", frozenset(self.retry_status_codes))

        if self.max_retries < 0:
            raise InvalidRetryConfigError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.initial_interval <= 0:
            raise InvalidRetryConfigError(
                f"initial_interval must be > 0, got {self.initial_interval}"
            )
        if self.multiplier < 1:
            raise InvalidRetryConfigError(f"multiplier must be >= 1, got {self.multiplier}")
        if self.max_interval < self.initial_interval:
            raise InvalidRetryConfigError(
                f"max_interval ({self.max_interval}) must be >= "
                f"initial_interval ({self.initial_interval})"
            )
        if self.max_elapsed_time is not None and self.max_elapsed_time <= 0:
            raise InvalidRetryConfigError(
                f"max_elapsed_time must be > 0 or None, got {self.max_elapsed_time}"
            )
        if not 0 <= self.jitter < 1:
            raise InvalidRetryConfigError(f"jitter must be in [0, 1), got {self.jitter}")
        for code in self.retry_status_codes:
            if not 100 <= code <= 599:
                raise InvalidRetryConfigError(f"Not an HTTP status code: {code}")

    def should_retry(self, status_code: int) -> bool:
        """Check if the given status code should trigger a backoff retry."""
        return status_code in self.retry_status_codes

    def with_changes(self, **changes) -> "RetryConfig":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def default_http(cls) -> "RetryConfig":
        """Preset retrying rate limits and transient server errors."""
        return cls(retry_status_codes={429, 500, 502, 503, 504})

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            max_retries=10,
            retry_status_codes={429, 500, 502, 503, 504},
            initial_interval=1.0,
            max_interval=300.0,
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(
            max_retries=3,
            retry_status_codes={503},
            initial_interval=0.25,
            max_interval=10.0,
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no backoff retry (single attempt only)."""
        return cls(max_retries=0)
