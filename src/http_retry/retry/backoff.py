"""
Backoff calculation.

`calculate_backoff` gives the wait for one attempt; `BackoffPolicy` adds the
retry budget and elapsed-time cap and answers "how long, or stop".
"""

import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from .config import RetryConfig, RetryStrategy


def _shaped_interval(attempt: int, config: RetryConfig) -> float:
    if config.strategy == RetryStrategy.EXPONENTIAL:
        delay = config.initial_interval * (config.multiplier**attempt)
    elif config.strategy == RetryStrategy.LINEAR:
        delay = config.initial_interval * (attempt + 1)
    else:  # CONSTANT
        delay = config.initial_interval

    return min(delay, config.max_interval)


def calculate_backoff(attempt: int, config: RetryConfig) -> float:
    """
    Calculate backoff delay for a given attempt.

    Args:
        attempt: Zero-based attempt number
        config: Retry configuration

    Returns:
        Delay in seconds with jitter applied
    """
    delay = _shaped_interval(attempt, config)

    # Apply jitter (±jitter%)
    if config.jitter > 0:
        jitter_amount = delay * config.jitter * (2 * random.random() - 1)
        delay = delay + jitter_amount

    return max(0, delay)


class BackoffPolicy:
    """
    Decides the wait before the next backoff retry, or that retrying stops.

    Holds no per-request state: the caller passes the number of backoff
    retries already used, so one policy serves any number of requests.
    """

    def __init__(self, config: RetryConfig):
        self.config = config

    def next_interval(self, attempts_used: int) -> float | None:
        """
        Return the delay in seconds before the next retry, or None to stop.

        Args:
            attempts_used: Backoff retries already consumed by this request

        Returns:
            Delay in seconds, or None once the retry budget or the
            elapsed-time cap is exhausted
        """
        if attempts_used >= self.config.max_retries:
            return None

        max_elapsed = self.config.max_elapsed_time
        if max_elapsed is not None:
            planned = sum(_shaped_interval(i, self.config) for i in range(attempts_used + 1))
            if planned > max_elapsed:
                return None

        return calculate_backoff(attempts_used, self.config)


def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
    """
    Parse a Retry-After header value into seconds.

    Accepts delta-seconds ("120") or an HTTP-date. Dates in the past give 0.

    Returns:
        Seconds to wait, or None when the value is missing or unparseable
    """
    if not value:
        return None
    value = value.strip()

    if value.isdigit():
        return float(value)

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    return max(0.0, (when - now).total_seconds())
