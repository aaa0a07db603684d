"""Tests for retry config and backoff - behavior focused."""

from datetime import datetime, timezone

import pytest
from http_retry.exceptions import InvalidRetryConfigError
from http_retry.retry import (
    BackoffPolicy,
    RetryConfig,
    RetryStrategy,
    calculate_backoff,
    parse_retry_after,
)


class TestCalculateBackoff:
    """Test backoff calculation behavior."""

    def test_backoff_increases_with_attempts(self):
        """Given increasing attempts, delay should grow."""
        config = RetryConfig(initial_interval=1.0)

        delay_0 = calculate_backoff(0, config)
        delay_1 = calculate_backoff(1, config)
        delay_2 = calculate_backoff(2, config)

        assert delay_0 < delay_1 < delay_2

    def test_exponential_uses_multiplier(self):
        """Exponential strategy: delay = initial * multiplier ** attempt."""
        config = RetryConfig(initial_interval=0.5, multiplier=3.0)

        assert calculate_backoff(0, config) == 0.5
        assert calculate_backoff(1, config) == 1.5
        assert calculate_backoff(2, config) == 4.5

    def test_backoff_respects_max_interval(self):
        """Delay never exceeds max_interval config."""
        config = RetryConfig(initial_interval=1.0, max_interval=5.0)

        # Even at high attempt numbers, should not exceed max
        delay = calculate_backoff(100, config)

        assert delay == config.max_interval

    def test_backoff_without_jitter_is_deterministic(self):
        """Default config has no jitter, so delay is deterministic."""
        config = RetryConfig(initial_interval=1.0)

        delay_a = calculate_backoff(2, config)
        delay_b = calculate_backoff(2, config)

        assert delay_a == delay_b

    def test_backoff_with_jitter_varies_within_bounds(self):
        """When jitter > 0, delays vary but stay within ±jitter."""
        config = RetryConfig(initial_interval=1.0, jitter=0.25)

        delays = [calculate_backoff(2, config) for _ in range(20)]

        assert len(set(delays)) > 1
        assert all(3.0 <= d <= 5.0 for d in delays)

    def test_linear_strategy_grows_linearly(self):
        """Linear strategy: delay = initial * (attempt + 1)."""
        config = RetryConfig(initial_interval=1.0, strategy=RetryStrategy.LINEAR)

        assert calculate_backoff(0, config) == 1.0
        assert calculate_backoff(1, config) == 2.0
        assert calculate_backoff(2, config) == 3.0

    def test_constant_strategy_stays_constant(self):
        """Constant strategy: delay = initial always."""
        config = RetryConfig(initial_interval=2.0, strategy=RetryStrategy.CONSTANT)

        delay_0 = calculate_backoff(0, config)
        delay_5 = calculate_backoff(5, config)
        delay_10 = calculate_backoff(10, config)

        assert delay_0 == delay_5 == delay_10 == 2.0


class TestBackoffPolicy:
    """Test the stop/continue decisions of the backoff policy."""

    def test_returns_interval_while_budget_remains(self):
        """Each attempt below max_retries gets a wait."""
        policy = BackoffPolicy(RetryConfig(max_retries=3, initial_interval=1.0))

        assert [policy.next_interval(n) for n in range(3)] == [1.0, 2.0, 4.0]

    def test_stops_when_budget_used(self):
        """attempts_used >= max_retries means stop."""
        policy = BackoffPolicy(RetryConfig(max_retries=3))

        assert policy.next_interval(3) is None
        assert policy.next_interval(4) is None

    def test_zero_retries_always_stops(self):
        """max_retries=0: the first failure is final."""
        policy = BackoffPolicy(RetryConfig.no_retry())

        assert policy.next_interval(0) is None

    def test_stops_when_elapsed_time_would_exceed_cap(self):
        """Cumulative planned waits 1+2+4=7 fit in 10s, adding 8 does not."""
        policy = BackoffPolicy(
            RetryConfig(max_retries=10, initial_interval=1.0, max_elapsed_time=10.0)
        )

        assert policy.next_interval(2) == 4.0
        assert policy.next_interval(3) is None

    def test_no_elapsed_cap_when_none(self):
        """max_elapsed_time=None leaves only the retry budget."""
        policy = BackoffPolicy(
            RetryConfig(
                max_retries=50,
                initial_interval=1.0,
                max_interval=60.0,
                max_elapsed_time=None,
            )
        )

        assert policy.next_interval(49) == 60.0

    def test_same_inputs_give_same_interval(self):
        """The interval is a pure function of the attempt count."""
        config = RetryConfig(max_retries=5)
        first = BackoffPolicy(config)
        second = BackoffPolicy(config)

        assert first.next_interval(2) == first.next_interval(2) == second.next_interval(2)


class TestRetryConfig:
    """Test RetryConfig behavior."""

    def test_defaults_retry_no_status_codes(self):
        """Empty retry_status_codes by default: no status triggers backoff."""
        config = RetryConfig()

        assert config.retry_status_codes == frozenset()
        assert config.should_retry(503) is False

    def test_status_codes_normalized_to_frozenset(self):
        """Any iterable of codes is accepted and stored immutably."""
        config = RetryConfig(retry_status_codes=[503, 503, 429])

        assert config.retry_status_codes == frozenset({429, 503})

    def test_config_is_immutable(self):
        """A built config cannot be changed in place."""
        config = RetryConfig()

        with pytest.raises(AttributeError):
            config.max_retries = 2

    def test_with_changes_returns_modified_copy(self):
        """with_changes leaves the original untouched."""
        config = RetryConfig(max_retries=2)
        changed = config.with_changes(max_retries=7, retry_status_codes={503})

        assert config.max_retries == 2
        assert changed.max_retries == 7
        assert changed.should_retry(503) is True

    def test_default_http_preset_retries_transient_statuses(self):
        """429 and common 5xx statuses should trigger retry."""
        config = RetryConfig.default_http()

        for status in (429, 500, 502, 503, 504):
            assert config.should_retry(status) is True
        for status in (400, 401, 403, 404):
            assert config.should_retry(status) is False

    def test_aggressive_preset_has_more_retries(self):
        """Aggressive preset should have more retries than default."""
        assert RetryConfig.aggressive().max_retries > RetryConfig().max_retries

    def test_conservative_preset_has_fewer_retries(self):
        """Conservative preset should have fewer retries than default."""
        assert RetryConfig.conservative().max_retries < RetryConfig().max_retries

    def test_no_retry_preset_has_zero_retries(self):
        """No retry preset should have zero retries."""
        assert RetryConfig.no_retry().max_retries == 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_retries": -1},
            {"initial_interval": 0},
            {"multiplier": 0.5},
            {"initial_interval": 10.0, "max_interval": 1.0},
            {"max_elapsed_time": 0},
            {"jitter": 1.0},
            {"retry_status_codes": {42}},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        """Out-of-range values raise InvalidRetryConfigError (a ValueError)."""
        with pytest.raises(InvalidRetryConfigError):
            RetryConfig(**kwargs)
        with pytest.raises(ValueError):
            RetryConfig(**kwargs)


class TestParseRetryAfter:
    """Test Retry-After header parsing."""

    def test_delta_seconds(self):
        assert parse_retry_after("120") == 120.0

    def test_http_date(self):
        """HTTP-date is converted to seconds from now."""
        now = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

        assert parse_retry_after("Mon, 01 Jan 2024 00:00:30 GMT", now=now) == 30.0

    def test_past_date_gives_zero(self):
        now = datetime(2024, 1, 1, 0, 1, 0, tzinfo=timezone.utc)

        assert parse_retry_after("Mon, 01 Jan 2024 00:00:30 GMT", now=now) == 0.0

    @pytest.mark.parametrize("value", [None, "", "soon", "-5"])
    def test_missing_or_garbage_gives_none(self, value):
        assert parse_retry_after(value) is None
