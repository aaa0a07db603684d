"""
Retry decisions for failed request attempts.

The transport loop owner calls one of two hooks after a failed attempt:
`on_transport_failure` when sending raised, `on_unsuccessful_response` when a
non-2xx response came back. Each answers True (send again) or False (give up
and surface the original failure). Both hooks draw from one shared backoff
budget per logical request; credential retries are free.
"""

import logging
from dataclasses import dataclass

import httpx

from .backoff import BackoffPolicy, parse_retry_after
from .config import RetryConfig
from .sleeper import Sleeper, TimeSleeper
from ..credentials import CredentialRefresher, NoCredentialRefresh
from ..exceptions import RetryCancelledError

logger = logging.getLogger(__name__)

# Failures below the HTTP layer. An unsupported URL scheme is a config error
# and is never retried.
RETRYABLE_TRANSPORT_ERRORS = (httpx.TransportError, OSError)
NON_RETRYABLE_TRANSPORT_ERRORS = (httpx.UnsupportedProtocol,)


@dataclass
class AttemptState:
    """Backoff retries consumed by one logical request."""

    attempts_used: int = 0


@dataclass(frozen=True)
class RetryDecision:
    """
    Outcome of a retry hook.

    Attributes:
        retry: Whether to send the request again
        delay: Seconds to wait first, or None to resend immediately
    """

    retry: bool
    delay: float | None = None

    @classmethod
    def backoff(cls, delay: float) -> "RetryDecision":
        return cls(retry=True, delay=delay)

    @classmethod
    def immediate(cls) -> "RetryDecision":
        return cls(retry=True)


RetryDecision.STOP = RetryDecision(retry=False)
STOP = RetryDecision.STOP


def _pace(decision: RetryDecision, sleeper: Sleeper, state: AttemptState) -> bool:
    """
    Wait out a backoff decision.

    A cancelled wait turns it into a stop and hands back the budget unit the
    decision consumed.
    """
    if decision.retry and decision.delay is not None:
        try:
            sleeper.sleep(decision.delay)
        except RetryCancelledError as e:
            state.attempts_used -= 1
            logger.info(f"Retry abandoned: {e}")
            return False
    return decision.retry


class TransportFailureHandler:
    """Retries transport errors with backoff."""

    def __init__(self, policy: BackoffPolicy, state: AttemptState, sleeper: Sleeper):
        self.policy = policy
        self.state = state
        self.sleeper = sleeper

    def decide(self, error: BaseException) -> RetryDecision:
        """Consume one unit of backoff budget if the error is worth retrying."""
        if not isinstance(error, RETRYABLE_TRANSPORT_ERRORS) or isinstance(
            error, NON_RETRYABLE_TRANSPORT_ERRORS
        ):
            logger.debug(f"Not retrying error: {error!r}")
            return STOP

        max_retries = self.policy.config.max_retries
        delay = self.policy.next_interval(self.state.attempts_used)
        if delay is None:
            logger.debug(
                f"Retry budget exhausted ({self.state.attempts_used}/{max_retries}): {error!r}"
            )
            return STOP

        self.state.attempts_used += 1
        logger.warning(
            f"Transport error ({type(error).__name__}: {error}), "
            f"retrying in {delay:.1f}s ({self.state.attempts_used}/{max_retries})"
        )
        return RetryDecision.backoff(delay)

    def handle(self, error: BaseException) -> bool:
        """Decide, then block for the backoff delay if retrying."""
        return _pace(self.decide(error), self.sleeper, self.state)


class ResponseFailureHandler:
    """
    Retries unsuccessful responses.

    Statuses in the configured retry set get a backoff retry while budget
    remains; once it runs out they are not offered to the credential
    refresher. Every other status goes to the refresher, whose retries are
    immediate and uncounted.
    """

    def __init__(
        self,
        policy: BackoffPolicy,
        state: AttemptState,
        sleeper: Sleeper,
        credentials: CredentialRefresher,
    ):
        self.policy = policy
        self.state = state
        self.sleeper = sleeper
        self.credentials = credentials

    def _backoff_decision(self, response: httpx.Response) -> RetryDecision:
        config = self.policy.config
        status = response.status_code

        delay = self.policy.next_interval(self.state.attempts_used)
        if delay is None:
            logger.debug(
                f"Retry budget exhausted ({self.state.attempts_used}/{config.max_retries}) "
                f"for status {status}"
            )
            return STOP

        if config.respect_retry_after:
            retry_after = parse_retry_after(response.headers.get("Retry-After"))
            if retry_after is not None:
                if retry_after > config.max_interval:
                    logger.debug(
                        f"Retry-After of {retry_after:.1f}s exceeds max_interval "
                        f"{config.max_interval:.1f}s, not retrying status {status}"
                    )
                    return STOP
                delay = retry_after

        self.state.attempts_used += 1
        logger.warning(
            f"Request failed (status {status}), "
            f"retrying in {delay:.1f}s ({self.state.attempts_used}/{config.max_retries})"
        )
        return RetryDecision.backoff(delay)

    def decide(self, request: httpx.Request, response: httpx.Response) -> RetryDecision:
        if self.policy.config.should_retry(response.status_code):
            return self._backoff_decision(response)

        if self.credentials.decide(request, response):
            return RetryDecision.immediate()
        return STOP

    def handle(self, request: httpx.Request, response: httpx.Response) -> bool:
        """Decide, then block for the backoff delay if one applies."""
        return _pace(self.decide(request, response), self.sleeper, self.state)


class RetryHandler:
    """
    Both retry hooks for one logical request.

    Wires a transport handler and a response handler to a single AttemptState,
    so transport and status retries share one max_retries budget. Create a new
    instance per logical request; config and policy may be shared.
    """

    def __init__(
        self,
        credentials: CredentialRefresher | None = None,
        config: RetryConfig | None = None,
        sleeper: Sleeper | None = None,
        policy: BackoffPolicy | None = None,
    ):
        """
        Initialize the handler.

        Args:
            credentials: Refresher consulted for non-backoff statuses
            config: Retry configuration (default: RetryConfig())
            sleeper: Wait primitive (default: TimeSleeper())
            policy: Backoff policy to share; built from config when omitted
        """
        if policy is None:
            policy = BackoffPolicy(config or RetryConfig())
        self.policy = policy
        self.state = AttemptState()
        self.sleeper = sleeper or TimeSleeper()
        self.transport_handler = TransportFailureHandler(self.policy, self.state, self.sleeper)
        self.response_handler = ResponseFailureHandler(
            self.policy,
            self.state,
            self.sleeper,
            credentials or NoCredentialRefresh(),
        )

    @property
    def config(self) -> RetryConfig:
        return self.policy.config

    def on_transport_failure(self, error: BaseException) -> bool:
        return self.transport_handler.handle(error)

    def on_unsuccessful_response(self, request: httpx.Request, response: httpx.Response) -> bool:
        return self.response_handler.handle(request, response)
