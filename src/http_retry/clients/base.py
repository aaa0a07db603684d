"""
Base retrying client.

Holds what the sync and async clients share: the retry configuration, the
backoff policy built from it, the credential refresher and the logging around
giving up.
"""

import logging

import httpx

from ..credentials import CredentialRefresher, NoCredentialRefresh
from ..exceptions import HttpResponseError
from ..retry import BackoffPolicy, RetryConfig, RetryHandler
from ..retry.sleeper import Sleeper

logger = logging.getLogger(__name__)


class BaseRetryingClient:
    """
    Common state for clients that own the retry loop.

    Subclasses send a request, and after each failed attempt ask a fresh
    per-request RetryHandler whether to send it again.
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        credentials: CredentialRefresher | None = None,
        timeout: float = 30.0,
    ):
        """
        Initialize the client.

        Args:
            config: Retry configuration shared by every request
            credentials: Refresher for rejected credentials (default: none)
            timeout: Timeout in seconds for a client created by this class
        """
        self.config = config or RetryConfig()
        self.credentials = credentials or NoCredentialRefresh()
        self.policy = BackoffPolicy(self.config)
        self.timeout = timeout

    def _new_handler(self, sleeper: Sleeper | None = None) -> RetryHandler:
        """Create the retry state for one logical request."""
        return RetryHandler(self.credentials, sleeper=sleeper, policy=self.policy)

    def _log_give_up(self, request: httpx.Request, attempts: int, cause: str) -> None:
        if attempts > 1:
            logger.error(f"{request.method} {request.url} failed after {attempts} attempts: {cause}")
        else:
            logger.debug(f"{request.method} {request.url} failed: {cause}")

    def _response_error(
        self, request: httpx.Request, response: httpx.Response, attempts: int
    ) -> HttpResponseError:
        error = HttpResponseError(response)
        self._log_give_up(request, attempts, str(error))
        return error
