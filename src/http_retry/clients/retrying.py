"""
Synchronous retrying client over httpx.Client.
"""

import httpx

from .base import BaseRetryingClient
from ..credentials import CredentialRefresher
from ..retry import RetryConfig
from ..retry.handlers import RETRYABLE_TRANSPORT_ERRORS
from ..retry.sleeper import Sleeper, TimeSleeper


class RetryingClient(BaseRetryingClient):
    """
    Sends requests through httpx.Client, retrying failed attempts.

    Features:
    - Backoff retry for transient transport errors and configured statuses
    - One retry budget per logical request, shared by both failure kinds
    - Immediate, uncounted retry after a credential refresh
    - The final failure surfaces as-is: the original httpx exception, or
      HttpResponseError wrapping the original response
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        config: RetryConfig | None = None,
        credentials: CredentialRefresher | None = None,
        sleeper: Sleeper | None = None,
        timeout: float = 30.0,
    ):
        """
        Initialize the client.

        Args:
            client: httpx client to send with; one is created (and closed by
                close()) when omitted
            config: Retry configuration
            credentials: Refresher for rejected credentials
            sleeper: Wait primitive for backoff (default: TimeSleeper())
            timeout: Request timeout in seconds for a created client
        """
        super().__init__(config, credentials, timeout)
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)
        self.sleeper = sleeper or TimeSleeper()

    def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a request, retrying as the retry hooks advise.

        The same request object is resent on every attempt; credential
        refreshes update its headers in place.

        Returns:
            The first successful (2xx) response

        Raises:
            httpx.TransportError, OSError: The original error of the final attempt
            HttpResponseError: The final attempt got a non-2xx response
        """
        handler = self._new_handler(self.sleeper)
        attempts = 0

        while True:
            attempts += 1
            try:
                response = self.client.send(request)
            except RETRYABLE_TRANSPORT_ERRORS as e:
                if handler.on_transport_failure(e):
                    continue
                self._log_give_up(request, attempts, f"{type(e).__name__}: {e}")
                raise

            if response.is_success:
                return response

            if handler.on_unsuccessful_response(request, response):
                response.close()
                continue
            raise self._response_error(request, response, attempts)

    def request(self, method: str, url: httpx.URL | str, **kwargs) -> httpx.Response:
        """Build a request with the underlying client and send it with retry."""
        return self.send(self.client.build_request(method, url, **kwargs))

    def get(self, url: httpx.URL | str, **kwargs) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: httpx.URL | str, **kwargs) -> httpx.Response:
        return self.request("POST", url, **kwargs)

    def close(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "RetryingClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
