"""
Asynchronous retrying client over httpx.AsyncClient.
"""

import asyncio
from typing import Awaitable, Callable

import httpx

from .base import BaseRetryingClient
from ..credentials import CredentialRefresher
from ..retry import RetryConfig
from ..retry.handlers import RETRYABLE_TRANSPORT_ERRORS, RetryDecision


class AsyncRetryingClient(BaseRetryingClient):
    """
    Sends requests through httpx.AsyncClient, retrying failed attempts.

    Same retry semantics as RetryingClient. Backoff waits suspend the task
    instead of blocking the thread; cancelling the task during a wait raises
    asyncio.CancelledError and no further attempt is made.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        config: RetryConfig | None = None,
        credentials: CredentialRefresher | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        timeout: float = 30.0,
    ):
        """
        Initialize the client.

        Args:
            client: httpx async client to send with; one is created (and
                closed by aclose()) when omitted
            config: Retry configuration
            credentials: Refresher for rejected credentials
            sleep: Awaitable wait primitive (default: asyncio.sleep)
            timeout: Request timeout in seconds for a created client
        """
        super().__init__(config, credentials, timeout)
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self._sleep = sleep

    async def _pace(self, decision: RetryDecision) -> bool:
        if decision.retry and decision.delay is not None:
            await self._sleep(decision.delay)
        return decision.retry

    async def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a request, retrying as the retry hooks advise.

        Returns:
            The first successful (2xx) response

        Raises:
            httpx.TransportError, OSError: The original error of the final attempt
            HttpResponseError: The final attempt got a non-2xx response
        """
        handler = self._new_handler()
        attempts = 0

        while True:
            attempts += 1
            try:
                response = await self.client.send(request)
            except RETRYABLE_TRANSPORT_ERRORS as e:
                if await self._pace(handler.transport_handler.decide(e)):
                    continue
                self._log_give_up(request, attempts, f"{type(e).__name__}: {e}")
                raise

            if response.is_success:
                return response

            if await self._pace(handler.response_handler.decide(request, response)):
                await response.aclose()
                continue
            raise self._response_error(request, response, attempts)

    async def request(self, method: str, url: httpx.URL | str, **kwargs) -> httpx.Response:
        """Build a request with the underlying client and send it with retry."""
        return await self.send(self.client.build_request(method, url, **kwargs))

    async def get(self, url: httpx.URL | str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: httpx.URL | str, **kwargs) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "AsyncRetryingClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
