"""
Bearer token refresh.
"""

import logging
from typing import Callable, Iterable

import httpx

logger = logging.getLogger(__name__)


class BearerTokenRefresher:
    """
    Refreshes a bearer token when the server rejects the current one.

    The token source is called on every matching rejection. A retry is only
    signalled when the resulting header differs from the one the request
    already carries, so a source that keeps returning a rejected token ends
    the retries after one extra attempt at most.
    """

    def __init__(
        self,
        token_source: Callable[[], str | None],
        *,
        statuses: Iterable[int] = (401,),
        header: str = "Authorization",
        scheme: str = "Bearer",
    ):
        """
        Initialize the refresher.

        Args:
            token_source: Returns a fresh token, or None if none is available
            statuses: Response statuses that mean "credentials rejected"
            header: Request header carrying the credential
            scheme: Prefix written before the token, empty for a raw token
        """
        self.token_source = token_source
        self.statuses = frozenset(statuses)
        self.header = header
        self.scheme = scheme

    def _header_value(self, token: str) -> str:
        return f"{self.scheme} {token}" if self.scheme else token

    def apply(self, request: httpx.Request) -> None:
        """Attach a token to a request that has no credential yet."""
        if self.header not in request.headers:
            token = self.token_source()
            if token:
                request.headers[self.header] = self._header_value(token)

    def decide(self, request: httpx.Request, response: httpx.Response) -> bool:
        if response.status_code not in self.statuses:
            return False

        token = self.token_source()
        if not token:
            logger.debug(f"No token available after {response.status_code}, not retrying")
            return False

        fresh = self._header_value(token)
        if request.headers.get(self.header) == fresh:
            logger.debug(f"Token unchanged after {response.status_code}, not retrying")
            return False

        request.headers[self.header] = fresh
        logger.info(f"Refreshed {self.header} header after {response.status_code}, retrying")
        return True
