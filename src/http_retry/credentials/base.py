"""
Credential refresh capability.

Consulted for unsuccessful responses that are not backoff-retryable. An
implementation decides whether fresh credentials can fix the failure and, if
so, writes them onto the request before answering.
"""

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class CredentialRefresher(Protocol):
    """Decides whether a rejected request is worth one more credentialed try."""

    def decide(self, request: httpx.Request, response: httpx.Response) -> bool:
        """
        Decide whether to retry the request with refreshed credentials.

        Implementations mutate request.headers in place before returning True,
        and must return False when they cannot make forward progress (for
        example, the fresh credential equals the one just rejected).

        Args:
            request: The request that will be resent on True
            response: The unsuccessful response it received

        Returns:
            True to resend immediately, False to give up
        """
        ...


class NoCredentialRefresh:
    """Refresher for unauthenticated clients. Never retries."""

    def decide(self, request: httpx.Request, response: httpx.Response) -> bool:
        return False
