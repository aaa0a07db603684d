"""
Base exception classes for retrying HTTP requests.

Transport errors raised by httpx are never wrapped: they reach the caller as
the original exception object. The classes here cover what httpx has no type
for: a final unsuccessful response, a cancelled backoff wait and bad config.
"""

import httpx


class HttpRetryError(Exception):
    """Base exception for all http_retry errors."""

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.retryable = retryable
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        return " ".join(parts)


class HttpResponseError(HttpRetryError):
    """
    Raised when the final attempt of a request got an unsuccessful response.

    The response is the one the transport received on that attempt, untouched.
    """

    def __init__(self, response: httpx.Response, message: str | None = None):
        status = response.status_code
        super().__init__(
            message or f"{status} {response.reason_phrase}".strip(),
            retryable=status == 429 or status >= 500,
            status_code=status,
        )
        self.response = response

    @property
    def request(self) -> httpx.Request:
        return self.response.request

    @property
    def reason_phrase(self) -> str:
        return self.response.reason_phrase


class RetryCancelledError(HttpRetryError):
    """Raised by a sleeper when a backoff wait is cancelled. Not retryable."""

    def __init__(self, message: str = "Backoff wait cancelled", **kwargs):
        super().__init__(message, retryable=False, **kwargs)


class InvalidRetryConfigError(HttpRetryError, ValueError):
    """Raised when a RetryConfig is built with out-of-range values."""

    def __init__(self, message: str = "Invalid retry configuration", **kwargs):
        super().__init__(message, retryable=False, **kwargs)
