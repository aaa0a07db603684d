"""
http_retry - Retrying Clients.

httpx clients that own the retry loop and consult the retry hooks.
"""

from .base import BaseRetryingClient
from .retrying import RetryingClient
from .async_retrying import AsyncRetryingClient

__all__ = [
    "BaseRetryingClient",
    "RetryingClient",
    "AsyncRetryingClient",
]
