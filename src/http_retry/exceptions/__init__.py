"""
http_retry - Exception Hierarchy.

Errors surfaced by retrying clients. Transport failures keep their httpx type.
"""

from .base import (
    HttpRetryError,
    HttpResponseError,
    RetryCancelledError,
    InvalidRetryConfigError,
)

__all__ = [
    "HttpRetryError",
    "HttpResponseError",
    "RetryCancelledError",
    "InvalidRetryConfigError",
]
