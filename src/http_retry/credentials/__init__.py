"""
http_retry - Credential Refresh.

Pluggable re-authentication for requests rejected by the server.
"""

from .base import CredentialRefresher, NoCredentialRefresh
from .bearer import BearerTokenRefresher

__all__ = [
    "CredentialRefresher",
    "NoCredentialRefresh",
    "BearerTokenRefresher",
]
