"""
Registrar clients for porkbun-tui

The dashboard only depends on RegistrarClient; PorkbunClient is the one
real implementation.
"""

from .base import (
    RegistrarClient, FetchError, AuthenticationError, RateLimitError,
    APIResponseError, is_api_access_error,
)
from .porkbun import PorkbunClient

__all__ = [
    # Base classes and errors
    "RegistrarClient",
    "FetchError",
    "AuthenticationError",
    "RateLimitError",
    "APIResponseError",
    "is_api_access_error",
    # Clients
    "PorkbunClient",
]
