"""Base abstraction for skip-segment provider clients.

All network-facing clients (title index, timing service, community database)
inherit from ProviderClient, which owns the provider settings and performs
single-attempt GET requests with the configured timeout.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from skipsync.metadata.settings import Settings


class ProviderClient(ABC):
    """Abstract base class for all provider clients.

    Clients never retry: every lookup is one request, and callers treat any
    failure as "no result". Used for dependency injection and testability.
    """

    provider: str = "unknown"

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the client with explicit or environment-loaded settings."""
        self.settings = settings or Settings()

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Root URL of the provider's API."""
        raise NotImplementedError

    async def _get(self, url: str, params: Any = None) -> httpx.Response:
        """Issue a single GET request bounded by ``REQUEST_TIMEOUT``.

        Raises:
            httpx.HTTPError: On transport failures and timeouts.
        """
        async with httpx.AsyncClient(timeout=self.settings.REQUEST_TIMEOUT) as client:
            return await client.get(url, params=params)
