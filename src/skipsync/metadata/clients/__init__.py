"""Client implementations for skip-segment providers."""

from skipsync.metadata.clients.aniskip import AniSkipClient
from skipsync.metadata.clients.jikan import JikanClient
from skipsync.metadata.clients.skipdb import SkipDbClient

__all__ = ["AniSkipClient", "JikanClient", "SkipDbClient"]
