"""Settings loader for skip-segment providers.

Endpoints and the per-request timeout can be overridden from environment
variables (prefixed ``SKIPSYNC_``) or a local .env file, e.g.:

- SKIPSYNC_ANISKIP_API_URL
- SKIPSYNC_JIKAN_API_URL
- SKIPSYNC_SKIP_DB_URL
- SKIPSYNC_REQUEST_TIMEOUT (seconds)
- SKIPSYNC_LENIENT_MOVIE_FALLBACK
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Provider endpoints and network behaviour."""

    ANISKIP_API_URL: str = "https://api.aniskip.com/v2/skip-times"
    JIKAN_API_URL: str = "https://api.jikan.moe/v4/anime"
    SKIP_DB_URL: str = (
        "https://raw.githubusercontent.com/ipavlin98/lmp-series-skip-db"
        "/refs/heads/main/database"
    )
    REQUEST_TIMEOUT: float = 10.0
    LENIENT_MOVIE_FALLBACK: bool = False
    """Serve ``movie`` segments for any episode of a serial when nothing else
    matches."""

    model_config = SettingsConfigDict(
        env_prefix="SKIPSYNC_", env_file=".env", extra="ignore"
    )
