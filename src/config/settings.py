"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# This class uses pydantic-settings to read configuration from TWO
# sources (in priority order):
#
#   1. **Environment variables** — e.g., DISCOGS_TOKEN=abc123
#      (highest priority — always wins)
#   2. **.env file** — key=value lines in the project root .env file
#      (lower priority — used for local development)
#
# Field `discogs_token` maps to env var `DISCOGS_TOKEN` automatically.
# `app_port` also accepts the conventional `PORT` variable set by most
# hosting platforms.
#
# An empty credential means "not configured": the matching fallback
# search provider reports itself once and stays disabled.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """groupieHub application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # === Primary catalog ===
    groupie_api_base_url: str = "https://groupietrackers.herokuapp.com/api"

    # === Fallback search: Discogs ===
    discogs_api_base_url: str = "https://api.discogs.com"
    discogs_token: str = ""
    discogs_user_agent: str = "groupieHub/0.1.0 +https://example.com"

    # === Fallback search: Ticketmaster ===
    ticketmaster_api_base_url: str = "https://app.ticketmaster.com"
    ticketmaster_api_key: str = ""
    ticketmaster_locale: str = "fr-FR"
    ticketmaster_page_size: int = 10

    # Waterfall order; names match each provider's get_provider_name().
    fallback_search_order: list[str] = Field(default_factory=lambda: ["discogs", "ticketmaster"])

    # === HTTP client ===
    http_timeout_seconds: float = 30.0

    # === Collection cache ===
    cache_single_flight: bool = True
    empty_retry_seconds: float = 30.0
    max_age_seconds: float = 0.0  # 0 = a loaded collection never goes stale

    # === Fallback search memo (cachetools TTLCache) ===
    search_cache_ttl: int = 300
    search_cache_max_size: int = 512

    # === Front-end assets ===
    album_images_path: str = "./data/albums_api.json"
    static_dir: str = "./static"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = Field(default=8080, validation_alias=AliasChoices("APP_PORT", "PORT"))
    app_env: str = "development"
    log_level: str = "INFO"

    def get_configured_fallbacks(self) -> list[str]:
        """Return the fallback providers (in waterfall order) that have credentials."""
        credentials = {
            "discogs": self.discogs_token,
            "ticketmaster": self.ticketmaster_api_key,
        }
        return [name for name in self.fallback_search_order if credentials.get(name)]
