"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  — Static defaults checked into the repo
#   2. .env file           — Local developer overrides (not committed)
#   3. Environment vars    — Set at deploy time
#
# load_config() reads the YAML file first, then deep-merges the values
# resolved by Settings on top.  Credentials are reduced to booleans so the
# resulting dict can be logged or exposed on /health without leaking keys.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh ``Settings()`` is used otherwise.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "catalog": {
            "base_url": settings.groupie_api_base_url,
        },
        "search": {
            "fallback_order": list(settings.fallback_search_order),
            "configured_fallbacks": settings.get_configured_fallbacks(),
            "discogs_configured": bool(settings.discogs_token),
            "ticketmaster_configured": bool(settings.ticketmaster_api_key),
            "ticketmaster_locale": settings.ticketmaster_locale,
        },
        "cache": {
            "single_flight": settings.cache_single_flight,
            "empty_retry_seconds": settings.empty_retry_seconds,
            "max_age_seconds": settings.max_age_seconds,
            "search_cache_ttl": settings.search_cache_ttl,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
