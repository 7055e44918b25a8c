"""Utility modules for groupieHub.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at GroupieHubError;
  upstream failures are split into unreachable / status / decode errors so
  the cache and the search orchestrator can log them precisely before
  degrading to an empty result.
- **concurrency** -- asyncio reader/writer lock and single-flight helper
  used by the collection cache.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

# -- Async concurrency helpers ---------------------------------------------
from src.utils.concurrency import ReadWriteLock, SingleFlight

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    ConfigurationMissingError,
    DecodeError,
    GroupieHubError,
    InvalidIdentifierError,
    NotFoundError,
    UpstreamError,
    UpstreamStatusError,
    UpstreamUnreachableError,
)

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationMissingError",
    "DecodeError",
    "GroupieHubError",
    "InvalidIdentifierError",
    "NotFoundError",
    "ReadWriteLock",
    "SingleFlight",
    "UpstreamError",
    "UpstreamStatusError",
    "UpstreamUnreachableError",
    "configure_logging",
    "get_logger",
]
