"""Custom exception hierarchy for groupieHub.

All application exceptions inherit from :class:`GroupieHubError`, which
carries an optional ``provider_name`` so error handlers can identify which
upstream service (e.g. "groupie", "discogs", "ticketmaster") caused the
failure.

The hierarchy is organized by where the failure originates:

    GroupieHubError  (base -- catch-all for any groupieHub error)
    +-- UpstreamError                (any failure talking to a provider)
    |   +-- UpstreamUnreachableError (network / DNS / timeout)
    |   +-- UpstreamStatusError      (non-200 HTTP status)
    |   +-- DecodeError              (body is not the expected schema)
    +-- NotFoundError                (entity absent or unreachable)
    +-- InvalidIdentifierError       (non-positive or non-numeric id)
    +-- ConfigurationMissingError    (absent credential at startup)

Upstream errors never reach an HTTP client verbatim: the cache, the
search orchestrator and the lookup index catch ``UpstreamError`` and turn
it into an empty result or a ``NotFoundError``.
"""


class GroupieHubError(Exception):
    """Base exception for all groupieHub errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which upstream triggered the error.
    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[discogs] HTTP 401``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------

class UpstreamError(GroupieHubError):
    """Raised when a call to an upstream provider fails for any reason."""

    def __init__(
        self,
        message: str = "Upstream provider call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UpstreamUnreachableError(UpstreamError):
    """Raised on transport-level failures (connection refused, DNS, timeout)."""

    def __init__(
        self,
        message: str = "Upstream provider is unreachable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UpstreamStatusError(UpstreamError):
    """Raised when a provider answers with a non-200 status code."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(
            message=message or f"Unexpected HTTP status {status_code}",
            provider_name=provider_name,
        )

    @property
    def status_code(self) -> int:
        return self._status_code


class DecodeError(UpstreamError):
    """Raised when a provider body is not valid JSON or not the expected shape."""

    def __init__(
        self,
        message: str = "Upstream response could not be decoded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Caller-facing errors
# ---------------------------------------------------------------------------

class NotFoundError(GroupieHubError):
    """Raised when a requested entity is absent or its source is unreachable."""

    def __init__(
        self,
        message: str = "Entity not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InvalidIdentifierError(GroupieHubError):
    """Raised when an entity identifier is not a positive integer."""

    def __init__(
        self,
        message: str = "Invalid identifier",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationMissingError(GroupieHubError):
    """Raised when a provider credential is absent from the configuration.

    Reported once when the provider is built; the provider then stays
    unavailable for the lifetime of the process.
    """

    def __init__(
        self,
        message: str = "Required configuration is missing",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
