# =============================================================================
# FOREX JOURNAL FEEDS - ACQUISITION EXCEPTIONS
# =============================================================================
#
# EXCEPTION HIERARCHY:
#
# AcquisitionError (base)
# ├── UpstreamError
# │   ├── TransientUpstreamError  - network failure, timeout, non-2xx
# │   └── MalformedResponseError  - payload failed to parse or validate
# └── ConfigurationError          - programmer error, raised at construction
#
# PROPAGATION:
# Upstream errors are raised by upstream adapters and ABSORBED by
# AcquisitionClient.fetch(). They never reach UI callers.
# ConfigurationError is the only class allowed to escape, and only at
# construction or config load time.
#
# Quota exhaustion is NOT an error. It is a normal FetchOutcome.
#
# =============================================================================

from typing import Optional


class AcquisitionError(Exception):
    """
    Base class for all acquisition-layer errors.

    Args:
        message: Error description
        source: Optional feed name for context (e.g. "calendar")
    """

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(message)

    def __str__(self) -> str:
        if self.source:
            return f"[{self.source}] {self.message}"
        return self.message


class UpstreamError(AcquisitionError):
    """Upstream call did not produce usable data."""


class TransientUpstreamError(UpstreamError):
    """
    Network failure, timeout or non-2xx response.

    status_code is set when the upstream answered with an HTTP error.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, source)
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (status: {self.status_code})"
        return base


class MalformedResponseError(UpstreamError):
    """Upstream answered, but the payload failed to parse or validate."""


class ConfigurationError(AcquisitionError, ValueError):
    """
    Invalid configuration.

    Indicates programmer error (e.g. max_calls_per_day <= 0), so it fails
    loudly at construction instead of being absorbed like runtime failures.
    """
