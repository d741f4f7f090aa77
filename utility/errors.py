# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-02
# Description: errors.py
# -----------------------------------------------------------------------------
"""
Failure kinds surfaced by the semantic retrieval pipeline.

Each carries the HTTP status the API layer reports it with, so routers can
map any of them without a lookup table.
"""


class SemanticSearchError(Exception):
    status_code: int = 500
    kind: str = "internal_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind)
        self.message = message or self.kind


class ValidationError(SemanticSearchError):
    """Malformed or out-of-range input. Raised before any I/O."""
    status_code = 400
    kind = "validation_error"


class Unauthorized(SemanticSearchError):
    """No resolvable user identity for the request."""
    status_code = 401
    kind = "unauthorized"


class ProviderUnavailable(SemanticSearchError):
    """Embedding provider is not configured (missing credential)."""
    status_code = 503
    kind = "provider_unavailable"


class ProviderError(SemanticSearchError):
    """Embedding call failed or returned malformed data. Safe to retry."""
    status_code = 502
    kind = "provider_error"


class PersistenceError(SemanticSearchError):
    """Storage read/write failure. Safe to retry."""
    status_code = 503
    kind = "persistence_error"
