"""
Error types for the proxy.

ProxyError subclasses are terminal for a request and map straight onto an
HTTP status and a JSON error body. UpstreamError subclasses are raised by
the GraphQL client and end up as the ``details`` of an InternalError.
"""

from typing import Any, Dict, List, Optional


UNAUTHORIZED_API_KEY = "Unauthorized: Invalid or missing API Key."
MISSING_TOKEN = "Authorization header with a Token is required."
MISSING_FILTERS = 'Missing "filters" in request body.'
INVALID_JSON = "Request body must be valid JSON."
INTERNAL_ERROR = "An internal server error occurred."


class ProxyError(Exception):
    """Base exception for errors reported back to the caller."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class Unauthorized(ProxyError):
    """Bad proxy key, or missing/malformed bearer token."""
    status_code = 401


class BadRequest(ProxyError):
    """Request body is unusable."""
    status_code = 400


class InternalError(ProxyError):
    """The upstream call failed."""
    status_code = 500

    def __init__(self, details: Optional[str] = None):
        super().__init__(INTERNAL_ERROR, details=details)


class UpstreamError(Exception):
    """Base exception for failures talking to the GraphQL API."""
    pass


class UpstreamHTTPError(UpstreamError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        message = f"Upstream returned HTTP {status_code}"
        if body:
            message = f"{message}: {body[:200]}"
        super().__init__(message)


class UpstreamResponseError(UpstreamError):
    """Upstream body could not be decoded into a JSON object."""
    pass


class UpstreamGraphQLError(UpstreamError):
    """Upstream returned a GraphQL ``errors`` list."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        messages = [
            str(e.get("message", e)) if isinstance(e, dict) else str(e)
            for e in errors
        ]
        super().__init__("; ".join(messages) or "GraphQL request failed")
