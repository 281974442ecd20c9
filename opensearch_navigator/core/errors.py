"""
Error taxonomy for query execution, credentials and discovery.

Each error carries the HTTP status the API layer answers with and enough
of the upstream message to diagnose credential, permission and
connectivity problems without server-side logs.
"""

from typing import Any, Dict, Optional


MAX_BODY_CHARS = 2000


def _truncate(body: Optional[str]) -> str:
    if not body:
        return ""
    if len(body) > MAX_BODY_CHARS:
        return body[:MAX_BODY_CHARS] + "...(truncated)"
    return body


class NavigatorError(Exception):
    """Base class for all navigator errors."""
    
    http_status = 500
    
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
    
    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error": type(self).__name__,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class NoNodesConfigured(NavigatorError):
    http_status = 400
    
    def __init__(self, message: str = "No OpenSearch nodes configured."):
        super().__init__(message)


class CredentialError(NavigatorError):
    """Credentials could not be resolved (store, profile name, or static keys)."""
    
    http_status = 401


class UpstreamError(NavigatorError):
    """The engine answered with a non-2xx status."""
    
    def __init__(self, status: int, body: Optional[str] = None, node: Optional[str] = None):
        self.status = status
        self.body = _truncate(body)
        self.node = node
        super().__init__(f"Upstream error ({status}): {self.body}", details=self.body or None)
        self.http_status = status


class AuthenticationFailed(UpstreamError):
    """The engine rejected the request with 401 or 403."""
    
    def __init__(self, status: int, body: Optional[str] = None, node: Optional[str] = None):
        super().__init__(status, body, node)
        self.message = f"Authentication failed ({status}): {self.body}"
        self.args = (self.message,)


class TransportError(NavigatorError):
    """No response was received at all (connection failure, timeout)."""
    
    http_status = 502
    
    def __init__(self, node: str, cause: Optional[BaseException] = None):
        self.node = node
        self.cause = cause
        reason = f"{type(cause).__name__}: {cause}" if cause else "no response"
        super().__init__(f"Failed to connect to node {node}: {reason}")


class DiscoveryError(NavigatorError):
    """Collections could not be listed."""
    
    http_status = 502
    
    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        self.status = status
        self.body = _truncate(body)
        super().__init__(message, details=self.body or None)
        if status is not None:
            self.http_status = status


class InvalidRegion(DiscoveryError):
    """The region is not a well-formed AWS region name."""
    
    def __init__(self, region: str):
        super().__init__(f"Invalid AWS region: {region!r}")
        self.http_status = 400
