"""
Custom exception classes.

Represent errors raised while translating an API Gateway event into a request.
All of them are raised before the handler runs.
"""


class AdapterError(Exception):
    """Base exception class for the adapter."""

    pass


class RequestConstructionError(AdapterError):
    """Raised when a valid request cannot be formed from the event."""

    def __init__(self, detail: str, cause: Exception = None):
        self.detail = detail
        self.cause = cause
        super().__init__(f"Cannot construct request: {detail}")


class InvalidMethodError(RequestConstructionError):
    """Raised when the HTTP method is not a valid token."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"invalid method {method!r}")


class InvalidTargetError(RequestConstructionError):
    """Raised when the request target contains characters a URL cannot carry."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"invalid control character in target {target!r}")


class InvalidEventError(RequestConstructionError):
    """Raised when the raw Lambda event is not an HTTP API v2 payload."""

    def __init__(self, cause: Exception):
        super().__init__(f"event is not an API Gateway v2 HTTP payload: {cause}", cause)


class BodyDecodeError(AdapterError):
    """Raised when a body flagged as base64 cannot be decoded."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to decode base64 request body: {cause}")
