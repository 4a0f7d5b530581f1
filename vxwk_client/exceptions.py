"""
Custom exceptions for the Vxwk API client.
"""


class VxwkClientError(Exception):
    """Base exception for Vxwk client errors."""
    pass


class InvalidConfiguration(VxwkClientError):
    """Raised when credentials, endpoint or request parameters are invalid."""
    pass


class UrlConstructionError(VxwkClientError):
    """Raised when the endpoint and path cannot be joined into a URL."""
    pass


class TransportError(VxwkClientError):
    """Raised when the HTTP call fails or returns an unexpected status."""

    def __init__(self, message, status=None, cause=None):
        super().__init__(message)
        self.status = status
        self.cause = cause


class ResponseDecodingError(VxwkClientError):
    """Raised when a successful response cannot be turned into a result."""

    def __init__(self, message, status=None, cause=None):
        super().__init__(message)
        self.status = status
        self.cause = cause
