"""
Vxwk API client library.

A Python client that signs requests for the Vxwk open API (cards, live
codes, external links and short links) with the platform's HMAC-SHA1
query-string scheme.

Example usage:
    from vxwk_client import VxwkAPI

    api = VxwkAPI("https://api.example.com", "access-key", "access-secret")
    links = api.short_link_list()
"""

from .client import ClientConfig, SignedRequest, VxwkClient
from .resources import VxwkAPI
from .exceptions import (
    VxwkClientError,
    InvalidConfiguration,
    UrlConstructionError,
    TransportError,
    ResponseDecodingError
)
from .signing import (
    SigningContext,
    build_signing_string,
    canonical_query,
    current_timestamp,
    generate_nonce,
    hmac_sha1_base64
)
from .constants import (
    DEFAULT_CONFIG,
    NONCE_LENGTH,
    RESERVED_PARAMS
)

__version__ = "0.1.0"
__all__ = [
    "VxwkAPI",
    "VxwkClient",
    "ClientConfig",
    "SignedRequest",
    "SigningContext",
    "VxwkClientError",
    "InvalidConfiguration",
    "UrlConstructionError",
    "TransportError",
    "ResponseDecodingError",
    "build_signing_string",
    "canonical_query",
    "current_timestamp",
    "generate_nonce",
    "hmac_sha1_base64",
    "DEFAULT_CONFIG",
    "NONCE_LENGTH",
    "RESERVED_PARAMS"
]
