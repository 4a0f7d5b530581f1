"""
Signed HTTP client for the Vxwk open API.

This module builds signed requests (see :mod:`vxwk_client.signing`), sends
them over a pooled ``requests`` session and normalizes the responses into
either a decoded JSON value, a ``Location`` URL, or a typed exception.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urlsplit

import requests

from .constants import (
    DEFAULT_CONFIG,
    DEFAULT_HEADERS,
    PARAM_ACCESS_KEY,
    PARAM_NONCE,
    PARAM_RUN_MODE,
    PARAM_TIMESTAMP,
    RESERVED_PARAMS,
)
from .exceptions import (
    InvalidConfiguration,
    ResponseDecodingError,
    TransportError,
    UrlConstructionError,
)
from .signing import (
    SigningContext,
    canonical_query,
    current_timestamp,
    generate_nonce,
    normalize_params,
    sign_params,
)

LOGGER = logging.getLogger(__name__)

EXPECT_JSON = "json"
EXPECT_LOCATION = "location"

SUPPORTED_METHODS = ("GET", "POST")


def _positive_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _valid_timeout(timeout) -> bool:
    """Accept what requests accepts: None, a number, or a (connect, read) pair."""
    if timeout is None:
        return True
    if isinstance(timeout, tuple):
        return len(timeout) == 2 and all(t is None or _positive_number(t) for t in timeout)
    return _positive_number(timeout)


@dataclass(frozen=True)
class ClientConfig:
    """Fixed identity used to sign every request of a client."""

    access_key: str
    access_secret: str
    endpoint: str

    def __post_init__(self) -> None:
        if not self.access_key:
            raise InvalidConfiguration("access_key cannot be empty")
        if not self.access_secret:
            raise InvalidConfiguration("access_secret cannot be empty")
        if not self.endpoint:
            raise InvalidConfiguration("endpoint cannot be empty")

        parts = urlsplit(self.endpoint)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidConfiguration(f"endpoint must be an absolute http(s) URL: {self.endpoint!r}")
        if parts.path not in ("", "/") or parts.query or parts.fragment:
            raise InvalidConfiguration(f"endpoint must not carry a path, query or fragment: {self.endpoint!r}")

        object.__setattr__(self, "endpoint", self.endpoint.rstrip('/'))

    def __repr__(self) -> str:
        return f"ClientConfig(access_key={self.access_key!r}, endpoint={self.endpoint!r})"


@dataclass(frozen=True)
class SignedRequest:
    """Wire-level request: identity and signature fields live in ``params``."""

    method: str
    url: str
    params: Mapping[str, str]
    body: Any = None

    @property
    def query_string(self) -> str:
        return canonical_query(self.params)

    @property
    def full_url(self) -> str:
        return f"{self.url}?{self.query_string}"


class VxwkClient:
    """
    Signed client for the Vxwk open API.

    Every request carries ``xaccesskey``, ``xn``, ``xtimestamp``, ``xrunmode``,
    ``xsignature`` and ``xsign`` in its query string. POST payloads travel as a
    JSON body that is not part of the signature.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        access_secret: str,
        session: Optional[requests.Session] = None,
        clock: Optional[Callable[[], int]] = None,
        nonce_factory: Optional[Callable[[int], str]] = None,
        **config
    ):
        """
        Initialize the client.

        Args:
            endpoint: Base URL (scheme and host) of the Vxwk API
            access_key: Developer access key, sent with every request
            access_secret: Developer secret, used only for signing
            session: Optional requests.Session; a new one is created otherwise
            clock: Callable returning Unix seconds (defaults to wall clock)
            nonce_factory: Callable taking a length and returning a nonce
            **config: Configuration options (timeout, nonce_length, run_mode)
        """
        self.credentials = ClientConfig(access_key, access_secret, endpoint)

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self._clock = clock or current_timestamp
        self._nonce_factory = nonce_factory or generate_nonce

        # Only sessions created here are closed by close()
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def _validate_config(self):
        """Validate client configuration."""
        unknown = set(self.config) - set(DEFAULT_CONFIG)
        if unknown:
            raise InvalidConfiguration(f"unknown configuration options: {sorted(unknown)}")

        if not _valid_timeout(self.config['timeout']):
            raise InvalidConfiguration(
                "timeout must be None, a positive number or a (connect, read) tuple of them"
            )

        nonce_length = self.config['nonce_length']
        if not isinstance(nonce_length, int) or nonce_length <= 0:
            raise InvalidConfiguration("nonce_length must be a positive integer")

        if not self.config['run_mode']:
            raise InvalidConfiguration("run_mode cannot be empty")

    @property
    def endpoint(self) -> str:
        return self.credentials.endpoint

    @property
    def access_key(self) -> str:
        return self.credentials.access_key

    def _join_url(self, path: str) -> str:
        if not path.startswith('/'):
            LOGGER.error("Cannot append path %r to %s", path, self.credentials.endpoint)
            raise UrlConstructionError(f"path must start with '/': {path!r}")
        if any(ch in path for ch in '?#') or any(ch.isspace() for ch in path):
            LOGGER.error("Cannot append path %r to %s", path, self.credentials.endpoint)
            raise UrlConstructionError(f"path contains characters not allowed in a URL path: {path!r}")
        return self.credentials.endpoint + path

    def signing_context(self, path: str, params: Optional[Mapping[str, object]] = None) -> SigningContext:
        """
        Create the signing context for one request.

        Merges the business parameters with the identity, nonce and
        timestamp fields using a fresh nonce and the current time.

        Raises:
            InvalidConfiguration: If a business parameter uses a reserved name
        """
        business = normalize_params(params)
        collisions = RESERVED_PARAMS.intersection(business)
        if collisions:
            LOGGER.error("Rejected reserved parameter names %s for %s", sorted(collisions), path)
            raise InvalidConfiguration(f"reserved parameter names cannot be supplied: {sorted(collisions)}")

        timestamp = int(self._clock())
        nonce = self._nonce_factory(self.config['nonce_length'])

        merged = dict(business)
        merged.update({
            PARAM_ACCESS_KEY: self.credentials.access_key,
            PARAM_NONCE: nonce,
            PARAM_TIMESTAMP: str(timestamp),
            PARAM_RUN_MODE: self.config['run_mode'],
        })
        return SigningContext(
            access_key=self.credentials.access_key,
            timestamp=timestamp,
            nonce=nonce,
            path=path,
            params=merged,
        )

    def build_request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, object]] = None,
        body: Any = None,
    ) -> SignedRequest:
        """
        Build a signed request.

        Args:
            method: "GET" or "POST"
            path: API path, e.g. "/api/v1/user/shortlink/list"
            params: Business query parameters (signed)
            body: JSON-serializable POST payload (not signed)

        Returns:
            SignedRequest ready to send

        Raises:
            InvalidConfiguration: If params collide with reserved names
            UrlConstructionError: If path cannot be appended to the endpoint
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"unsupported method {method!r}, expected one of {SUPPORTED_METHODS}")
        if body is not None and method != "POST":
            raise ValueError("a request body is only supported for POST")

        url = self._join_url(path)
        context = self.signing_context(path, params)
        return SignedRequest(
            method=method,
            url=url,
            params=sign_params(self.credentials.access_secret, context),
            body=body,
        )

    def send(self, request: SignedRequest, expect: str = EXPECT_JSON) -> Any:
        """
        Execute a signed request and normalize the response.

        Args:
            request: Request produced by build_request
            expect: "json" to decode the body, "location" to return the
                Location header

        Returns:
            Decoded JSON value, or the Location URL string

        Raises:
            TransportError: On network failure or an unexpected HTTP status
            ResponseDecodingError: If the body is not JSON or Location is missing
        """
        if expect not in (EXPECT_JSON, EXPECT_LOCATION):
            raise ValueError(f"unknown response kind {expect!r}")

        LOGGER.debug("%s %s", request.method, request.url)
        try:
            response = self.session.request(
                request.method,
                request.full_url,
                json=request.body,
                headers=DEFAULT_HEADERS,
                timeout=self.config['timeout'],
                allow_redirects=False,
            )
        except requests.RequestException as e:
            LOGGER.error("HTTP request to %s failed: %s", request.url, e)
            raise TransportError(f"HTTP request failed: {e}", cause=e) from e

        if expect == EXPECT_LOCATION:
            return self._location_result(request, response)
        return self._json_result(request, response)

    def _raise_for_status(self, request: SignedRequest, response: requests.Response):
        status = response.status_code
        LOGGER.error("%s %s returned HTTP %s: %s", request.method, request.url, status, response.text)
        raise TransportError(
            f"{request.method} {request.url} returned HTTP {status}: {response.text}",
            status=status,
        )

    def _json_result(self, request: SignedRequest, response: requests.Response) -> Any:
        if not 200 <= response.status_code < 300:
            self._raise_for_status(request, response)
        try:
            return response.json()
        except ValueError as e:
            LOGGER.error("Invalid JSON from %s: %s", request.url, e)
            raise ResponseDecodingError(
                f"invalid JSON response from {request.url}",
                status=response.status_code,
                cause=e,
            ) from e

    def _location_result(self, request: SignedRequest, response: requests.Response) -> str:
        """
        Return the Location header of an image URL response.

        Redirects are not followed, so a 3xx carrying Location counts as
        success here on purpose; other non-2xx statuses are failures.
        """
        if not 200 <= response.status_code < 400:
            self._raise_for_status(request, response)
        location = response.headers.get('Location')
        if not location:
            LOGGER.error("No Location header in response from %s", request.url)
            raise ResponseDecodingError(
                f"missing Location header in response from {request.url}",
                status=response.status_code,
            )
        return location

    def get(self, path: str, params: Optional[Mapping[str, object]] = None) -> Any:
        """Make a signed GET request and return the decoded JSON body."""
        return self.send(self.build_request('GET', path, params))

    def post(self, path: str, body: Any = None, params: Optional[Mapping[str, object]] = None) -> Any:
        """Make a signed POST request with a JSON body and return the decoded JSON body."""
        return self.send(self.build_request('POST', path, params, body))

    def get_location(self, path: str, params: Optional[Mapping[str, object]] = None) -> str:
        """Make a signed GET request and return its Location header."""
        return self.send(self.build_request('GET', path, params), expect=EXPECT_LOCATION)

    def close(self):
        """Close HTTP session if this client created it."""
        if self.session and self._owns_session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
