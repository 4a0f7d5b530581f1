"""
Request signing primitives for the Vxwk open API.

The service authenticates every call with two HMAC-SHA1 values carried in the
query string. Both are derived from a signing string of six newline-terminated
fields::

    GET
    {access key}
    {timestamp}
    {nonce}
    {path}
    {canonical query}

The canonical query covers the business parameters plus the identity fields
(``xaccesskey``, ``xn``, ``xtimestamp``, ``xrunmode``), never the signatures
themselves, and never a JSON request body.
"""

import base64
import hashlib
import hmac
import secrets
import time
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import quote_plus

from .constants import (
    NONCE_LENGTH,
    PARAM_SIGN,
    PARAM_SIGNATURE,
    SIGNING_METHOD,
)
from .exceptions import InvalidConfiguration

DIGITS = "0123456789"


def normalize_params(params: Optional[Mapping[str, object]]) -> Dict[str, str]:
    """
    Drop ``None`` values and coerce everything else to ``str``.

    Raises:
        InvalidConfiguration: If a key or value is not encodable as UTF-8
    """
    if not params:
        return {}
    normalized = {}
    for key, value in params.items():
        if value is None:
            continue
        key, value = str(key), str(value)
        try:
            key.encode('utf-8')
            value.encode('utf-8')
        except UnicodeEncodeError as e:
            raise InvalidConfiguration(f"parameter {key!r} is not valid UTF-8 text") from e
        normalized[key] = value
    return normalized


def _form_quote(value: str) -> str:
    # application/x-www-form-urlencoded: only alphanumerics and "*-._" pass through
    return quote_plus(value, safe="*").replace("~", "%7E")


def canonical_query(params: Optional[Mapping[str, object]]) -> str:
    """
    Serialize parameters into the canonical query string.

    Entries are sorted by key (ordinal comparison), form-urlencoded and
    joined with ``&``. The same string is signed and transmitted.

    Args:
        params: Parameter mapping; ``None`` values are skipped

    Returns:
        Canonical query string, empty for an empty mapping
    """
    items = sorted(normalize_params(params).items())
    return "&".join(f"{_form_quote(key)}={_form_quote(value)}" for key, value in items)


def current_timestamp() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """
    Generate a random decimal nonce.

    Each digit is drawn independently from the system CSPRNG. Collisions are
    possible; replay protection comes from nonce, timestamp and signature
    together.

    Args:
        length: Number of digits

    Returns:
        String of exactly ``length`` characters in ``0-9``
    """
    if length <= 0:
        raise ValueError("nonce length must be positive")
    return "".join(secrets.choice(DIGITS) for _ in range(length))


def hmac_sha1_base64(secret: str, message: str) -> str:
    """Return base64(HMAC-SHA1(secret, message)) over UTF-8 bytes."""
    mac = hmac.new(
        secret.encode('utf-8'),
        message.encode('utf-8'),
        hashlib.sha1
    )
    return base64.b64encode(mac.digest()).decode('ascii')


def build_signing_string(access_key: str, timestamp: int, nonce: str, path: str,
                         params: Mapping[str, object]) -> str:
    """Build the newline-delimited string the signature is computed over."""
    return "\n".join([
        SIGNING_METHOD,
        access_key,
        str(timestamp),
        nonce,
        path,
        canonical_query(params),
    ]) + "\n"


@dataclass(frozen=True)
class SigningContext:
    """Per-request signing input. Discarded once the request is built."""

    access_key: str
    timestamp: int
    nonce: str
    path: str
    params: Mapping[str, str]

    def signing_string(self) -> str:
        return build_signing_string(
            self.access_key, self.timestamp, self.nonce, self.path, self.params
        )

    def sign(self, secret: str) -> Tuple[str, str]:
        """
        Compute the signature chain.

        Returns:
            Tuple of (xsignature, xsign), where xsign is the HMAC of xsignature
        """
        signature = hmac_sha1_base64(secret, self.signing_string())
        return signature, hmac_sha1_base64(secret, signature)


def sign_params(secret: str, context: SigningContext) -> Dict[str, str]:
    """Return the context parameters with ``xsignature`` and ``xsign`` added."""
    signature, sign = context.sign(secret)
    signed = dict(context.params)
    signed[PARAM_SIGNATURE] = signature
    signed[PARAM_SIGN] = sign
    return signed
