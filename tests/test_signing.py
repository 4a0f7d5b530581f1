"""
Unit tests for request signing primitives.
"""

import base64
import hashlib
import hmac
import random
from urllib.parse import parse_qsl

import pytest

from vxwk_client import InvalidConfiguration
from vxwk_client.signing import (
    SigningContext,
    build_signing_string,
    canonical_query,
    generate_nonce,
    hmac_sha1_base64,
    normalize_params,
    sign_params,
)


SHORT_LINK_LIST = "/api/v1/user/shortlink/list"
IDENTITY = {
    "xaccesskey": "AK1",
    "xn": "000000000000000000",
    "xtimestamp": "1700000000",
    "xrunmode": "release",
}
EXPECTED_SIGNING_STRING = (
    "GET\nAK1\n1700000000\n000000000000000000\n/api/v1/user/shortlink/list\n"
    "xaccesskey=AK1&xn=000000000000000000&xrunmode=release&xtimestamp=1700000000\n"
)
EXPECTED_SIGNATURE = "4eUbgc9abttE7qbmhTujQnXAhaM="
EXPECTED_SIGN = "ZjiAZNrgW68S3sD6oqOJm0RqVQI="


class TestCanonicalQuery:
    """Test canonical query encoding."""

    def test_empty(self):
        assert canonical_query({}) == ""
        assert canonical_query(None) == ""

    def test_sorted_by_key(self):
        assert canonical_query({"b": "2", "a": "1", "c": "3"}) == "a=1&b=2&c=3"

    def test_ordinal_sort(self):
        """Uppercase sorts before lowercase and prefixes before longer keys."""
        query = canonical_query({"xsignature": "1", "xsign": "2", "Z": "3"})
        assert query == "Z=3&xsign=2&xsignature=1"

    def test_order_independent(self):
        params = {f"key{i}": f"value {i}" for i in range(20)}
        expected = canonical_query(params)

        items = list(params.items())
        for seed in range(5):
            random.Random(seed).shuffle(items)
            assert canonical_query(dict(items)) == expected

    def test_deterministic(self):
        params = {"name": "hello world", "id": "42"}
        assert canonical_query(params) == canonical_query(params)

    def test_form_urlencoding(self):
        query = canonical_query({"q": "a b&c=d", "sig": "ab+/=", "mark": "*-._~"})
        assert query == "mark=*-._%7E&q=a+b%26c%3Dd&sig=ab%2B%2F%3D"

    def test_utf8_encoding(self):
        assert canonical_query({"title": "短链"}) == "title=%E7%9F%AD%E9%93%BE"

    def test_surrogate_rejected(self):
        with pytest.raises(InvalidConfiguration):
            canonical_query({"a": "\ud800"})

    def test_none_values_dropped(self):
        assert canonical_query({"a": None, "b": "1"}) == "b=1"

    def test_non_string_values(self):
        assert normalize_params({"page": 2, "testMode": True}) == {"page": "2", "testMode": "True"}

    def test_round_trip(self):
        params = {"title": "短链 test", "link": "https://example.com/?a=1&b=2", "n": "007"}
        parsed = dict(parse_qsl(canonical_query(params), keep_blank_values=True))
        assert parsed == params


class TestNonce:
    """Test nonce generation."""

    def test_default_length(self):
        for _ in range(50):
            nonce = generate_nonce()
            assert len(nonce) == 18
            assert all(ch in "0123456789" for ch in nonce)

    def test_custom_length(self):
        assert len(generate_nonce(6)) == 6

    def test_leading_zeros_kept(self, monkeypatch):
        monkeypatch.setattr("vxwk_client.signing.secrets.choice", lambda seq: "0")
        assert generate_nonce(18) == "0" * 18

    def test_fresh_per_call(self):
        assert generate_nonce() != generate_nonce()

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            generate_nonce(0)


class TestSignature:
    """Test HMAC-SHA1 signing."""

    def test_known_vector(self):
        signature = hmac_sha1_base64("key", "The quick brown fox jumps over the lazy dog")
        assert signature == "3nybhbi3iqa8ino29wqQcBydtNk="

    def test_matches_hmac_module(self):
        expected = base64.b64encode(
            hmac.new(b"SECRET", b"message", hashlib.sha1).digest()
        ).decode()
        assert hmac_sha1_base64("SECRET", "message") == expected

    def test_deterministic(self):
        assert hmac_sha1_base64("SECRET", "message") == hmac_sha1_base64("SECRET", "message")

    def test_perturbation_changes_output(self):
        base = hmac_sha1_base64("SECRET", "message")
        assert hmac_sha1_base64("SECRET", "messagf") != base
        assert hmac_sha1_base64("SECRET!", "message") != base

    def test_signing_string(self):
        signing_string = build_signing_string(
            "AK1", 1700000000, "000000000000000000", SHORT_LINK_LIST, IDENTITY
        )
        assert signing_string == EXPECTED_SIGNING_STRING


class TestSigningContext:
    """Test the signature chain for a request."""

    @pytest.fixture
    def context(self):
        return SigningContext(
            access_key="AK1",
            timestamp=1700000000,
            nonce="000000000000000000",
            path=SHORT_LINK_LIST,
            params=dict(IDENTITY),
        )

    def test_signing_string(self, context):
        assert context.signing_string() == EXPECTED_SIGNING_STRING

    def test_signature_chain(self, context):
        signature, sign = context.sign("SECRET")

        assert signature == EXPECTED_SIGNATURE
        assert sign == EXPECTED_SIGN
        assert sign == hmac_sha1_base64("SECRET", signature)

    def test_sign_params(self, context):
        signed = sign_params("SECRET", context)

        assert signed["xsignature"] == EXPECTED_SIGNATURE
        assert signed["xsign"] == EXPECTED_SIGN
        assert "xsignature" not in context.params
        for key, value in IDENTITY.items():
            assert signed[key] == value

    def test_business_params_signed(self):
        params = dict(IDENTITY, id="42")
        context = SigningContext("AK1", 1700000000, "000000000000000000", "/api/v1/user/shortlink", params)

        assert context.sign("SECRET") == ("bdohJKuaDJmJLpwC4HXx6QYagAA=", "JLg1/4129Z/WAXXeYQb1AvPLJiM=")
