#!/usr/bin/env python3
"""
Basic usage examples for the Vxwk API client library.

This script demonstrates how to sign requests for the Vxwk open API and call
a few resource endpoints. Credentials are read from the environment.
"""

import logging
import os
import sys

from vxwk_client import VxwkAPI, VxwkClientError, TransportError


def main():
    """Run basic usage examples."""

    endpoint = os.environ.get("VXWK_ENDPOINT", "https://api.example.com")
    access_key = os.environ.get("VXWK_ACCESS_KEY")
    access_secret = os.environ.get("VXWK_ACCESS_SECRET")
    if not access_key or not access_secret:
        print("Set VXWK_ACCESS_KEY and VXWK_ACCESS_SECRET first.")
        sys.exit(1)

    print("=== Vxwk Python Client Basic Usage Examples ===\n")

    with VxwkAPI(endpoint, access_key, access_secret, timeout=10) as api:
        # Example 1: what gets signed
        print("1. Building a signed request...")
        request = api.build_request("GET", "/api/v1/user/shortlink/list")
        print(f"   URL: {request.url}")
        print(f"   Nonce: {request.params['xn']}")
        print(f"   Timestamp: {request.params['xtimestamp']}")
        print(f"   Signature: {request.params['xsignature']}\n")

        try:
            # Example 2: list short links
            print("2. Listing short links...")
            links = api.short_link_list({"page": 1})
            print(f"   ✓ Response: {links}\n")

            # Example 3: resolve a card image URL
            print("3. Resolving a WeChat card image URL...")
            url = api.wx_card_img_url(os.environ.get("VXWK_PROJECT_ID", "demo-project"))
            print(f"   ✓ Image URL: {url}\n")

        except TransportError as e:
            print(f"   ✗ HTTP error (status {e.status}): {e}")
            sys.exit(1)
        except VxwkClientError as e:
            print(f"   ✗ Client error: {e}")
            sys.exit(1)

    print("=== All Examples Completed Successfully! ===")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
