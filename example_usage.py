#!/usr/bin/env python3
"""
Basic usage examples for URL signer library.

This script demonstrates how to sign URLs, check them, and handle
expiring links.
"""

import datetime
import logging

from url_signer import (
    UrlSigner,
    MockClock,
    SystemClock,
    ConfigurationError,
    ConflictError,
    ExpiredError
)


def main():
    """Run basic usage examples."""

    secret_key = "python-url-signer-demo-secret"

    print("=== URL Signer Basic Usage Examples ===\n")

    # Example 1: Sign and check a URL
    print("1. Signing a URL...")
    signer = UrlSigner(secret_key, clock=SystemClock())
    url = "https://example.com/report?id=42"
    signed = signer.sign(url)
    print(f"   URL:    {url}")
    print(f"   Signed: {signed}")
    print(f"   Check:  {'✓ Valid' if signer.check(signed) else '✗ Invalid'}")
    print()

    # Example 2: Tampering is detected
    print("2. Checking a tampered URL...")
    tampered = signed.replace("id=42", "id=43")
    print(f"   URL:   {tampered}")
    print(f"   Check: {'✓ Valid' if signer.check(tampered) else '✗ Invalid'}")
    print()

    # Example 3: Expiring URL
    print("3. Signing an expiring URL...")
    signed = signer.sign(url, expires_in=datetime.timedelta(hours=1))
    print(f"   Signed: {signed}")
    print(f"   Check:  {'✓ Valid' if signer.check(signed) else '✗ Invalid'}")
    print()

    # Example 4: Errors
    print("4. Error handling...")
    try:
        UrlSigner(secret_key).sign(url, expires_in=60)
    except ConfigurationError as e:
        print(f"   ✓ Expected error without clock: {e}")

    try:
        signer.sign(url + "&_timestamp=1", expires_in=60)
    except ConflictError as e:
        print(f"   ✓ Expected conflict: {e}")
    print()

    print("=== Examples completed ===")


def demonstrate_expiration():
    """Demonstrate expiry with a controllable clock."""

    print("\n=== Expiration Example ===")

    clock = MockClock()
    signer = UrlSigner("python-url-signer-demo-secret", clock=clock)
    signed = signer.sign("https://example.com/download/file.zip", expires_in=60)
    print(f"✓ Signed for 60 seconds: {signed}")

    clock.sleep(61)
    try:
        signer.check(signed)
    except ExpiredError as e:
        print(f"✓ Expired after 61 seconds: expired at {e.expires_at}, now {e.now}")


def demonstrate_configuration():
    """Demonstrate signer configuration options."""

    print("\n=== Configuration Options Example ===")

    signer = UrlSigner(
        "python-url-signer-demo-secret",
        hash_parameter="signature",
        timestamp_parameter="expires"
    )

    print("✓ Signer configured with:")
    print(f"  - Hash parameter: {signer.config['hash_parameter']}")
    print(f"  - Timestamp parameter: {signer.config['timestamp_parameter']}")
    print(f"  - Signed: {signer.sign('https://example.com/report?id=42')}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    main()
    demonstrate_expiration()
    demonstrate_configuration()
