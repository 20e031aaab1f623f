"""
URL Signer Library

Signs URLs with an HMAC-SHA256 query parameter so that a receiver can
later confirm a URL was issued by a trusted party, has not been tampered
with and, optionally, has not expired.

Example usage:
    from url_signer import UrlSigner, SystemClock

    signer = UrlSigner("your-secret-key", clock=SystemClock())
    url = signer.sign("https://example.com/report?id=42", expires_in=3600)
    signer.check(url)  # True
"""

from .signer import UrlSigner, build_url, parse_url
from .clock import Clock, MockClock, SystemClock
from .request import InboundRequest, WSGIRequest
from .auth import UrlSignerAuth
from .exceptions import (
    UrlSignerError,
    ConfigurationError,
    ConflictError,
    ExpiredError,
    UnsignedUrlError,
    InvalidSignatureError
)
from .constants import (
    DEFAULT_HASH_PARAMETER,
    DEFAULT_TIMESTAMP_PARAMETER,
    DEFAULT_CONFIG
)

__version__ = "1.0.0"
__all__ = [
    "UrlSigner",
    "build_url",
    "parse_url",
    "Clock",
    "MockClock",
    "SystemClock",
    "InboundRequest",
    "WSGIRequest",
    "UrlSignerAuth",
    "UrlSignerError",
    "ConfigurationError",
    "ConflictError",
    "ExpiredError",
    "UnsignedUrlError",
    "InvalidSignatureError",
    "DEFAULT_HASH_PARAMETER",
    "DEFAULT_TIMESTAMP_PARAMETER",
    "DEFAULT_CONFIG"
]
