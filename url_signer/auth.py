"""
requests integration: sign outgoing request URLs.

Example usage:
    session = requests.Session()
    session.auth = UrlSignerAuth(UrlSigner("your-secret-key"), expires_in=300)
    response = session.get("https://example.com/report?id=42")
"""

import requests
from requests.auth import AuthBase

from .signer import ExpiresIn, UrlSigner


class UrlSignerAuth(AuthBase):
    """Signs the URL of every request it is attached to."""

    def __init__(self, signer: UrlSigner, expires_in: ExpiresIn = None):
        self.signer = signer
        self.expires_in = expires_in

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        r.url = self.signer.sign(r.url, self.expires_in)
        return r

    def __eq__(self, other):
        return (
            isinstance(other, UrlSignerAuth)
            and self.signer is other.signer
            and self.expires_in == other.expires_in
        )

    def __ne__(self, other):
        return not self == other
