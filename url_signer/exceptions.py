"""
Custom exceptions for URL signer library.
"""


class UrlSignerError(Exception):
    """Base exception for URL signer errors."""
    pass


class ConfigurationError(UrlSignerError):
    """Raised when signer configuration is invalid or incomplete."""

    @classmethod
    def missing_clock_component(cls):
        return cls("Missing clock component: expiration requires a clock")


class ConflictError(UrlSignerError):
    """Raised when a URL already carries a parameter reserved by the signer."""

    @classmethod
    def timestamp_parameter_already_present(cls, parameter: str):
        return cls(f"Timestamp parameter '{parameter}' is already present")


class ExpiredError(UrlSignerError):
    """Raised when a correctly signed URL is past its expiration time."""

    def __init__(self, message: str, expires_at: int, now: int):
        super().__init__(message)
        self.expires_at = expires_at
        self.now = now

    @classmethod
    def expired_url(cls, expires_at: int, now: int):
        return cls(
            f"URL expired at {expires_at} (current time {now})",
            expires_at,
            now
        )


class UnsignedUrlError(UrlSignerError):
    """Raised when a URL carries no hash parameter."""
    pass


class InvalidSignatureError(UrlSignerError):
    """Raised when URL signature verification fails."""
    pass
