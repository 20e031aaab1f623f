"""
URL signer.

This module provides HMAC-SHA256 signing and verification of URLs. The
signature travels in a query string parameter and covers the whole URL,
including an optional expiration timestamp.
"""

import base64
import datetime
import hashlib
import hmac
import logging
import types
from typing import Dict, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urlsplit

from .clock import Clock, unix_time
from .constants import DEFAULT_CONFIG
from .exceptions import (
    ConfigurationError,
    ConflictError,
    ExpiredError,
    InvalidSignatureError,
    UnsignedUrlError
)
from .request import InboundRequest, WSGIRequest, request_url

logger = logging.getLogger(__name__)

ExpiresIn = Optional[Union[int, datetime.timedelta]]


def _split_netloc(netloc: str) -> Tuple[Optional[str], Optional[str], str, Optional[str]]:
    """Split ``user:pass@host:port`` without touching the host's case."""
    user = password = port = None

    userinfo, at, hostport = netloc.rpartition('@')
    if at:
        user, colon, secret = userinfo.partition(':')
        if colon:
            password = secret

    host = hostport
    if hostport.startswith('['):
        end = hostport.find(']')
        if end != -1 and hostport[end + 1:end + 2] == ':':
            host, port = hostport[:end + 1], hostport[end + 2:]
    else:
        name, colon, number = hostport.partition(':')
        if colon:
            host, port = name, number

    return user or None, password, host, port or None


def parse_url(url: str) -> Tuple[Dict[str, Optional[str]], Dict[str, str]]:
    """
    Decompose a URL into its components and its query parameters.

    Duplicate query keys keep the last value.

    Returns:
        Tuple of (components, params)
    """
    parts = urlsplit(url)
    user, password, host, port = _split_netloc(parts.netloc)

    components = {
        'scheme': parts.scheme or None,
        'user': user,
        'pass': password,
        'host': host,
        'port': port,
        'path': parts.path,
        'fragment': parts.fragment or None,
    }
    params = dict(parse_qsl(parts.query, keep_blank_values=True))

    return components, params


def build_url(components: Mapping[str, Optional[str]], params: Mapping[str, str]) -> str:
    """
    Rebuild a URL in canonical form.

    Query parameters are sorted by key so that the same logical URL always
    produces the same string, whatever order its parameters came in.
    """
    query = urlencode(sorted(params.items()))

    scheme = components.get('scheme')
    host = components.get('host') or ''
    user = components.get('user') or ''
    password = components.get('pass')
    port = components.get('port')
    fragment = components.get('fragment')

    if scheme:
        url = scheme + '://'
    elif host:
        # scheme-relative
        url = '//'
    else:
        url = ''

    userinfo = user + (':' + password if password is not None else '')
    if user or password is not None:
        userinfo += '@'

    url += userinfo + host
    if port:
        url += ':' + port
    url += components.get('path') or ''
    if query:
        url += '?' + query
    if fragment:
        url += '#' + fragment

    return url


class UrlSigner:
    """
    Signs URLs and checks that signed URLs have not been tampered with.

    A signed URL carries a keyed hash of itself in a query parameter and,
    when signed with an expiration, the expiry as a Unix timestamp in a
    second parameter that the hash also covers.

    Instances are immutable and safe to share between threads.
    """

    def __init__(self, secret: Union[str, bytes], clock: Optional[Clock] = None, **config):
        """
        Initialize URL signer.

        Args:
            secret: HMAC secret key, never logged
            clock: Time source, required only for expiring URLs
            **config: Configuration options (hash_parameter, timestamp_parameter)
        """
        if isinstance(secret, str):
            secret = secret.encode('utf-8')
        self._secret = secret
        self._clock = clock

        # Merge default config with user overrides
        self._config = {**DEFAULT_CONFIG, **config}

        self._validate_config(config)
        self._config = types.MappingProxyType(self._config)

    def _validate_config(self, overrides):
        """Validate signer configuration."""
        if not self._secret:
            raise ConfigurationError("secret cannot be empty")

        unknown = set(overrides) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"unknown configuration options: {', '.join(sorted(unknown))}")

        for name in ('hash_parameter', 'timestamp_parameter'):
            if not isinstance(self._config[name], str) or not self._config[name]:
                raise ConfigurationError(f"{name} must be a non-empty string")

        if self._config['hash_parameter'] == self._config['timestamp_parameter']:
            raise ConfigurationError("hash_parameter and timestamp_parameter must differ")

    @property
    def config(self) -> Mapping[str, str]:
        return self._config

    @property
    def hash_parameter(self) -> str:
        return self._config['hash_parameter']

    @property
    def timestamp_parameter(self) -> str:
        return self._config['timestamp_parameter']

    @property
    def clock(self) -> Optional[Clock]:
        return self._clock

    def __repr__(self):
        return (
            f"{type(self).__name__}(hash_parameter={self.hash_parameter!r}, "
            f"timestamp_parameter={self.timestamp_parameter!r}, clock={self._clock!r})"
        )

    def _now(self) -> int:
        if self._clock is None:
            raise ConfigurationError.missing_clock_component()
        return unix_time(self._clock)

    @staticmethod
    def _expiration_seconds(expires_in: ExpiresIn) -> int:
        if expires_in is None:
            return 0
        if isinstance(expires_in, datetime.timedelta):
            return int(expires_in.total_seconds())
        if isinstance(expires_in, bool) or not isinstance(expires_in, int):
            raise TypeError(f"expires_in must be an int or timedelta, not {type(expires_in).__name__}")
        return expires_in

    def compute_hash(self, url: str) -> str:
        """
        Generate the base64 HMAC-SHA256 of a canonical URL.

        Args:
            url: Canonical URL, as produced by ``build_url``

        Returns:
            Base64-encoded HMAC signature
        """
        mac = hmac.new(self._secret, url.encode('utf-8'), hashlib.sha256)
        return base64.b64encode(mac.digest()).decode('ascii')

    def sign(self, url: str, expires_in: ExpiresIn = None) -> str:
        """
        Sign a URL.

        The hash parameter is added to the query string. When ``expires_in``
        is positive, the expiration timestamp is added first so that the
        hash covers it.

        Args:
            url: URL to sign
            expires_in: Lifetime in seconds (int or timedelta), None for no expiry

        Returns:
            Signed URL

        Raises:
            ConfigurationError: If expiry is requested and no clock is configured
            ConflictError: If the URL already carries the timestamp parameter
        """
        components, params = parse_url(url)

        seconds = self._expiration_seconds(expires_in)
        if seconds > 0:
            now = self._now()

            if self.timestamp_parameter in params:
                raise ConflictError.timestamp_parameter_already_present(self.timestamp_parameter)

            params[self.timestamp_parameter] = str(now + seconds)

        params[self.hash_parameter] = self.compute_hash(build_url(components, params))

        return build_url(components, params)

    def verify(self, url: str):
        """
        Verify a signed URL, raising on any failure.

        Args:
            url: Signed URL

        Raises:
            UnsignedUrlError: If the hash parameter is missing or empty
            InvalidSignatureError: If the hash does not match the URL
            ExpiredError: If the URL is correctly signed but expired
            ConfigurationError: If the URL expires and no clock is configured
        """
        try:
            components, params = parse_url(url)
        except ValueError as e:
            raise UnsignedUrlError(f"Malformed URL: {e}") from e

        hash_value = params.pop(self.hash_parameter, '')
        if not hash_value:
            raise UnsignedUrlError(f"URL has no '{self.hash_parameter}' parameter")

        expected_hash = self.compute_hash(build_url(components, params))

        # Use constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(expected_hash.encode('ascii'), hash_value.encode('utf-8')):
            raise InvalidSignatureError("URL signature does not match")

        if self.timestamp_parameter in params:
            expires_at = self._parse_timestamp(params[self.timestamp_parameter])
            now = self._now()
            if expires_at <= now:
                logger.debug("Signed URL expired at %d (now %d)", expires_at, now)
                raise ExpiredError.expired_url(expires_at, now)

    @staticmethod
    def _parse_timestamp(value: str) -> int:
        try:
            return int(value)
        except ValueError:
            # Unparseable expiry counts as already expired
            logger.debug("Invalid expiration timestamp %r", value)
            return 0

    def check(self, url: str) -> bool:
        """
        Check that a URL carries a valid signature.

        Args:
            url: Signed URL

        Returns:
            True if the signature is valid and the URL has not expired,
            False if it is unsigned or the signature does not match

        Raises:
            ExpiredError: If the URL is correctly signed but expired
        """
        try:
            self.verify(url)
        except (UnsignedUrlError, InvalidSignatureError) as e:
            logger.debug("URL signature check failed: %s", e)
            return False
        return True

    def check_request(self, request: Union[InboundRequest, Mapping]) -> bool:
        """
        Check the URL of an inbound request.

        Args:
            request: Request adapter, or a WSGI environ

        Returns:
            Same as ``check``
        """
        return self.check(self._request_url(request))

    def verify_request(self, request: Union[InboundRequest, Mapping]):
        """Raising counterpart of ``check_request``."""
        self.verify(self._request_url(request))

    @staticmethod
    def _request_url(request) -> str:
        # Work with the original URL: a normalised one reorders the query string
        if isinstance(request, Mapping):
            request = WSGIRequest(request)
        return request_url(request)
