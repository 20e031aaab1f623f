"""
Inbound request adapters for URL signature checks.

The signer never looks at a framework's normalised URI, since reordering
the query string changes the canonical form and breaks the hash. Adapters
expose the original pieces of the requested URL instead.
"""

from typing import Any, Mapping, Protocol
from urllib.parse import quote

from .constants import DEFAULT_PORTS, PATH_SAFE_CHARS


class InboundRequest(Protocol):
    """What ``UrlSigner.check_request`` needs from a request object."""

    @property
    def scheme_and_host(self) -> str:
        ...

    @property
    def base_path(self) -> str:
        ...

    @property
    def path_info(self) -> str:
        ...

    @property
    def query_string(self) -> str:
        ...


def request_url(request: InboundRequest) -> str:
    """Rebuild the URL exactly as the client sent it."""
    qs = request.query_string
    qs = '?' + qs if qs else ''
    return request.scheme_and_host + request.base_path + request.path_info + qs


class WSGIRequest:
    """
    Adapter over a PEP 3333 environ.

    When the server passes the raw request target (``RAW_URI`` or
    ``REQUEST_URI``) it is used verbatim; otherwise the path is rebuilt
    from ``SCRIPT_NAME`` and ``PATH_INFO``.
    """

    def __init__(self, environ: Mapping[str, Any]):
        self.environ = environ

    @property
    def scheme(self) -> str:
        return self.environ.get('wsgi.url_scheme', 'http')

    @property
    def host(self) -> str:
        host = self.environ.get('HTTP_HOST')
        if host:
            return host

        host = self.environ.get('SERVER_NAME', '')
        port = str(self.environ.get('SERVER_PORT', ''))
        if port and DEFAULT_PORTS.get(self.scheme) != port:
            host += ':' + port
        return host

    @property
    def scheme_and_host(self) -> str:
        return f"{self.scheme}://{self.host}"

    def _raw_target(self):
        target = self.environ.get('RAW_URI') or self.environ.get('REQUEST_URI')
        if target and '://' in target.partition('?')[0]:
            # absolute-form, as sent to proxies: keep path and query only
            authority_and_rest = target.split('://', 1)[1]
            path_start = min(
                (i for i in (authority_and_rest.find('/'), authority_and_rest.find('?')) if i != -1),
                default=len(authority_and_rest)
            )
            target = authority_and_rest[path_start:] or '/'
        return target

    @property
    def base_path(self) -> str:
        if self._raw_target():
            return ''
        return quote(self.environ.get('SCRIPT_NAME', '').encode('latin-1'), safe=PATH_SAFE_CHARS)

    @property
    def path_info(self) -> str:
        target = self._raw_target()
        if target:
            return target.partition('?')[0]
        return quote(self.environ.get('PATH_INFO', '').encode('latin-1'), safe=PATH_SAFE_CHARS)

    @property
    def query_string(self) -> str:
        return self.environ.get('QUERY_STRING', '')

    @property
    def url(self) -> str:
        return request_url(self)
