"""
Integration tests: requests client signing URLs for a live WSGI server.
"""

import json
import threading
from wsgiref.simple_server import WSGIRequestHandler, make_server

import pytest
import requests

from url_signer import ExpiredError, MockClock, UrlSigner, UrlSignerAuth


class QuietHandler(WSGIRequestHandler):
    def log_message(self, format, *args):
        pass


class TestIntegration:
    """Integration tests with a local WSGI server."""
    SECRET_KEY = "python-url-signer-demo-secret"
    clock = MockClock(1700000000)

    @classmethod
    def app(cls, environ, start_response):
        """Protected endpoint: only signed, unexpired URLs get through."""
        signer = UrlSigner(cls.SECRET_KEY, clock=cls.clock)
        try:
            valid = signer.check_request(environ)
        except ExpiredError as e:
            status, body = '410 Gone', {"error": "expired", "expires_at": e.expires_at}
        else:
            if valid:
                status, body = '200 OK', {"status": "ok", "path": environ['PATH_INFO']}
            else:
                status, body = '403 Forbidden', {"error": "invalid signature"}

        start_response(status, [('Content-Type', 'application/json')])
        return [json.dumps(body).encode('utf-8')]

    @pytest.fixture(scope="class")
    def server_url(self):
        """Start WSGI server for integration tests."""
        server = make_server('127.0.0.1', 0, self.app, handler_class=QuietHandler)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()

        yield f"http://127.0.0.1:{server.server_port}"

        # Cleanup: stop the server
        server.shutdown()
        server.server_close()

    @pytest.fixture
    def signer(self):
        return UrlSigner(self.SECRET_KEY, clock=self.clock)

    def test_unsigned_request_rejected(self, server_url):
        response = requests.get(f"{server_url}/api/report?id=42")

        assert response.status_code == 403

    def test_signed_request_accepted(self, server_url, signer):
        response = requests.get(signer.sign(f"{server_url}/api/report?id=42"))

        assert response.status_code == 200
        assert response.json()["path"] == "/api/report"

    def test_session_auth(self, server_url, signer):
        with requests.Session() as session:
            session.auth = UrlSignerAuth(signer, expires_in=60)
            response = session.get(f"{server_url}/api/report", params={"id": 42, "format": "pdf"})

        assert response.status_code == 200

    def test_tampered_request_rejected(self, server_url, signer):
        signed = signer.sign(f"{server_url}/api/report?id=42")

        response = requests.get(signed.replace("id=42", "id=43"))

        assert response.status_code == 403

    def test_expired_request(self, server_url, signer):
        signed = signer.sign(f"{server_url}/api/report?id=42", expires_in=60)

        self.clock.sleep(120)
        try:
            response = requests.get(signed)
        finally:
            self.clock.sleep(-120)

        assert response.status_code == 410
        assert response.json()["expires_at"] == 1700000000 + 60
