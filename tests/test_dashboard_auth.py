# Tests for the local-only installer guard.
# Created: 2026-10-12

from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from xfilemanager.config import Settings
from xfilemanager.dashboard_auth import (
    _is_genuine_localhost,
    _is_same_origin,
    require_localhost,
    require_same_origin,
)


class TestIsGenuineLocalhost:
    """Test the _is_genuine_localhost helper function."""

    def _make_request(self, host="127.0.0.1", headers=None):
        """Create a mock request with given client host and headers."""
        req = MagicMock()
        req.client = MagicMock()
        req.client.host = host
        req.headers = headers or {}
        return req

    @pytest.fixture
    def settings(self, tmp_path):
        return Settings(root_dir=tmp_path)

    def test_ipv4_loopback(self, settings):
        assert _is_genuine_localhost(self._make_request("127.0.0.1"), settings) is True

    def test_ipv6_loopback(self, settings):
        assert _is_genuine_localhost(self._make_request("::1"), settings) is True

    def test_remote_host(self, settings):
        assert _is_genuine_localhost(self._make_request("192.168.1.20"), settings) is False

    def test_no_client(self, settings):
        req = self._make_request()
        req.client = None
        assert _is_genuine_localhost(req, settings) is False

    @pytest.mark.parametrize("header", ["x-forwarded-for", "x-real-ip", "cf-connecting-ip"])
    def test_proxied_loopback_blocked(self, settings, header):
        req = self._make_request("127.0.0.1", headers={header: "5.6.7.8"})
        assert _is_genuine_localhost(req, settings) is False

    def test_custom_allowed_hosts(self, tmp_path):
        settings = Settings(root_dir=tmp_path, installer_allowed_hosts=["10.0.0.5"])
        assert _is_genuine_localhost(self._make_request("10.0.0.5"), settings) is True
        assert _is_genuine_localhost(self._make_request("127.0.0.1"), settings) is False

    def test_require_localhost_raises_403(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            require_localhost(self._make_request("8.8.8.8"), settings)
        assert exc_info.value.status_code == 403

    def test_require_localhost_allows_loopback(self, settings):
        assert require_localhost(self._make_request("127.0.0.1"), settings) is None


class TestSameOrigin:
    """Test the cross-site submission check."""

    def _make_request(self, headers):
        req = MagicMock()
        req.headers = {"host": "127.0.0.1:8080", **headers}
        return req

    def test_no_origin_or_referer(self):
        assert _is_same_origin(self._make_request({})) is True

    def test_matching_origin(self):
        req = self._make_request({"origin": "http://127.0.0.1:8080"})
        assert _is_same_origin(req) is True

    def test_matching_referer(self):
        req = self._make_request({"referer": "http://127.0.0.1:8080/install"})
        assert _is_same_origin(req) is True

    @pytest.mark.parametrize(
        "headers",
        [
            {"origin": "https://evil.example"},
            {"origin": "null"},
            {"origin": "http://127.0.0.1:9999"},
            {"referer": "https://evil.example/page"},
        ],
    )
    def test_foreign_origin(self, headers):
        assert _is_same_origin(self._make_request(headers)) is False

    def test_require_same_origin_raises_403(self):
        with pytest.raises(HTTPException) as exc_info:
            require_same_origin(self._make_request({"origin": "https://evil.example"}))
        assert exc_info.value.status_code == 403
