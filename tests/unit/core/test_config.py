"""Unit tests for ClientConfig validation, URL building and default headers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rest_resource.core.config import DEFAULT_CONTENT_TYPE, DEFAULT_USER_AGENT, ClientConfig
from rest_resource.core.exceptions import ConfigurationError


class TestClientConfigValidation:
    """Test option parsing and validation."""

    def test_defaults(self):
        """Test default option values."""
        config = ClientConfig(host="api.example.com")
        assert config.scheme == "https"
        assert config.port is None
        assert config.version is None
        assert config.content_type == DEFAULT_CONTENT_TYPE
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.insecure is False
        assert config.timeout == 30.0

    @pytest.mark.parametrize(
        "version,expected", [(2, "v2"), ("2", "v2"), ("v3", "v3"), ("/api/", "api")]
    )
    def test_version_normalization(self, version, expected):
        """Test integer versions become vN path segments."""
        config = ClientConfig(host="api.example.com", version=version)
        assert config.version == expected

    def test_from_options(self):
        """Test options map onto config fields."""
        config = ClientConfig.from_options(
            "api.example.com",
            "http",
            {"version": 1, "port": 8080, "content_type": False, "insecure": True},
        )
        assert config.scheme == "http"
        assert config.port == 8080
        assert config.content_type is False
        assert config.insecure is True

    def test_from_options_unknown_key(self):
        """Test unknown keys raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Unknown client option"):
            ClientConfig.from_options("api.example.com", options={"proxy": "x"})

    def test_from_options_invalid_port(self):
        """Test out-of-range ports raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            ClientConfig.from_options("api.example.com", options={"port": 70000})

    def test_from_options_invalid_scheme(self):
        """Test schemes other than http and https are rejected."""
        with pytest.raises(ConfigurationError):
            ClientConfig.from_options("api.example.com", "ftp")

    def test_host_with_scheme_rejected(self):
        """Test a host carrying a scheme is rejected."""
        with pytest.raises(ConfigurationError):
            ClientConfig.from_options("https://api.example.com")

    def test_frozen(self):
        """Test config instances are immutable."""
        config = ClientConfig(host="api.example.com")
        with pytest.raises(ValidationError):
            config.host = "other"  # type: ignore[misc]


class TestURLBuilding:
    """Test the URL construction rule."""

    def test_build_url_with_id_path(self):
        """Test URLs join resource and path."""
        config = ClientConfig(host="api.example.com")
        assert config.build_url("people", "42") == "https://api.example.com/people/42"

    def test_build_url_with_version(self):
        """Test URLs include the version segment."""
        config = ClientConfig(host="api.example.com", version=2)
        assert config.build_url("people", "42") == "https://api.example.com/v2/people/42"

    def test_build_url_empty_path_omitted(self):
        """Test an empty template leaves no trailing segment."""
        config = ClientConfig(host="api.example.com")
        assert config.build_url("people", "") == "https://api.example.com/people"

    def test_build_url_with_port(self):
        """Test URLs include an explicit port."""
        config = ClientConfig(host="localhost", scheme="http", port=8080)
        assert config.base_url == "http://localhost:8080"
        assert config.build_url("people") == "http://localhost:8080/people"


class TestDefaultHeaders:
    """Test default header construction."""

    def test_default_headers(self):
        """Test default Content-Type and User-Agent."""
        headers = ClientConfig(host="api.example.com").default_headers()
        assert headers["Content-Type"] == "application/json"
        assert headers["User-Agent"] == DEFAULT_USER_AGENT

    def test_disabled_headers(self):
        """Test False disables default headers."""
        headers = ClientConfig(
            host="api.example.com", content_type=False, user_agent=False
        ).default_headers()
        assert "Content-Type" not in headers
        assert "User-Agent" not in headers

    def test_extra_headers_override_defaults(self):
        """Test configured headers replace defaults case-insensitively."""
        headers = ClientConfig(
            host="api.example.com", headers={"content-type": "text/plain"}
        ).default_headers()
        assert headers.getall("Content-Type") == ["text/plain"]


class TestSSLOption:
    """Test aiohttp ssl argument derivation."""

    def test_default_verifies(self):
        """Test certificates are verified by default."""
        assert ClientConfig(host="api.example.com").ssl_option() is True

    def test_insecure_disables_verification(self):
        """Test insecure turns off verification."""
        assert ClientConfig(host="api.example.com", insecure=True).ssl_option() is False

    def test_missing_cert_file(self, tmp_path):
        """Test an unreadable cert raises ConfigurationError."""
        config = ClientConfig(host="api.example.com", cert=str(tmp_path / "missing.pem"))
        with pytest.raises(ConfigurationError, match="Cannot load certificate bundle"):
            config.ssl_option()
