"""Unit tests for TransportConfig."""

import pytest

from laakhay.paging.config import TransportConfig


class TestTransportConfig:
    """Test TransportConfig."""

    def test_defaults(self):
        """Test default configuration."""
        config = TransportConfig()
        assert config.timeout == 30.0
        assert config.verify_ssl is True
        assert config.default_headers() == {"Accept": "application/json"}

    def test_validation(self):
        """Test invalid values are rejected."""
        with pytest.raises(ValueError):
            TransportConfig(timeout=0)
        with pytest.raises(ValueError):
            TransportConfig(max_connections=0)

    def test_with_bearer_token(self):
        """Test adding a bearer token."""
        config = TransportConfig(headers={"X-GitHub-Api-Version": "2022-11-28"}).with_bearer_token("t0k")
        assert config.default_headers() == {
            "Accept": "application/json",
            "X-GitHub-Api-Version": "2022-11-28",
            "Authorization": "Bearer t0k",
        }

    def test_from_env(self):
        """Test loading from environment."""
        config = TransportConfig.from_env(
            environ={
                "LAAKHAY_PAGING_BASE_URL": "https://api.example.com",
                "LAAKHAY_PAGING_TIMEOUT": "5",
                "LAAKHAY_PAGING_MAX_CONNECTIONS": "2",
                "LAAKHAY_PAGING_VERIFY_SSL": "false",
                "LAAKHAY_PAGING_TOKEN": "abc",
            }
        )
        assert config.base_url == "https://api.example.com"
        assert config.timeout == 5.0
        assert config.max_connections == 2
        assert config.verify_ssl is False
        assert config.headers["Authorization"] == "Bearer abc"

    def test_from_env_empty(self):
        """Test empty environment gives defaults."""
        config = TransportConfig.from_env(environ={})
        assert config == TransportConfig()
