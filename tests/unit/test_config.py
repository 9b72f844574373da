"""
Unit tests for server configuration.
"""

import dataclasses

import pytest

from waiter.config import (
    ServerConfig,
    IndexDocument,
    parse_address,
    ASSET_CACHE_SECONDS,
    CONTENT_CACHE_SECONDS,
)


class TestParseAddress:
    """Tests for parse_address."""

    def test_default_address(self):
        assert parse_address("localhost:4000") == ("localhost", 4000)

    def test_empty_host(self):
        assert parse_address(":8080") == ("", 8080)

    def test_ipv6_literal(self):
        assert parse_address("[::1]:4000") == ("::1", 4000)

    @pytest.mark.parametrize("address", [
        "localhost",
        "localhost:http",
        "localhost:0",
        "localhost:70000",
        "localhost:",
    ])
    def test_invalid(self, address):
        with pytest.raises(ValueError):
            parse_address(address)


class TestServerConfig:
    """Tests for ServerConfig."""

    def test_defaults(self):
        config = ServerConfig()

        assert config.address == "localhost:4000"
        assert config.host == "localhost"
        assert config.port == 4000
        assert config.root_dir == "."
        assert config.asset_cache_seconds == ASSET_CACHE_SECONDS == 31536000
        assert config.content_cache_seconds == CONTENT_CACHE_SECONDS == 43200
        assert config.server_name == "waiter (Python)"

    def test_index_priority_order(self):
        assert ServerConfig().index_documents == (
            IndexDocument("index.htmd", "text/htmd"),
            IndexDocument("index.txt", "text/plain"),
            IndexDocument("index.html", "text/html"),
            IndexDocument("index.xml", "text/xml"),
        )

    def test_asset_suffixes(self):
        assert ServerConfig().asset_suffixes == (
            ".ico", ".jpg", ".jpeg", ".png", ".webp", ".gif", ".svg", ".woff", ".woff2",
        )

    def test_is_immutable(self):
        config = ServerConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.address = "0.0.0.0:80"

    def test_validate_ok(self, site_dir):
        ServerConfig(root_dir=str(site_dir)).validate()

    def test_validate_bad_address(self, site_dir):
        with pytest.raises(ValueError, match="port"):
            ServerConfig(address="localhost:abc", root_dir=str(site_dir)).validate()

    def test_validate_missing_root(self, site_dir):
        with pytest.raises(ValueError, match="Root directory"):
            ServerConfig(root_dir=str(site_dir / "nope")).validate()

    def test_validate_negative_cache(self, site_dir):
        with pytest.raises(ValueError):
            ServerConfig(root_dir=str(site_dir), content_cache_seconds=-1).validate()

    def test_validate_empty_index_table(self, site_dir):
        with pytest.raises(ValueError):
            ServerConfig(root_dir=str(site_dir), index_documents=()).validate()

    def test_validate_log_settings(self, site_dir):
        with pytest.raises(ValueError):
            ServerConfig(root_dir=str(site_dir), log_level="LOUD").validate()

        with pytest.raises(ValueError):
            ServerConfig(root_dir=str(site_dir), log_format="xml").validate()
