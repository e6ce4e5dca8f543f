"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from delongify.config import Config, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run without a .env file or inherited settings."""
    monkeypatch.chdir(tmp_path)
    for name in ("MONGODB_URI", "PORT", "DEFAULT_SCHEME", "SLUG_TTL_SECONDS", "RATE_LIMIT_PER_MINUTE"):
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Test configuration."""

    def test_mongodb_uri_required(self):
        with pytest.raises(ValidationError, match="mongodb_uri"):
            load_config()

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://db:27017")

        config = load_config()

        assert config.mongodb_uri == "mongodb://db:27017"
        assert config.mongodb_database == "dlgfy"
        assert config.mongodb_collection == "slug-url-pairs"
        assert config.port == 8000
        assert config.slug_length == 5
        assert config.slug_ttl_seconds == 5 * 24 * 60 * 60
        assert config.default_scheme == "https"
        assert config.check_url_liveness is False
        assert config.rate_limit == "5/minute"
        assert config.trusted_proxy_count == 0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://db:27017")
        monkeypatch.setenv("PORT", "3000")
        monkeypatch.setenv("DEFAULT_SCHEME", "http")
        monkeypatch.setenv("SLUG_TTL_SECONDS", "300")
        monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "20")

        config = load_config()

        assert config.port == 3000
        assert config.default_scheme == "http"
        assert config.slug_ttl_seconds == 300
        assert config.rate_limit == "20/minute"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("MONGODB_URI=mongodb://from-dotenv:27017\nPORT=3000\n")

        config = load_config()

        assert config.mongodb_uri == "mongodb://from-dotenv:27017"
        assert config.port == 3000

    def test_rejects_unknown_scheme(self):
        with pytest.raises(ValidationError):
            Config(mongodb_uri="mongodb://db:27017", default_scheme="ftp")
