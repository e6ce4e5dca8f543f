"""Tests for common utilities."""

import json
import logging

import pytest

from delongify.lib.common.headers import extract_forwarded_for, resolve_client_ip
from delongify.lib.common.logging_config import setup_logging
from delongify.lib.common.validators import MAX_URL_LENGTH, normalize_url
from delongify.lib.exceptions import InvalidURLError


class TestNormalizeURL:
    """Test URL normalization."""

    def test_adds_default_scheme(self):
        assert normalize_url("example.com") == "https://example.com"
        assert normalize_url("example.com/a/b?c=d#e") == "https://example.com/a/b?c=d#e"
        assert normalize_url("localhost:8080/path") == "https://localhost:8080/path"

    def test_adds_configured_scheme(self):
        assert normalize_url("example.com", default_scheme="http") == "http://example.com"

    def test_http_and_https_are_unchanged(self, sample_urls):
        for url in sample_urls:
            assert normalize_url(url) == url
            assert normalize_url(url, default_scheme="http") == url

    def test_idempotent(self):
        for raw in ["example.com", "ftp://example.com/file", "https://example.com/x"]:
            once = normalize_url(raw)
            assert normalize_url(once) == once

    def test_replaces_unsupported_scheme(self):
        assert normalize_url("ftp://example.com/file") == "https://example.com/file"
        assert normalize_url("ws://example.com/chat", default_scheme="http") == "http://example.com/chat"

    def test_strips_surrounding_whitespace(self):
        assert normalize_url("  https://example.com  ") == "https://example.com"

    def test_accepts_ip_hosts(self):
        assert normalize_url("http://127.0.0.1:8000/") == "http://127.0.0.1:8000/"
        assert normalize_url("http://[::1]:8000/") == "http://[::1]:8000/"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "not a url",
            "https://",
            "https://exa mple.com",
            "http://example.com:notaport/",
            "http://example.com:99999/",
            "https://exa<mple.com",
            "http://[::zz]/",
            "https://example.com/a\nb",
            "https://example.com/\x00",
        ],
    )
    def test_invalid_urls(self, raw):
        with pytest.raises(InvalidURLError):
            normalize_url(raw)

    def test_spaces_outside_host_are_kept(self):
        assert normalize_url("https://example.com/a b?q=x y") == "https://example.com/a b?q=x y"
        assert normalize_url("example.com/a b") == "https://example.com/a b"

    def test_rejects_too_long_url(self):
        with pytest.raises(InvalidURLError, match="too long"):
            normalize_url("https://example.com/" + "a" * MAX_URL_LENGTH)

    def test_invalid_url_error_is_value_error(self):
        with pytest.raises(ValueError):
            normalize_url("not a url")

    def test_rejects_unknown_default_scheme(self):
        with pytest.raises(ValueError, match="Default scheme"):
            normalize_url("example.com", default_scheme="ftp")


class TestHeaders:
    """Test header utilities."""

    def test_extract_forwarded_for(self):
        headers = {"X-Forwarded-For": "1.1.1.1, 2.2.2.2 ,3.3.3.3"}
        assert extract_forwarded_for(headers) == ["1.1.1.1", "2.2.2.2", "3.3.3.3"]
        assert extract_forwarded_for({}) == []

    def test_peer_address_without_trusted_proxies(self):
        headers = {"x-forwarded-for": "6.6.6.6"}
        assert resolve_client_ip(headers, "10.0.0.1") == "10.0.0.1"

    def test_one_trusted_proxy_uses_last_entry(self):
        headers = {"x-forwarded-for": "6.6.6.6, 1.2.3.4"}
        assert resolve_client_ip(headers, "10.0.0.1", trusted_proxy_count=1) == "1.2.3.4"

    def test_two_trusted_proxies(self):
        headers = {"x-forwarded-for": "6.6.6.6, 1.2.3.4, 10.0.0.2"}
        assert resolve_client_ip(headers, "10.0.0.1", trusted_proxy_count=2) == "1.2.3.4"

    def test_short_header_falls_back_to_first_entry(self):
        headers = {"x-forwarded-for": "1.2.3.4"}
        assert resolve_client_ip(headers, "10.0.0.1", trusted_proxy_count=3) == "1.2.3.4"

    def test_missing_header_falls_back_to_peer(self):
        assert resolve_client_ip({}, "10.0.0.1", trusted_proxy_count=1) == "10.0.0.1"
        assert resolve_client_ip({}, None, trusted_proxy_count=1) == "unknown"


class TestLogging:
    """Test logging setup."""

    def test_setup_logging_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "delongify.log"

        setup_logging(level="INFO")
        logger = setup_logging(level="WARNING", log_file=str(log_file))

        assert logger.name == "delongify"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2

        logger.warning("written to file")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()

        setup_logging(level="INFO")

    def test_json_format(self, capsys):
        logger = setup_logging(level="INFO", json_format=True)
        logger.info("hello")

        out = capsys.readouterr().out
        assert '"level": "INFO"' in out
        assert '"message": "hello"' in out

    def test_json_format_escapes_message(self, capsys):
        logger = setup_logging(level="INFO", json_format=True)
        logger.info('Created slug mapping: abcde -> https://example.com/?q="x"')

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["message"] == 'Created slug mapping: abcde -> https://example.com/?q="x"'
        assert record["logger"] == "delongify"

        setup_logging(level="INFO")

    def test_uvicorn_shares_handlers(self):
        logger = setup_logging(level="DEBUG")

        uvicorn_logger = logging.getLogger("uvicorn")
        assert uvicorn_logger.handlers == logger.handlers
        assert uvicorn_logger.level == logging.DEBUG
        assert not uvicorn_logger.propagate

    def test_pymongo_kept_at_info(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("pymongo").level == logging.INFO

        setup_logging(level="ERROR")
        assert logging.getLogger("pymongo").level == logging.ERROR

        setup_logging(level="INFO")
