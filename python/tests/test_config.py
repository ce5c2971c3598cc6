"""Tests for digest service configuration."""

from vlei_credentials import config
from vlei_credentials.client import HttpDigestService
from vlei_credentials.said import Blake3Saider


def test_default_is_local_saider():
    assert isinstance(config.get_digest_service(), Blake3Saider)


def test_singleton():
    assert config.get_digest_service() is config.get_digest_service()


def test_remote_when_url_configured(monkeypatch):
    monkeypatch.setattr(config, "DIGEST_SERVICE_URL", "https://digest.example.com")
    monkeypatch.setattr(config, "DIGEST_SERVICE_TIMEOUT", 2.5)
    service = config.get_digest_service()
    try:
        assert isinstance(service, HttpDigestService)
        assert service.base_url == "https://digest.example.com"
    finally:
        service.close()


def test_set_and_reset(recording_service):
    config.set_digest_service(recording_service)
    assert config.get_digest_service() is recording_service
    config.reset_digest_service()
    assert isinstance(config.get_digest_service(), Blake3Saider)
