import pytest

from flight_search.core.config import DEFAULT_BASE_URL, AmadeusSettings
from flight_search.core.errors import ConfigurationError


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("AMADEUS_CLIENT_ID", "abc")
    monkeypatch.setenv("AMADEUS_CLIENT_SECRET", "xyz")
    monkeypatch.setenv("AMADEUS_BASE_URL", "https://api.amadeus.com/")

    cfg = AmadeusSettings.from_env()
    assert cfg.client_id == "abc"
    assert cfg.client_secret == "xyz"
    assert cfg.base_url == "https://api.amadeus.com"
    assert cfg.has_credentials()


def test_base_url_defaults_to_sandbox(monkeypatch):
    monkeypatch.delenv("AMADEUS_BASE_URL", raising=False)
    monkeypatch.delenv("AMADEUS_CLIENT_ID", raising=False)
    monkeypatch.delenv("AMADEUS_CLIENT_SECRET", raising=False)

    cfg = AmadeusSettings.from_env()
    assert cfg.base_url == DEFAULT_BASE_URL == "https://test.api.amadeus.com"
    assert not cfg.has_credentials()


def test_ensure_fails_fast_on_missing_value():
    cfg = AmadeusSettings(client_id="abc", client_secret="")
    assert cfg.ensure("client_id") == "abc"
    with pytest.raises(ConfigurationError, match="client_secret"):
        cfg.ensure("client_secret")
