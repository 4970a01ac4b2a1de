"""Tests for cart settings"""
import pytest

from rocketshoes.config import CartSettings, load_settings
from rocketshoes.errors import ConfigError


def test_defaults():
    """Empty environment gives storefront defaults"""
    settings = load_settings({})

    assert settings == CartSettings()
    assert settings.inventory_api_url == "http://localhost:3333"
    assert settings.storage_backend == "file"
    assert settings.storage_key == "@RocketShoes:cart"
    assert settings.language == "pt"


def test_reads_environment():
    settings = load_settings({
        "INVENTORY_API_URL": "https://api.example.com",
        "INVENTORY_TIMEOUT": "2.5",
        "INVENTORY_RETRIES": "0",
        "CART_STORAGE_BACKEND": " Redis ",
        "CART_STORAGE_KEY": "session-42",
        "CART_LANGUAGE": "en",
        "UPSTASH_REDIS_REST_URL": "https://redis.example.com",
        "UPSTASH_REDIS_REST_TOKEN": "secret",
    })

    assert settings.inventory_api_url == "https://api.example.com"
    assert settings.inventory_timeout == 2.5
    assert settings.inventory_retries == 0
    assert settings.storage_backend == "redis"
    assert settings.storage_key == "session-42"
    assert settings.redis_token == "secret"


def test_empty_values_use_defaults():
    settings = load_settings({"INVENTORY_TIMEOUT": "", "CART_STORAGE_BACKEND": ""})

    assert settings.inventory_timeout == 5.0
    assert settings.storage_backend == "file"


def test_reads_os_environ(monkeypatch):
    monkeypatch.setenv("CART_STORAGE_BACKEND", "memory")

    assert load_settings().storage_backend == "memory"


@pytest.mark.parametrize("env", [
    {"INVENTORY_TIMEOUT": "soon"},
    {"INVENTORY_TIMEOUT": "0"},
    {"INVENTORY_RETRIES": "-1"},
    {"CART_STORAGE_BACKEND": "sqlite"},
])
def test_invalid_values(env):
    with pytest.raises(ConfigError):
        load_settings(env)
