"""Tests for cart snapshot stores"""
import pytest
from unittest.mock import Mock

from rocketshoes.cart import FileCartStore, MemoryCartStore, RedisCartStore
from rocketshoes.cart.storage import DEFAULT_STORAGE_KEY
from rocketshoes.db import RedisKeys, get_redis_sync
from rocketshoes.errors import ConfigError


def test_memory_store_roundtrip():
    """Memory slot returns the last write"""
    store = MemoryCartStore()
    assert store.read() is None

    store.write("[]")
    store.write('[{"id": 1}]')

    assert store.read() == '[{"id": 1}]'


def test_file_store_missing_file(tmp_path):
    """Missing file reads as an absent slot"""
    store = FileCartStore(tmp_path / "cart.json")

    assert store.read() is None


def test_file_store_creates_parent_dirs(tmp_path):
    """First write creates the directory"""
    path = tmp_path / "nested" / "dir" / "cart.json"
    store = FileCartStore(path)

    store.write("[]")

    assert path.read_text(encoding="utf-8") == "[]"


def test_file_store_overwrites(tmp_path):
    """Each write replaces the previous snapshot and leaves no temp files"""
    store = FileCartStore(tmp_path / "cart.json")

    store.write('[{"id": 1}]')
    store.write("[]")

    assert store.read() == "[]"
    assert [p.name for p in tmp_path.iterdir()] == ["cart.json"]


def test_file_store_keeps_old_snapshot_on_failure(tmp_path, monkeypatch):
    """A failed replace leaves the previous snapshot readable"""
    store = FileCartStore(tmp_path / "cart.json")
    store.write("[]")

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("rocketshoes.cart.storage.os.replace", failing_replace)

    with pytest.raises(OSError):
        store.write('[{"id": 1}]')

    assert store.read() == "[]"
    assert [p.name for p in tmp_path.iterdir()] == ["cart.json"]


def test_file_store_expands_user(monkeypatch, tmp_path):
    """~ in the configured path points to the home directory"""
    monkeypatch.setenv("HOME", str(tmp_path))

    store = FileCartStore("~/cart.json")

    assert store.path == tmp_path / "cart.json"


def test_redis_store_uses_single_key():
    """Reads and writes go to one namespaced key without TTL"""
    redis = Mock()
    redis.get.return_value = "[]"
    store = RedisCartStore(redis)

    assert store.read() == "[]"
    store.write('[{"id": 1}]')

    key = RedisKeys.cart_key(DEFAULT_STORAGE_KEY)
    redis.get.assert_called_once_with(key)
    redis.set.assert_called_once_with(key, '[{"id": 1}]')


def test_redis_store_missing_key():
    redis = Mock()
    redis.get.return_value = None

    assert RedisCartStore(redis, "custom").read() is None
    redis.get.assert_called_once_with("cart:custom")


def test_get_redis_requires_credentials():
    with pytest.raises(ConfigError):
        get_redis_sync("", "")
