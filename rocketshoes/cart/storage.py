"""Durable storage for the cart snapshot.

Every store holds exactly one named slot containing the last committed,
serialized cart. Reads and writes are synchronous so a commit never
yields to the event loop between the store write and the state swap.
"""
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from rocketshoes.db import RedisKeys
from rocketshoes.logging import get_logger

logger = get_logger(__name__)

# Slot name used by the original web storefront
DEFAULT_STORAGE_KEY = "@RocketShoes:cart"


class CartStore(Protocol):
    """Single-slot key-value persistence."""

    def read(self) -> Optional[str]:
        ...

    def write(self, payload: str) -> None:
        ...


class MemoryCartStore:
    """In-process slot. Survives nothing; used for tests and throwaway sessions."""

    def __init__(self, payload: Optional[str] = None):
        self.payload = payload

    def read(self) -> Optional[str]:
        return self.payload

    def write(self, payload: str) -> None:
        self.payload = payload


class FileCartStore:
    """
    Cart slot backed by a JSON file.

    Writes land in a temp file next to the target and are moved into place
    with ``os.replace``, so a reader sees either the old or the new snapshot.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def read(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            logger.error(f"Failed to write cart file {self.path}")
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class RedisCartStore:
    """Cart slot stored under a single Redis key (no TTL)."""

    def __init__(self, redis, storage_key: str = DEFAULT_STORAGE_KEY):
        self.redis = redis
        self.key = RedisKeys.cart_key(storage_key)

    def read(self) -> Optional[str]:
        data = self.redis.get(self.key)
        return data if data else None

    def write(self, payload: str) -> None:
        self.redis.set(self.key, payload)
