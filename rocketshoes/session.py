"""
Session wiring.

One CartManager per session, built explicitly and handed to every consumer.

Usage:
    async with cart_session(load_settings()) as manager:
        await manager.add_product(1)
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from rocketshoes.cart import CartManager, CartStore, FileCartStore, MemoryCartStore, RedisCartStore
from rocketshoes.config import CartSettings
from rocketshoes.db import get_redis_sync
from rocketshoes.inventory import HttpInventoryClient, InventoryClient
from rocketshoes.logging import get_logger
from rocketshoes.notifications import LogNotifier, Notifier

logger = get_logger(__name__)


def create_store(settings: CartSettings) -> CartStore:
    """Build the cart slot for the configured backend."""
    if settings.storage_backend == "memory":
        return MemoryCartStore()
    if settings.storage_backend == "redis":
        redis = get_redis_sync(settings.redis_url or "", settings.redis_token or "")
        return RedisCartStore(redis, settings.storage_key)
    return FileCartStore(settings.storage_path)


def create_inventory_client(settings: CartSettings) -> HttpInventoryClient:
    return HttpInventoryClient(
        base_url=settings.inventory_api_url,
        timeout=settings.inventory_timeout,
        retries=settings.inventory_retries,
    )


def create_cart_manager(
    settings: CartSettings,
    notifier: Optional[Notifier] = None,
    inventory: Optional[InventoryClient] = None,
    store: Optional[CartStore] = None,
) -> CartManager:
    """
    Build a CartManager from settings.

    Explicit ``inventory``/``store`` arguments override the configured ones.

    Raises:
        CartLoadError: stored snapshot is corrupted
        ConfigError: redis backend without credentials
    """
    return CartManager(
        inventory=inventory if inventory is not None else create_inventory_client(settings),
        store=store if store is not None else create_store(settings),
        notifier=notifier if notifier is not None else LogNotifier(),
        language=settings.language,
    )


@asynccontextmanager
async def cart_session(
    settings: CartSettings,
    notifier: Optional[Notifier] = None,
) -> AsyncIterator[CartManager]:
    """Open a cart session and close its HTTP client on exit."""
    inventory = create_inventory_client(settings)
    try:
        manager = create_cart_manager(settings, notifier=notifier, inventory=inventory)
        logger.info(f"Cart session opened ({settings.storage_backend} storage, {len(manager.cart)} lines)")
        yield manager
    finally:
        await inventory.aclose()
        logger.info("Cart session closed")
