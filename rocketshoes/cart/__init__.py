"""Cart package: models, storage, and manager."""
from .models import CartItem, cart_size, cart_total, deserialize_cart, serialize_cart
from .service import Cart, CartManager
from .storage import CartStore, FileCartStore, MemoryCartStore, RedisCartStore

__all__ = [
    "Cart",
    "CartItem",
    "CartManager",
    "CartStore",
    "FileCartStore",
    "MemoryCartStore",
    "RedisCartStore",
    "cart_size",
    "cart_total",
    "deserialize_cart",
    "serialize_cart",
]
