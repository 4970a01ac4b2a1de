"""
Redis client factory.

The cart slot can live in Upstash Redis so a customer's cart survives across
browser sessions and devices sharing the same key. The store contract is
synchronous, so only the sync REST client is used here.
"""
from upstash_redis import Redis

from rocketshoes.errors import ConfigError


def get_redis_sync(url: str, token: str) -> Redis:
    """
    Build a sync Upstash Redis client.

    Args:
        url: UPSTASH_REDIS_REST_URL
        token: UPSTASH_REDIS_REST_TOKEN
    """
    if not url or not token:
        raise ConfigError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
    return Redis(url=url, token=token)


# Redis key prefixes for organization
class RedisKeys:
    """Redis key prefixes for cart data."""

    CART = "cart:"  # cart:{storage_key}

    @staticmethod
    def cart_key(storage_key: str) -> str:
        return f"{RedisKeys.CART}{storage_key}"
