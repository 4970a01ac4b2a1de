"""
Inventory Diagnostic Script - Check stock and product lookups against the API.

Usage: python scripts/check_inventory.py 1 2 3
"""
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from rocketshoes.config import load_settings
from rocketshoes.errors import InventoryError
from rocketshoes.session import create_inventory_client

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
    print(f"Loaded .env from {env_path}")


async def check(product_ids: list[int]) -> bool:
    settings = load_settings()
    print(f"Inventory API: {settings.inventory_api_url}")

    ok = True
    async with create_inventory_client(settings) as client:
        for product_id in product_ids:
            try:
                stock = await client.get_stock(product_id)
                product = await client.get_product(product_id)
            except InventoryError as e:
                print(f"  #{product_id}: ERROR {e}")
                ok = False
                continue
            print(f"  #{product_id}: {product.title} - {product.price} ({stock.amount} in stock)")
    return ok


if __name__ == "__main__":
    ids = [int(arg) for arg in sys.argv[1:]] or [1]
    sys.exit(0 if asyncio.run(check(ids)) else 1)
