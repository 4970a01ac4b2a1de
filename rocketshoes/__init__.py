"""
RocketShoes cart core.

Client-side cart state with stock-checked mutations and durable snapshots:
- cart: CartManager, CartItem, cart stores
- inventory: async HTTP client for stock and product lookups
- session: explicit per-session wiring
"""

__version__ = "1.0.0"
