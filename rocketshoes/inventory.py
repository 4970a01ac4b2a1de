"""
Inventory Service Client

Remote stock and product lookups for the cart. The client owns the whole
network policy (timeouts, retries, error mapping); callers see either a
parsed model or an ``InventoryError``.
"""

import asyncio
from typing import Protocol

import httpx
from pydantic import ValidationError

from rocketshoes.errors import InventoryError, InventoryNotFoundError
from rocketshoes.logging import get_logger, sanitize_string_for_logging
from rocketshoes.models import Product, Stock

logger = get_logger(__name__)

# Constants
NO_RESPONSE_BODY = "No response body"


class InventoryClient(Protocol):
    """Remote stock/product lookup consumed by the cart manager."""

    async def get_stock(self, product_id: int) -> Stock:
        ...

    async def get_product(self, product_id: int) -> Product:
        ...


def _is_permanent_error(status_code: int) -> bool:
    """Client errors will not change on retry."""
    return 400 <= status_code < 500


def _calculate_backoff_delay(attempt: int) -> float:
    """Calculate exponential backoff delay."""
    return float(0.5 * (2 ** attempt))


class HttpInventoryClient:
    """
    Inventory client for the storefront REST API.

    Endpoints:
        GET {base_url}/stock/{id}     -> {"id": 1, "amount": 3}
        GET {base_url}/products/{id}  -> {"id": 1, "title": ..., "price": ..., "image": ...}
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        retries: int = 2,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            base_url: API root, e.g. http://localhost:3333
            timeout: Per-request timeout in seconds
            retries: Extra attempts after a transport error or 5xx
            client: Pre-built AsyncClient (not closed by this object)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def get_stock(self, product_id: int) -> Stock:
        data = await self._get_json(f"/stock/{product_id}")
        return self._parse(Stock, data, product_id)

    async def get_product(self, product_id: int) -> Product:
        data = await self._get_json(f"/products/{product_id}")
        return self._parse(Product, data, product_id)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this object created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpInventoryClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _parse(self, model, data, product_id: int):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Malformed {model.__name__} payload for product {product_id}: {e.error_count()} errors")
            raise InventoryError(f"Malformed {model.__name__} payload for product {product_id}") from e

    async def _get_json(self, path: str):
        """GET with retry. Returns decoded JSON or raises InventoryError."""
        url = f"{self.base_url}{path}"
        last_error: InventoryError | None = None

        for attempt in range(self.retries + 1):
            try:
                response = await self._client.get(url, timeout=self.timeout)
            except httpx.HTTPError as e:
                last_error = InventoryError(f"Request to {path} failed: {type(e).__name__}")
                logger.warning(f"Inventory request {path} failed (attempt {attempt + 1}): {type(e).__name__}")
            else:
                if response.is_success:
                    try:
                        return response.json()
                    except ValueError as e:
                        raise InventoryError(f"Invalid JSON from {path}") from e

                error_text = sanitize_string_for_logging(response.text or NO_RESPONSE_BODY, 200)
                if response.status_code == 404:
                    raise InventoryNotFoundError(f"Not found: {path}", status_code=404)
                if _is_permanent_error(response.status_code):
                    logger.warning(f"Inventory request {path} rejected: {response.status_code} - {error_text}")
                    raise InventoryError(
                        f"Request to {path} rejected with {response.status_code}",
                        status_code=response.status_code,
                    )

                last_error = InventoryError(
                    f"Request to {path} failed with {response.status_code}",
                    status_code=response.status_code,
                )
                logger.warning(
                    f"Inventory request {path} failed (attempt {attempt + 1}): {response.status_code} - {error_text}"
                )

            if attempt < self.retries:
                await asyncio.sleep(_calculate_backoff_delay(attempt))

        logger.error(f"Inventory request {path} failed after {self.retries + 1} attempts")
        raise last_error
