"""
Error types and message keys for the cart core.

Failures inside a cart operation are carried as ``CartFailure`` values and
turned into one user-facing notification at the public boundary. The
exception classes below are only raised where no such boundary exists:
startup, configuration and the inventory client layer.
"""
from enum import Enum


class CartFailure(str, Enum):
    """Why a cart operation did not commit."""

    VALIDATION = "validation"
    STOCK_INSUFFICIENT = "stock_insufficient"
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"


# Notification keys (resolved through rocketshoes.i18n)
MSG_ADD_FAILED = "cart.add_failed"
MSG_REMOVE_FAILED = "cart.remove_failed"
MSG_UPDATE_FAILED = "cart.update_failed"
MSG_OUT_OF_STOCK = "cart.out_of_stock"


class RocketShoesError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(RocketShoesError):
    """Invalid or missing configuration."""


class CartLoadError(RocketShoesError):
    """Persisted cart snapshot exists but cannot be decoded."""


class InventoryError(RocketShoesError):
    """Inventory service call failed (transport, HTTP status or payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InventoryNotFoundError(InventoryError):
    """Inventory service has no record for the requested id."""
