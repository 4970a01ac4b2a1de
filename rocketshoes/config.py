"""Cart settings loaded from environment variables."""
import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from rocketshoes.cart.storage import DEFAULT_STORAGE_KEY
from rocketshoes.errors import ConfigError

# Environment variable -> settings field
ENV_FIELDS = {
    "INVENTORY_API_URL": "inventory_api_url",
    "INVENTORY_TIMEOUT": "inventory_timeout",
    "INVENTORY_RETRIES": "inventory_retries",
    "CART_STORAGE_BACKEND": "storage_backend",
    "CART_STORAGE_PATH": "storage_path",
    "CART_STORAGE_KEY": "storage_key",
    "CART_LANGUAGE": "language",
    "UPSTASH_REDIS_REST_URL": "redis_url",
    "UPSTASH_REDIS_REST_TOKEN": "redis_token",
}


class CartSettings(BaseModel):
    """Runtime configuration for one cart session."""
    inventory_api_url: str = "http://localhost:3333"
    inventory_timeout: float = Field(default=5.0, gt=0)
    inventory_retries: int = Field(default=2, ge=0)
    storage_backend: Literal["memory", "file", "redis"] = "file"
    storage_path: str = "~/.rocketshoes/cart.json"
    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, min_length=1)
    language: str = "pt"
    redis_url: Optional[str] = None
    redis_token: Optional[str] = None


def load_settings(environ: Mapping[str, str] | None = None) -> CartSettings:
    """
    Build settings from environment variables.

    Unset and empty variables fall back to defaults.

    Raises:
        ConfigError: if a variable has an invalid value
    """
    environ = os.environ if environ is None else environ
    values = {
        field: environ[var]
        for var, field in ENV_FIELDS.items()
        if environ.get(var)
    }
    if "storage_backend" in values:
        values["storage_backend"] = values["storage_backend"].strip().lower()

    try:
        return CartSettings(**values)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise ConfigError(f"Invalid cart configuration: {fields}") from e
