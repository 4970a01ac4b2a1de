"""Catalog models - Pydantic schemas for inventory service payloads."""
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from rocketshoes.money import parse_decimal as _parse_decimal


class Product(BaseModel):
    """Product as returned by ``GET /products/{id}``."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    title: str
    price: Decimal
    # json-server fixtures call it "image"; some clients send "imageUrl"
    image_url: str = Field(
        default="",
        validation_alias=AliasChoices("image", "imageUrl", "image_url"),
    )

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _parse_decimal(v)


class Stock(BaseModel):
    """Available quantity as returned by ``GET /stock/{id}``."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    amount: int = Field(ge=0)
