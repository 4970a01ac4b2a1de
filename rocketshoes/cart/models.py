"""Cart models and snapshot (de)serialization."""
import json
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable

from rocketshoes.errors import CartLoadError
from rocketshoes.models import Product
from rocketshoes.money import round_money, multiply, parse_decimal


@dataclass(frozen=True)
class CartItem:
    """One product line in the cart."""
    id: int
    title: str
    price: Decimal
    image_url: str
    amount: int = 1

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "price", parse_decimal(self.price))
        if self.amount < 1:
            raise ValueError("amount must be >= 1")

    @property
    def subtotal(self) -> Decimal:
        """Price for all units of this line."""
        return round_money(multiply(self.price, self.amount))

    def with_amount(self, amount: int) -> "CartItem":
        """Copy of this line with a different amount."""
        return replace(self, amount=amount)

    @classmethod
    def from_product(cls, product: Product, amount: int = 1) -> "CartItem":
        """Start a new cart line from a catalog product."""
        return cls(
            id=product.id,
            title=product.title,
            price=product.price,
            image_url=product.image_url,
            amount=amount,
        )

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "price": str(self.price),
            "image": self.image_url,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from the persisted JSON shape."""
        return cls(
            id=int(data["id"]),
            title=data["title"],
            price=parse_decimal(data["price"]),
            image_url=data.get("image", data.get("imageUrl", "")),
            amount=int(data["amount"]),
        )


def serialize_cart(cart: Iterable[CartItem]) -> str:
    """Encode a cart as the JSON array stored in the cart slot."""
    return json.dumps([item.to_dict() for item in cart])


def deserialize_cart(payload: str | None) -> tuple[CartItem, ...]:
    """
    Decode a stored cart snapshot.

    An absent slot is an empty cart. A payload that is present but does not
    decode to a list of cart lines raises ``CartLoadError``.
    """
    if not payload:
        return ()

    try:
        data = json.loads(payload)
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        items = tuple(CartItem.from_dict(entry) for entry in data)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise CartLoadError(f"Stored cart is corrupted: {e}") from e

    ids = [item.id for item in items]
    if len(ids) != len(set(ids)):
        raise CartLoadError("Stored cart contains duplicate product ids")

    return items


def cart_size(cart: Iterable[CartItem]) -> int:
    """Number of distinct product lines."""
    return sum(1 for _ in cart)


def cart_total(cart: Iterable[CartItem]) -> Decimal:
    """Sum of line subtotals."""
    return round_money(sum((item.subtotal for item in cart), Decimal("0")))
