"""Cart manager: owns the session cart and keeps its stored snapshot in sync."""
from typing import Callable, Optional, Union

from rocketshoes.errors import (
    CartFailure,
    MSG_ADD_FAILED,
    MSG_OUT_OF_STOCK,
    MSG_REMOVE_FAILED,
    MSG_UPDATE_FAILED,
)
from rocketshoes.i18n import get_text
from rocketshoes.inventory import InventoryClient
from rocketshoes.logging import get_logger
from rocketshoes.models import Product, Stock
from rocketshoes.notifications import Notifier
from .models import CartItem, deserialize_cart, serialize_cart
from .storage import CartStore

logger = get_logger(__name__)

Cart = tuple[CartItem, ...]
CartListener = Callable[[Cart], None]

# A mutation either yields the next cart or the reason it did not
Outcome = Union[Cart, CartFailure]


class CartManager:
    """
    Session cart with stock-checked mutations.

    Mutations never raise for business or network failures: they report a
    single message through the notifier and leave the cart untouched.
    Success is visible only through ``cart``.

    Only one mutation may run at a time. There is no internal lock; two
    overlapping ``add_product`` calls can both start from the same snapshot
    and the later commit wins.
    """

    def __init__(
        self,
        inventory: InventoryClient,
        store: CartStore,
        notifier: Notifier,
        language: str = "pt",
    ):
        """
        Raises:
            CartLoadError: if the store holds an undecodable snapshot
        """
        self.inventory = inventory
        self.store = store
        self.notifier = notifier
        self.language = language
        self._listeners: list[CartListener] = []
        self._cart: Cart = deserialize_cart(store.read())
        logger.debug(f"Cart loaded with {len(self._cart)} lines")

    @property
    def cart(self) -> Cart:
        """Current cart (immutable snapshot)."""
        return self._cart

    def get_cart(self) -> Cart:
        """Current cart (same snapshot as ``cart``)."""
        return self._cart

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Call ``listener(cart)`` after every commit.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Public mutations
    # ------------------------------------------------------------------

    async def add_product(self, product_id: int) -> None:
        """Add one unit of ``product_id``, fetching its catalog entry if new."""
        outcome = await self._plan_add(product_id)
        self._finish("add", product_id, outcome, MSG_ADD_FAILED)

    def remove_product(self, product_id: int) -> None:
        """Drop the whole line for ``product_id``."""
        outcome = self._plan_remove(product_id)
        self._finish("remove", product_id, outcome, MSG_REMOVE_FAILED)

    async def update_product_amount(self, product_id: int, amount: int) -> None:
        """
        Move the line's amount one unit toward ``amount``.

        The line changes by exactly +1 or -1 per call, never jumping to the
        requested value.
        """
        outcome = await self._plan_update(product_id, amount)
        self._finish("update", product_id, outcome, MSG_UPDATE_FAILED)

    # ------------------------------------------------------------------
    # Planning: compute the next cart without touching state
    # ------------------------------------------------------------------

    async def _plan_add(self, product_id: int) -> Outcome:
        cart = self._cart
        index = _find_line(cart, product_id)

        stock = await self._fetch_stock(product_id)
        if stock is None:
            return CartFailure.TRANSPORT

        if index is not None:
            line = cart[index]
            if line.amount + 1 > stock.amount:
                return CartFailure.STOCK_INSUFFICIENT
            return _replace_line(cart, index, line.with_amount(line.amount + 1))

        if stock.amount < 1:
            return CartFailure.STOCK_INSUFFICIENT

        product = await self._fetch_product(product_id)
        if product is None:
            return CartFailure.TRANSPORT
        if product.id != product_id:
            # A mismatched catalog entry would duplicate an existing line
            logger.warning(f"Product lookup for {product_id} returned product {product.id}")
            return CartFailure.TRANSPORT

        return cart + (CartItem.from_product(product, amount=1),)

    def _plan_remove(self, product_id: int) -> Outcome:
        cart = self._cart
        remaining = tuple(item for item in cart if item.id != product_id)
        if not len(remaining) < len(cart):
            return CartFailure.NOT_FOUND
        return remaining

    async def _plan_update(self, product_id: int, amount: int) -> Outcome:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            return CartFailure.VALIDATION

        cart = self._cart
        stock = await self._fetch_stock(product_id)
        if stock is None:
            return CartFailure.TRANSPORT

        index = _find_line(cart, product_id)
        if index is None:
            # Nothing to change; still committed so the call is total
            return cart

        current = cart[index].amount
        if current < amount <= stock.amount:
            return _replace_line(cart, index, cart[index].with_amount(current + 1))
        if amount < current and amount <= stock.amount:
            return _replace_line(cart, index, cart[index].with_amount(current - 1))
        return CartFailure.STOCK_INSUFFICIENT

    # ------------------------------------------------------------------
    # Inventory lookups
    # ------------------------------------------------------------------

    async def _fetch_stock(self, product_id: int) -> Optional[Stock]:
        try:
            return await self.inventory.get_stock(product_id)
        except Exception as e:
            logger.warning(f"Stock lookup for product {product_id} failed: {type(e).__name__}: {e}")
            return None

    async def _fetch_product(self, product_id: int) -> Optional[Product]:
        try:
            return await self.inventory.get_product(product_id)
        except Exception as e:
            logger.warning(f"Product lookup for product {product_id} failed: {type(e).__name__}: {e}")
            return None

    # ------------------------------------------------------------------
    # Commit / report
    # ------------------------------------------------------------------

    def _finish(self, operation: str, product_id: int, outcome: Outcome, generic_key: str) -> None:
        """Commit a planned cart or turn a failure into one notification."""
        if isinstance(outcome, CartFailure):
            self._report(operation, product_id, outcome, generic_key)
            return

        if not self._commit(outcome):
            self._report(operation, product_id, CartFailure.TRANSPORT, generic_key)

    def _commit(self, new_cart: Cart) -> bool:
        """
        Persist then swap in ``new_cart``.

        No await between the two steps, so no other task can observe one
        without the other. A failed write leaves the in-memory cart as is.
        """
        payload = serialize_cart(new_cart)
        try:
            self.store.write(payload)
        except Exception as e:
            logger.error(f"Failed to persist cart: {type(e).__name__}: {e}")
            return False

        self._cart = new_cart
        logger.debug(f"Cart committed with {len(new_cart)} lines")

        for listener in list(self._listeners):
            try:
                listener(new_cart)
            except Exception:
                logger.exception("Cart listener failed")
        return True

    def _report(self, operation: str, product_id: int, failure: CartFailure, generic_key: str) -> None:
        logger.warning(f"Cart {operation} for product {product_id} rejected: {failure.value}")
        key = MSG_OUT_OF_STOCK if failure is CartFailure.STOCK_INSUFFICIENT else generic_key
        self.notifier.error(get_text(key, self.language))


def _find_line(cart: Cart, product_id: int) -> Optional[int]:
    """Index of the line for ``product_id``, or None."""
    for index, item in enumerate(cart):
        if item.id == product_id:
            return index
    return None


def _replace_line(cart: Cart, index: int, item: CartItem) -> Cart:
    return cart[:index] + (item,) + cart[index + 1:]
