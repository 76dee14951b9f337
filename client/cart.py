"""
Shopper-side cart state.

A Cart holds the lines the shopper picked, derives money totals with the
same arithmetic the server uses, and writes the whole line list to a
CartStore after every change.
"""

from decimal import Decimal
from pathlib import Path
from typing import Iterator, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from schemas.order_schemas import CartItem
from schemas.product_schemas import ProductRecord
from utils.logger import get_logger
from utils.pricing import DEFAULT_TAX_RATE, Totals, check_tax_rate, compute_totals

logger = get_logger(__name__)

_LINES = TypeAdapter(list[CartItem])


def cart_item_from_product(product: ProductRecord) -> CartItem:
    return CartItem(
        id=product.id,
        name=product.name,
        price=product.price,
        quantity=1,
        image=product.image
    )


class CartStore:
    """
    JSON file holding the cart lines between sessions.

    A missing, unreadable or corrupt file loads as an empty cart.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> list[CartItem]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Failed to read saved cart", extra={"path": str(self.path), "error": str(exc)})
            return []

        try:
            return _LINES.validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning(
                "Saved cart is corrupt, starting empty",
                extra={"path": str(self.path), "errors": exc.error_count()}
            )
            return []

    def save(self, items: list[CartItem]) -> bool:
        """Write the lines out. A failed write is logged and the cart carries on in memory."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(_LINES.dump_json(items, by_alias=True))
        except OSError as exc:
            logger.warning("Failed to save cart", extra={"path": str(self.path), "error": str(exc)})
            return False
        return True


class Cart:

    def __init__(self, store: Optional[CartStore] = None, tax_rate: Decimal = DEFAULT_TAX_RATE):
        self.store = store
        self.tax_rate = check_tax_rate(tax_rate)
        # loaded once, at session start
        self._items: list[CartItem] = store.load() if store else []

    @property
    def items(self) -> list[CartItem]:
        return [item.model_copy() for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)

    def _persist(self):
        if self.store is not None:
            self.store.save(self._items)

    def add_item(self, item: CartItem) -> CartItem:
        """
        Add one unit of item. A line for the same product gets its quantity
        bumped by one; otherwise a new line with quantity 1 goes at the end.
        The incoming quantity is ignored.
        """
        for index, existing in enumerate(self._items):
            if existing.id == item.id:
                line = existing.model_copy(update={"quantity": existing.quantity + 1})
                self._items[index] = line
                logger.debug("Cart quantity increased", extra={"product_id": item.id, "quantity": line.quantity})
                break
        else:
            line = item.model_copy(update={"quantity": 1})
            self._items.append(line)
            logger.debug("Cart line added", extra={"product_id": item.id})

        self._persist()
        return line.model_copy()

    def remove_item(self, product_id: int) -> bool:
        """Drop the line for product_id. Returns False if there was none."""
        remaining = [item for item in self._items if item.id != product_id]
        if len(remaining) == len(self._items):
            return False

        self._items = remaining
        self._persist()
        return True

    def clear(self):
        self._items = []
        self._persist()

    def compute_totals(self) -> Totals:
        # never cached: lines change between calls
        return compute_totals(self._items, self.tax_rate)
