import itertools
import threading
from datetime import datetime, timezone
from typing import Optional

from core.exceptions import ConstraintViolation, NotFoundError
from schemas.auth_schemas import UserCreate, UserRecord
from schemas.order_schemas import (OrderCreate, OrderItemCreate, OrderItemRecord,
                                   OrderLine, OrderRecord)
from schemas.product_schemas import ProductCreate, ProductRecord
from storage.base import ALL_CATEGORIES, DEFAULT_ORDER_STATUS, Storage
from storage.seed import seed_catalog
from utils.logger import get_logger
from utils.pricing import PRICE_QUANT, RATING_QUANT, TOTAL_QUANT, quantize

logger = get_logger(__name__)


class MemoryStorage(Storage):
    """
    Process-local store backed by dicts.

    Ids come from one counter per entity, starting at 1. A single lock
    guards counters and maps so concurrent requests in the threadpool see
    consistent state. Records handed out are copies.

    Decimal fields are quantized to the same scale the relational columns
    use, so both stores return identical values.
    """

    def __init__(self, seed: bool = True):
        self._lock = threading.RLock()

        self._users: dict[int, UserRecord] = {}
        self._products: dict[int, ProductRecord] = {}
        self._orders: dict[int, OrderRecord] = {}
        self._order_items: dict[int, OrderItemRecord] = {}

        self._user_ids = itertools.count(1)
        self._product_ids = itertools.count(1)
        self._order_ids = itertools.count(1)
        self._order_item_ids = itertools.count(1)

        if seed:
            seed_catalog(self)

    # Users

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user.model_copy()
        return None

    def create_user(self, user: UserCreate) -> UserRecord:
        with self._lock:
            if any(existing.username == user.username for existing in self._users.values()):
                raise ConstraintViolation("Username already exists")

            record = UserRecord(
                id=next(self._user_ids),
                username=user.username,
                hashed_password=user.hashed_password
            )
            self._users[record.id] = record
            return record.model_copy()

    # Products

    def get_products(self) -> list[ProductRecord]:
        with self._lock:
            return [product.model_copy() for product in self._products.values()]

    def get_product_by_id(self, product_id: int) -> Optional[ProductRecord]:
        with self._lock:
            product = self._products.get(product_id)
            return product.model_copy() if product else None

    def get_products_by_category(self, category: str) -> list[ProductRecord]:
        if category == ALL_CATEGORIES:
            return self.get_products()

        with self._lock:
            return [product.model_copy() for product in self._products.values()
                    if product.category == category]

    def get_featured_products(self) -> list[ProductRecord]:
        with self._lock:
            return [product.model_copy() for product in self._products.values()
                    if product.featured == 1]

    def create_product(self, product: ProductCreate) -> ProductRecord:
        with self._lock:
            record = ProductRecord(
                id=next(self._product_ids),
                name=product.name,
                description=product.description,
                price=quantize(product.price, PRICE_QUANT),
                image=product.image,
                category=product.category,
                featured=product.featured if product.featured is not None else 0,
                rating=quantize(product.rating if product.rating is not None else 0, RATING_QUANT),
                review_count=product.review_count if product.review_count is not None else 0,
                badge=product.badge
            )
            self._products[record.id] = record
            return record.model_copy()

    # Orders

    # Records are built with id 0 and numbered only once they have validated,
    # so a rejected write never uses up an id.

    def _build_order(self, order: OrderCreate) -> OrderRecord:
        return OrderRecord(
            id=0,
            user_id=order.user_id,
            total=quantize(order.total, TOTAL_QUANT),
            status=order.status or DEFAULT_ORDER_STATUS,
            created_at=datetime.now(timezone.utc)
        )

    def _build_order_item(self, order_id: int, line: OrderLine) -> OrderItemRecord:
        return OrderItemRecord(
            id=0,
            order_id=order_id,
            product_id=line.product_id,
            quantity=line.quantity,
            price=quantize(line.price, PRICE_QUANT)
        )

    def create_order(self, order: OrderCreate) -> OrderRecord:
        with self._lock:
            record = self._build_order(order)
            record = record.model_copy(update={"id": next(self._order_ids)})
            self._orders[record.id] = record
            return record.model_copy()

    def get_order_by_id(self, order_id: int) -> Optional[OrderRecord]:
        with self._lock:
            order = self._orders.get(order_id)
            return order.model_copy() if order else None

    def create_order_item(self, item: OrderItemCreate) -> OrderItemRecord:
        with self._lock:
            if item.order_id not in self._orders:
                raise NotFoundError(f"Order {item.order_id} not found")

            record = self._build_order_item(item.order_id, item)
            record = record.model_copy(update={"id": next(self._order_item_ids)})
            self._order_items[record.id] = record
            return record.model_copy()

    def get_order_items_by_order_id(self, order_id: int) -> list[OrderItemRecord]:
        with self._lock:
            return [item.model_copy() for item in self._order_items.values()
                    if item.order_id == order_id]

    def create_order_with_items(self, order: OrderCreate,
                                lines: list[OrderLine]) -> tuple[OrderRecord, list[OrderItemRecord]]:
        with self._lock:
            # Build every record before taking ids or touching the maps so a
            # failure part-way leaves nothing behind.
            order_record = self._build_order(order)
            item_records = [self._build_order_item(0, line) for line in lines]

            order_record = order_record.model_copy(update={"id": next(self._order_ids)})
            item_records = [
                item.model_copy(update={"id": next(self._order_item_ids), "order_id": order_record.id})
                for item in item_records
            ]

            self._orders[order_record.id] = order_record
            for item in item_records:
                self._order_items[item.id] = item

            logger.debug(
                "Order stored in memory",
                extra={"order_id": order_record.id, "items": len(item_records)}
            )

            return order_record.model_copy(), [item.model_copy() for item in item_records]
