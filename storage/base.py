"""
Storage contract.

Routers and services only ever talk to a Storage. Two realizations exist
(storage.memory and storage.database) and callers must not be able to tell
them apart.
"""

from abc import ABC, abstractmethod
from typing import Optional

from schemas.auth_schemas import UserCreate, UserRecord
from schemas.order_schemas import (OrderCreate, OrderItemCreate, OrderItemRecord,
                                   OrderLine, OrderRecord)
from schemas.product_schemas import ProductCreate, ProductRecord
from storage.seed import seed_catalog

# Category value meaning "no filter"
ALL_CATEGORIES = "All Apps"

DEFAULT_ORDER_STATUS = "pending"


class Storage(ABC):

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def create_user(self, user: UserCreate) -> UserRecord:
        """Raises ConstraintViolation if the username is taken."""

    # Products
    @abstractmethod
    def get_products(self) -> list[ProductRecord]: ...

    @abstractmethod
    def get_product_by_id(self, product_id: int) -> Optional[ProductRecord]: ...

    @abstractmethod
    def get_products_by_category(self, category: str) -> list[ProductRecord]:
        """ALL_CATEGORIES returns the whole catalog."""

    @abstractmethod
    def get_featured_products(self) -> list[ProductRecord]: ...

    @abstractmethod
    def create_product(self, product: ProductCreate) -> ProductRecord:
        """Missing featured/rating/review_count default to 0, badge to None."""

    # Orders
    @abstractmethod
    def create_order(self, order: OrderCreate) -> OrderRecord:
        """Missing status defaults to "pending". created_at is set by the store."""

    @abstractmethod
    def get_order_by_id(self, order_id: int) -> Optional[OrderRecord]: ...

    @abstractmethod
    def create_order_item(self, item: OrderItemCreate) -> OrderItemRecord:
        """Raises NotFoundError if item.order_id does not exist."""

    @abstractmethod
    def get_order_items_by_order_id(self, order_id: int) -> list[OrderItemRecord]: ...

    @abstractmethod
    def create_order_with_items(self, order: OrderCreate,
                                lines: list[OrderLine]) -> tuple[OrderRecord, list[OrderItemRecord]]:
        """
        Write an order and one item per line as a single unit: either all
        rows exist afterwards or none do.
        """

    def bootstrap(self) -> int:
        """
        Prepare the store for serving. Seeds the catalog when it is empty and
        returns the number of products inserted.
        """
        return seed_catalog(self)
