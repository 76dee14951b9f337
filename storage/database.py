from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from core.database import Base
from core.exceptions import ConstraintViolation, NotFoundError, PersistenceError
import models
from schemas.auth_schemas import UserCreate, UserRecord
from schemas.order_schemas import (OrderCreate, OrderItemCreate, OrderItemRecord,
                                   OrderLine, OrderRecord)
from schemas.product_schemas import ProductCreate, ProductRecord
from storage.base import ALL_CATEGORIES, DEFAULT_ORDER_STATUS, Storage
from utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseStorage(Storage):
    """
    Relational store built on SQLAlchemy.

    Every operation runs in its own session. Identity comes from the
    database, timestamps from the database clock. Driver errors never leave
    this class: integrity failures become ConstraintViolation, anything else
    PersistenceError, and the session is rolled back in both cases.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @contextmanager
    def _session(self, integrity_message: str = "Constraint violation") -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except IntegrityError as exc:
            db.rollback()
            logger.warning(
                "Integrity error",
                extra={"error": str(exc.orig), "error_type": type(exc).__name__}
            )
            raise ConstraintViolation(integrity_message) from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(
                f"Database error: {str(exc)}",
                extra={"error_type": type(exc).__name__},
                exc_info=True
            )
            raise PersistenceError() from exc
        finally:
            db.close()

    def create_schema(self):
        Base.metadata.create_all(bind=self.engine)

    def bootstrap(self) -> int:
        """Create missing tables, then seed the catalog if it is empty."""
        try:
            self.create_schema()
        except SQLAlchemyError as exc:
            logger.error("Could not create schema", exc_info=True)
            raise PersistenceError() from exc
        return super().bootstrap()

    # Users

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        with self._session() as db:
            model = db.get(models.User, user_id)
            return UserRecord.model_validate(model) if model else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._session() as db:
            model = db.query(models.User).filter(models.User.username == username).one_or_none()
            return UserRecord.model_validate(model) if model else None

    def create_user(self, user: UserCreate) -> UserRecord:
        with self._session(integrity_message="Username already exists") as db:
            model = models.User(username=user.username, hashed_password=user.hashed_password)
            db.add(model)
            db.commit()
            db.refresh(model)
            return UserRecord.model_validate(model)

    # Products

    def get_products(self) -> list[ProductRecord]:
        with self._session() as db:
            rows = db.query(models.Product).order_by(models.Product.id).all()
            return [ProductRecord.model_validate(row) for row in rows]

    def get_product_by_id(self, product_id: int) -> Optional[ProductRecord]:
        with self._session() as db:
            model = db.get(models.Product, product_id)
            return ProductRecord.model_validate(model) if model else None

    def get_products_by_category(self, category: str) -> list[ProductRecord]:
        if category == ALL_CATEGORIES:
            return self.get_products()

        with self._session() as db:
            rows = (db.query(models.Product)
                    .filter(models.Product.category == category)
                    .order_by(models.Product.id)
                    .all())
            return [ProductRecord.model_validate(row) for row in rows]

    def get_featured_products(self) -> list[ProductRecord]:
        with self._session() as db:
            rows = (db.query(models.Product)
                    .filter(models.Product.featured == 1)
                    .order_by(models.Product.id)
                    .all())
            return [ProductRecord.model_validate(row) for row in rows]

    def create_product(self, product: ProductCreate) -> ProductRecord:
        with self._session() as db:
            model = models.Product(
                name=product.name,
                description=product.description,
                price=product.price,
                image=product.image,
                category=product.category,
                featured=product.featured if product.featured is not None else 0,
                rating=product.rating if product.rating is not None else 0,
                review_count=product.review_count if product.review_count is not None else 0,
                badge=product.badge
            )
            db.add(model)
            db.commit()
            db.refresh(model)
            return ProductRecord.model_validate(model)

    # Orders

    @staticmethod
    def _new_order(order: OrderCreate) -> models.Order:
        return models.Order(
            user_id=order.user_id,
            total=order.total,
            status=order.status or DEFAULT_ORDER_STATUS
        )

    def create_order(self, order: OrderCreate) -> OrderRecord:
        with self._session() as db:
            model = self._new_order(order)
            db.add(model)
            db.commit()
            db.refresh(model)
            return OrderRecord.model_validate(model)

    def get_order_by_id(self, order_id: int) -> Optional[OrderRecord]:
        with self._session() as db:
            model = db.get(models.Order, order_id)
            return OrderRecord.model_validate(model) if model else None

    def create_order_item(self, item: OrderItemCreate) -> OrderItemRecord:
        with self._session() as db:
            if db.get(models.Order, item.order_id) is None:
                raise NotFoundError(f"Order {item.order_id} not found")

            model = models.OrderItem(
                order_id=item.order_id,
                product_id=item.product_id,
                quantity=item.quantity,
                price=item.price
            )
            db.add(model)
            db.commit()
            db.refresh(model)
            return OrderItemRecord.model_validate(model)

    def get_order_items_by_order_id(self, order_id: int) -> list[OrderItemRecord]:
        with self._session() as db:
            rows = (db.query(models.OrderItem)
                    .filter(models.OrderItem.order_id == order_id)
                    .order_by(models.OrderItem.id)
                    .all())
            return [OrderItemRecord.model_validate(row) for row in rows]

    def create_order_with_items(self, order: OrderCreate,
                                lines: list[OrderLine]) -> tuple[OrderRecord, list[OrderItemRecord]]:
        with self._session() as db:
            order_model = self._new_order(order)
            db.add(order_model)
            # flush assigns the order id without committing
            db.flush()

            item_models = [
                models.OrderItem(
                    order_id=order_model.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.price
                )
                for line in lines
            ]
            db.add_all(item_models)
            db.commit()

            db.refresh(order_model)
            for item_model in item_models:
                db.refresh(item_model)

            logger.debug(
                "Order committed",
                extra={"order_id": order_model.id, "items": len(item_models)}
            )

            return (OrderRecord.model_validate(order_model),
                    [OrderItemRecord.model_validate(item) for item in item_models])
