from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ConstraintViolation, NotFoundError, ValidationError
from schemas.order_schemas import CheckoutRequest, OrderCreate, OrderLine
from services.order_service import OrderService
from tests.factories import make_cart_line, make_checkout_payload
from utils.pricing import compute_totals


def checkout(items=None, **overrides) -> CheckoutRequest:
    return CheckoutRequest.model_validate(make_checkout_payload(items=items, **overrides))


def test_single_line_order(storage):
    placed = OrderService.place_order(checkout(), storage)

    assert placed.status == "completed"
    assert placed.total == Decimal("53.4893")

    order = storage.get_order_by_id(placed.order_id)
    assert order.user_id is None
    assert order.total == Decimal("53.4893")

    items = storage.get_order_items_by_order_id(placed.order_id)
    assert len(items) == 1
    assert items[0].product_id == 1
    assert items[0].quantity == 1
    assert items[0].price == Decimal("49.99")


def test_n_lines_make_one_order_and_n_items(storage):
    items = [
        make_cart_line(1, 49.99, 2),
        make_cart_line(2, 79.99, 1, "DataViz Analytics"),
        make_cart_line(6, 89.99, 3, "Project Manager Pro"),
    ]
    placed = OrderService.place_order(checkout(items), storage)

    order_items = storage.get_order_items_by_order_id(placed.order_id)
    assert len(order_items) == 3
    assert storage.get_order_by_id(placed.order_id + 1) is None

    totals = compute_totals(order_items, Decimal("0.07"))
    assert totals.total == placed.total


def test_empty_cart_makes_empty_order(storage):
    placed = OrderService.place_order(checkout([]), storage)

    assert placed.total == 0
    assert storage.get_order_items_by_order_id(placed.order_id) == []


def test_unknown_product_rejected_without_side_effects(storage):
    items = [make_cart_line(1), make_cart_line(99, 10.00, 1, "Ghost App")]

    with pytest.raises(ValidationError) as exc_info:
        OrderService.place_order(checkout(items), storage)

    assert "items.1.id" in exc_info.value.message
    assert storage.get_order_by_id(1) is None


def test_tampered_price_rejected(storage):
    items = [make_cart_line(1, 0.99), make_cart_line(2, 1.00, 1, "DataViz Analytics")]

    with pytest.raises(ValidationError) as exc_info:
        OrderService.place_order(checkout(items), storage)

    # every offending line is reported
    assert "items.0.price" in exc_info.value.message
    assert "items.1.price" in exc_info.value.message
    assert storage.get_order_by_id(1) is None


def test_total_mismatch_rejected(storage):
    with pytest.raises(ValidationError) as exc_info:
        OrderService.place_order(checkout(total=1.00), storage)

    assert "total" in exc_info.value.message
    assert storage.get_order_by_id(1) is None


def test_float_noise_in_client_total_is_accepted(storage):
    placed = OrderService.place_order(checkout(total=53.489300000000004), storage)
    assert placed.total == Decimal("53.4893")


def test_tax_rate_is_configurable(storage):
    placed = OrderService.place_order(checkout(total=59.99), storage, tax_rate=Decimal("0.2"))
    assert placed.total == Decimal("59.988")


def test_get_order_with_items(storage):
    placed = OrderService.place_order(checkout(), storage)

    detail = OrderService.get_order(storage, placed.order_id)
    assert detail.id == placed.order_id
    assert detail.status == "completed"
    assert len(detail.items) == 1


def test_get_missing_order(storage):
    with pytest.raises(NotFoundError):
        OrderService.get_order(storage, 404)


def test_database_order_write_is_all_or_nothing(db_storage):
    lines = [
        OrderLine(product_id=1, quantity=1, price=Decimal("49.99")),
        # product_id is NOT NULL: the second insert fails inside the transaction
        OrderLine.model_construct(product_id=None, quantity=1, price=Decimal("79.99")),
    ]

    with pytest.raises(ConstraintViolation):
        db_storage.create_order_with_items(OrderCreate(total=Decimal("1")), lines)

    assert db_storage.get_order_by_id(1) is None
    with db_storage.engine.connect() as connection:
        assert connection.exec_driver_sql("SELECT COUNT(*) FROM order_items").scalar() == 0


def test_memory_order_write_is_all_or_nothing(memory_storage):
    lines = [
        OrderLine(product_id=1, quantity=1, price=Decimal("49.99")),
        OrderLine.model_construct(product_id=None, quantity=1, price=Decimal("79.99")),
    ]

    with pytest.raises(PydanticValidationError):
        memory_storage.create_order_with_items(OrderCreate(total=Decimal("1")), lines)

    assert memory_storage.get_order_by_id(1) is None
    assert memory_storage.get_order_items_by_order_id(1) == []


def test_stored_total_matches_lines_for_other_tax_rate(storage):
    placed = OrderService.place_order(checkout(total=53.9892), storage, tax_rate=Decimal("0.08"))

    items = storage.get_order_items_by_order_id(placed.order_id)
    assert placed.total == Decimal("53.9892")
    assert storage.get_order_by_id(placed.order_id).total == compute_totals(items, Decimal("0.08")).total


def test_tax_rate_that_cannot_be_stored_exactly_is_refused(storage):
    with pytest.raises(ValueError):
        OrderService.place_order(checkout(total=54.114175), storage, tax_rate=Decimal("0.0825"))

    assert storage.get_order_by_id(1) is None
