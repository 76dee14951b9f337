from decimal import Decimal

from core.config import settings
from core.exceptions import NotFoundError, ValidationError
from schemas.order_schemas import (CheckoutRequest, OrderCreate, OrderDetail, OrderLine,
                                   OrderPlacedResponse)
from storage.base import Storage
from utils.logger import get_logger, sanitize_log_data
from utils.pricing import PRICE_QUANT, check_tax_rate, compute_totals, quantize, same_amount

logger = get_logger(__name__)

CHECKOUT_ORDER_STATUS = "completed"


class OrderService:

    @staticmethod
    def price_lines(checkout: CheckoutRequest, storage: Storage) -> list[OrderLine]:
        """
        Check every cart line against the live catalog.

        The product must exist and the submitted unit price must equal the
        catalog price. All offending lines are reported together. The
        returned lines carry the catalog price as the purchase snapshot.
        """
        errors = []
        lines = []

        for index, item in enumerate(checkout.items):
            product = storage.get_product_by_id(item.id)

            if product is None:
                errors.append(f"items.{index}.id: Product {item.id} does not exist")
                continue

            if quantize(item.price, PRICE_QUANT) != product.price:
                errors.append(
                    f"items.{index}.price: Price {item.price} does not match "
                    f"current price {product.price} for product {item.id}"
                )
                continue

            lines.append(OrderLine(product_id=product.id, quantity=item.quantity, price=product.price))

        if errors:
            raise ValidationError(errors=errors)

        return lines

    @staticmethod
    def place_order(checkout: CheckoutRequest, storage: Storage,
                    tax_rate: Decimal | None = None) -> OrderPlacedResponse:
        """
        Turn a validated checkout payload into one order and its items.

        Flow:
        1. Re-price the cart lines against the catalog
        2. Recompute subtotal, tax and total server-side
        3. Reject the payload if the client's total disagrees by more than a cent
        4. Write order (status "completed", no user) and items in one unit
        """
        tax_rate = settings.TAX_RATE if tax_rate is None else check_tax_rate(tax_rate)

        logger.debug("Checkout received", extra={"payload": sanitize_log_data(checkout.model_dump(mode="json"))})

        lines = OrderService.price_lines(checkout, storage)
        totals = compute_totals(lines, tax_rate)

        if not same_amount(checkout.total, totals.total):
            logger.warning(
                "Checkout total mismatch",
                extra={"submitted_total": str(checkout.total), "computed_total": str(totals.total)}
            )
            raise ValidationError(errors=[
                f"total: Submitted total {checkout.total} does not match computed total {totals.total}"
            ])

        order, items = storage.create_order_with_items(
            OrderCreate(total=totals.total, status=CHECKOUT_ORDER_STATUS, user_id=None),
            lines
        )

        logger.info(
            "Order placed",
            extra={"order_id": order.id, "items": len(items), "total": str(order.total)}
        )

        return OrderPlacedResponse(order_id=order.id, status=order.status, total=order.total)

    @staticmethod
    def get_order(storage: Storage, order_id: int) -> OrderDetail:
        order = storage.get_order_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")

        items = storage.get_order_items_by_order_id(order_id)
        return OrderDetail(**order.model_dump(), items=items)
