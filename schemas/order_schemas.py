from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from pydantic import EmailStr, Field, field_validator
from schemas.base import CamelModel
from utils.pricing import to_decimal


def _exact_decimal(value):
    # JSON numbers arrive as floats; take their shortest repr, not the binary expansion
    if isinstance(value, float):
        return to_decimal(value)
    return value


class CartItem(CamelModel):
    """One cart line as the client holds it. id is the product id."""
    id: int
    name: str
    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1)
    image: str

    @field_validator('price', mode='before')
    @classmethod
    def price_from_float(cls, value):
        return _exact_decimal(value)


class CheckoutRequest(CamelModel):
    first_name: str
    last_name: str
    email: EmailStr
    card_number: str
    exp_date: str
    cvv: str
    items: list[CartItem]
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    @field_validator('subtotal', 'tax', 'total', mode='before')
    @classmethod
    def totals_from_float(cls, value):
        return _exact_decimal(value)

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, value):
        if not value.strip():
            raise ValueError('First name is required')
        return value

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, value):
        if not value.strip():
            raise ValueError('Last name is required')
        return value

    @field_validator('card_number')
    @classmethod
    def validate_card_number(cls, value):
        # shape only, cards are never charged
        if not 13 <= len(value) <= 19:
            raise ValueError('Valid card number is required')
        return value

    @field_validator('exp_date')
    @classmethod
    def validate_exp_date(cls, value):
        if len(value) < 4:
            raise ValueError('Valid expiration date is required')
        return value

    @field_validator('cvv')
    @classmethod
    def validate_cvv(cls, value):
        if not 3 <= len(value) <= 4:
            raise ValueError('Valid CVV is required')
        return value


class OrderCreate(CamelModel):
    total: Decimal
    status: Optional[str] = None
    user_id: Optional[int] = None


class OrderLine(CamelModel):
    """An order item before it belongs to an order."""
    product_id: int
    quantity: int = Field(ge=1)
    price: Decimal


class OrderItemCreate(OrderLine):
    order_id: int


class OrderRecord(CamelModel):
    id: int
    user_id: Optional[int] = None
    total: Decimal
    status: str
    created_at: datetime

    @field_validator('created_at')
    @classmethod
    def created_at_in_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without a zone; they were written in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class OrderItemRecord(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal


class OrderDetail(OrderRecord):
    items: list[OrderItemRecord]


class OrderPlacedResponse(CamelModel):
    order_id: int
    status: str
    total: Decimal
