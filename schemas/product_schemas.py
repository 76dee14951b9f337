from decimal import Decimal
from typing import Optional
from pydantic import Field
from schemas.base import CamelModel


class ProductCreate(CamelModel):
    name: str
    description: str
    price: Decimal = Field(max_digits=10, decimal_places=2, ge=0)
    image: str
    category: str
    featured: Optional[int] = None
    rating: Optional[Decimal] = Field(default=None, max_digits=3, decimal_places=1)
    review_count: Optional[int] = None
    badge: Optional[str] = None


class ProductRecord(CamelModel):
    id: int
    name: str
    description: str
    price: Decimal
    image: str
    category: str
    featured: int
    rating: Decimal
    review_count: int
    badge: Optional[str] = None
