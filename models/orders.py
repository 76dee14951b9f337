from core.database import Base
from sqlalchemy.orm import relationship
from sqlalchemy import (Column, Integer, Numeric, String)
from .mixins import CreatedAtMixin

class Order(Base, CreatedAtMixin):
    __tablename__ = "orders"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    # plain column: guest orders carry no user and the id is not enforced
    user_id = Column(Integer, nullable=True)

    #relationships
    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")

    # scale 4 holds subtotal + tax exactly for rates with at most 2 decimal places
    total = Column(Numeric(12, 4), nullable=False)
    status = Column(String, nullable=False, default="pending")
