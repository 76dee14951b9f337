from core.database import Base
from sqlalchemy import (Column, Integer, ForeignKey, Numeric)
from sqlalchemy.orm import relationship

class OrderItem(Base):
    __tablename__ = "order_items"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    #fk
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    # not a foreign key: line items outlive catalog changes
    product_id = Column(Integer, nullable=False)

    #relationships
    order = relationship("Order", back_populates="items")

    quantity = Column(Integer, nullable=False)
    # unit price snapshot, independent of later catalog changes
    price = Column(Numeric(10, 2), nullable=False)
