from core.database import Base
from sqlalchemy import (Column, Integer, String, Numeric)

class Product(Base):
    __tablename__ = "products"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    featured = Column(Integer, default=0)
    rating = Column(Numeric(3, 1), default=0)
    review_count = Column(Integer, default=0)
    badge = Column(String, nullable=True)
