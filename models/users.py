from core.database import Base
from sqlalchemy import (Column, Integer, String)

class User(Base):
    __tablename__ = "users"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    username = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
