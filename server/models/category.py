# server/models/category.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from . import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    item_count = Column(Integer, default=0, nullable=False)
    image = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)
