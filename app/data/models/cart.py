#app/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Boolean, DateTime

from app.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)

    created_timestamp = Column(DateTime(timezone=True), nullable=False, default=_now)
    modification_timestamp = Column(DateTime(timezone=True), nullable=False, default=_now)
    checked_out = Column(Boolean, nullable=False, default=False)
