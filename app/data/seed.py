# app/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.database import SessionLocal, unit_of_work
from app.data.models.product import ProductModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    ("Keyboard", Decimal("199.99")),
    ("Mouse", Decimal("49.50")),
    ("Monitor", Decimal("899.00")),
]


def seed(db: Session | None = None) -> int:
    """Wstawia przykladowe produkty jesli katalog jest pusty. Zwraca liczbe dodanych."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.execute(select(ProductModel.id).limit(1)).first():
            return 0
        with unit_of_work(db):
            db.add_all(ProductModel(name=name, price=price) for name, price in PRODUCTS)
        logger.info(f"Seeded {len(PRODUCTS)} products")
        return len(PRODUCTS)
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    seed()
