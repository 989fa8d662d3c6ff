# app/repos/cart_repo.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_product import CartProductModel
from app.repos.db_errors import translate_db_errors

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    @translate_db_errors
    def get_cart(self, cart_id: int) -> CartModel | None:
        #populate_existing - zawsze swiezy stan z bazy, nie z identity map
        return self.db.get(CartModel, cart_id, populate_existing=True)

    @translate_db_errors
    def create_cart(self) -> CartModel:
        cart = CartModel(checked_out=False)
        self.db.add(cart)
        self.db.flush()
        return cart

    @translate_db_errors
    def update_cart(self, cart_id: int, checked_out: bool) -> int:
        """Zwraca rowcount - 0 oznacza ze wiersz koszyka zniknal."""
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id)
            .values(
                checked_out=checked_out,
                modification_timestamp=datetime.now(timezone.utc),
            )
        )
        return result.rowcount

    @translate_db_errors
    def get_product_ids(self, cart_id: int) -> List[int]:
        stmt = select(CartProductModel.product_id).where(CartProductModel.cart_id == cart_id)
        return list(self.db.execute(stmt).scalars().all())

    @translate_db_errors
    def link_products(self, cart_id: int, product_ids: List[int]) -> None:
        if not product_ids:
            return

        # dict.fromkeys - usuwa powtorzenia z zachowaniem kolejnosci
        rows = [{"cart_id": cart_id, "product_id": pid} for pid in dict.fromkeys(product_ids)]

        dialect = self.db.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect)

        if insert_fn is not None:
            # INSERT ... ON CONFLICT DO NOTHING
            stmt = insert_fn(CartProductModel).values(rows).on_conflict_do_nothing()
            self.db.execute(stmt)
            return

        existing = set(self.get_product_ids(cart_id))
        missing = [r for r in rows if r["product_id"] not in existing]
        if missing:
            self.db.execute(insert(CartProductModel), missing)

    @translate_db_errors
    def unlink_products(self, cart_id: int, product_ids: List[int]) -> int:
        if not product_ids:
            return 0
        result = self.db.execute(
            delete(CartProductModel).where(
                CartProductModel.cart_id == cart_id,
                CartProductModel.product_id.in_(product_ids),
            )
        )
        return result.rowcount

    @translate_db_errors
    def clear_cart(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartProductModel).where(CartProductModel.cart_id == cart_id)
        )
        return result.rowcount
