# app/repos/product_repo.py
from decimal import Decimal
from typing import List

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.repos.db_errors import translate_db_errors


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    @translate_db_errors
    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    @translate_db_errors
    def create_product(self, name: str, price: Decimal) -> ProductModel:
        product = ProductModel(name=name, price=price)
        self.db.add(product)
        #flush zeby dostac id z bazy, commit robi serwis
        self.db.flush()
        return product

    @translate_db_errors
    def update_product(self, product: ProductModel, name: str, price: Decimal) -> ProductModel:
        product.name = name
        product.price = price
        self.db.flush()
        return product

    @translate_db_errors
    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.flush()

    @translate_db_errors
    def list_products(self, start: int, count: int) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.id).offset(start).limit(count)
        return list(self.db.execute(stmt).scalars().all())

    @translate_db_errors
    def search_products(self, query: str) -> List[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.name.contains(query, autoescape=True))
        return list(self.db.execute(stmt).scalars().all())

    @translate_db_errors
    def get_products_by_ids(self, ids: List[int]) -> List[ProductModel]:
        if not ids:
            return []
        stmt = select(ProductModel).where(ProductModel.id.in_(ids))
        return list(self.db.execute(stmt).scalars().all())

    @translate_db_errors
    def find_by_identity(
        self,
        product_id: int | None,
        name: str | None,
        price: Decimal | None,
    ) -> ProductModel | None:
        #dopasowanie po id ALBO po parze (name, price)
        conditions = []
        if product_id is not None:
            conditions.append(ProductModel.id == product_id)
        if name is not None and price is not None:
            conditions.append(and_(ProductModel.name == name, ProductModel.price == price))
        if not conditions:
            return None

        stmt = (
            select(ProductModel)
            .where(or_(*conditions))
            .order_by(ProductModel.id)
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()
