# app/services/product_service.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from app.data.database import unit_of_work
from app.data.models.product import ProductModel
from app.domain.errors import InvalidArgument, NotFound
from app.repos.product_repo import ProductRepo
from app.utils.settings import DEFAULT_PAGE_SIZE
from app.utils.logging import get_logger

logger = get_logger(__name__)


def product_to_dict(product: ProductModel) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
    }


def to_money(price: Decimal | None) -> Decimal | None:
    #kolumna to NUMERIC(10, 2) - zaokraglamy tak jak baza, zanim cokolwiek zapiszemy lub porownamy
    if price is None:
        return None
    return Decimal(price).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _parse_non_negative(value, name: str, default: int) -> int:
    #brak parametru -> wartosc domyslna
    if value is None or value == "":
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise InvalidArgument(f"Invalid {name} parameter")
    if parsed < 0:
        raise InvalidArgument(f"Invalid {name} parameter")
    return parsed


class ProductService:
    """
    Katalog produktow: CRUD, wyszukiwanie, pobieranie po liscie id
    oraz insert-or-get uzywany przy dodawaniu produktow do koszyka.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)

    #query
    def get_product(self, product_id: int) -> Dict[str, Any]:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return product_to_dict(product)

    def list_products(self, start=None, count=None) -> List[Dict[str, Any]]:
        count = _parse_non_negative(count, "count", DEFAULT_PAGE_SIZE)
        start = _parse_non_negative(start, "start", 0)
        return [product_to_dict(p) for p in self.repo.list_products(start, count)]

    def search_products(self, query: str | None) -> List[Dict[str, Any]]:
        if not query:
            raise InvalidArgument("Missing search query")
        return [product_to_dict(p) for p in self.repo.search_products(query)]

    def get_products_by_ids(self, ids: List[int]) -> List[Dict[str, Any]]:
        if not ids:
            return []
        return [product_to_dict(p) for p in self.repo.get_products_by_ids(ids)]

    #commands
    def create_product(self, name: str, price: Decimal) -> Dict[str, Any]:
        with unit_of_work(self.db):
            product = self.repo.create_product(name, to_money(price))
            created = product_to_dict(product)

        logger.info(f"Utworzono produkt {created['id']} ({name}, {price})")
        return created

    def update_product(self, product_id: int, name: str, price: Decimal) -> Dict[str, Any]:
        with unit_of_work(self.db):
            product = self.repo.get_product(product_id)
            if not product:
                raise NotFound("Product not found")
            updated = product_to_dict(self.repo.update_product(product, name, to_money(price)))

        logger.info(f"Zaktualizowano produkt {product_id}")
        return updated

    def delete_product(self, product_id: int) -> None:
        with unit_of_work(self.db):
            product = self.repo.get_product(product_id)
            if not product:
                raise NotFound("Product not found")
            self.repo.delete_product(product)

        logger.info(f"Usunieto produkt {product_id}")

    def insert_or_get(self, products: Iterable) -> List[int]:
        """
        Dla kazdego produktu osobno: szukaj po id albo (name, price),
        jesli jest - bierzemy jego id, jesli nie - insert i nowe id.

        Nie commituje - wolajacy trzyma transakcje (np. CartService.add_products).
        """
        ids = []
        for p in products:
            price = to_money(p.price)
            existing = self.repo.find_by_identity(p.id, p.name, price)
            if existing:
                ids.append(existing.id)
                continue

            #samo id bez name/price - nie ma z czego utworzyc produktu
            if p.name is None or price is None:
                raise NotFound(f"Product {p.id} not found")

            created = self.repo.create_product(p.name, price)
            logger.info(f"insert_or_get: nowy produkt {created.id} ({p.name}, {price})")
            ids.append(created.id)
        return ids
