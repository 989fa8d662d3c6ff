from decimal import Decimal
from typing import Any, Dict, Iterable, List, Tuple

from sqlalchemy.orm import Session

from app.data.database import unit_of_work
from app.data.models.cart import CartModel
from app.domain.errors import AlreadyCheckedOut, NotFound
from app.repos.cart_repo import CartRepo
from app.services.product_service import ProductService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Koszyki: odczyt, tworzenie, dodawanie / usuwanie produktow, czyszczenie
    i checkout. Kazda komenda to jedna transakcja (unit_of_work).

    Stany: Open -> CheckedOut (tylko przez checkout), CheckedOut jest koncowy.
    """

    def __init__(self, db: Session, product_service: ProductService | None = None):
        self.db = db
        self.repo = CartRepo(db)
        self.product_service = product_service or ProductService(db)

    #query - odczyt
    def get_cart(self, cart_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart(cart_id)

        if not cart:
            raise NotFound("Cart not found")

        #produkty dociagane z katalogu po id z tabeli laczacej
        product_ids = self.repo.get_product_ids(cart_id)
        products = self.product_service.get_products_by_ids(product_ids)

        return self._to_dict(cart, products)

    #commands
    def get_or_create(self, cart_id: int | None) -> Dict[str, Any]:
        if cart_id is None:
            return self.create_cart()

        try:
            return self.get_cart(cart_id)
        except NotFound:
            # tylko brak koszyka -> nowy; BackendUnavailable leci dalej
            logger.info(f"Koszyk {cart_id} nie istnieje, tworze nowy")
            return self.create_cart()

    def create_cart(
        self,
        product_ids: List[int] | None = None,
        checked_out: bool = False,
    ) -> Dict[str, Any]:
        if checked_out:
            raise AlreadyCheckedOut()

        with unit_of_work(self.db):
            created = self.repo.create_cart()
            # id podane przez wolajacego, bez insert_or_get
            self.repo.link_products(created.id, product_ids or [])
            cart = self.get_cart(created.id)

        logger.info(f"Utworzono nowy koszyk {cart['id']}")
        return cart

    def add_products(self, cart_id: int, products: Iterable) -> Dict[str, Any]:
        products = list(products)

        with unit_of_work(self.db):
            cart = self._get_open_cart(cart_id)

            if not products:
                return self.get_cart(cart.id)

            ids = self.product_service.insert_or_get(products)
            self._update(cart.id, checked_out=False, product_ids=ids)
            result = self.get_cart(cart.id)

        logger.info(f"Dodano produkty {ids} do koszyka {cart_id}")
        return result

    def remove_products(self, cart_id: int, product_ids: List[int]) -> Dict[str, Any]:
        with unit_of_work(self.db):
            cart = self._get_open_cart(cart_id)
            removed = self.repo.unlink_products(cart.id, product_ids)
            result = self.get_cart(cart.id)

        logger.info(f"Usunieto {removed} produktow z koszyka {cart_id}")
        return result

    def clear(self, cart_id: int) -> Dict[str, Any]:
        with unit_of_work(self.db):
            cart = self._get_open_cart(cart_id)
            removed = self.repo.clear_cart(cart.id)
            result = self.get_cart(cart.id)

        logger.info(f"Wyczyszczono koszyk {cart_id} ({removed} produktow)")
        return result

    def checkout(self, cart_id: int) -> Tuple[List[Dict[str, Any]], Decimal]:
        with unit_of_work(self.db):
            self._get_open_cart(cart_id)

            cart = self.get_cart(cart_id)
            products = cart["products"]
            #zwykla suma cen, bez podatkow i rabatow
            subtotal = sum((p["price"] for p in products), Decimal("0.00"))

            self._update(cart_id, checked_out=True)

        logger.info(f"Koszyk {cart_id} zamkniety (checkout), subtotal {subtotal}")
        return products, subtotal

    def _get_open_cart(self, cart_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise NotFound("Cart not found")
        if cart.checked_out:
            raise AlreadyCheckedOut(cart_id)
        return cart

    def _update(self, cart_id: int, checked_out: bool, product_ids: List[int] | None = None) -> None:
        rowcount = self.repo.update_cart(cart_id, checked_out=checked_out)

        #wiersz zniknal miedzy odczytem a update
        if rowcount == 0:
            raise NotFound(f"Cart with ID {cart_id} does not exist")

        # linki dla produktow ktore wolajacy juz ma (duplikaty ignorowane)
        self.repo.link_products(cart_id, product_ids or [])

    @staticmethod
    def _to_dict(cart: CartModel, products: List[Dict[str, Any]]) -> Dict[str, Any]:
        #dict przeksztalcany w jsona przez CartOut
        return {
            "id": cart.id,
            "created_timestamp": cart.created_timestamp,
            "modification_timestamp": cart.modification_timestamp,
            "checked_out": cart.checked_out,
            "products": products,
        }
