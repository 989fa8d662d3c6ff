# app/services/checkout_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from app.domain.errors import AlreadyCheckedOut
from app.services.cart_service import CartService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Finalizacja koszyka. Sprawdza ze koszyk istnieje i jest otwarty,
    liczy subtotal (suma cen) i oznacza koszyk jako checked_out.
    """

    def __init__(self, db: Session, cart_service: CartService | None = None):
        self.cart_service = cart_service or CartService(db)

    def checkout(self, cart_id: int) -> Dict[str, Any]:
        # NotFound jesli koszyka nie ma
        cart = self.cart_service.get_cart(cart_id)

        if cart["checked_out"]:
            raise AlreadyCheckedOut(cart_id)

        logger.info(f"Checkout koszyka {cart_id}, produktow: {len(cart['products'])}")

        products, subtotal = self.cart_service.checkout(cart_id)

        return {
            "products": products,
            "subtotal": subtotal,
        }
