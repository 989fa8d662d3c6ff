#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import AlreadyCheckedOut, NotFound
from app.domain.schemas import (
    AddProductsIn,
    CartOut,
    CheckoutOut,
    RemoveProductsIn,
)
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


@router.put("", response_model=CartOut)
def add_products_to_cart(payload: AddProductsIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    # 0 albo brak cart_id = nowy koszyk
    cart_id = payload.cart_id or None
    try:
        cart = svc.get_or_create(cart_id)
        return svc.add_products(cart["id"], payload.products)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AlreadyCheckedOut as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(cart_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_cart(cart_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{cart_id}/products", response_model=CartOut)
def remove_products_from_cart(
    cart_id: int,
    payload: RemoveProductsIn,
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.remove_products(cart_id, payload.product_ids)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AlreadyCheckedOut as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{cart_id}", response_model=CartOut)
def clear_cart(cart_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.clear(cart_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AlreadyCheckedOut as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{cart_id}/checkout", response_model=CheckoutOut)
def checkout(cart_id: int, db: Session = Depends(get_db)):
    svc = CheckoutService(db, cart_service=get_service(db))
    try:
        return svc.checkout(cart_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AlreadyCheckedOut as e:
        raise HTTPException(status_code=400, detail=str(e))
