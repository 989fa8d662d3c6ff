# app/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import InvalidArgument, NotFound
from app.domain.schemas import ProductIn, ProductOut, ResultOut
from app.services.product_service import ProductService

router = APIRouter(tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("/products", response_model=List[ProductOut])
def list_products(
    start: str | None = Query(None),
    count: str | None = Query(None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.list_products(start=start, count=count)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/product", response_model=ProductOut, status_code=201)
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    return svc.create_product(payload.name, payload.price)


# musi byc przed /product/{product_id}
@router.get("/product/search", response_model=List[ProductOut])
def search_products(q: str | None = Query(None), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.search_products(q)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/product/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_product(product_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/product/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: ProductIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_product(product_id, payload.name, payload.price)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/product/{product_id}", response_model=ResultOut)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.delete_product(product_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"result": "success"}
