# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer, model_validator
from typing import Annotated, List
from decimal import Decimal
from datetime import datetime

# w JSON ceny ida jako liczby, nie stringi
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductIn(BaseModel):
    """Schema dla tworzenia / aktualizacji produktu."""

    name: str = Field(..., min_length=1, description="Nazwa produktu")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Cena produktu (>= 0)")


class CartProductIn(BaseModel):
    """Produkt w zadaniu PUT /cart - id opcjonalne, dopasowanie po id albo (name, price)."""

    id: int | None = None
    name: str | None = Field(None, min_length=1)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)

    @model_validator(mode="after")
    def _id_or_name_and_price(self):
        #samo id wystarczy, bez id potrzebne name i price
        if self.id is None and (self.name is None or self.price is None):
            raise ValueError("Product needs an id or both name and price")
        return self


class ProductOut(BaseModel):
    id: int
    name: str
    price: Money

    model_config = ConfigDict(from_attributes=True)


class AddProductsIn(BaseModel):
    """Schema dla dodawania produktow do koszyka. cart_id 0/brak = nowy koszyk."""

    cart_id: int | None = None
    products: List[CartProductIn] = Field(default_factory=list)


class RemoveProductsIn(BaseModel):
    product_ids: List[int] = Field(default_factory=list)


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: int
    created_timestamp: datetime
    modification_timestamp: datetime
    checked_out: bool
    products: List[ProductOut] = Field(default_factory=list, alias="Products")

    model_config = ConfigDict(populate_by_name=True)


class CheckoutOut(BaseModel):
    products: List[ProductOut]
    subtotal: Money


class ResultOut(BaseModel):
    result: str
