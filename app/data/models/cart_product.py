from sqlalchemy import Column, Integer, ForeignKey

from app.data.database import Base


class CartProductModel(Base):
    __tablename__ = "cart_products"

    #para (cart_id, product_id) jest kluczem, wiec duplikatow nie ma
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), primary_key=True)
    #bez FK - usuniecie produktu nie kaskaduje na koszyki
    product_id = Column(Integer, primary_key=True)
