#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.product import ProductModel
from app.data.models.cart import CartModel
from app.data.models.cart_product import CartProductModel

__all__ = ["ProductModel", "CartModel", "CartProductModel"]
