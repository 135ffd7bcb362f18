# import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel, OrderStatus
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.review import ReviewModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartItemModel",
    "AddressModel",
    "OrderModel",
    "OrderStatus",
    "OrderItemModel",
    "ReviewModel",
]
