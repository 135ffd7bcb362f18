# storefront/services/cart_service.py
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import Forbidden, NotFound, ValidationError
from storefront.domain.pricing import price_lines
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Per-user cart lines, source of truth until checkout.
    No locking: concurrent adds of the same product race and the last write wins.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    # query
    def list_cart(self, user_id: int) -> dict:
        items = self.repo.get_cart_items(user_id)
        pricing = price_lines((i.product.price, i.quantity) for i in items)
        return {"items": items, "pricing": pricing}

    # commands
    def add(self, user_id: int, product_id: int, quantity: int) -> CartItemModel:
        if quantity < 1:
            raise ValidationError("Invalid data")

        if not self.products.get_product(product_id):
            raise NotFound("Product not found")

        existing = self.repo.get_cart_item(user_id, product_id)
        if existing:
            logger.info(
                f"Product {product_id} already in cart of user {user_id}, "
                f"quantity {existing.quantity} -> {existing.quantity + quantity}"
            )
            existing.quantity += quantity
            line = existing
        else:
            logger.info(f"Adding product {product_id} to cart of user {user_id}")
            line = self.repo.add_cart_item(
                CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
            )

        self.repo.commit()
        return line

    def _owned_line(self, user_id: int, line_id: int) -> CartItemModel:
        line = self.repo.get_line(line_id)
        if not line:
            raise NotFound("Cart item not found")
        if line.user_id != user_id:
            raise Forbidden("No access to this cart item")
        return line

    def set_quantity(self, user_id: int, line_id: int, quantity: int) -> CartItemModel:
        # stock is advisory, clamping to it is up to the caller
        if quantity < 1:
            raise ValidationError("Invalid data")

        line = self._owned_line(user_id, line_id)
        line.quantity = quantity
        self.repo.commit()
        return line

    def remove(self, user_id: int, line_id: int) -> None:
        line = self._owned_line(user_id, line_id)
        self.repo.delete_line(line)
        self.repo.commit()
        logger.info(f"Removed cart item {line_id} of user {user_id}")

    def clear(self, user_id: int) -> int:
        removed = self.repo.clear(user_id)
        self.repo.commit()
        logger.info(f"Cleared {removed} cart items of user {user_id}")
        return removed
