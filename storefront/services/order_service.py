# storefront/services/order_service.py
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.errors import NotFound
from storefront.repos.order_repo import OrderRepo


class OrderService:
    """
    Order history queries. Orders are written only by checkout and never
    updated by the storefront.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def list_orders(self, user_id: int) -> list[OrderModel]:
        return self.repo.list_for_user(user_id)

    def get_order(self, user_id: int, order_number: str) -> OrderModel:
        order = self.repo.get_by_number(order_number)
        # another user's order is reported as missing
        if not order or order.user_id != user_id:
            raise NotFound("Order not found")
        return order
