# storefront/repos/order_repo.py
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select

from storefront.data.models.order import OrderModel


class OrderRepo:
    """Append-only ledger of placed orders."""

    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        # reloaded with items and address so callers never lazy load afterwards
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order.id)
            .options(
                selectinload(OrderModel.items),
                selectinload(OrderModel.shipping_address),
            )
            .execution_options(populate_existing=True)
        ).scalar_one()

    def list_for_user(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .options(
                    selectinload(OrderModel.items),
                    selectinload(OrderModel.shipping_address),
                )
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars().all()
        )

    def get_by_number(self, order_number: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.order_number == order_number)
            .options(
                selectinload(OrderModel.items),
                selectinload(OrderModel.shipping_address),
            )
        ).scalar_one_or_none()

    def get_by_payment_reference(self, reference: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.payment_reference == reference)
        ).scalar_one_or_none()

    def rollback(self):
        self.db.rollback()
