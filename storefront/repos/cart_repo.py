# storefront/repos/cart_repo.py
from sqlalchemy.orm import Session
from sqlalchemy import select, delete

from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self, user_id: int, refresh: bool = False) -> list[CartItemModel]:
        # refresh overwrites rows already in the session with the committed
        # quantities
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        )
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        return list(self.db.execute(stmt).unique().scalars().all())

    def get_cart_item(self, user_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).unique().scalar_one_or_none()

    def get_line(self, line_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, line_id)

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_line(self, line: CartItemModel) -> None:
        self.db.delete(line)

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount

    def savepoint(self):
        return self.db.begin_nested()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
