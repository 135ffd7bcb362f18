from sqlalchemy.orm import Session
from sqlalchemy import select, update, func

from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int) -> list[AddressModel]:
        return list(
            self.db.execute(
                select(AddressModel)
                .where(AddressModel.user_id == user_id)
                .order_by(AddressModel.is_default.desc(), AddressModel.id)
            ).scalars().all()
        )

    def get_for_user(self, address_id: int, user_id: int) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def add(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.flush()
        return address

    def unset_defaults(self, user_id: int) -> None:
        self.db.execute(
            update(AddressModel)
            .where(AddressModel.user_id == user_id, AddressModel.is_default.is_(True))
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )

    def is_referenced_by_order(self, address_id: int) -> bool:
        count = self.db.execute(
            select(func.count(OrderModel.id)).where(OrderModel.address_id == address_id)
        ).scalar_one()
        return count > 0

    def delete(self, address: AddressModel) -> None:
        self.db.delete(address)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
