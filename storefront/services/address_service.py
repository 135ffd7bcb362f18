# storefront/services/address_service.py
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.domain.errors import Conflict, NotFound
from storefront.domain.schemas import AddressIn, AddressPatch
from storefront.repos.address_repo import AddressRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    """
    Address book. At most one default per user: setting a default clears the
    flag on every other address of that user in the same transaction.
    Relies on the database's read-committed isolation, there is no row locking.
    """

    def __init__(self, db: Session):
        self.repo = AddressRepo(db)

    def list_addresses(self, user_id: int) -> list[AddressModel]:
        return self.repo.list_for_user(user_id)

    def get(self, address_id: int, user_id: int) -> AddressModel:
        address = self.repo.get_for_user(address_id, user_id)
        if not address:
            raise NotFound("Address not found")
        return address

    def create(self, user_id: int, payload: AddressIn) -> AddressModel:
        if payload.is_default:
            self.repo.unset_defaults(user_id)

        address = self.repo.add(AddressModel(user_id=user_id, **payload.model_dump()))
        self.repo.commit()
        logger.info(f"Created address {address.id} for user {user_id}")
        return address

    def update(self, user_id: int, address_id: int, payload: AddressPatch) -> AddressModel:
        address = self.get(address_id, user_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        if changes.get("is_default"):
            self.repo.unset_defaults(user_id)

        for field, value in changes.items():
            setattr(address, field, value)

        self.repo.commit()
        return address

    def set_default(self, user_id: int, address_id: int) -> AddressModel:
        address = self.get(address_id, user_id)
        try:
            self.repo.unset_defaults(user_id)
            address.is_default = True
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise
        logger.info(f"Address {address_id} is now the default for user {user_id}")
        return address

    def delete(self, user_id: int, address_id: int) -> None:
        address = self.get(address_id, user_id)
        # orders keep a live reference to their shipping address
        if self.repo.is_referenced_by_order(address_id):
            raise Conflict("Address is used by an order")
        self.repo.delete(address)
        self.repo.commit()
