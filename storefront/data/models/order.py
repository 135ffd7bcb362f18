import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_NEXT = {
    OrderStatus.PENDING: OrderStatus.PROCESSING,
    OrderStatus.PROCESSING: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.DELIVERED,
}

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def can_transition(src: OrderStatus, dst: OrderStatus) -> bool:
    """Status moves forward one step at a time, or to cancelled from any non-terminal state.

    Transitions are driven by fulfillment, outside the storefront.
    """
    if src in TERMINAL_STATUSES:
        return False
    if dst == OrderStatus.CANCELLED:
        return True
    return _NEXT.get(src) == dst


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # live reference, the address row may change after the order is placed
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)

    payment_method = Column(String, nullable=False)
    # one captured payment backs at most one order
    payment_reference = Column(String, nullable=False, unique=True)

    status = Column(String, nullable=False, default=OrderStatus.PROCESSING.value)

    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    shipping = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
    )
    shipping_address = relationship("AddressModel")
