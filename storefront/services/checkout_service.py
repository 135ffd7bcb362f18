# storefront/services/checkout_service.py
import enum
import time
from decimal import Decimal
from uuid import uuid4

from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel, OrderStatus
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import (
    CheckoutInProgress,
    EmptyCart,
    PaymentFailure,
    PersistenceFailure,
    ValidationError,
)
from storefront.domain.pricing import PricedCart, price_lines, to_minor_units
from storefront.domain.schemas import CheckoutIn
from storefront.repos.address_repo import AddressRepo
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.payment_client import PaymentGateway, PaymentIntent
from storefront.services.product_service import ProductService
from storefront.utils.settings import CURRENCY, CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutState(str, enum.Enum):
    IDLE = "idle"
    PAYMENT_PENDING = "payment_pending"
    PAYMENT_CAPTURED = "payment_captured"
    ORDER_PERSISTED = "order_persisted"
    CART_CLEARED = "cart_cleared"
    DONE = "done"
    FAILED = "failed"


def generate_order_number() -> str:
    # uniqueness is enforced by the unique index on orders.order_number
    return f"ORD-{int(time.time() * 1000)}-{uuid4().hex[:12].upper()}"


class CheckoutService:
    """
    Turns the caller's cart into an order.

    Idle -> PaymentPending -> PaymentCaptured -> OrderPersisted -> CartCleared -> Done,
    or Failed from PaymentPending / PaymentCaptured.

    Prices always come from the products table at the moment of capture.
    The span from reading the cart to persisting the order runs under a
    per-user redis lock, so two tabs cannot both charge the same cart.

    A payment that was captured but could not be written as an order is NOT
    refunded. It is logged as critical and reported for manual reconciliation.
    """

    def __init__(
        self,
        db: Session,
        gateway: PaymentGateway,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
        currency: str = CURRENCY,
        lock_ttl: int = CHECKOUT_LOCK_TTL_SECONDS,
    ):
        self.carts = CartRepo(db)
        self.addresses = AddressRepo(db)
        self.orders = OrderRepo(db)
        self.products = ProductService(db)
        self.gateway = gateway
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()
        self.currency = currency
        self.lock_ttl = lock_ttl

    @staticmethod
    def _enter(user_id: int, state: CheckoutState) -> None:
        logger.info(f"Checkout of user {user_id}: {state.value}")

    def _price_cart(self, user_id: int) -> tuple[list[tuple[int, int, Decimal]], PricedCart]:
        lines = self.carts.get_cart_items(user_id, refresh=True)
        if not lines:
            raise EmptyCart()

        snapshot = [
            (line.product_id, line.quantity, self.products.get_price(line.product_id))
            for line in lines
        ]
        pricing = price_lines((price, quantity) for _, quantity, price in snapshot)
        return snapshot, pricing

    def preview(self, user_id: int) -> PricedCart:
        _, pricing = self._price_cart(user_id)
        return pricing

    def create_payment_intent(self, user_id: int) -> PaymentIntent:
        _, pricing = self._price_cart(user_id)
        return self.gateway.create_intent(to_minor_units(pricing.total), self.currency, str(user_id))

    def checkout(self, user_id: int, request: CheckoutIn) -> OrderModel:
        self._enter(user_id, CheckoutState.IDLE)

        if not request.address_id or not request.payment_method or not request.payment_method.strip():
            raise ValidationError("Invalid data")

        address = self.addresses.get_for_user(request.address_id, user_id)
        if not address:
            raise ValidationError("Invalid data")

        if not self.carts.get_cart_items(user_id):
            raise EmptyCart()

        token = uuid4().hex
        if not self.lock_service.acquire_checkout_lock(user_id, token, self.lock_ttl):
            raise CheckoutInProgress()

        try:
            return self._run(user_id, address, request)
        finally:
            try:
                self.lock_service.release_checkout_lock(user_id, token)
            except RedisError as e:
                # the TTL frees it eventually
                logger.warning(f"Failed to release checkout lock of user {user_id}: {e}")

    def _run(self, user_id: int, address: AddressModel, request: CheckoutIn) -> OrderModel:
        self._enter(user_id, CheckoutState.PAYMENT_PENDING)

        # re-read under the lock, an earlier submission may have emptied the cart
        snapshot, pricing = self._price_cart(user_id)
        amount_minor = to_minor_units(pricing.total)

        try:
            if request.payment_intent_id and self.orders.get_by_payment_reference(request.payment_intent_id):
                raise PaymentFailure("Payment already used")
            capture = self.gateway.capture(
                amount_minor,
                self.currency,
                str(user_id),
                request.payment_method,
                request.payment_intent_id,
            )
        except PaymentFailure as e:
            self._enter(user_id, CheckoutState.FAILED)
            logger.warning(f"Payment of {amount_minor} {self.currency} for user {user_id} failed: {e.reason}")
            raise

        self._enter(user_id, CheckoutState.PAYMENT_CAPTURED)

        order = OrderModel(
            order_number=generate_order_number(),
            user_id=user_id,
            address_id=address.id,
            payment_method=request.payment_method,
            payment_reference=capture.reference,
            status=OrderStatus.PROCESSING.value,
            subtotal=pricing.subtotal,
            tax=pricing.tax,
            shipping=pricing.shipping,
            total=pricing.total,
            currency=self.currency,
            items=[
                OrderItemModel(product_id=product_id, quantity=quantity, price=price)
                for product_id, quantity, price in snapshot
            ],
        )

        try:
            order = self.orders.create_order(order)
        except Exception as e:
            self.orders.rollback()
            self._enter(user_id, CheckoutState.FAILED)
            if self._backs_existing_order(capture.reference):
                # lost a race on orders.payment_reference, this payment already has its order
                logger.warning(f"Payment {capture.reference} already backs an order, user {user_id} resubmitted it")
                raise PaymentFailure("Payment already used") from e
            logger.critical(
                f"Payment {capture.reference} of {amount_minor} {self.currency} captured for user "
                f"{user_id} but the order could not be stored, requires manual reconciliation: {e}"
            )
            self._report_unreconciled(user_id, capture.reference, amount_minor)
            raise PersistenceFailure() from e

        self._enter(user_id, CheckoutState.ORDER_PERSISTED)

        order_number = order.order_number

        # the order is authoritative from here on, a stale cart is only cosmetic
        try:
            with self.carts.savepoint():
                self.carts.clear(user_id)
            self.carts.commit()
        except Exception as e:
            logger.warning(f"Order {order_number} placed but cart of user {user_id} was not cleared: {e}")
        else:
            self._enter(user_id, CheckoutState.CART_CLEARED)

        try:
            self.notification_service.send_order_notification(user_id, order_number)
        except Exception as e:
            logger.warning(f"Failed to enqueue notification for order {order_number}: {e}")

        self._enter(user_id, CheckoutState.DONE)
        logger.info(f"Order {order_number} created for user {user_id}, total {pricing.total} {self.currency}")
        return order

    def _backs_existing_order(self, reference: str) -> bool:
        try:
            return self.orders.get_by_payment_reference(reference) is not None
        except Exception as e:
            logger.error(f"Could not look up orders paid by {reference}: {e}")
            return False

    def _report_unreconciled(self, user_id: int, reference: str, amount_minor: int) -> None:
        try:
            self.notification_service.report_unreconciled_capture(user_id, reference, amount_minor, self.currency)
        except Exception as e:
            logger.error(f"Failed to enqueue reconciliation alert for {reference}: {e}")
