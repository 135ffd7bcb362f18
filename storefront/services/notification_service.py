# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Fire-and-forget notifications, processed by the Celery worker.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_number: str):
        send_order_notification_task.delay(user_id, order_number)

    @staticmethod
    def report_unreconciled_capture(user_id: int, reference: str, amount_minor: int, currency: str):
        """
        Payment was captured but no order row exists.
        Nothing is refunded automatically; this only raises the alarm for manual reconciliation.
        """
        report_unreconciled_capture_task.delay(user_id, reference, amount_minor, currency)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_number: str):
    # a real deployment would hand this to an email/SMS provider
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_number} is being processed")
    return {"user_id": user_id, "order_number": order_number, "status": "sent"}


@celery_app.task(name="storefront.services.notification_service.report_unreconciled_capture_task")
def report_unreconciled_capture_task(user_id: int, reference: str, amount_minor: int, currency: str):
    logger.critical(
        f"[RECONCILIATION] Capture {reference} for user {user_id} "
        f"({amount_minor} {currency}) has no order"
    )
    return {"user_id": user_id, "reference": reference, "status": "reported"}
