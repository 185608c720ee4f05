# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia dla klienta o zmianach zamowienia.
    Celery, fire and forget - nic w sciezce spojnosci od tego nie zalezy.
    """

    @staticmethod
    def order_placed(user_id: int, order_number: str):
        send_order_notification_task.delay(user_id, order_number, "placed")

    @staticmethod
    def payment_completed(user_id: int, order_number: str):
        send_order_notification_task.delay(user_id, order_number, "paid")

    @staticmethod
    def status_changed(user_id: int, order_number: str, status: str):
        send_order_notification_task.delay(user_id, order_number, status)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_number: str, event: str):
    """
    W prawdziwym systemie email/SMS/push, na razie tylko log.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_number} -> {event}")
    return {"user_id": user_id, "order_number": order_number, "event": event, "status": "sent"}
