# checkout_service/services/notification_service.py
from checkout_service.celery_worker import celery_app
from checkout_service.services.communication_client import CommunicationClient
from checkout_service.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_CREATED = "order_created"


class NotificationService:
    """
    Domain-event dispatcher. notify() only enqueues; delivery and its retries
    happen in the Celery worker.
    """

    def __init__(self, task=None):
        self.task = task or dispatch_event_task

    def notify(self, event_name: str, order_id: int) -> None:
        logger.info(f"Dispatching {event_name} for order {order_id}")
        self.task.delay(event_name, order_id)


@celery_app.task(name="checkout_service.services.notification_service.dispatch_event_task")
def dispatch_event_task(event_name: str, order_id: int):
    client = CommunicationClient()
    client.notify(event_name, order_id)

    logger.info(f"[NOTIFICATION] {event_name} delivered for order {order_id}")
    return {"event": event_name, "order_id": order_id, "status": "sent"}
