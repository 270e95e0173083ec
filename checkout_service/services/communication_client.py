# checkout_service/services/communication_client.py
import requests

from checkout_service.utils.retry import http_retry
from checkout_service.utils.settings import COMMUNICATION_SERVICE_URL
from checkout_service.utils.logging import get_logger

logger = get_logger(__name__)


class CommunicationClient:
    """HTTP client for the service that turns domain events into e-mails/chat messages."""

    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or COMMUNICATION_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def notify(self, event_name: str, order_id: int) -> dict:
        url = f"{self.base_url}/events"
        logger.info(f"CommunicationClient POST {url} event={event_name} order={order_id}")

        resp = requests.post(
            url,
            json={"event": event_name, "order_id": order_id},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()
