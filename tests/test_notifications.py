"""Tests for event dispatch and the communication client."""

import pytest
import requests
from fastapi.testclient import TestClient
from tenacity import wait_none

from checkout_service.communication_service import main as communication_service
from checkout_service.services import notification_service
from checkout_service.services.communication_client import CommunicationClient
from checkout_service.services.notification_service import (
    ORDER_CREATED,
    NotificationService,
    dispatch_event_task,
)


class FakeTask:
    def __init__(self):
        self.calls = []

    def delay(self, *args):
        self.calls.append(args)


class FakeResponse:
    def __init__(self, status_code=202, payload=None):
        self.status_code = status_code
        self._payload = payload or {"accepted": True}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch):
    monkeypatch.setattr(CommunicationClient.notify.retry, "wait", wait_none())


def test_notify_enqueues_task():
    task = FakeTask()

    NotificationService(task=task).notify(ORDER_CREATED, 12)

    assert task.calls == [(ORDER_CREATED, 12)]


def test_task_delivers_through_client(monkeypatch):
    sent = []

    class RecordingClient:
        def notify(self, event_name, order_id):
            sent.append((event_name, order_id))

    monkeypatch.setattr(notification_service, "CommunicationClient", RecordingClient)

    result = dispatch_event_task.run(ORDER_CREATED, 5)

    assert sent == [(ORDER_CREATED, 5)]
    assert result == {"event": ORDER_CREATED, "order_id": 5, "status": "sent"}


def test_client_posts_event(monkeypatch):
    calls = []

    def fake_post(url, json, timeout):
        calls.append((url, json, timeout))
        return FakeResponse()

    monkeypatch.setattr(requests, "post", fake_post)

    CommunicationClient(base_url="http://comms:8000/").notify(ORDER_CREATED, 3)

    assert calls == [("http://comms:8000/events", {"event": ORDER_CREATED, "order_id": 3}, 2)]


def test_client_retries_connection_errors(monkeypatch):
    attempts = []

    def flaky_post(url, json, timeout):
        attempts.append(url)
        if len(attempts) < 3:
            raise requests.ConnectionError("refused")
        return FakeResponse()

    monkeypatch.setattr(requests, "post", flaky_post)

    assert CommunicationClient(base_url="http://comms").notify(ORDER_CREATED, 1) == {"accepted": True}
    assert len(attempts) == 3


def test_client_gives_up_after_three_attempts(monkeypatch):
    attempts = []

    def failing_post(url, json, timeout):
        attempts.append(url)
        return FakeResponse(status_code=503)

    monkeypatch.setattr(requests, "post", failing_post)

    with pytest.raises(requests.HTTPError):
        CommunicationClient(base_url="http://comms").notify(ORDER_CREATED, 1)
    assert len(attempts) == 3


def test_communication_service_mock_records_events():
    communication_service.EVENTS.clear()
    client = TestClient(communication_service.app)

    response = client.post("/events", json={"event": ORDER_CREATED, "order_id": 9})

    assert response.status_code == 202
    assert client.get("/events").json() == [{"event": ORDER_CREATED, "order_id": 9}]
