"""
Testes do notificador de eventos e do webhook.
"""
from dakarmarket.services.notifications import (
    MESSAGE_CREATED,
    ORDER_CREATED,
    Notifier,
    WebhookSubscriber,
)


class FakeResponse:
    status_code = 204

    def raise_for_status(self):
        return None


class FakeSession:
    def __init__(self):
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        return FakeResponse()


def test_failing_subscriber_does_not_block_others():
    notifier = Notifier()
    received = []

    def broken(event, payload):
        raise RuntimeError("fora do ar")

    notifier.subscribe(ORDER_CREATED, broken)
    notifier.subscribe(ORDER_CREATED, lambda e, p: received.append(p))

    assert notifier.publish(ORDER_CREATED, {"order_id": "1"}) == 1
    assert received == [{"order_id": "1"}]


def test_events_are_routed_by_name():
    notifier = Notifier()
    received = []
    notifier.subscribe(MESSAGE_CREATED, lambda e, p: received.append(e))
    assert notifier.publish(ORDER_CREATED, {}) == 0
    assert received == []


def test_webhook_posts_json():
    session = FakeSession()
    hook = WebhookSubscriber("https://hooks.example/market", timeout=2.0, session=session)
    hook(ORDER_CREATED, {"order_id": "42"})
    assert session.calls == [
        ("https://hooks.example/market", {"event": ORDER_CREATED, "payload": {"order_id": "42"}}, 2.0)
    ]
