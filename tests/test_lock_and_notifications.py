from unittest.mock import MagicMock

from storefront.services.lock_service import LockService
from storefront.services.notification_service import (
    send_order_notification_task,
    report_unreconciled_capture_task,
)


def test_acquire_uses_set_nx_with_ttl():
    client = MagicMock()
    client.set.return_value = True

    assert LockService(client=client).acquire_checkout_lock(7, "tok", 60) is True
    client.set.assert_called_once_with(name="checkout:user:7:lock", value="tok", nx=True, ex=60)


def test_acquire_when_held():
    client = MagicMock()
    client.set.return_value = None

    assert LockService(client=client).acquire_checkout_lock(7, "tok", 60) is False


def test_release_is_compare_and_delete():
    client = MagicMock()
    client.eval.return_value = 0

    assert LockService(client=client).release_checkout_lock(7, "stale") is False
    script, numkeys, key, token = client.eval.call_args.args
    assert "redis.call('DEL', KEYS[1])" in script
    assert (numkeys, key, token) == (1, "checkout:user:7:lock", "stale")


def test_notification_tasks_run_inline():
    assert send_order_notification_task(1, "ORD-1-ABC")["status"] == "sent"
    assert report_unreconciled_capture_task(1, "pi_1", 5399, "usd")["status"] == "reported"
