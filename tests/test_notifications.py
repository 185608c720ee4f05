from storefront.services.notification_service import send_order_notification_task


def test_notification_task_runs_eagerly():
    result = send_order_notification_task.delay(1, "ORD-1-0001", "placed")

    assert result.get() == {
        "user_id": 1,
        "order_number": "ORD-1-0001",
        "event": "placed",
        "status": "sent",
    }
