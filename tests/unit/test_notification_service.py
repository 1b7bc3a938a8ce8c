import pytest
pytest.importorskip("jinja2")

from datetime import datetime, UTC
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import uuid

from storefront.services.notification_service import (
    NotificationService,
    STATUS_LABELS,
    TEMPLATE_ORDER_CONFIRMATION,
    TEMPLATE_ORDER_STATUS_UPDATE,
    build_order_context,
)
from storefront.utils.feature_flags import refresh_feature_flag_cache


def _order(status="pending", email="asha@example.com"):
    product = SimpleNamespace(name="Linen Shirt")
    item = SimpleNamespace(product=product, product_id=uuid.uuid4(), quantity=2, size="M", color=None, price=Decimal("899.00"))
    return SimpleNamespace(
        order_number="ORD-1700000000000-ABCDEFGHI",
        status=status,
        total_amount=Decimal("1798.00"),
        payment_method="upi",
        estimated_delivery=datetime(2024, 5, 6, 10, 0, tzinfo=UTC),
        shipping_address={"first_name": "Asha", "last_name": "Rao", "email": email, "city": "Bengaluru"},
        order_items=[item],
    )


@pytest.fixture
def email_service():
    service = MagicMock()
    service.render_template.return_value = ("<p>hi</p>", "hi")
    service.send_email = AsyncMock(return_value={"success": True})
    return service


@pytest.fixture
def notifications_on(monkeypatch):
    monkeypatch.setenv("EMAIL_NOTIFICATIONS_ENABLED", "true")
    refresh_feature_flag_cache()


def test_build_order_context_is_plain_data():
    ctx = build_order_context(_order(status="out_for_delivery"))
    assert ctx["order_number"] == "ORD-1700000000000-ABCDEFGHI"
    assert ctx["status_label"] == STATUS_LABELS["out_for_delivery"]
    assert ctx["customer_name"] == "Asha Rao"
    assert ctx["email"] == "asha@example.com"
    assert ctx["estimated_delivery"] == "2024-05-06"
    assert ctx["items"] == [{"name": "Linen Shirt", "quantity": 2, "size": "M", "color": None, "price": "899.00"}]


@pytest.mark.asyncio
async def test_notifications_skipped_when_flag_disabled(email_service):
    service = NotificationService(email_service)
    result = await service.notify_order_placed(build_order_context(_order()))
    assert result == {"success": False, "skipped": True}
    email_service.send_email.assert_not_called()


@pytest.mark.asyncio
async def test_order_placed_sends_confirmation(email_service, notifications_on):
    service = NotificationService(email_service)
    result = await service.notify_order_placed(build_order_context(_order()))

    assert result == {"success": True}
    template_name, _ctx = email_service.render_template.call_args.args
    assert template_name == TEMPLATE_ORDER_CONFIRMATION
    kwargs = email_service.send_email.call_args.kwargs
    assert kwargs["to_email"] == "asha@example.com"
    assert "ORD-1700000000000-ABCDEFGHI" in kwargs["subject"]
    assert kwargs["text_content"] == "hi"


@pytest.mark.asyncio
async def test_status_change_uses_status_template(email_service, notifications_on):
    service = NotificationService(email_service)
    await service.notify_order_status_changed(build_order_context(_order(status="shipped")))

    template_name, _ctx = email_service.render_template.call_args.args
    assert template_name == TEMPLATE_ORDER_STATUS_UPDATE
    assert email_service.send_email.call_args.kwargs["subject"].endswith("Shipped")


@pytest.mark.asyncio
async def test_missing_recipient_is_skipped(email_service, notifications_on):
    service = NotificationService(email_service)
    result = await service.notify_order_placed(build_order_context(_order(email=None)))
    assert result["skipped"] is True
    email_service.send_email.assert_not_called()


@pytest.mark.asyncio
async def test_render_failure_is_reported(email_service, notifications_on):
    email_service.render_template.side_effect = RuntimeError("bad template")
    service = NotificationService(email_service)
    result = await service.notify_order_placed(build_order_context(_order()))
    assert result == {"success": False, "error": "render_failed"}
