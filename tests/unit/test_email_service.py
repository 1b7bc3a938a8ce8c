import pytest
pytest.importorskip("jinja2")

from unittest.mock import AsyncMock, patch

from storefront.services.email_service import EmailService, EmailServiceConfig
from storefront.services.notification_service import TEMPLATE_ORDER_CONFIRMATION, TEMPLATE_ORDER_STATUS_UPDATE


def _context():
    return {
        "order_number": "ORD-1-ABC",
        "status": "shipped",
        "status_label": "Shipped",
        "total_amount": "1798.00",
        "payment_method": "card",
        "estimated_delivery": "2024-05-06",
        "customer_name": "Asha Rao",
        "email": "asha@example.com",
        "shipping_address": {"address": "12 MG Road", "city": "Bengaluru", "state": "KA", "pincode": "560001"},
        "items": [{"name": "Linen <Shirt>", "quantity": 2, "size": "M", "color": None, "price": "899.00"}],
    }


def test_config_reads_env(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "2525")
    monkeypatch.setenv("SMTP_USE_TLS", "false")
    monkeypatch.setenv("FROM_EMAIL", "shop@example.com")
    config = EmailServiceConfig()
    assert config.smtp_host == "smtp.example.com"
    assert config.smtp_port == 2525
    assert config.smtp_use_tls is False
    assert config.is_configured() is True
    assert config.validate() == []


def test_config_validate_reports_conflicts(monkeypatch):
    monkeypatch.setenv("SMTP_USE_TLS", "true")
    monkeypatch.setenv("SMTP_USE_SSL", "true")
    monkeypatch.setenv("SMTP_HOST", "")
    errors = EmailServiceConfig().validate()
    assert "Cannot use both SSL and TLS simultaneously" in errors
    assert "SMTP_HOST is required" in errors


def test_render_confirmation_escapes_html_and_falls_back_to_text():
    service = EmailService(EmailServiceConfig())
    html, text = service.render_template(TEMPLATE_ORDER_CONFIRMATION, _context())
    assert "ORD-1-ABC" in html
    assert "Linen &lt;Shirt&gt;" in html
    assert "Linen <Shirt>" in text
    assert "<td>" not in text
    assert "ORD-1-ABC" in text


def test_render_status_update_uses_text_template():
    service = EmailService(EmailServiceConfig())
    _html, text = service.render_template(TEMPLATE_ORDER_STATUS_UPDATE, _context())
    assert text.startswith("Your order ORD-1-ABC is now Shipped.")
    assert "Estimated delivery: 2024-05-06" in text


@pytest.mark.asyncio
async def test_send_email_not_configured(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "")
    service = EmailService(EmailServiceConfig())
    result = await service.send_email("a@example.com", "Hi", "<p>Hi</p>")
    assert result["success"] is False


@pytest.mark.asyncio
async def test_send_email_success_and_failure():
    service = EmailService(EmailServiceConfig())
    with patch.object(service, "_send_via_smtp", AsyncMock(return_value={"success": True, "message_id": ""})):
        result = await service.send_email("a@example.com", "Hi", "<p>Hi</p>", "Hi")
    assert result["success"] is True

    with patch.object(service, "_send_via_smtp", AsyncMock(side_effect=OSError("connection refused"))):
        result = await service.send_email("a@example.com", "Hi", "<p>Hi</p>")
    assert result["success"] is False
    assert "connection refused" in result["error"]
