"""
Notification service: order confirmation and status update emails.

Contexts are plain dicts built while the request session is open so the
background send never touches a closed session.
"""

import logging
from typing import Optional, Dict, Any

from storefront.db import models
from storefront.services.email_service import EmailService, get_email_service
from storefront.utils.feature_flags import email_notifications_enabled

logger = logging.getLogger(__name__)

TEMPLATE_ORDER_CONFIRMATION = 'order_confirmation'
TEMPLATE_ORDER_STATUS_UPDATE = 'order_status_update'

STATUS_LABELS = {
    'pending': 'Order Placed',
    'confirmed': 'Order Confirmed',
    'shipped': 'Shipped',
    'out_for_delivery': 'Out for Delivery',
    'delivered': 'Delivered',
    'cancelled': 'Cancelled',
}


def build_order_context(order: models.Order) -> Dict[str, Any]:
    address = order.shipping_address or {}
    return {
        'order_number': order.order_number,
        'status': order.status,
        'status_label': STATUS_LABELS.get(order.status, order.status),
        'total_amount': str(order.total_amount),
        'payment_method': order.payment_method,
        'estimated_delivery': order.estimated_delivery.date().isoformat() if order.estimated_delivery else None,
        'customer_name': f"{address.get('first_name', '')} {address.get('last_name', '')}".strip(),
        'email': address.get('email'),
        'shipping_address': address,
        'items': [
            {
                'name': item.product.name if item.product else str(item.product_id),
                'quantity': item.quantity,
                'size': item.size,
                'color': item.color,
                'price': str(item.price),
            }
            for item in order.order_items
        ],
    }


class NotificationService:
    """Sends customer-facing order emails."""

    def __init__(self, email_service: Optional[EmailService] = None):
        self.email_service = email_service or get_email_service()

    async def _send(self, template_name: str, subject: str, context: Dict[str, Any]) -> Dict[str, Any]:
        if not email_notifications_enabled():
            return {'success': False, 'skipped': True}
        to_email = context.get('email')
        if not to_email:
            logger.info("notification_skipped: order_number=%s reason=no_email", context.get('order_number'))
            return {'success': False, 'skipped': True}
        try:
            html_content, text_content = self.email_service.render_template(template_name, context)
        except Exception:
            logger.error("notification_render_failed: template=%s", template_name, exc_info=True)
            return {'success': False, 'error': 'render_failed'}
        return await self.email_service.send_email(
            to_email=to_email,
            subject=subject,
            html_content=html_content,
            text_content=text_content,
        )

    async def notify_order_placed(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return await self._send(
            TEMPLATE_ORDER_CONFIRMATION,
            f"Your order {context['order_number']} is confirmed",
            context,
        )

    async def notify_order_status_changed(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return await self._send(
            TEMPLATE_ORDER_STATUS_UPDATE,
            f"Order {context['order_number']}: {context['status_label']}",
            context,
        )


def get_notification_service() -> NotificationService:
    return NotificationService()
