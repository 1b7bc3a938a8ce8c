"""
Checkout service: prices a cart server-side and places the order.

Line prices always come from the catalog (effective price), never from the
client payload. The cart is cleared once the order transaction commits.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from storefront.db import models, schemas, storage
from storefront.utils import pricing

logger = logging.getLogger(__name__)


class CheckoutError(ValueError):
    """Raised when an order cannot be placed from the submitted items."""


def summarize_cart(cart_items: Sequence[models.CartItem], config: Optional[pricing.PricingConfig] = None) -> schemas.CartSummary:
    config = config or pricing.get_pricing_config()
    item_count = sum(item.quantity for item in cart_items)
    sub = pricing.subtotal((pricing.effective_price(item.product), item.quantity) for item in cart_items)
    shipping = pricing.shipping_for(sub, config) if cart_items else Decimal("0.00")
    return schemas.CartSummary(item_count=item_count, subtotal=sub, shipping=shipping, total=sub + shipping)


def _price_items(db: Session, items: List[schemas.CheckoutItem]) -> List[schemas.OrderItemCreate]:
    products = {p.id: p for p in storage.get_products_by_ids(db, [i.product_id for i in items])}
    priced: List[schemas.OrderItemCreate] = []
    for item in items:
        product = products.get(item.product_id)
        if product is None or not product.is_active:
            raise CheckoutError(f"Product {item.product_id} is not available")
        priced.append(
            schemas.OrderItemCreate(
                product_id=item.product_id,
                quantity=item.quantity,
                size=item.size,
                color=item.color,
                price=pricing.effective_price(product),
            )
        )
    return priced


def place_order(db: Session, user_id: str, request: schemas.CheckoutRequest) -> models.Order:
    """Create an order for ``user_id`` and empty their cart."""
    if not request.items:
        raise CheckoutError("Cannot place an order without items")

    config = pricing.get_pricing_config()
    order_items = _price_items(db, request.items)
    sub = pricing.subtotal((item.price, item.quantity) for item in order_items)
    total = sub + pricing.shipping_for(sub, config)

    order = storage.create_order(
        db,
        schemas.OrderCreate(
            user_id=user_id,
            total_amount=total,
            shipping_address=request.shipping_address,
            payment_method=request.payment_method,
            estimated_delivery=pricing.estimated_delivery(config=config),
        ),
        order_items,
    )
    storage.clear_cart(db, user_id)
    logger.info("checkout_complete: order_number=%s subtotal=%s total=%s", order.order_number, sub, total)
    return storage.get_order(db, order.id)
