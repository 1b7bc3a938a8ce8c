"""Checkout pricing rules: effective prices, shipping fee and delivery estimate."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from decimal import Decimal
from typing import Iterable, Tuple

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class PricingConfig:
    free_shipping_threshold: Decimal
    shipping_fee: Decimal
    estimated_delivery_days: int


def get_pricing_config() -> PricingConfig:
    return PricingConfig(
        free_shipping_threshold=Decimal(os.getenv("FREE_SHIPPING_THRESHOLD", "999")),
        shipping_fee=Decimal(os.getenv("SHIPPING_FEE", "99")),
        estimated_delivery_days=int(os.getenv("ESTIMATED_DELIVERY_DAYS", "5")),
    )


def effective_price(product) -> Decimal:
    """Sale price when set, else list price."""
    price = product.sale_price if product.sale_price is not None else product.price
    return Decimal(str(price)).quantize(_CENTS)


def subtotal(lines: Iterable[Tuple[Decimal, int]]) -> Decimal:
    """Sum of unit price * quantity over (price, quantity) pairs."""
    total = sum((Decimal(str(price)) * quantity for price, quantity in lines), Decimal("0"))
    return total.quantize(_CENTS)


def shipping_for(amount: Decimal, config: PricingConfig | None = None) -> Decimal:
    config = config or get_pricing_config()
    if amount >= config.free_shipping_threshold:
        return Decimal("0.00")
    return config.shipping_fee.quantize(_CENTS)


def estimated_delivery(now: datetime | None = None, config: PricingConfig | None = None) -> datetime:
    config = config or get_pricing_config()
    return (now or datetime.now(UTC)) + timedelta(days=config.estimated_delivery_days)
