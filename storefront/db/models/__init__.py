"""
Domain-split SQLAlchemy models with an aggregator.

Exposes `Base`, `now_utc`, the enum value tuples, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User
from .products import Product, PRODUCT_CATEGORIES
from .cart import CartItem
from .orders import Order, OrderItem, OrderTracking, ORDER_STATUSES, PAYMENT_METHODS, PAYMENT_STATUSES
from .wishlist import WishlistItem
from .reviews import Review
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    # catalog
    "Product",
    "PRODUCT_CATEGORIES",
    # cart/wishlist
    "CartItem",
    "WishlistItem",
    # orders
    "Order",
    "OrderItem",
    "OrderTracking",
    "ORDER_STATUSES",
    "PAYMENT_METHODS",
    "PAYMENT_STATUSES",
    # reviews
    "Review",
    # audit
    "AuditLog",
]
