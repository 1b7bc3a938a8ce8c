"""
Domain-split Pydantic schemas with an aggregator.

Request bodies (``*Add``, ``*Request``), repository inputs (``*Create``,
``*Update``) and response models live side by side per domain.
"""

from .users import UserBase, UserUpsert, User
from .products import ProductCategory, ProductBase, ProductCreate, ProductUpdate, Product
from .cart import (
    CartItemBase,
    CartItemAdd,
    CartItemCreate,
    CartItemUpdate,
    CartItem,
    CartItemWithProduct,
    CartSummary,
)
from .orders import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
    OrderItemCreate,
    OrderCreate,
    CheckoutItem,
    CheckoutRequest,
    OrderStatusUpdate,
    OrderTrackingBase,
    OrderTrackingRequest,
    OrderTrackingCreate,
    OrderTracking,
    OrderItem,
    OrderItemWithProduct,
    Order,
    OrderWithItems,
    OrderDetail,
)
from .wishlist import WishlistAdd, WishlistItemCreate, WishlistItem, WishlistItemWithProduct
from .reviews import ReviewBase, ReviewRequest, ReviewCreate, Review, ReviewWithUser
from .audits import AuditLogBase, AuditLogCreate, AuditLog

__all__ = [
    # Users
    "UserBase",
    "UserUpsert",
    "User",
    # Products
    "ProductCategory",
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "Product",
    # Cart
    "CartItemBase",
    "CartItemAdd",
    "CartItemCreate",
    "CartItemUpdate",
    "CartItem",
    "CartItemWithProduct",
    "CartSummary",
    # Orders
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ShippingAddress",
    "OrderItemCreate",
    "OrderCreate",
    "CheckoutItem",
    "CheckoutRequest",
    "OrderStatusUpdate",
    "OrderTrackingBase",
    "OrderTrackingRequest",
    "OrderTrackingCreate",
    "OrderTracking",
    "OrderItem",
    "OrderItemWithProduct",
    "Order",
    "OrderWithItems",
    "OrderDetail",
    # Wishlist
    "WishlistAdd",
    "WishlistItemCreate",
    "WishlistItem",
    "WishlistItemWithProduct",
    # Reviews
    "ReviewBase",
    "ReviewRequest",
    "ReviewCreate",
    "Review",
    "ReviewWithUser",
    # Audits
    "AuditLogBase",
    "AuditLogCreate",
    "AuditLog",
]
