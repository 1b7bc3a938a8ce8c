"""
Storage facade over the per-domain repositories.

Every read and write the API and services perform goes through these
functions: users, products, cart, orders, order tracking, wishlist, reviews
and audit logs.
"""
import uuid
from typing import List, Optional
from sqlalchemy.orm import Session

from . import models, schemas
from .repositories import users as repo_users
from .repositories import products as repo_products
from .repositories import cart as repo_cart
from .repositories import orders as repo_orders
from .repositories import wishlist as repo_wishlist
from .repositories import reviews as repo_reviews
from .repositories import audits as repo_audits

# User operations
def get_user(db: Session, user_id: str) -> Optional[models.User]:
    return repo_users.get_user(db, user_id)

def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return repo_users.get_user_by_email(db, email)

def upsert_user(db: Session, user: schemas.UserUpsert) -> models.User:
    return repo_users.upsert_user(db, user)

def set_admin(db: Session, user_id: str, is_admin: bool = True) -> Optional[models.User]:
    return repo_users.set_admin(db, user_id, is_admin)

# Product operations
def get_products(
    db: Session,
    *,
    category: Optional[str] = None,
    search: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[models.Product]:
    return repo_products.get_products(
        db,
        category=category,
        search=search,
        featured=featured,
        limit=limit,
        offset=offset,
    )

def get_product(db: Session, product_id: uuid.UUID) -> Optional[models.Product]:
    return repo_products.get_product(db, product_id)

def get_products_by_ids(db: Session, product_ids: List[uuid.UUID]) -> List[models.Product]:
    return repo_products.get_products_by_ids(db, product_ids)

def create_product(db: Session, product: schemas.ProductCreate) -> models.Product:
    return repo_products.create_product(db, product)

def update_product(db: Session, product_id: uuid.UUID, product: schemas.ProductUpdate) -> Optional[models.Product]:
    return repo_products.update_product(db, product_id, product)

def delete_product(db: Session, product_id: uuid.UUID) -> bool:
    return repo_products.delete_product(db, product_id)

# Cart operations
def get_cart_items(db: Session, user_id: str) -> List[models.CartItem]:
    return repo_cart.get_cart_items(db, user_id)

def get_cart_item(db: Session, cart_item_id: uuid.UUID) -> Optional[models.CartItem]:
    return repo_cart.get_cart_item(db, cart_item_id)

def add_to_cart(db: Session, cart_item: schemas.CartItemCreate) -> models.CartItem:
    return repo_cart.add_to_cart(db, cart_item)

def update_cart_item(db: Session, cart_item_id: uuid.UUID, quantity: int) -> Optional[models.CartItem]:
    return repo_cart.update_cart_item(db, cart_item_id, quantity)

def remove_from_cart(db: Session, cart_item_id: uuid.UUID) -> bool:
    return repo_cart.remove_from_cart(db, cart_item_id)

def clear_cart(db: Session, user_id: str) -> bool:
    return repo_cart.clear_cart(db, user_id)

# Order operations
def create_order(db: Session, order: schemas.OrderCreate, items: List[schemas.OrderItemCreate]) -> models.Order:
    return repo_orders.create_order(db, order, items)

def get_orders(db: Session, user_id: str) -> List[models.Order]:
    return repo_orders.get_orders(db, user_id)

def get_all_orders(db: Session, skip: int = 0, limit: int = 100) -> List[models.Order]:
    return repo_orders.get_all_orders(db, skip=skip, limit=limit)

def get_order(db: Session, order_id: uuid.UUID) -> Optional[models.Order]:
    return repo_orders.get_order(db, order_id)

def get_order_by_number(db: Session, order_number: str) -> Optional[models.Order]:
    return repo_orders.get_order_by_number(db, order_number)

def update_order_status(db: Session, order_id: uuid.UUID, status: str) -> Optional[models.Order]:
    return repo_orders.update_order_status(db, order_id, status)

# Order tracking operations
def add_order_tracking(db: Session, tracking: schemas.OrderTrackingCreate) -> models.OrderTracking:
    return repo_orders.add_order_tracking(db, tracking)

def get_order_tracking(db: Session, order_id: uuid.UUID) -> List[models.OrderTracking]:
    return repo_orders.get_order_tracking(db, order_id)

# Wishlist operations
def get_wishlist(db: Session, user_id: str) -> List[models.WishlistItem]:
    return repo_wishlist.get_wishlist(db, user_id)

def add_to_wishlist(db: Session, wishlist_item: schemas.WishlistItemCreate) -> models.WishlistItem:
    return repo_wishlist.add_to_wishlist(db, wishlist_item)

def remove_from_wishlist(db: Session, user_id: str, product_id: uuid.UUID) -> bool:
    return repo_wishlist.remove_from_wishlist(db, user_id, product_id)

# Review operations
def get_product_reviews(db: Session, product_id: uuid.UUID) -> List[models.Review]:
    return repo_reviews.get_product_reviews(db, product_id)

def add_review(db: Session, review: schemas.ReviewCreate) -> models.Review:
    return repo_reviews.add_review(db, review)

# Audit log operations
def create_audit_log(db: Session, audit_log: schemas.AuditLogCreate, *, actor_user_id: str):
    return repo_audits.create_audit_log(db, audit_log, actor_user_id)

def get_audit_logs(
    db: Session,
    *,
    user_id: Optional[str] = None,
    action_type: Optional[str] = None,
    target_id: Optional[uuid.UUID] = None,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
):
    return repo_audits.get_audit_logs(
        db,
        user_id=user_id,
        action_type=action_type,
        target_id=target_id,
        status=status,
        skip=skip,
        limit=limit,
    )
