"""
Cart repository functions.

Cart lines are merged per (user, product, size, color); size and color
compare null-safely so an unsized line only merges with another unsized one.
"""
from __future__ import annotations

import uuid
from typing import List, Optional
from sqlalchemy.orm import Session, contains_eager

from storefront.db import models, schemas


def _null_safe_eq(column, value):
    return column == value if value else column.is_(None)


def get_cart_items(db: Session, user_id: str) -> List[models.CartItem]:
    return (
        db.query(models.CartItem)
        .join(models.Product, models.CartItem.product_id == models.Product.id)
        .options(contains_eager(models.CartItem.product))
        .filter(models.CartItem.user_id == user_id)
        .order_by(models.CartItem.created_at.asc())
        .all()
    )


def get_cart_item(db: Session, cart_item_id: uuid.UUID) -> Optional[models.CartItem]:
    return db.query(models.CartItem).filter(models.CartItem.id == cart_item_id).first()


def add_to_cart(db: Session, cart_item: schemas.CartItemCreate) -> models.CartItem:
    existing = (
        db.query(models.CartItem)
        .filter(
            models.CartItem.user_id == cart_item.user_id,
            models.CartItem.product_id == cart_item.product_id,
            _null_safe_eq(models.CartItem.size, cart_item.size),
            _null_safe_eq(models.CartItem.color, cart_item.color),
        )
        .first()
    )
    if existing:
        existing.quantity = (existing.quantity or 0) + (cart_item.quantity or 1)
        db.commit()
        db.refresh(existing)
        return existing

    db_item = models.CartItem(**cart_item.model_dump())
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def update_cart_item(db: Session, cart_item_id: uuid.UUID, quantity: int) -> Optional[models.CartItem]:
    db_item = get_cart_item(db, cart_item_id)
    if db_item:
        db_item.quantity = quantity
        db.commit()
        db.refresh(db_item)
    return db_item


def remove_from_cart(db: Session, cart_item_id: uuid.UUID) -> bool:
    deleted = (
        db.query(models.CartItem)
        .filter(models.CartItem.id == cart_item_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return (deleted or 0) > 0


def clear_cart(db: Session, user_id: str) -> bool:
    # An already empty cart is cleared successfully
    db.query(models.CartItem).filter(models.CartItem.user_id == user_id).delete(synchronize_session=False)
    db.commit()
    return True
