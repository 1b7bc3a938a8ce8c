"""
Wishlist repository functions.
"""
from __future__ import annotations

import uuid
from typing import List
from sqlalchemy.orm import Session, contains_eager

from storefront.db import models, schemas


def get_wishlist(db: Session, user_id: str) -> List[models.WishlistItem]:
    return (
        db.query(models.WishlistItem)
        .join(models.Product, models.WishlistItem.product_id == models.Product.id)
        .options(contains_eager(models.WishlistItem.product))
        .filter(models.WishlistItem.user_id == user_id)
        .order_by(models.WishlistItem.created_at.desc())
        .all()
    )


def add_to_wishlist(db: Session, wishlist_item: schemas.WishlistItemCreate) -> models.WishlistItem:
    existing = (
        db.query(models.WishlistItem)
        .filter(
            models.WishlistItem.user_id == wishlist_item.user_id,
            models.WishlistItem.product_id == wishlist_item.product_id,
        )
        .first()
    )
    if existing:
        return existing
    db_item = models.WishlistItem(**wishlist_item.model_dump())
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def remove_from_wishlist(db: Session, user_id: str, product_id: uuid.UUID) -> bool:
    deleted = (
        db.query(models.WishlistItem)
        .filter(
            models.WishlistItem.user_id == user_id,
            models.WishlistItem.product_id == product_id,
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    return (deleted or 0) > 0
