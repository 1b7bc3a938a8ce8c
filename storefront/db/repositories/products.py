"""
Product repository functions.

Implements catalog listing with category/search/featured filters, CRUD, and
soft deletion through the ``is_active`` flag.
"""
from __future__ import annotations

import uuid
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import or_

from storefront.db import models, schemas


def get_products(
    db: Session,
    *,
    category: Optional[str] = None,
    search: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[models.Product]:
    """List active products, newest first."""
    q = db.query(models.Product).filter(models.Product.is_active.is_(True))
    if category:
        q = q.filter(models.Product.category == category)
    if search:
        pattern = f"%{search}%"
        q = q.filter(
            or_(
                models.Product.name.ilike(pattern),
                models.Product.description.ilike(pattern),
                models.Product.brand.ilike(pattern),
            )
        )
    if featured:
        q = q.filter(models.Product.is_featured.is_(True))
    q = q.order_by(models.Product.created_at.desc())
    if limit:
        q = q.limit(limit)
    if offset:
        q = q.offset(offset)
    return q.all()


def get_product(db: Session, product_id: uuid.UUID) -> Optional[models.Product]:
    return db.query(models.Product).filter(models.Product.id == product_id).first()


def get_products_by_ids(db: Session, product_ids: List[uuid.UUID]) -> List[models.Product]:
    if not product_ids:
        return []
    return db.query(models.Product).filter(models.Product.id.in_(product_ids)).all()


def create_product(db: Session, product: schemas.ProductCreate) -> models.Product:
    db_product = models.Product(**product.model_dump())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product


_NULLABLE_FIELDS = {"description", "brand", "subcategory", "sale_price", "image_url"}


def update_product(db: Session, product_id: uuid.UUID, product: schemas.ProductUpdate) -> Optional[models.Product]:
    db_product = get_product(db, product_id)
    if db_product:
        for key, value in product.model_dump(exclude_unset=True).items():
            if value is None and key not in _NULLABLE_FIELDS:
                continue
            setattr(db_product, key, value)
        db_product.updated_at = models.now_utc()
        db.commit()
        db.refresh(db_product)
    return db_product


def delete_product(db: Session, product_id: uuid.UUID) -> bool:
    """Soft-delete a product; True when a row was affected."""
    if product_id is None:
        return False
    try:
        affected = (
            db.query(models.Product)
            .filter(models.Product.id == product_id)
            .update({models.Product.is_active: False}, synchronize_session=False)
        )
        db.commit()
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete product {product_id}: {str(e)}")
    return (affected or 0) > 0
