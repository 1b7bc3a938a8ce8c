"""
Review repository functions.

Submitting a review recomputes the product's aggregate rating (one decimal)
and review count in the same transaction as the insert.
"""
from __future__ import annotations

import logging
import uuid
from decimal import Decimal, ROUND_HALF_UP
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session, contains_eager

from storefront.db import models, schemas

logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def round_rating(value) -> Decimal:
    """Round an average rating to one decimal place, halves away from zero."""
    if value is None:
        return Decimal("0.0")
    return Decimal(str(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def get_product_reviews(db: Session, product_id: uuid.UUID) -> List[models.Review]:
    return (
        db.query(models.Review)
        .join(models.User, models.Review.user_id == models.User.id)
        .options(contains_eager(models.Review.user))
        .filter(models.Review.product_id == product_id)
        .order_by(models.Review.created_at.desc())
        .all()
    )


def add_review(db: Session, review: schemas.ReviewCreate) -> models.Review:
    db_review = models.Review(**review.model_dump())
    try:
        db.add(db_review)
        db.flush()
        count, average = (
            db.query(func.count(models.Review.id), func.avg(models.Review.rating))
            .filter(models.Review.product_id == review.product_id)
            .one()
        )
        rating = round_rating(average)
        db.query(models.Product).filter(models.Product.id == review.product_id).update(
            {
                models.Product.rating: rating,
                models.Product.review_count: count,
                models.Product.updated_at: models.now_utc(),
            },
            synchronize_session=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("review_add_failed: product_id=%s", review.product_id, exc_info=True)
        raise
    db.refresh(db_review)
    logger.info(
        "product_rating_recomputed: product_id=%s rating=%s review_count=%d",
        review.product_id,
        rating,
        count,
    )
    return db_review
