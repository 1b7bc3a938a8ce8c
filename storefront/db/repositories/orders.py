"""
Order repository functions.

Order creation writes the order, its line items and the initial tracking
event in a single transaction. Status updates append a tracking event.
"""
from __future__ import annotations

import logging
import secrets
import string
import time
import uuid
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload, joinedload

from storefront.db import models, schemas

logger = logging.getLogger(__name__)

_ORDER_NUMBER_ALPHABET = string.digits + string.ascii_uppercase
ORDER_PLACED_MESSAGE = "Order placed successfully"


def generate_order_number() -> str:
    """Return ``ORD-<epoch millis>-<9 base-36 chars>``."""
    suffix = "".join(secrets.choice(_ORDER_NUMBER_ALPHABET) for _ in range(9))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"


def _with_items(q):
    return q.options(
        selectinload(models.Order.order_items).joinedload(models.OrderItem.product),
    )


def _with_items_and_tracking(q):
    return _with_items(q).options(selectinload(models.Order.tracking))


def create_order(
    db: Session,
    order: schemas.OrderCreate,
    items: List[schemas.OrderItemCreate],
) -> models.Order:
    data = order.model_dump()
    data["shipping_address"] = order.shipping_address.model_dump()
    db_order = models.Order(id=uuid.uuid4(), order_number=generate_order_number(), **data)
    try:
        db.add(db_order)
        db.flush()
        for item in items:
            db.add(models.OrderItem(order_id=db_order.id, **item.model_dump()))
        db.add(
            models.OrderTracking(
                order_id=db_order.id,
                status="pending",
                message=ORDER_PLACED_MESSAGE,
            )
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("order_create_failed: user_id=%s", order.user_id, exc_info=True)
        raise
    db.refresh(db_order)
    logger.info(
        "order_created: order_number=%s user_id=%s items=%d total=%s",
        db_order.order_number,
        db_order.user_id,
        len(items),
        db_order.total_amount,
    )
    return db_order


def get_orders(db: Session, user_id: str) -> List[models.Order]:
    q = db.query(models.Order).filter(models.Order.user_id == user_id)
    return _with_items(q).order_by(models.Order.created_at.desc()).all()


def get_all_orders(db: Session, skip: int = 0, limit: int = 100) -> List[models.Order]:
    q = _with_items(db.query(models.Order))
    return q.order_by(models.Order.created_at.desc()).offset(skip).limit(limit).all()


def get_order(db: Session, order_id: uuid.UUID) -> Optional[models.Order]:
    q = db.query(models.Order).filter(models.Order.id == order_id)
    return _with_items_and_tracking(q).first()


def get_order_by_number(db: Session, order_number: str) -> Optional[models.Order]:
    q = db.query(models.Order).filter(models.Order.order_number == order_number)
    return _with_items_and_tracking(q).first()


def update_order_status(db: Session, order_id: uuid.UUID, status: str) -> Optional[models.Order]:
    db_order = db.query(models.Order).filter(models.Order.id == order_id).first()
    if not db_order:
        return None
    previous = db_order.status
    db_order.status = status
    db_order.updated_at = models.now_utc()
    db.commit()
    db.refresh(db_order)
    add_order_tracking(
        db,
        schemas.OrderTrackingCreate(
            order_id=order_id,
            status=status,
            message=f"Order status updated to {status}",
        ),
    )
    logger.info(
        "order_status_updated: order_number=%s from=%s to=%s",
        db_order.order_number,
        previous,
        status,
    )
    return db_order


# Tracking
def add_order_tracking(db: Session, tracking: schemas.OrderTrackingCreate) -> models.OrderTracking:
    db_tracking = models.OrderTracking(**tracking.model_dump())
    db.add(db_tracking)
    db.commit()
    db.refresh(db_tracking)
    return db_tracking


def get_order_tracking(db: Session, order_id: uuid.UUID) -> List[models.OrderTracking]:
    return (
        db.query(models.OrderTracking)
        .filter(models.OrderTracking.order_id == order_id)
        .order_by(models.OrderTracking.timestamp.desc())
        .all()
    )
