"""
Orders API endpoints.

Checkout, order history, admin status changes and order tracking events.
Order emails are rendered from a context captured while the session is open
and delivered from a background task.
"""
import logging
from typing import Any, Dict, List
import uuid
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.db import models, schemas, storage
from storefront.db.database import get_db
from storefront.api.deps import get_current_user_context, require_admin, ensure_owner_or_admin
from storefront.audit import AuditAction, log_order
from storefront.services.checkout_service import CheckoutError, place_order
from storefront.services.notification_service import build_order_context, get_notification_service
from storefront.utils.feature_flags import email_notifications_enabled

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _get_visible_order(db: Session, order_id: uuid.UUID, current_user: Dict[str, Any]) -> models.Order:
    order = storage.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    ensure_owner_or_admin(order.user_id, current_user, "Order not found")
    return order


def _schedule_email(background_tasks: BackgroundTasks, method_name: str, order: models.Order) -> None:
    if not email_notifications_enabled():
        return
    context = build_order_context(order)
    service = get_notification_service()
    background_tasks.add_task(getattr(service, method_name), context)


@router.post("", response_model=schemas.OrderDetail, status_code=status.HTTP_201_CREATED)
def create_order_endpoint(
    request: schemas.CheckoutRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    try:
        order = place_order(db, user.id, request)
    except CheckoutError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _schedule_email(background_tasks, "notify_order_placed", order)
    return order


@router.get("", response_model=List[schemas.OrderWithItems])
def list_orders_endpoint(
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    return storage.get_orders(db, user.id)


@router.get("/{order_id}", response_model=schemas.OrderDetail)
def get_order_endpoint(
    order_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _user, current_user = user_context
    return _get_visible_order(db, order_id, current_user)


@router.put("/{order_id}/status", response_model=schemas.OrderDetail)
def update_order_status_endpoint(
    order_id: uuid.UUID,
    payload: schemas.OrderStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user_context = Depends(require_admin),
):
    user, _ctx = user_context
    existing = storage.get_order(db, order_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Order not found")
    previous_status = existing.status

    updated = storage.update_order_status(db, order_id, payload.status)
    if not updated:
        raise HTTPException(status_code=404, detail="Order not found")
    log_order(
        db,
        actor_user_id=user.id,
        order_id=order_id,
        action=AuditAction.ORDER_STATUS_CHANGE,
        metadata={"from": previous_status, "to": payload.status},
    )
    order = storage.get_order(db, order_id)
    _schedule_email(background_tasks, "notify_order_status_changed", order)
    return order


@router.get("/{order_id}/tracking", response_model=List[schemas.OrderTracking])
def get_order_tracking_endpoint(
    order_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _user, current_user = user_context
    _get_visible_order(db, order_id, current_user)
    return storage.get_order_tracking(db, order_id)


@router.post("/{order_id}/tracking", response_model=schemas.OrderTracking, status_code=status.HTTP_201_CREATED)
def add_order_tracking_endpoint(
    order_id: uuid.UUID,
    payload: schemas.OrderTrackingRequest,
    db: Session = Depends(get_db),
    user_context = Depends(require_admin),
):
    user, _ctx = user_context
    if not storage.get_order(db, order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    tracking = storage.add_order_tracking(
        db,
        schemas.OrderTrackingCreate(order_id=order_id, **payload.model_dump()),
    )
    log_order(
        db,
        actor_user_id=user.id,
        order_id=order_id,
        action=AuditAction.ORDER_TRACKING_ADD,
        metadata={"status": payload.status, "location": payload.location},
    )
    return tracking
