"""
Audit logging helpers and enums.

Centralized helpers to persist normalized audit records for admin actions;
includes convenience wrappers per target type.
"""
from __future__ import annotations
import logging
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from storefront.db import storage, schemas

logger = logging.getLogger(__name__)


class AuditAction(str, Enum):
    # Catalog
    PRODUCT_CREATE = "product_create"
    PRODUCT_UPDATE = "product_update"
    PRODUCT_DELETE = "product_delete"
    # Orders
    ORDER_STATUS_CHANGE = "order_status_change"
    ORDER_TRACKING_ADD = "order_tracking_add"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    actor_user_id: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> schemas.AuditLog:
    """Central audit logging helper."""
    # Ensure we persist pure string values, not Enum reprs (avoid 'AuditAction.XYZ')
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )
    return storage.create_audit_log(db, audit_log, actor_user_id=actor_user_id)


def safe_log(db: Session, **kwargs) -> None:
    """Write an audit record without letting a failure reach the caller."""
    try:
        log(db, **kwargs)
    except Exception:
        db.rollback()
        logger.warning("audit_log_failed: action=%s", kwargs.get("action"), exc_info=True)


__all__ = ["AuditAction", "AuditStatus", "log", "safe_log"]


def log_product(db: Session, *, actor_user_id: str, product_id: uuid.UUID, action: AuditAction, name: Optional[str] = None, status: AuditStatus | str = AuditStatus.SUCCESS):
    return safe_log(
        db,
        action=action,
        status=status,
        target_type="product",
        target_id=product_id,
        actor_user_id=actor_user_id,
        metadata={"name": name} if name else None,
    )


def log_order(db: Session, *, actor_user_id: str, order_id: uuid.UUID, action: AuditAction, status: AuditStatus | str = AuditStatus.SUCCESS, metadata: Optional[Dict[str, Any]] = None):
    return safe_log(
        db,
        action=action,
        status=status,
        target_type="order",
        target_id=order_id,
        actor_user_id=actor_user_id,
        metadata=metadata,
    )


__all__.extend(["log_product", "log_order"])
