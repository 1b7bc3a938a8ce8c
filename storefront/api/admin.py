"""
Admin console endpoints: every order and the audit trail.
"""
from typing import List, Optional
import uuid
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.db import schemas, storage
from storefront.db.database import get_db
from storefront.api.deps import require_admin

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/orders", response_model=List[schemas.OrderWithItems])
def list_all_orders_endpoint(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return storage.get_all_orders(db, skip=skip, limit=limit)


@router.get("/audit-logs", response_model=List[schemas.AuditLog])
def list_audit_logs_endpoint(
    user_id: Optional[str] = None,
    action_type: Optional[str] = None,
    target_id: Optional[uuid.UUID] = None,
    status: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return storage.get_audit_logs(
        db,
        user_id=user_id,
        action_type=action_type,
        target_id=target_id,
        status=status,
        skip=skip,
        limit=limit,
    )
