"""
Public order tracking by order number.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.db import schemas, storage
from storefront.db.database import get_db

router = APIRouter(prefix="/api/track", tags=["tracking"])


@router.get("/{order_number}", response_model=schemas.OrderDetail)
def track_order_endpoint(order_number: str, db: Session = Depends(get_db)):
    order = storage.get_order_by_number(db, order_number.strip())
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
