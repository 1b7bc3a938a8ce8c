"""
Products API endpoints.

Public catalog browsing and search, admin product management, and product
reviews.
"""
import logging
from typing import List, Optional
import uuid
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from storefront.db import schemas, storage
from storefront.db.database import get_db
from storefront.api.deps import get_current_user_context, require_admin
from storefront.audit import AuditAction, log_product
from storefront.utils.feature_flags import reviews_enabled

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[schemas.Product])
def list_products_endpoint(
    category: Optional[schemas.ProductCategory] = None,
    search: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: Optional[int] = Query(default=None, ge=0),
    db: Session = Depends(get_db),
):
    return storage.get_products(
        db,
        category=category,
        search=(search or "").strip() or None,
        featured=featured,
        limit=limit,
        offset=offset,
    )


@router.get("/{product_id}", response_model=schemas.Product)
def get_product_endpoint(product_id: uuid.UUID, db: Session = Depends(get_db)):
    product = storage.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=schemas.Product, status_code=status.HTTP_201_CREATED)
def create_product_endpoint(
    product: schemas.ProductCreate,
    db: Session = Depends(get_db),
    user_context = Depends(require_admin),
):
    user, _ctx = user_context
    created = storage.create_product(db, product)
    log_product(db, actor_user_id=user.id, product_id=created.id, action=AuditAction.PRODUCT_CREATE, name=created.name)
    return created


@router.put("/{product_id}", response_model=schemas.Product)
def update_product_endpoint(
    product_id: uuid.UUID,
    product: schemas.ProductUpdate,
    db: Session = Depends(get_db),
    user_context = Depends(require_admin),
):
    user, _ctx = user_context
    updated = storage.update_product(db, product_id, product)
    if not updated:
        raise HTTPException(status_code=404, detail="Product not found")
    log_product(db, actor_user_id=user.id, product_id=product_id, action=AuditAction.PRODUCT_UPDATE, name=updated.name)
    return updated


@router.delete("/{product_id}")
def delete_product_endpoint(
    product_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context = Depends(require_admin),
):
    user, _ctx = user_context
    if not storage.delete_product(db, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    log_product(db, actor_user_id=user.id, product_id=product_id, action=AuditAction.PRODUCT_DELETE)
    return {"message": "Product deleted successfully"}


# Reviews

@router.get("/{product_id}/reviews", response_model=List[schemas.ReviewWithUser])
def list_product_reviews_endpoint(product_id: uuid.UUID, db: Session = Depends(get_db)):
    return storage.get_product_reviews(db, product_id)


@router.post("/{product_id}/reviews", response_model=schemas.Review, status_code=status.HTTP_201_CREATED)
def add_product_review_endpoint(
    product_id: uuid.UUID,
    review: schemas.ReviewRequest,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    if not reviews_enabled():
        raise HTTPException(status_code=403, detail="Reviews are disabled")
    user, _ctx = user_context
    product = storage.get_product(db, product_id)
    if not product or not product.is_active:
        raise HTTPException(status_code=404, detail="Product not found")
    return storage.add_review(
        db,
        schemas.ReviewCreate(user_id=user.id, product_id=product_id, **review.model_dump()),
    )
