"""
Wishlist API endpoints.
"""
from typing import List
import uuid
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.db import schemas, storage
from storefront.db.database import get_db
from storefront.api.deps import get_current_user_context
from storefront.utils.feature_flags import wishlist_enabled

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


def _require_wishlist():
    if not wishlist_enabled():
        raise HTTPException(status_code=404, detail="Wishlist is disabled")


@router.get("", response_model=List[schemas.WishlistItemWithProduct], dependencies=[Depends(_require_wishlist)])
def get_wishlist_endpoint(
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    return storage.get_wishlist(db, user.id)


@router.post(
    "",
    response_model=schemas.WishlistItem,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(_require_wishlist)],
)
def add_to_wishlist_endpoint(
    payload: schemas.WishlistAdd,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    product = storage.get_product(db, payload.product_id)
    if not product or not product.is_active:
        raise HTTPException(status_code=404, detail="Product not found")
    return storage.add_to_wishlist(db, schemas.WishlistItemCreate(user_id=user.id, product_id=payload.product_id))


@router.delete("/{product_id}", dependencies=[Depends(_require_wishlist)])
def remove_from_wishlist_endpoint(
    product_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    if not storage.remove_from_wishlist(db, user.id, product_id):
        raise HTTPException(status_code=404, detail="Product not in wishlist")
    return {"message": "Removed from wishlist"}
