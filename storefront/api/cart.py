"""
Cart API endpoints.

All routes act on the caller's own cart; foreign cart lines look missing.
"""
from typing import List
import uuid
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.db import schemas, storage
from storefront.db.database import get_db
from storefront.api.deps import get_current_user_context
from storefront.services.checkout_service import summarize_cart

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _own_cart_item(db: Session, cart_item_id: uuid.UUID, user_id: str):
    item = storage.get_cart_item(db, cart_item_id)
    if not item or item.user_id != user_id:
        raise HTTPException(status_code=404, detail="Cart item not found")
    return item


@router.get("", response_model=List[schemas.CartItemWithProduct])
def get_cart_endpoint(
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    return storage.get_cart_items(db, user.id)


@router.get("/summary", response_model=schemas.CartSummary)
def get_cart_summary_endpoint(
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    return summarize_cart(storage.get_cart_items(db, user.id))


@router.post("", response_model=schemas.CartItem, status_code=status.HTTP_201_CREATED)
def add_to_cart_endpoint(
    item: schemas.CartItemAdd,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    product = storage.get_product(db, item.product_id)
    if not product or not product.is_active:
        raise HTTPException(status_code=404, detail="Product not found")
    return storage.add_to_cart(db, schemas.CartItemCreate(user_id=user.id, **item.model_dump()))


@router.put("/{cart_item_id}", response_model=schemas.CartItem)
def update_cart_item_endpoint(
    cart_item_id: uuid.UUID,
    payload: schemas.CartItemUpdate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    _own_cart_item(db, cart_item_id, user.id)
    return storage.update_cart_item(db, cart_item_id, payload.quantity)


@router.delete("/{cart_item_id}")
def remove_from_cart_endpoint(
    cart_item_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    _own_cart_item(db, cart_item_id, user.id)
    storage.remove_from_cart(db, cart_item_id)
    return {"message": "Item removed from cart"}


@router.delete("")
def clear_cart_endpoint(
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ctx = user_context
    storage.clear_cart(db, user.id)
    return {"message": "Cart cleared"}
