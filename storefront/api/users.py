"""
Users API endpoints.

Exposes the signed-in shopper's own profile.
"""
from fastapi import APIRouter, Depends

from storefront.db import schemas
from storefront.api.deps import get_current_user_context

router = APIRouter(prefix="/api/auth", tags=["users"])


@router.get("/user", response_model=schemas.User)
def get_auth_user(user_context = Depends(get_current_user_context)):
    user, _ctx = user_context
    return user
