import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from .users import User


class ReviewBase(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str | None = None


class ReviewRequest(ReviewBase):
    """Request body for reviewing a product as the current user."""


class ReviewCreate(ReviewBase):
    user_id: str
    product_id: uuid.UUID


class Review(ReviewCreate):
    id: uuid.UUID
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ReviewWithUser(Review):
    user: User
