import uuid
from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .products import Product


class WishlistAdd(BaseModel):
    product_id: uuid.UUID = Field(validation_alias=AliasChoices("product_id", "productId"))


class WishlistItemCreate(WishlistAdd):
    user_id: str


class WishlistItem(WishlistItemCreate):
    id: uuid.UUID
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class WishlistItemWithProduct(WishlistItem):
    product: Product
