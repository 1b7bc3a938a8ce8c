import uuid
from datetime import datetime
from decimal import Decimal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .products import Product


class CartItemBase(BaseModel):
    product_id: uuid.UUID = Field(validation_alias=AliasChoices("product_id", "productId"))
    quantity: int = Field(default=1, ge=1)
    size: str | None = None
    color: str | None = None


class CartItemAdd(CartItemBase):
    """Request body for adding a product to the caller's cart."""


class CartItemCreate(CartItemBase):
    user_id: str


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=1)


class CartItem(CartItemBase):
    id: uuid.UUID
    user_id: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class CartItemWithProduct(CartItem):
    product: Product


class CartSummary(BaseModel):
    item_count: int
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
