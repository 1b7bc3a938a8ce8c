import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Literal
from pydantic import BaseModel, ConfigDict, Field

ProductCategory = Literal['men', 'women', 'kids', 'accessories']


class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    brand: str | None = None
    category: ProductCategory
    subcategory: str | None = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    sale_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image_url: str | None = None
    images: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    stock: int = Field(default=0, ge=0)
    is_featured: bool = False


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    brand: str | None = None
    category: ProductCategory | None = None
    subcategory: str | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    sale_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image_url: str | None = None
    images: List[str] | None = None
    sizes: List[str] | None = None
    colors: List[str] | None = None
    tags: List[str] | None = None
    stock: int | None = Field(default=None, ge=0)
    is_featured: bool | None = None
    is_active: bool | None = None


class Product(ProductBase):
    id: uuid.UUID
    rating: Decimal
    review_count: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
