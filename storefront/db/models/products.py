import uuid
from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    Integer,
    Numeric,
    Boolean,
    Index,
    CheckConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc
from ..types import StringList

PRODUCT_CATEGORIES = ('men', 'women', 'kids', 'accessories')


class Product(Base):
    __tablename__ = 'products'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    brand = Column(String(255), nullable=True)
    category = Column(String(20), nullable=False)
    subcategory = Column(String(100), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String, nullable=True)
    images = Column(StringList(), nullable=False, default=list)
    sizes = Column(StringList(), nullable=False, default=list)
    colors = Column(StringList(), nullable=False, default=list)
    tags = Column(StringList(), nullable=False, default=list)
    stock = Column(Integer, nullable=False, default=0)
    rating = Column(Numeric(2, 1), nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_products_category', 'category'),
        Index('idx_products_active_created_at', 'is_active', 'created_at'),
        CheckConstraint("category in ('men','women','kids','accessories')", name='ck_products_category'),
    )

    @property
    def effective_price(self):
        """Price a customer pays today: the sale price when one is set."""
        return self.sale_price if self.sale_price is not None else self.price
