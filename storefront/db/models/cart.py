import uuid
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class CartItem(Base):
    __tablename__ = 'cart_items'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(UUID(as_uuid=True), ForeignKey('products.id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    size = Column(String(50), nullable=True)
    color = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    product = relationship("Product", lazy="joined")

    __table_args__ = (
        Index('idx_cart_items_user_id', 'user_id'),
    )
