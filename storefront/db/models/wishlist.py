import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class WishlistItem(Base):
    __tablename__ = 'wishlist'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(UUID(as_uuid=True), ForeignKey('products.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    product = relationship("Product", lazy="joined")

    __table_args__ = (
        Index('idx_wishlist_user_id', 'user_id'),
        UniqueConstraint('user_id', 'product_id', name='uq_wishlist_user_product'),
    )
