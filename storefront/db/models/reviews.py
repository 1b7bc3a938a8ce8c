import uuid
from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Review(Base):
    __tablename__ = 'reviews'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(UUID(as_uuid=True), ForeignKey('products.id', ondelete='CASCADE'), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    user = relationship("User", lazy="joined")

    __table_args__ = (
        Index('idx_reviews_product_id_created_at', 'product_id', 'created_at'),
        CheckConstraint("rating >= 1 and rating <= 5", name='ck_reviews_rating_range'),
    )
