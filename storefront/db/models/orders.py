import uuid
from sqlalchemy import Column, String, Text, DateTime, Integer, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from .base import Base, now_utc

ORDER_STATUSES = ('pending', 'confirmed', 'shipped', 'out_for_delivery', 'delivered', 'cancelled')
PAYMENT_METHODS = ('card', 'upi', 'wallet', 'cod')
PAYMENT_STATUSES = ('pending', 'paid', 'failed', 'refunded')


class Order(Base):
    __tablename__ = 'orders'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), ForeignKey('users.id'), nullable=False)
    order_number = Column(String(64), nullable=False, unique=True)
    status = Column(String(32), nullable=False, default='pending')
    total_amount = Column(Numeric(10, 2), nullable=False)
    shipping_address = Column(JSONB, nullable=False)
    payment_method = Column(String(20), nullable=False)
    payment_status = Column(String(20), nullable=False, default='pending')
    estimated_delivery = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    order_items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    tracking = relationship(
        "OrderTracking",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderTracking.timestamp.desc()",
    )

    __table_args__ = (
        Index('idx_orders_user_id_created_at', 'user_id', 'created_at'),
        CheckConstraint(
            "status in ('pending','confirmed','shipped','out_for_delivery','delivered','cancelled')",
            name='ck_orders_status',
        ),
        CheckConstraint("payment_method in ('card','upi','wallet','cod')", name='ck_orders_payment_method'),
        CheckConstraint("payment_status in ('pending','paid','failed','refunded')", name='ck_orders_payment_status'),
    )


class OrderItem(Base):
    __tablename__ = 'order_items'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_id = Column(UUID(as_uuid=True), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(UUID(as_uuid=True), ForeignKey('products.id'), nullable=False)
    quantity = Column(Integer, nullable=False)
    size = Column(String(50), nullable=True)
    color = Column(String(50), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    order = relationship("Order", back_populates="order_items")
    product = relationship("Product", lazy="joined")

    __table_args__ = (
        Index('idx_order_items_order_id', 'order_id'),
    )


class OrderTracking(Base):
    __tablename__ = 'order_tracking'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_id = Column(UUID(as_uuid=True), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    status = Column(String(32), nullable=False)
    message = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    timestamp = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    order = relationship("Order", back_populates="tracking")

    __table_args__ = (
        Index('idx_order_tracking_order_id_timestamp', 'order_id', 'timestamp'),
    )
