import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Literal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .products import Product

OrderStatus = Literal['pending', 'confirmed', 'shipped', 'out_for_delivery', 'delivered', 'cancelled']
PaymentMethod = Literal['card', 'upi', 'wallet', 'cod']
PaymentStatus = Literal['pending', 'paid', 'failed', 'refunded']


class ShippingAddress(BaseModel):
    first_name: str = Field(min_length=1, validation_alias=AliasChoices("first_name", "firstName"))
    last_name: str = Field(min_length=1, validation_alias=AliasChoices("last_name", "lastName"))
    email: str
    phone: str
    address: str = Field(min_length=1)
    city: str
    state: str
    pincode: str


class OrderItemCreate(BaseModel):
    product_id: uuid.UUID
    quantity: int = Field(ge=1)
    size: str | None = None
    color: str | None = None
    price: Decimal = Field(ge=0)


class OrderCreate(BaseModel):
    user_id: str
    total_amount: Decimal = Field(ge=0)
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    payment_status: PaymentStatus = 'pending'
    estimated_delivery: datetime | None = None


class CheckoutItem(BaseModel):
    product_id: uuid.UUID = Field(validation_alias=AliasChoices("product_id", "productId"))
    quantity: int = Field(default=1, ge=1)
    size: str | None = None
    color: str | None = None


class CheckoutRequest(BaseModel):
    shipping_address: ShippingAddress = Field(validation_alias=AliasChoices("shipping_address", "shippingAddress"))
    payment_method: PaymentMethod = Field(validation_alias=AliasChoices("payment_method", "paymentMethod"))
    items: List[CheckoutItem] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderTrackingBase(BaseModel):
    status: OrderStatus
    message: str | None = None
    location: str | None = None


class OrderTrackingRequest(OrderTrackingBase):
    """Admin-supplied tracking event for an existing order."""


class OrderTrackingCreate(OrderTrackingBase):
    order_id: uuid.UUID


class OrderTracking(OrderTrackingBase):
    id: uuid.UUID
    order_id: uuid.UUID
    timestamp: datetime
    model_config = ConfigDict(from_attributes=True)


class OrderItem(BaseModel):
    id: uuid.UUID
    order_id: uuid.UUID
    product_id: uuid.UUID
    quantity: int
    size: str | None = None
    color: str | None = None
    price: Decimal
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class OrderItemWithProduct(OrderItem):
    product: Product


class Order(BaseModel):
    id: uuid.UUID
    user_id: str
    order_number: str
    status: OrderStatus
    total_amount: Decimal
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    estimated_delivery: datetime | None = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class OrderWithItems(Order):
    order_items: List[OrderItemWithProduct] = Field(default_factory=list)


class OrderDetail(OrderWithItems):
    tracking: List[OrderTracking] = Field(default_factory=list)
