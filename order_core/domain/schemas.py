# order_core/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from decimal import Decimal
from datetime import date, datetime

from order_core.domain.enums import OrderStatus, PaymentStatus


class OrderCreate(BaseModel):
    """Checkout request: shipping details plus the cart items to convert."""

    shipping_address: str = Field(..., min_length=1, description="Shipping address")
    shipping_phone: str = Field(..., min_length=1, max_length=20)
    shipping_name: str = Field(..., min_length=1, max_length=100)
    payment_method: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None
    cart_item_ids: List[str] = Field(..., description="IDs of cart items to order")


class OrderUpdateRequest(BaseModel):
    """Raw update body; tokens are resolved by the router so unknown ones map to a 400."""

    status: Optional[str] = None
    payment_status: Optional[str] = None
    admin_notes: Optional[str] = None


class OrderUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    admin_notes: Optional[str] = None

    @field_validator("status", "payment_status", mode="before")
    @classmethod
    def _upper_token(cls, value):
        # status tokens are accepted case-insensitively
        if isinstance(value, str):
            return value.strip().upper()
        return value


class OrderItemOut(BaseModel):
    id: str
    order_id: str
    product_id: Optional[str] = None
    product_name: str
    product_price: Decimal
    quantity: int
    subtotal: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: str
    user_id: str
    username: Optional[str] = None
    order_number: str
    total_amount: Decimal
    shipping_address: str
    shipping_phone: Optional[str] = None
    shipping_name: Optional[str] = None
    status: OrderStatus
    payment_method: Optional[str] = None
    payment_status: PaymentStatus
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    version: int = 1
    items: List[OrderItemOut] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderPage(BaseModel):
    items: List[OrderOut]
    page: int
    size: int
    total_elements: int
    total_pages: int


class OrderSummaryOut(BaseModel):
    total_orders: int = 0
    pending_orders: int = 0
    shipping_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0
    total_revenue: Decimal = Decimal("0.00")


class DashboardSummaryOut(BaseModel):
    total_revenue: Decimal
    revenue_30_days: Decimal
    total_orders: int
    pending_orders: int
    delivered_orders: int
    total_customers: int
    new_customers: int
    total_products: int
    low_stock_products: int
    active_banners: int
    active_coupons: int


class RevenueTrendPointOut(BaseModel):
    date: date
    revenue: Decimal
    order_count: int


class RecentOrderOut(BaseModel):
    id: str
    order_number: str
    customer_name: Optional[str] = None
    total_amount: Decimal
    status: OrderStatus
    payment_status: PaymentStatus
    created_at: datetime


class DashboardOut(BaseModel):
    summary: DashboardSummaryOut
    revenue_trend: List[RevenueTrendPointOut]
    recent_orders: List[RecentOrderOut]
