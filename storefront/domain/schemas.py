# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List
from decimal import Decimal
from datetime import datetime


class ShippingAddressIn(BaseModel):
    """Adres dostawy. Kompletnosc sprawdza OrderService, zeby zachowac kolejnosc walidacji."""

    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None


class OrderItemIn(BaseModel):
    """Line item as submitted by the client, a snapshot of the catalog item."""

    item_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)
    unit_price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: str = ""


class OrderCreate(BaseModel):
    order_items: List[OrderItemIn] = Field(default_factory=list)
    shipping_address: ShippingAddressIn | None = None
    payment_method: str | None = None
    items_price: Decimal = Field(Decimal("0"), ge=0)
    tax_price: Decimal = Field(Decimal("0"), ge=0)
    shipping_price: Decimal = Field(Decimal("0"), ge=0)
    notes: str = ""


class CancelIn(BaseModel):
    cancellation_reason: str | None = None


class StatusUpdateIn(BaseModel):
    status: str | None = None
    notes: str | None = None


class OrderItemOut(BaseModel):
    item_id: int
    name: str
    unit_price: Decimal
    quantity: int
    image: str


class ShippingAddressOut(BaseModel):
    address: str
    city: str
    postal_code: str
    country: str
    phone: str


class OrderSummaryOut(BaseModel):
    total_items: int
    total_price: Decimal
    status: str


class OrderOut(BaseModel):
    id: int
    user_id: int
    order_items: List[OrderItemOut]
    shipping_address: ShippingAddressOut
    payment_method: str
    items_price: Decimal
    tax_price: Decimal
    shipping_price: Decimal
    total_price: Decimal
    status: str
    is_paid: bool
    paid_at: datetime | None = None
    is_delivered: bool
    delivered_at: datetime | None = None
    notes: str
    cancellation_reason: str
    cancelled_by: str | None = None
    cancelled_at: datetime | None = None
    version: int
    created_at: datetime
    updated_at: datetime
    summary: OrderSummaryOut


class OrderEnvelope(BaseModel):
    message: str
    order: OrderOut


class PaginationOut(BaseModel):
    current_page: int
    total_pages: int
    total_orders: int
    orders_per_page: int


class OrderListOut(BaseModel):
    message: str
    orders: List[OrderOut]
    pagination: PaginationOut


class OrderStatsOut(BaseModel):
    period: str
    total_orders: int
    total_revenue: Decimal
    average_order_value: Decimal
    status_breakdown: Dict[str, int]
    daily_revenue: Dict[str, Decimal]


class OrderStatsEnvelope(BaseModel):
    message: str
    stats: OrderStatsOut


class CatalogItem(BaseModel):
    """Item as seen by order validation, local table or remote catalog."""

    id: int
    name: str
    category: str
    price: Decimal
    discount_price: Decimal | None = None
    availability: str
    images: List[str] = Field(default_factory=list)
    description: str = ""

    model_config = ConfigDict(from_attributes=True)

    @property
    def authoritative_price(self) -> Decimal:
        if self.discount_price is not None:
            return self.discount_price
        return self.price


class ItemEnvelope(BaseModel):
    message: str
    item: CatalogItem


class PriceIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    original_price: Decimal = Field(..., gt=0)
    discounted_price: Decimal = Field(..., gt=0)


class PriceUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    original_price: Decimal | None = Field(None, gt=0)
    discounted_price: Decimal | None = Field(None, gt=0)
    is_active: bool | None = None


class PriceOut(BaseModel):
    id: int
    name: str
    description: str
    original_price: Decimal
    discounted_price: Decimal
    discount_percentage: Decimal
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PriceEnvelope(BaseModel):
    message: str
    price: PriceOut


class PriceListOut(BaseModel):
    message: str
    prices: List[PriceOut]
    count: int
