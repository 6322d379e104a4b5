"""Store I/O models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from campaign_portal.core.models.domain.enums import OrderStatus

from .common import EntityRead


class VariantWrite(BaseModel):
    name: str = Field(min_length=1)
    size: Optional[str] = None
    color: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock: int = 0
    is_active: bool = True


class VariantRead(VariantWrite, EntityRead):
    product_id: int


class ProductBase(BaseModel):
    name_en: str = Field(min_length=1)
    name_bn: str = Field(min_length=1)
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    price: float = Field(ge=0)
    compare_at_price: Optional[float] = Field(default=None, ge=0)
    images: list[str] = Field(default_factory=list)
    stock: int = 0
    is_active: bool = True
    is_featured: bool = False
    display_order: int = 0


class ProductCreate(ProductBase):
    slug: Optional[str] = None
    variants: list[VariantWrite] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    compare_at_price: Optional[float] = Field(default=None, ge=0)
    images: Optional[list[str]] = None
    stock: Optional[int] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    display_order: Optional[int] = None
    variants: Optional[list[VariantWrite]] = Field(default=None, description="Replaces all variants when given")


class ProductRead(ProductBase, EntityRead):
    slug: str
    variants: list[VariantRead] = Field(default_factory=list)


class OrderItemRequest(BaseModel):
    product_id: int
    variant_id: Optional[int] = None
    quantity: int = Field(ge=1, le=100)


class OrderCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    customer_email: Optional[EmailStr] = None
    customer_address: str = Field(min_length=1)
    items: list[OrderItemRequest] = Field(min_length=1)
    notes: Optional[str] = None


class OrderItemRead(EntityRead):
    order_id: int
    product_id: Optional[int] = None
    variant_id: Optional[int] = None
    product_name: str
    variant_info: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float


class OrderRead(EntityRead):
    order_number: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    customer_address: str
    subtotal: float
    delivery_fee: float
    total: float
    notes: Optional[str] = None
    status: OrderStatus
    items: list[OrderItemRead] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
