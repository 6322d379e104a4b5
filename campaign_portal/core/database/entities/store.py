"""Merchandise store: products, variants, orders and order lines."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import JSON, Text
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import OrderStatus

from ..base import TimestampedBase


class Product(TimestampedBase, table=True):
    """Table: store_products"""

    __tablename__ = "store_products"
    __table_args__ = ({"extend_existing": True},)

    name_en: str
    name_bn: str
    slug: str = Field(unique=True, index=True)
    description_en: Optional[str] = Field(default=None, sa_type=Text)
    description_bn: Optional[str] = Field(default=None, sa_type=Text)
    price: float = Field(ge=0)
    compare_at_price: Optional[float] = None
    images: list[str] = Field(default_factory=list, sa_type=JSON)
    stock: int = Field(default=0)
    is_active: bool = Field(default=True)
    is_featured: bool = Field(default=False)
    display_order: int = Field(default=0)


class ProductVariant(TimestampedBase, table=True):
    """Size/colour option of a product; ``price`` overrides the product price when set.

    Table: store_product_variants
    """

    __tablename__ = "store_product_variants"
    __table_args__ = ({"extend_existing": True},)

    product_id: int = Field(foreign_key="store_products.id", ondelete="CASCADE", index=True)
    name: str
    size: Optional[str] = None
    color: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[float] = None
    stock: int = Field(default=0)
    is_active: bool = Field(default=True)


class Order(TimestampedBase, table=True):
    """Table: store_orders"""

    __tablename__ = "store_orders"
    __table_args__ = ({"extend_existing": True},)

    order_number: str = Field(unique=True, index=True)
    customer_name: str
    customer_phone: str = Field(index=True)
    customer_email: Optional[str] = None
    customer_address: str
    subtotal: float
    delivery_fee: float = Field(default=0)
    total: float
    notes: Optional[str] = None
    status: OrderStatus = Field(default=OrderStatus.pending, index=True)


class OrderItem(TimestampedBase, table=True):
    """Table: store_order_items"""

    __tablename__ = "store_order_items"
    __table_args__ = ({"extend_existing": True},)

    order_id: int = Field(foreign_key="store_orders.id", ondelete="CASCADE", index=True)
    product_id: Optional[int] = Field(default=None, foreign_key="store_products.id", ondelete="SET NULL")
    variant_id: Optional[int] = Field(default=None, foreign_key="store_product_variants.id", ondelete="SET NULL")
    product_name: str
    variant_info: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float
