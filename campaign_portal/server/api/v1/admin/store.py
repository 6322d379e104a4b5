"""
Console Store Management.

Products with their variants, and order fulfilment. Writing ``variants`` on
a product replaces the whole variant list.
"""

from typing import List, Optional

from fastapi import APIRouter, status
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import Order, Product, ProductVariant
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import OrderStatus
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io.store import (
    OrderStatusUpdate,
    ProductCreate,
    ProductUpdate,
    VariantWrite,
)
from campaign_portal.server.api.v1.store import order_reads, product_reads
from campaign_portal.server.services.content import changes, get_or_404, ok, paged, resolve_slug
from campaign_portal.server.services.deps import PageDep, SessionDep

logger = get_logger(__name__)
products_router = APIRouter()
orders_router = APIRouter()


async def _replace_variants(session, product_id: int, variants: List[VariantWrite]) -> None:
    existing = await session.execute(select(ProductVariant).where(ProductVariant.product_id == product_id))
    for variant in existing.scalars().all():
        await session.delete(variant)
    for variant in variants:
        session.add(ProductVariant(**variant.model_dump(), product_id=product_id))


async def _product(session, product: Product):
    return (await product_reads(session, [product], active_variants_only=False))[0]


@products_router.get("", summary="List Products", description="All products with all of their variants.")
async def list_products(
    session: SessionDep, page: PageDep, is_active: Optional[bool] = None, search: Optional[str] = None
):
    stmt = select(Product)
    if is_active is not None:
        stmt = stmt.where(Product.is_active == is_active)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(Product.name_en.ilike(pattern), Product.name_bn.ilike(pattern)))
    stmt = stmt.order_by(Product.display_order, Product.created_at.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await product_reads(session, rows, active_variants_only=False), total, page)


@products_router.get("/{product_id}", summary="Get Product")
async def get_product(product_id: int, session: SessionDep):
    return ok(await _product(session, await get_or_404(session, Product, product_id, "Product")))


@products_router.post("", status_code=status.HTTP_201_CREATED, summary="Create Product")
async def create_product(product_in: ProductCreate, session: SessionDep):
    data = product_in.model_dump(exclude={"variants"})
    data["slug"] = await resolve_slug(session, Product, data.get("slug"), product_in.name_en)
    product = Product(**data)
    session.add(product)
    await session.flush()
    await _replace_variants(session, product.id, product_in.variants)
    await session.commit()
    await session.refresh(product)
    return ok(await _product(session, product), message="Product created")


@products_router.patch("/{product_id}", summary="Update Product", description="``variants``, when sent, replaces every variant.")
async def update_product(product_id: int, product_in: ProductUpdate, session: SessionDep):
    product = await get_or_404(session, Product, product_id, "Product")
    data = changes(product_in, "name_en", "name_bn", "slug", "price", "images", "stock", "is_active", "is_featured")
    variants = data.pop("variants", None)
    if "slug" in data:
        data["slug"] = await resolve_slug(session, Product, data["slug"], None, exclude_id=product.id)
    if variants is not None:
        await _replace_variants(session, product.id, product_in.variants)
    product = await AsyncRepository(session, Product).update(product, data)
    return ok(await _product(session, product), message="Product updated")


@products_router.delete("/{product_id}", summary="Delete Product")
async def delete_product(product_id: int, session: SessionDep):
    product = await get_or_404(session, Product, product_id, "Product")
    await _replace_variants(session, product.id, [])
    await AsyncRepository(session, Product).delete(product)
    return ok(DeleteResult(id=product_id), message="Product deleted")


@orders_router.get("", summary="List Orders")
async def list_orders(
    session: SessionDep, page: PageDep, status: Optional[OrderStatus] = None, search: Optional[str] = None
):
    """
    List orders, newest first.

    - **search**: Matches order number, customer name or phone
    """
    stmt = select(Order)
    if status is not None:
        stmt = stmt.where(Order.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(Order.order_number.ilike(pattern), Order.customer_name.ilike(pattern), Order.customer_phone.ilike(pattern))
        )
    stmt = stmt.order_by(Order.created_at.desc(), Order.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await order_reads(session, rows), total, page)


@orders_router.get("/{order_id}", summary="Get Order")
async def get_order(order_id: int, session: SessionDep):
    order = await get_or_404(session, Order, order_id, "Order")
    return ok((await order_reads(session, [order]))[0])


@orders_router.patch("/{order_id}", summary="Update Order Status")
async def update_order(order_id: int, update: OrderStatusUpdate, session: SessionDep):
    order = await get_or_404(session, Order, order_id, "Order")
    previous = order.status
    order = await AsyncRepository(session, Order).update(order, {"status": update.status})
    logger.info(f"Order {order.order_number}: {previous.value} -> {order.status.value}")
    return ok((await order_reads(session, [order]))[0], message="Order updated")
