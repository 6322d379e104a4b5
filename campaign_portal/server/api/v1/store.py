"""
Store Endpoints.

Active products with their active variants, order placement and order
lookup. Order prices always come from the catalogue, never from the client.
"""

from collections import defaultdict
from typing import Optional

from fastapi import APIRouter, Query, status
from sqlmodel import select

from campaign_portal.core.database.entities import Order, OrderItem, Product, ProductVariant
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import OrderStatus
from campaign_portal.core.models.io.store import OrderCreate, OrderItemRead, OrderRead, ProductRead, VariantRead
from campaign_portal.server.core.config import settings
from campaign_portal.server.services.content import bad_request, generate_order_number, load_by_ids, not_found, ok
from campaign_portal.server.services.deps import SessionDep

logger = get_logger(__name__)
router = APIRouter()


async def product_reads(session, products: list, active_variants_only: bool = True) -> list[ProductRead]:
    """Read models with their variants attached."""
    items = [ProductRead.model_validate(p) for p in products]
    if not products:
        return items
    stmt = select(ProductVariant).where(ProductVariant.product_id.in_([p.id for p in products]))
    if active_variants_only:
        stmt = stmt.where(ProductVariant.is_active == True)  # noqa: E712
    result = await session.execute(stmt.order_by(ProductVariant.id))
    variants = defaultdict(list)
    for variant in result.scalars().all():
        variants[variant.product_id].append(VariantRead.model_validate(variant))
    for item in items:
        item.variants = variants.get(item.id, [])
    return items


async def order_reads(session, orders: list) -> list[OrderRead]:
    """Read models with their order lines attached."""
    items = [OrderRead.model_validate(o) for o in orders]
    if not orders:
        return items
    result = await session.execute(
        select(OrderItem).where(OrderItem.order_id.in_([o.id for o in orders])).order_by(OrderItem.id)
    )
    lines = defaultdict(list)
    for line in result.scalars().all():
        lines[line.order_id].append(OrderItemRead.model_validate(line))
    for item in items:
        item.items = lines.get(item.id, [])
    return items


def _variant_info(variant: ProductVariant) -> str:
    details = "/".join(v for v in (variant.size, variant.color) if v)
    return f"{variant.name} ({details})" if details else variant.name


@router.get(
    "/products",
    summary="List Products",
    description="Active products with active variants, or one product by slug.",
    response_description="List of products, or one product when slug is given.",
    responses={404: {"description": "Product not found"}},
)
async def list_products(session: SessionDep, slug: Optional[str] = None, featured: Optional[bool] = None):
    """
    List products.

    - **slug**: Return only this product (404 when missing or inactive)
    - **featured**: Only featured products when true
    """
    stmt = select(Product).where(Product.is_active == True)  # noqa: E712
    if slug:
        result = await session.execute(stmt.where(Product.slug == slug))
        product = result.scalars().first()
        if product is None:
            raise not_found("Product")
        items = await product_reads(session, [product])
        return ok(items[0])

    if featured is not None:
        stmt = stmt.where(Product.is_featured == featured)
    result = await session.execute(stmt.order_by(Product.display_order, Product.created_at.desc()))
    return ok(await product_reads(session, list(result.scalars().all())))


@router.post(
    "/orders",
    status_code=status.HTTP_201_CREATED,
    summary="Place Order",
    description="Place an order; prices come from the catalogue and a delivery fee is added.",
    response_description="The order with its lines and totals.",
    responses={400: {"description": "Validation failed or a product is unavailable"}},
)
async def place_order(order_in: OrderCreate, session: SessionDep):
    """
    Place an order.

    - **customer_name**, **customer_phone**, **customer_address**: Required
    - **items**: At least one ``{product_id, variant_id?, quantity}``
    """
    products = await load_by_ids(session, Product, (i.product_id for i in order_in.items))
    variants = await load_by_ids(session, ProductVariant, (i.variant_id for i in order_in.items))

    lines = []
    for requested in order_in.items:
        product = products.get(requested.product_id)
        if product is None or not product.is_active:
            raise bad_request(f"Product {requested.product_id} is not available")
        unit_price = product.price
        variant_info = None
        if requested.variant_id is not None:
            variant = variants.get(requested.variant_id)
            if variant is None or variant.product_id != product.id or not variant.is_active:
                raise bad_request(f"Variant {requested.variant_id} is not available for {product.name_en}")
            if variant.price is not None:
                unit_price = variant.price
            variant_info = _variant_info(variant)
        lines.append(
            OrderItem(
                order_id=0,
                product_id=product.id,
                variant_id=requested.variant_id,
                product_name=product.name_en,
                variant_info=variant_info,
                quantity=requested.quantity,
                unit_price=unit_price,
                total_price=round(unit_price * requested.quantity, 2),
            )
        )

    subtotal = round(sum(line.total_price for line in lines), 2)
    delivery_fee = settings.store_delivery_fee
    order = Order(
        **order_in.model_dump(exclude={"items"}),
        order_number=generate_order_number(),
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        total=round(subtotal + delivery_fee, 2),
        status=OrderStatus.pending,
    )
    session.add(order)
    await session.flush()
    for line in lines:
        line.order_id = order.id
        session.add(line)
    await session.commit()
    await session.refresh(order)

    logger.info(f"Order {order.order_number} placed, total {order.total}")
    items = await order_reads(session, [order])
    return ok(items[0], message=f"Order placed. Your order number is {order.order_number}")


@router.get(
    "/orders",
    summary="Track Order",
    description="Look up an order by order number and the phone number used to place it.",
    response_description="The order.",
    responses={404: {"description": "Order not found"}},
)
async def track_order(
    session: SessionDep,
    order_number: str = Query(min_length=1),
    phone: str = Query(min_length=1),
):
    result = await session.execute(
        select(Order).where(Order.order_number == order_number.strip().upper(), Order.customer_phone == phone.strip())
    )
    order = result.scalars().first()
    if order is None:
        raise not_found("Order")
    items = await order_reads(session, [order])
    return ok(items[0])
