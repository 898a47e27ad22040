"""Row mapping shared by every backend adapter.

Both the local JSON tables and the hosted REST backend use the same
column names (``products``, ``orders``, ``order_items``), so the
domain <-> row conversion lives here once.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from storefront.domain.exceptions import BackendError, DomainException
from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


def parse_timestamp(raw: str | None) -> datetime:
    if not raw:
        return datetime.now(timezone.utc)
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _money(raw: Any, currency: str) -> Money:
    return Money.of(str(raw), currency)


# --- products -----------------------------------------------------------------


def product_to_row(product: Product) -> dict:
    row = {
        "name": product.name,
        "price": product.price.to_wire(),
        "original_price": product.original_price.to_wire() if product.original_price else None,
        "image_url": product.image_url,
        "category": product.category,
        "description": product.description,
        "is_new": product.is_new,
        "is_on_sale": product.is_on_sale,
        "stock": product.stock,
        "created_at": product.created_at.isoformat(),
    }
    if product.id is not None:
        row["id"] = product.id
    return row


def product_from_row(row: dict, currency: str) -> Product:
    try:
        return Product(
            id=str(row["id"]),
            name=row["name"],
            price=_money(row["price"], currency),
            original_price=(
                _money(row["original_price"], currency)
                if row.get("original_price") is not None
                else None
            ),
            image_url=row.get("image_url"),
            category=row.get("category"),
            description=row.get("description"),
            is_new=bool(row.get("is_new")),
            is_on_sale=bool(row.get("is_on_sale")),
            stock=int(row.get("stock") or 0),
            created_at=parse_timestamp(row.get("created_at")),
        )
    except (KeyError, ValueError, TypeError, DomainException) as exc:
        raise BackendError(f"Malformed product row: {exc}") from exc


# --- orders -------------------------------------------------------------------


def order_to_row(order: Order) -> dict:
    row = {
        "user_id": order.user_id,
        "customer_name": order.customer_name,
        "customer_email": order.customer_email,
        "customer_phone": order.customer_phone,
        "shipping_address": order.shipping_address,
        "city": order.city,
        "postal_code": order.postal_code,
        "total_amount": order.total_amount.to_wire(),
        "notes": order.notes,
        "status": order.status.value,
    }
    if order.id is not None:
        row["id"] = order.id
        row["created_at"] = order.created_at.isoformat()
    return row


def order_from_row(row: dict, currency: str) -> Order:
    try:
        order = Order(
            id=str(row["id"]),
            user_id=row.get("user_id"),
            customer_name=row["customer_name"],
            customer_email=row.get("customer_email"),
            customer_phone=row.get("customer_phone"),
            shipping_address=row["shipping_address"],
            city=row["city"],
            postal_code=row.get("postal_code"),
            total_amount=_money(row["total_amount"], currency),
            notes=row.get("notes"),
            status=OrderStatus(row.get("status") or OrderStatus.PENDING.value),
            created_at=parse_timestamp(row.get("created_at")),
        )
        order.items = [
            item_from_row(raw, currency) for raw in row.get("order_items") or []
        ]
        return order
    except (KeyError, ValueError, TypeError, DomainException) as exc:
        raise BackendError(f"Malformed order row: {exc}") from exc


# --- order_items --------------------------------------------------------------


def item_to_row(item: OrderLineItem) -> dict:
    row = {
        "order_id": item.order_id,
        "product_id": item.product_id,
        "product_name": item.product_name,
        "product_price": item.product_price.to_wire(),
        "quantity": item.quantity.value,
        "size": item.size,
    }
    if item.id is not None:
        row["id"] = item.id
    return row


def item_from_row(row: dict, currency: str) -> OrderLineItem:
    try:
        return OrderLineItem(
            id=str(row["id"]) if row.get("id") is not None else None,
            order_id=str(row["order_id"]) if row.get("order_id") is not None else None,
            product_id=row.get("product_id"),
            product_name=row["product_name"],
            product_price=_money(row["product_price"], currency),
            quantity=Quantity(int(row["quantity"])),
            size=row.get("size"),
        )
    except (KeyError, ValueError, TypeError, DomainException) as exc:
        raise BackendError(f"Malformed order item row: {exc}") from exc
