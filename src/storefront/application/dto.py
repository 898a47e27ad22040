"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money values are
pre-formatted strings.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart, CartLineItem
from storefront.domain.model.checkout import ShippingPolicy
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.product import Product

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str
    original_price: str | None
    image_url: str
    category: str | None
    description: str | None
    is_new: bool
    is_on_sale: bool
    stock: int

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id or "",
            name=product.name,
            price=str(product.price),
            original_price=str(product.original_price) if product.original_price else None,
            image_url=product.display_image,
            category=product.category,
            description=product.description,
            is_new=product.is_new,
            is_on_sale=product.is_on_sale,
            stock=product.stock,
        )


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    name: str
    size: str | None
    quantity: int
    unit_price: str
    line_total: str

    @staticmethod
    def from_item(item: CartLineItem) -> CartLineDTO:
        return CartLineDTO(
            product_id=item.product_id,
            name=item.name,
            size=item.size,
            quantity=item.quantity,
            unit_price=str(item.unit_price),
            line_total=str(item.line_total),
        )


@dataclass(frozen=True)
class CartDTO:
    """Output: the cart with checkout pricing applied."""

    items: list[CartLineDTO]
    count: int
    subtotal: str
    shipping: str
    total: str
    free_shipping: bool

    @staticmethod
    def from_cart(cart: Cart, policy: ShippingPolicy) -> CartDTO:
        subtotal = cart.total
        shipping = policy.shipping_for(subtotal)
        return CartDTO(
            items=[CartLineDTO.from_item(item) for item in cart.items],
            count=cart.count,
            subtotal=str(subtotal),
            shipping=str(shipping),
            total=str(policy.total_for(subtotal)),
            free_shipping=shipping.is_zero,
        )


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single order line as displayed to the user."""

    product_name: str
    size: str | None
    quantity: int
    unit_price: str
    line_total: str

    @staticmethod
    def from_item(item: OrderLineItem) -> OrderLineItemDTO:
        return OrderLineItemDTO(
            product_name=item.product_name,
            size=item.size,
            quantity=item.quantity.value,
            unit_price=str(item.product_price),
            line_total=str(item.line_total),
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    reference: str
    customer_name: str
    customer_email: str | None
    customer_phone: str | None
    shipping_address: str
    city: str
    postal_code: str | None
    notes: str | None
    status: str
    items: list[OrderLineItemDTO]
    total: str
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id or "",
            reference=order.reference,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            shipping_address=order.shipping_address,
            city=order.city,
            postal_code=order.postal_code,
            notes=order.notes,
            status=order.status.value,
            items=[OrderLineItemDTO.from_item(item) for item in order.items],
            total=str(order.total_amount),
            created_at=order.created_at.strftime(TIMESTAMP_FORMAT),
        )


@dataclass(frozen=True)
class CheckoutResult:
    """Output: a successfully placed order."""

    order_id: str
    reference: str
    total: str
    payment_method: str
    bank_account: str | None
