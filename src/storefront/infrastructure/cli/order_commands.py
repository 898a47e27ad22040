"""CLI commands for orders: customer history and the admin order desk."""

from __future__ import annotations

import asyncio

import click

from storefront.application.dto import OrderDTO
from storefront.application.list_my_orders import ListMyOrdersHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.order_notifications import OrderNotificationFeed
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.notification import OrderNotification
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.cli.runtime import Runtime, pass_runtime

STATUS_CHOICE = click.Choice([s.value for s in OrderStatus])


def _display_orders(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<10} {'Customer':<22} {'Status':<11} {'Total':>12}  Placed")
    click.echo("-" * 78)
    for o in orders:
        click.echo(
            f"{o.reference:<10} {o.customer_name:<22} {o.status:<11} {o.total:>12}  {o.created_at}"
        )


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.reference}  (status={dto.status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Customer: {dto.customer_name}")
    if dto.customer_email:
        click.echo(f"Email:    {dto.customer_email}")
    if dto.customer_phone:
        click.echo(f"Phone:    {dto.customer_phone}")
    click.echo(f"Ship to:  {dto.shipping_address}, {dto.city} {dto.postal_code or ''}".rstrip())
    click.echo(f"Placed:   {dto.created_at}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Size':<6} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*63}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {(item.size or '-'):<6} {item.quantity:>5} "
            f"{item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*63}")
    click.echo(f"  {'Order Total':<50} {dto.total:>12}")


def _display_notification(notification: OrderNotification) -> None:
    marker = "*" if not notification.read else " "
    click.echo(f"{marker} {notification.message}")


@click.command("mine")
@pass_runtime
def orders_mine(runtime: Runtime) -> None:
    """Show the signed-in customer's orders."""
    try:
        orders = ListMyOrdersHandler(runtime.backend.orders, runtime.context).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("You have not placed any orders yet.")
        return
    for index, dto in enumerate(orders):
        if index:
            click.echo()
        _display_order(dto)


@click.command("list")
@click.option("--search", default=None, help="Match customer name, email or order id.")
@click.option("--status", type=STATUS_CHOICE, default=None, help="Only this status.")
@pass_runtime
def admin_orders_list(runtime: Runtime, search: str | None, status: str | None) -> None:
    """List all orders, newest first."""
    handler = ListOrdersHandler(runtime.backend.orders, runtime.context)

    try:
        orders = handler.handle(search=search, status=OrderStatus(status) if status else None)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_orders(orders)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID.")
@pass_runtime
def admin_orders_show(runtime: Runtime, order_id: str) -> None:
    """Show order details with line items."""
    try:
        dto = ShowOrderHandler(runtime.backend.orders, runtime.context).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("set-status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--status", type=STATUS_CHOICE, required=True, help="New status.")
@pass_runtime
def admin_orders_set_status(runtime: Runtime, order_id: str, status: str) -> None:
    """Change an order's status."""
    handler = UpdateOrderStatusHandler(runtime.backend.orders, runtime.context)

    try:
        dto = handler.handle(order_id, OrderStatus(status))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.reference} is now {dto.status}")


@click.command("watch")
@click.option("--limit", default=None, type=int, help="Stop after this many new orders.")
@pass_runtime
def admin_orders_watch(runtime: Runtime, limit: int | None) -> None:
    """Show recent orders, then print new ones as they arrive."""
    notifications = OrderNotificationFeed(
        runtime.backend.orders, runtime.backend.feed, runtime.context,
    )

    try:
        recent = notifications.load_recent()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{notifications.unread_count} unread")
    for notification in recent:
        _display_notification(notification)
    click.echo("Waiting for new orders (Ctrl+C to stop)...")

    try:
        asyncio.run(notifications.listen(_display_notification, max_events=limit))
    except KeyboardInterrupt:
        pass
    except DomainException as exc:
        raise click.ClickException(str(exc))
