"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.cli.runtime import Runtime, pass_runtime


@click.command("add")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--quantity", default=1, type=int, show_default=True)
@click.option("--size", default=None, help="Variant (size).")
@pass_runtime
def cart_add(runtime: Runtime, product_id: str, quantity: int, size: str | None) -> None:
    """Add a product to the cart."""
    handler = AddToCartHandler(runtime.backend.products, runtime.context)

    try:
        handler.handle(product_id, quantity=quantity, size=size)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart: {runtime.context.cart.count} item(s)")


@click.command("update")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Quantity change, e.g. 1 or -1.")
@click.option("--size", default=None, help="Only this variant.")
@pass_runtime
def cart_update(runtime: Runtime, product_id: str, delta: int, size: str | None) -> None:
    """Change a cart line's quantity (lines reaching 0 are removed)."""
    runtime.context.cart.update_quantity(product_id, delta, size=size)
    click.echo(f"Cart: {runtime.context.cart.count} item(s)")


@click.command("remove")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--size", default=None, help="Only this variant.")
@pass_runtime
def cart_remove(runtime: Runtime, product_id: str, size: str | None) -> None:
    """Remove a product from the cart."""
    runtime.context.cart.remove_item(product_id, size=size)


@click.command("clear")
@pass_runtime
def cart_clear(runtime: Runtime) -> None:
    """Empty the cart."""
    runtime.context.cart.clear()
    click.echo("Cart cleared.")


@click.command("show")
@pass_runtime
def cart_show(runtime: Runtime) -> None:
    """Show the cart with shipping and total."""
    dto = ShowCartHandler(runtime.context).handle()

    if not dto.items:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'Product':<24} {'Size':<6} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*63}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {(item.size or '-'):<6} {item.quantity:>5} "
            f"{item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*63}")
    click.echo(f"  {'Subtotal':<50} {dto.subtotal:>12}")
    click.echo(f"  {'Shipping':<50} {('Free' if dto.free_shipping else dto.shipping):>12}")
    click.echo(f"  {'Total':<50} {dto.total:>12}")
