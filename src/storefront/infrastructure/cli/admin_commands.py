"""CLI commands for the back-office: catalog, customers and analytics."""

from __future__ import annotations

from pathlib import Path

import click

from storefront.application.analytics import AnalyticsHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.list_customers import ListCustomersHandler
from storefront.application.save_product import ProductForm, SaveProductHandler
from storefront.application.upload_product_image import UploadProductImageHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.cli.runtime import Runtime, pass_runtime


@click.command("save")
@click.option("--id", "product_id", default=None, help="Update this product instead of creating one.")
@click.option("--name", required=True)
@click.option("--price", required=True, help="Price, e.g. 49.99")
@click.option("--original-price", default=None, help="Price before discount.")
@click.option("--description", default=None)
@click.option("--image-url", default=None)
@click.option("--category", default=None)
@click.option("--new/--not-new", "is_new", default=False)
@click.option("--on-sale/--not-on-sale", "is_on_sale", default=False)
@click.option("--stock", default=0, type=int, show_default=True)
@pass_runtime
def admin_products_save(runtime: Runtime, product_id: str | None, **fields) -> None:
    """Create or update a product."""
    handler = SaveProductHandler(
        runtime.backend.products, runtime.context, runtime.settings.currency,
    )

    try:
        dto = handler.handle(ProductForm(**fields), product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    action = "updated" if product_id else "created"
    click.echo(f"Product {action}: {dto.name} ({dto.id})  price={dto.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Are you sure you want to delete this product?")
@pass_runtime
def admin_products_delete(runtime: Runtime, product_id: str) -> None:
    """Delete a product."""
    try:
        DeleteProductHandler(runtime.backend.products, runtime.context).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Product {product_id} deleted.")


@click.command("upload-image")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--id", "product_id", default=None, help="Set the image on this product.")
@pass_runtime
def admin_products_upload_image(runtime: Runtime, image: Path, product_id: str | None) -> None:
    """Upload a product image and print its public URL."""
    handler = UploadProductImageHandler(
        runtime.backend.storage, runtime.backend.products, runtime.context,
    )

    try:
        url = handler.handle(image.name, image.read_bytes(), product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(url)


@click.command("customers")
@click.option("--search", default=None, help="Match name, email or city.")
@pass_runtime
def admin_customers(runtime: Runtime, search: str | None) -> None:
    """List customers derived from orders."""
    try:
        customers = ListCustomersHandler(runtime.backend.orders, runtime.context).handle(search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'Name':<22} {'Email':<28} {'City':<14} {'Orders':>6} {'Spent':>12}  Last order")
    click.echo("-" * 108)
    for c in customers:
        click.echo(
            f"{c.name:<22} {(c.email or c.phone or '-'):<28} {c.city:<14} "
            f"{c.orders_count:>6} {c.total_spent:>12}  {c.last_order}"
        )


@click.command("analytics")
@pass_runtime
def admin_analytics(runtime: Runtime) -> None:
    """Revenue, order and catalog summary."""
    handler = AnalyticsHandler(
        runtime.backend.orders,
        runtime.backend.products,
        runtime.context,
        runtime.settings.currency,
    )

    try:
        stats = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Revenue:   {stats.total_revenue}")
    click.echo(f"Orders:    {stats.total_orders}")
    click.echo(f"Products:  {stats.total_products}")
    click.echo(f"Customers: {stats.total_customers}")

    if stats.orders_by_status:
        click.echo()
        click.echo("Orders by status:")
        for status, count in stats.orders_by_status.items():
            click.echo(f"  {status:<12} {count:>5}")

    if stats.daily_sales:
        click.echo()
        click.echo("Daily sales:")
        for day in stats.daily_sales:
            click.echo(f"  {day.date}  {day.amount:>12}")

    if stats.top_products:
        click.echo()
        click.echo("Top products:")
        for p in stats.top_products:
            click.echo(f"  {p.name:<24} {p.units_sold:>5} sold {p.revenue:>12}")

    if stats.products_by_category:
        click.echo()
        click.echo("Products by category:")
        for category, count in stats.products_by_category.items():
            click.echo(f"  {category:<16} {count:>5}")
