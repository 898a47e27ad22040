"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.application.browse_products import (
    ALL_CATEGORIES,
    BrowseProductsHandler,
    ProductSort,
)
from storefront.application.dto import ProductDTO
from storefront.application.search_products import SearchProductsHandler
from storefront.application.show_product import ShowProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.cli.runtime import Runtime, pass_runtime


def _display_products(products: list[ProductDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<24} {'Category':<14} {'Price':>12}")
    click.echo("-" * 91)
    for p in products:
        flags = " ".join(f for f, on in (("NEW", p.is_new), ("SALE", p.is_on_sale)) if on)
        click.echo(f"{p.id:<38} {p.name:<24} {(p.category or '-'):<14} {p.price:>12} {flags}")


@click.command("list")
@click.option("--search", default="", help="Match name or description.")
@click.option("--category", default=ALL_CATEGORIES, show_default=True, help="Category filter.")
@click.option(
    "--sort",
    type=click.Choice([s.value for s in ProductSort]),
    default=ProductSort.NEWEST.value,
    show_default=True,
)
@pass_runtime
def product_list(runtime: Runtime, search: str, category: str, sort: str) -> None:
    """List catalog products."""
    handler = BrowseProductsHandler(runtime.backend.products)

    try:
        products = handler.handle(search=search, category=category, sort=ProductSort(sort))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_products(products)


@click.command("categories")
@pass_runtime
def product_categories(runtime: Runtime) -> None:
    """List product categories."""
    try:
        categories = BrowseProductsHandler(runtime.backend.products).categories()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    for name in categories:
        click.echo(name)


@click.command("search")
@click.argument("query")
@pass_runtime
def product_search(runtime: Runtime, query: str) -> None:
    """Quick search by product name."""
    try:
        products = SearchProductsHandler(runtime.backend.products).handle(query)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_products(products)


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_runtime
def product_show(runtime: Runtime, product_id: str) -> None:
    """Show product details."""
    try:
        p = ShowProductHandler(runtime.backend.products).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{p.name}  ({p.id})")
    price = f"{p.price} (was {p.original_price})" if p.original_price else p.price
    click.echo(f"Price:    {price}")
    click.echo(f"Category: {p.category or '-'}")
    click.echo(f"Stock:    {p.stock}")
    click.echo(f"Image:    {p.image_url}")
    if p.description:
        click.echo()
        click.echo(p.description)
