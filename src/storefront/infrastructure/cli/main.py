import click

from storefront.infrastructure.cli.admin_commands import (
    admin_analytics,
    admin_customers,
    admin_products_delete,
    admin_products_save,
    admin_products_upload_image,
)
from storefront.infrastructure.cli.auth_commands import (
    auth_signin,
    auth_signout,
    auth_signup,
    auth_whoami,
)
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.order_commands import (
    admin_orders_list,
    admin_orders_set_status,
    admin_orders_show,
    admin_orders_watch,
    orders_mine,
)
from storefront.infrastructure.cli.product_commands import (
    product_categories,
    product_list,
    product_search,
    product_show,
)
from storefront.infrastructure.cli.runtime import Runtime
from storefront.infrastructure.config import ConfigurationError, load_settings
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Storefront: shop, check out and manage the back-office"""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))

    configure_logging("DEBUG" if verbose else settings.log_level)
    runtime = Runtime.start(settings)
    ctx.obj = runtime
    ctx.call_on_close(runtime.finish)


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def auth() -> None:
    """Sign in and out."""


@cli.group()
def orders() -> None:
    """Your orders."""


@cli.group()
def admin() -> None:
    """Back-office (admin accounts only)."""


@admin.group("orders")
def admin_orders() -> None:
    """Manage orders."""


@admin.group("products")
def admin_products() -> None:
    """Manage the catalog."""


# Register subcommands
product.add_command(product_categories)
product.add_command(product_list)
product.add_command(product_search)
product.add_command(product_show)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
cli.add_command(checkout)
auth.add_command(auth_signin)
auth.add_command(auth_signout)
auth.add_command(auth_signup)
auth.add_command(auth_whoami)
orders.add_command(orders_mine)
admin_orders.add_command(admin_orders_list)
admin_orders.add_command(admin_orders_set_status)
admin_orders.add_command(admin_orders_show)
admin_orders.add_command(admin_orders_watch)
admin_products.add_command(admin_products_delete)
admin_products.add_command(admin_products_save)
admin_products.add_command(admin_products_upload_image)
admin.add_command(admin_analytics)
admin.add_command(admin_customers)
