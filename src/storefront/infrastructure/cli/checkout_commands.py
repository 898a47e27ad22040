"""CLI command for placing an order."""

from __future__ import annotations

import click

from storefront.application.checkout import CheckoutFlow
from storefront.domain.exceptions import CheckoutValidationError, DomainException
from storefront.domain.model.checkout import CheckoutForm, PaymentMethod
from storefront.infrastructure.cli.runtime import Runtime, pass_runtime


@click.command("checkout")
@click.option("--name", default="", help="Full name.")
@click.option("--email", default="", help="Email address.")
@click.option("--phone", default="", help="Phone number.")
@click.option("--address", default="", help="Shipping address.")
@click.option("--city", default="", help="City / locality.")
@click.option("--postal-code", default="", help="Postal code.")
@click.option("--region", default="", help="Region (paired with --district).")
@click.option("--district", default="", help="District within the region.")
@click.option("--notes", default="", help="Delivery notes.")
@click.option(
    "--payment",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH_ON_DELIVERY.value,
    show_default=True,
)
@pass_runtime
def checkout(runtime: Runtime, payment: str, **fields: str) -> None:
    """Place an order for everything in the cart."""
    flow = CheckoutFlow(runtime.backend.orders, runtime.context)

    try:
        flow.ensure_enterable()
    except DomainException as exc:
        raise click.ClickException(f"{exc}. Add some products before checkout.")

    form = CheckoutForm(**fields)

    try:
        result = flow.submit(form, PaymentMethod(payment))
    except CheckoutValidationError as exc:
        for field, message in exc.field_errors.items():
            click.echo(f"  --{field.replace('_', '-')}: {message}", err=True)
        raise click.ClickException("Please correct the fields above.")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order placed successfully!")
    click.echo(f"Order ID: {result.reference}")
    click.echo(f"Total:    {result.total}")
    if result.payment_method == PaymentMethod.BANK_TRANSFER.value:
        if result.bank_account:
            click.echo(f"Transfer the total to: {result.bank_account}")
        click.echo("Include your order ID in the transfer reference.")
    else:
        click.echo("Pay on delivery.")
