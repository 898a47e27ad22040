"""CLI commands for signing in and out."""

from __future__ import annotations

import click

from storefront.application.authenticate import (
    CurrentSessionHandler,
    SignInHandler,
    SignOutHandler,
    SignUpHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.cli.runtime import Runtime, pass_runtime


@click.command("signin")
@click.option("--email", required=True)
@click.option("--password", prompt=True, hide_input=True)
@pass_runtime
def auth_signin(runtime: Runtime, email: str, password: str) -> None:
    """Sign in with email and password."""
    try:
        session = SignInHandler(runtime.backend.auth, runtime.context).handle(email, password)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Signed in as {session.email}")


@click.command("signup")
@click.option("--name", "full_name", required=True, help="Full name.")
@click.option("--email", required=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@pass_runtime
def auth_signup(runtime: Runtime, full_name: str, email: str, password: str) -> None:
    """Create an account."""
    try:
        session = SignUpHandler(runtime.backend.auth, runtime.context).handle(
            full_name, email, password
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Account created. Signed in as {session.email}")


@click.command("signout")
@pass_runtime
def auth_signout(runtime: Runtime) -> None:
    """Sign out."""
    try:
        SignOutHandler(runtime.backend.auth, runtime.context).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo("Signed out.")


@click.command("whoami")
@pass_runtime
def auth_whoami(runtime: Runtime) -> None:
    """Show the signed-in user."""
    try:
        session = CurrentSessionHandler(runtime.backend.auth, runtime.context).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if session is None:
        click.echo("Not signed in.")
        return
    role = "admin" if session.is_admin else "customer"
    click.echo(f"{session.full_name or session.email} <{session.email}> ({role})")
