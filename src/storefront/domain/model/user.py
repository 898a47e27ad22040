"""Authenticated user session."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.checkout import is_valid_email

MIN_PASSWORD_LENGTH = 6
MIN_FULL_NAME_LENGTH = 2


@dataclass(frozen=True)
class AuthSession:
    """The signed-in user as seen by the storefront.

    ``is_admin`` gates every back-office operation.
    """

    user_id: str
    email: str
    access_token: str
    full_name: str | None = None
    is_admin: bool = False


def validate_credentials(email: str, password: str) -> None:
    if not email or not is_valid_email(email):
        raise ValidationError("Email address is invalid")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def validate_sign_up(full_name: str, email: str, password: str) -> None:
    if len((full_name or "").strip()) < MIN_FULL_NAME_LENGTH:
        raise ValidationError("Full name is required")
    validate_credentials(email, password)
