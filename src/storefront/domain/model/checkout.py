"""Checkout form, payment options and shipping rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import CheckoutValidationError, ValidationError
from storefront.domain.model.value_objects import Money

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value.strip()))


class CheckoutState(Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "cod"
    BANK_TRANSFER = "bank_transfer"

    @staticmethod
    def parse(raw: str) -> PaymentMethod:
        try:
            return PaymentMethod(raw.strip().lower().replace("-", "_"))
        except ValueError:
            raise ValidationError(f"Unknown payment method '{raw}'") from None


@dataclass(frozen=True)
class ShippingPolicy:
    """Flat shipping fee waived once the subtotal reaches a threshold."""

    fee: Money
    free_shipping_threshold: Money

    def shipping_for(self, subtotal: Money) -> Money:
        if subtotal >= self.free_shipping_threshold:
            return Money.zero(subtotal.currency)
        return self.fee

    def total_for(self, subtotal: Money) -> Money:
        return subtotal + self.shipping_for(subtotal)


@dataclass(frozen=True)
class CheckoutForm:
    """Shipping and contact details typed in by the shopper.

    ``region`` / ``district`` form a selector pair: when either is filled
    (or the store requires the selector) both must be.
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    notes: str = ""
    region: str = ""
    district: str = ""

    def validate(self, require_region: bool = False) -> dict[str, str]:
        """Return field-level messages; empty when the form is valid."""
        errors: dict[str, str] = {}
        if not self.name.strip():
            errors["name"] = "Full name is required"
        if not self.email.strip() and not self.phone.strip():
            errors["email"] = "An email address or phone number is required"
        elif self.email.strip() and not is_valid_email(self.email):
            errors["email"] = "Email address is invalid"
        if not self.address.strip():
            errors["address"] = "Shipping address is required"
        if not self.city.strip():
            errors["city"] = "City is required"

        uses_region = require_region or self.region.strip() or self.district.strip()
        if uses_region:
            if not self.region.strip():
                errors["region"] = "Please select a region"
            if not self.district.strip():
                errors["district"] = "Please select a district"
        return errors

    def ensure_valid(self, require_region: bool = False) -> None:
        errors = self.validate(require_region)
        if errors:
            raise CheckoutValidationError(errors)

    @property
    def full_address(self) -> str:
        """Street address with the selected district and region appended."""
        parts = [self.address.strip(), self.district.strip(), self.region.strip()]
        return ", ".join(part for part in parts if part)
