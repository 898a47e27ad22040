"""Application service: Checkout use case.

Turns the cart into one ``orders`` row plus one ``order_items`` row per
cart line.  The two writes are sequential and NOT atomic: if the order
insert succeeds and the line-item insert fails, the order stays behind
without items.  That window is logged and exposed on
``CheckoutFlow.orphaned_order_id``; nothing tries to compensate for it.

State machine::

    editing --submit--> submitting --ok--> succeeded
                             |
                             +--backend error--> failed --submit--> ...

A validation error never leaves ``editing`` and never reaches the backend.
"""

from __future__ import annotations

import logging

from storefront.application.context import StoreContext
from storefront.application.dto import CheckoutResult
from storefront.domain.exceptions import (
    BackendError,
    CheckoutFailedError,
    EmptyCartError,
    ValidationError,
)
from storefront.domain.model.checkout import CheckoutForm, CheckoutState, PaymentMethod
from storefront.domain.model.order import Order, line_items_from_cart
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to place order. Please try again."


class CheckoutFlow:

    def __init__(self, order_repo: OrderRepository, context: StoreContext) -> None:
        self._order_repo = order_repo
        self._context = context
        self.state = CheckoutState.EDITING
        self.order_id: str | None = None
        self.orphaned_order_id: str | None = None

    # --- Entry guard ----------------------------------------------------------

    def ensure_enterable(self) -> None:
        """Checkout only exists for a non-empty cart."""
        if self._context.cart.is_empty:
            raise EmptyCartError("Your cart is empty")

    @property
    def bank_account(self) -> str | None:
        """Static account reference shown for manual bank transfers."""
        return self._context.bank_account

    # --- Submit ---------------------------------------------------------------

    def submit(
        self,
        form: CheckoutForm,
        payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY,
    ) -> CheckoutResult:
        """Validate the form and place the order.

        Steps:
        1. Reject an empty cart and an invalid form (no backend call).
        2. Insert the pending order with the shipping-inclusive total.
        3. Batch-insert line items referencing the new order id.
        4. Clear the cart and record the order id.
        """
        if self.state == CheckoutState.SUBMITTING:
            raise ValidationError("An order is already being placed")
        if self.state == CheckoutState.SUCCEEDED:
            raise ValidationError(f"Order {self.order_id} has already been placed")
        self.state = CheckoutState.EDITING

        self.ensure_enterable()
        form.ensure_valid(require_region=self._context.require_region)

        cart = self._context.cart
        total = self._context.shipping_policy.total_for(cart.total)
        session = self._context.session
        order = Order.place(
            customer_name=form.name,
            customer_email=form.email,
            customer_phone=form.phone,
            shipping_address=form.full_address,
            city=form.city,
            postal_code=form.postal_code,
            notes=form.notes,
            total_amount=total,
            user_id=session.user_id if session else None,
        )

        self.state = CheckoutState.SUBMITTING
        self.orphaned_order_id = None
        try:
            saved = self._order_repo.insert(order)
            if saved.id is None:
                raise BackendError("Backend did not return an id for the new order")
            try:
                lines = line_items_from_cart(saved.id, cart.items, cart.currency)
                self._order_repo.insert_items(lines)
            except (BackendError, ValidationError):
                self.orphaned_order_id = saved.id
                logger.error(
                    "Order %s was created but its line items were not; "
                    "the order has no items",
                    saved.id,
                )
                raise
        except (BackendError, ValidationError) as exc:
            self.state = CheckoutState.FAILED
            logger.exception("Placing order failed")
            raise CheckoutFailedError(FAILURE_MESSAGE) from exc

        line_count = len(cart)
        cart.clear()
        self.order_id = saved.id
        self.state = CheckoutState.SUCCEEDED
        logger.info(
            "Order %s placed with %d line(s), total %s, payment %s",
            saved.id, line_count, total, payment_method.value,
        )

        return CheckoutResult(
            order_id=saved.id,
            reference=saved.reference,
            total=str(total),
            payment_method=payment_method.value,
            bank_account=(
                self.bank_account
                if payment_method == PaymentMethod.BANK_TRANSFER
                else None
            ),
        )
