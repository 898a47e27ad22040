"""Store context: the explicitly scoped session state.

One StoreContext is created when the application starts and lives for the
whole shopping session.  It owns the cart and the current auth session and
is injected into every handler that needs them, instead of handlers
reaching for module-level globals.
"""

from __future__ import annotations

from storefront.domain.exceptions import (
    AuthenticationRequiredError,
    PermissionDeniedError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.checkout import ShippingPolicy
from storefront.domain.model.user import AuthSession


class StoreContext:

    def __init__(
        self,
        cart: Cart,
        shipping_policy: ShippingPolicy,
        *,
        session: AuthSession | None = None,
        require_region: bool = False,
        bank_account: str | None = None,
    ) -> None:
        self.cart = cart
        self.shipping_policy = shipping_policy
        self.require_region = require_region
        self.bank_account = bank_account or None
        self._session = session

    # --- Auth session ---------------------------------------------------------

    @property
    def session(self) -> AuthSession | None:
        return self._session

    def start_session(self, session: AuthSession) -> None:
        self._session = session

    def end_session(self) -> None:
        self._session = None

    def require_session(self) -> AuthSession:
        if self._session is None:
            raise AuthenticationRequiredError("Please sign in first")
        return self._session

    def require_admin(self) -> AuthSession:
        session = self.require_session()
        if not session.is_admin:
            raise PermissionDeniedError("You do not have access to the back-office")
        return session
