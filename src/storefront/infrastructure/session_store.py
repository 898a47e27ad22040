"""Keeps the shopping session (cart + auth session) between CLI runs.

Every CLI invocation is one "event": it loads the StoreContext from the
session file, runs one use case, and writes the context back.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from storefront.application.context import StoreContext
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, CartLineItem, Notifier
from storefront.domain.model.user import AuthSession
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class JsonSessionStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def load(self, settings: Settings, notify: Notifier | None = None) -> StoreContext:
        raw = self._read()
        try:
            items, session = self._parse(raw, settings.currency)
        except (KeyError, TypeError, ValueError, AttributeError, ValidationError):
            logger.warning("Session file %s is unreadable; starting a new session", self._file_path)
            items, session = [], None

        return StoreContext(
            Cart(items, currency=settings.currency, notify=notify),
            settings.shipping_policy(),
            session=session,
            require_region=settings.require_region,
            bank_account=settings.bank_account,
        )

    def _parse(self, raw: dict, currency: str) -> tuple[list[CartLineItem], AuthSession | None]:
        items = []
        for line in raw.get("cart", []):
            if line.get("currency", currency) != currency:
                logger.warning("Dropping cart line %s priced in another currency", line.get("product_id"))
                continue
            items.append(
                CartLineItem(
                    product_id=line["product_id"],
                    name=line["name"],
                    unit_price=Money.of(line["unit_price"], currency),
                    quantity=int(line["quantity"]),
                    image=line.get("image", ""),
                    size=line.get("size"),
                    category=line.get("category"),
                    original_price=(
                        Money.of(line["original_price"], currency)
                        if line.get("original_price")
                        else None
                    ),
                )
            )

        session = None
        if raw.get("session"):
            session = AuthSession(**raw["session"])
        return items, session

    def save(self, context: StoreContext) -> None:
        session = context.session
        raw = {
            "cart": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "unit_price": item.unit_price.to_wire(),
                    "currency": item.unit_price.currency,
                    "quantity": item.quantity,
                    "image": item.image,
                    "size": item.size,
                    "category": item.category,
                    "original_price": (
                        item.original_price.to_wire() if item.original_price else None
                    ),
                }
                for item in context.cart.items
            ],
            "session": (
                {
                    "user_id": session.user_id,
                    "email": session.email,
                    "access_token": session.access_token,
                    "full_name": session.full_name,
                    "is_admin": session.is_admin,
                }
                if session
                else None
            ),
        }
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")

    def _read(self) -> dict:
        if not self._file_path.exists():
            return {}
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Session file %s is unreadable; starting a new session", self._file_path)
            return {}
        return raw if isinstance(raw, dict) else {}
