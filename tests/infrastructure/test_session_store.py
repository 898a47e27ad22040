"""Tests for the CLI session file (cart + auth session between runs)."""

import json

import pytest

from storefront.domain.model.cart import CartLineItem
from storefront.domain.model.user import AuthSession
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.config import Settings
from storefront.infrastructure.session_store import JsonSessionStore


def _settings(tmp_path, **overrides) -> Settings:
    return Settings(data_dir=tmp_path, **overrides)


class TestJsonSessionStore:

    def test_missing_file_gives_empty_context(self, tmp_path):
        settings = _settings(tmp_path)
        context = JsonSessionStore(settings.session_file).load(settings)

        assert context.cart.is_empty
        assert context.session is None

    def test_cart_and_session_survive_save_and_load(self, tmp_path):
        settings = _settings(tmp_path, bank_account="DE00 1234", require_region=True)
        store = JsonSessionStore(settings.session_file)
        context = store.load(settings)
        context.cart.add(CartLineItem("a", "Jacket", Money.of("99.90"), 2, "/i.png", size="M",
                                      original_price=Money.of("120")))
        context.start_session(AuthSession("u1", "alice@example.com", "tok", "Alice"))
        store.save(context)

        restored = store.load(settings)

        assert restored.cart.items == context.cart.items
        assert restored.session == context.session
        assert restored.bank_account == "DE00 1234"
        assert restored.require_region

    def test_lines_in_another_currency_are_dropped(self, tmp_path):
        store = JsonSessionStore(tmp_path / "session.json")
        usd = _settings(tmp_path)
        context = store.load(usd)
        context.cart.add(CartLineItem("a", "Jacket", Money.of("10"), 1, "/i.png"))
        store.save(context)

        restored = store.load(_settings(tmp_path, currency="EUR"))
        assert restored.cart.is_empty

    def test_unreadable_file_starts_fresh(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("garbage", encoding="utf-8")
        context = JsonSessionStore(path).load(_settings(tmp_path))
        assert context.cart.is_empty

    def test_signed_out_session_is_written_as_null(self, tmp_path):
        settings = _settings(tmp_path)
        store = JsonSessionStore(settings.session_file)
        store.save(store.load(settings))
        assert json.loads(settings.session_file.read_text())["session"] is None

    @pytest.mark.parametrize("content", [
        {"cart": [{"name": "Jacket", "unit_price": "10.00", "quantity": 1}]},
        {"cart": [{"product_id": "a", "name": "Jacket", "unit_price": "ten", "quantity": 1}]},
        {"cart": [{"product_id": "a", "name": "Jacket", "unit_price": "10", "quantity": "x"}]},
        {"cart": "not-a-list-of-lines"},
        {"session": {"user_id": "u1", "unexpected": True}},
        ["not", "an", "object"],
    ])
    def test_malformed_content_starts_fresh(self, tmp_path, content, caplog):
        path = tmp_path / "session.json"
        path.write_text(json.dumps(content), encoding="utf-8")

        context = JsonSessionStore(path).load(_settings(tmp_path))

        assert context.cart.is_empty
        assert context.session is None
        if isinstance(content, dict):
            assert "starting a new session" in caplog.text
