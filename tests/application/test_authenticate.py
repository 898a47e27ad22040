"""Tests for sign-in, sign-up, sign-out and session refresh."""

import pytest

from storefront.application.authenticate import (
    CurrentSessionHandler,
    SignInHandler,
    SignOutHandler,
    SignUpHandler,
)
from storefront.domain.exceptions import AuthenticationRequiredError, ValidationError
from tests.fakes import FakeAuthGateway, make_context


def _setup():
    auth = FakeAuthGateway(admin_emails={"admin@example.com"})
    auth.register("alice@example.com", "secret1", "Alice")
    auth.register("admin@example.com", "secret1", "Admin")
    return auth, make_context()


class TestSignIn:

    def test_starts_session(self):
        auth, context = _setup()
        session = SignInHandler(auth, context).handle(" alice@example.com ", "secret1")

        assert context.session == session
        assert session.full_name == "Alice"
        assert not session.is_admin

    def test_admin_role(self):
        auth, context = _setup()
        SignInHandler(auth, context).handle("admin@example.com", "secret1")
        assert context.require_admin().is_admin

    def test_wrong_password(self):
        auth, context = _setup()
        with pytest.raises(AuthenticationRequiredError, match="Invalid email or password"):
            SignInHandler(auth, context).handle("alice@example.com", "wrong-1")
        assert context.session is None

    @pytest.mark.parametrize(
        "email, password, message",
        [
            ("not-an-email", "secret1", "Email address is invalid"),
            ("alice@example.com", "12345", "at least 6"),
        ],
    )
    def test_validated_before_backend(self, email, password, message):
        auth, context = _setup()
        with pytest.raises(ValidationError, match=message):
            SignInHandler(auth, context).handle(email, password)


class TestSignUp:

    def test_creates_and_signs_in(self):
        auth, context = _setup()
        session = SignUpHandler(auth, context).handle("Bob", "bob@example.com", "secret1")
        assert context.session == session
        assert session.full_name == "Bob"

    def test_short_name_rejected(self):
        auth, context = _setup()
        with pytest.raises(ValidationError, match="Full name is required"):
            SignUpHandler(auth, context).handle("B", "bob@example.com", "secret1")

    def test_duplicate_email(self):
        auth, context = _setup()
        with pytest.raises(ValidationError, match="already registered"):
            SignUpHandler(auth, context).handle("Alice", "alice@example.com", "secret1")


class TestSignOutAndRefresh:

    def test_sign_out_ends_session(self):
        auth, context = _setup()
        session = SignInHandler(auth, context).handle("alice@example.com", "secret1")

        SignOutHandler(auth, context).handle()

        assert context.session is None
        assert auth.signed_out == [session.access_token]

    def test_sign_out_without_session_is_a_no_op(self):
        auth, context = _setup()
        SignOutHandler(auth, context).handle()
        assert auth.signed_out == []

    def test_current_session_still_valid(self):
        auth, context = _setup()
        session = SignInHandler(auth, context).handle("alice@example.com", "secret1")
        assert CurrentSessionHandler(auth, context).handle() == session

    def test_expired_session_is_dropped(self):
        auth, context = _setup()
        session = SignInHandler(auth, context).handle("alice@example.com", "secret1")
        auth.sign_out(session.access_token)

        assert CurrentSessionHandler(auth, context).handle() is None
        assert context.session is None
