"""Application services: sign in, sign up, sign out, current session."""

from __future__ import annotations

import logging

from storefront.application.context import StoreContext
from storefront.domain.gateway.auth_gateway import AuthGateway
from storefront.domain.model.user import (
    AuthSession,
    validate_credentials,
    validate_sign_up,
)

logger = logging.getLogger(__name__)


class SignInHandler:

    def __init__(self, auth: AuthGateway, context: StoreContext) -> None:
        self._auth = auth
        self._context = context

    def handle(self, email: str, password: str) -> AuthSession:
        validate_credentials(email, password)
        session = self._auth.sign_in(email.strip(), password)
        self._context.start_session(session)
        logger.info("User %s signed in", session.user_id)
        return session


class SignUpHandler:

    def __init__(self, auth: AuthGateway, context: StoreContext) -> None:
        self._auth = auth
        self._context = context

    def handle(self, full_name: str, email: str, password: str) -> AuthSession:
        validate_sign_up(full_name, email, password)
        session = self._auth.sign_up(email.strip(), password, full_name.strip())
        self._context.start_session(session)
        logger.info("User %s signed up", session.user_id)
        return session


class SignOutHandler:

    def __init__(self, auth: AuthGateway, context: StoreContext) -> None:
        self._auth = auth
        self._context = context

    def handle(self) -> None:
        session = self._context.session
        if session is None:
            return
        try:
            self._auth.sign_out(session.access_token)
        finally:
            self._context.end_session()
        logger.info("User %s signed out", session.user_id)


class CurrentSessionHandler:
    """Re-validates the stored session against the auth service."""

    def __init__(self, auth: AuthGateway, context: StoreContext) -> None:
        self._auth = auth
        self._context = context

    def handle(self) -> AuthSession | None:
        session = self._context.session
        if session is None:
            return None
        current = self._auth.current_user(session.access_token)
        if current is None:
            logger.info("Stored session for %s has expired", session.user_id)
            self._context.end_session()
            return None
        self._context.start_session(current)
        return current
