"""Local stand-in for the backend's authentication service.

Users live in ``users.json`` (werkzeug password hashes), issued tokens in
``auth_sessions.json``.  Admin rights come from the ``role`` column,
which sign-up sets for the configured admin emails.
"""

from __future__ import annotations

import hmac
import secrets
from pathlib import Path

from werkzeug.security import check_password_hash, generate_password_hash

from storefront.domain.exceptions import AuthenticationRequiredError, ValidationError
from storefront.domain.gateway.auth_gateway import AuthGateway
from storefront.domain.model.user import AuthSession
from storefront.infrastructure.persistence.json_table import JsonTable


class JsonAuthGateway(AuthGateway):

    def __init__(
        self,
        users_path: Path,
        sessions_path: Path,
        admin_emails: frozenset[str] = frozenset(),
    ) -> None:
        self._users = JsonTable(users_path)
        self._sessions = JsonTable(sessions_path)
        self._admin_emails = {e.lower() for e in admin_emails}

    # --- AuthGateway interface ------------------------------------------------

    def sign_in(self, email: str, password: str) -> AuthSession:
        user = self._find_user(email)
        if user is None or not check_password_hash(user["password_hash"], password):
            raise AuthenticationRequiredError("Invalid email or password")
        return self._issue_token(user)

    def sign_up(self, email: str, password: str, full_name: str) -> AuthSession:
        if self._find_user(email) is not None:
            raise ValidationError("This email is already registered")
        user = JsonTable.stamp({
            "email": email.lower(),
            "full_name": full_name,
            "password_hash": generate_password_hash(password),
            "role": "admin" if email.lower() in self._admin_emails else "customer",
        })
        self._users.persist(self._users.load() + [user])
        return self._issue_token(user)

    def current_user(self, access_token: str) -> AuthSession | None:
        for row in self._sessions.load():
            if hmac.compare_digest(row["token"], access_token):
                user = self._find_user_by_id(row["user_id"])
                return self._to_session(user, access_token) if user else None
        return None

    def sign_out(self, access_token: str) -> None:
        rows = self._sessions.load()
        self._sessions.persist([row for row in rows if row["token"] != access_token])

    # --- Helpers --------------------------------------------------------------

    def _issue_token(self, user: dict) -> AuthSession:
        token = secrets.token_urlsafe(32)
        rows = self._sessions.load()
        rows.append({"token": token, "user_id": user["id"]})
        self._sessions.persist(rows)
        return self._to_session(user, token)

    def _find_user(self, email: str) -> dict | None:
        email = email.strip().lower()
        return next((u for u in self._users.load() if u["email"] == email), None)

    def _find_user_by_id(self, user_id: str) -> dict | None:
        return next((u for u in self._users.load() if u["id"] == user_id), None)

    @staticmethod
    def _to_session(user: dict, token: str) -> AuthSession:
        return AuthSession(
            user_id=user["id"],
            email=user["email"],
            access_token=token,
            full_name=user.get("full_name"),
            is_admin=user.get("role") == "admin",
        )
