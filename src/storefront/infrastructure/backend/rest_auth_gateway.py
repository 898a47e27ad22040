"""Hosted-backend implementation of AuthGateway (``/auth/v1``)."""

from __future__ import annotations

from storefront.domain.exceptions import AuthenticationRequiredError, ValidationError
from storefront.domain.gateway.auth_gateway import AuthGateway
from storefront.domain.model.user import AuthSession
from storefront.infrastructure.backend.rest_client import BackendClient, HostedBackendError

AUTH_PREFIX = "/auth/v1"
ADMIN_ROLE = "admin"


class RestAuthGateway(AuthGateway):

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self._client.request(
                "POST",
                f"{AUTH_PREFIX}/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
            )
        except HostedBackendError as exc:
            if exc.status_code in (400, 401):
                raise AuthenticationRequiredError("Invalid email or password") from exc
            raise
        body = response.json()
        return self._to_session(body["user"], body["access_token"])

    def sign_up(self, email: str, password: str, full_name: str) -> AuthSession:
        try:
            response = self._client.request(
                "POST",
                f"{AUTH_PREFIX}/signup",
                json={"email": email, "password": password, "data": {"full_name": full_name}},
            )
        except HostedBackendError as exc:
            if exc.status_code in (400, 422) and "registered" in str(exc).lower():
                raise ValidationError("This email is already registered") from exc
            raise
        body = response.json()
        token = body.get("access_token")
        if not token:
            # Email confirmation pending: the account exists but has no session yet.
            raise AuthenticationRequiredError(
                "Account created. Confirm your email address, then sign in"
            )
        return self._to_session(body["user"], token)

    def current_user(self, access_token: str) -> AuthSession | None:
        try:
            response = self._client.request("GET", f"{AUTH_PREFIX}/user", token=access_token)
        except HostedBackendError as exc:
            if exc.status_code in (401, 403):
                return None
            raise
        return self._to_session(response.json(), access_token)

    def sign_out(self, access_token: str) -> None:
        try:
            self._client.request("POST", f"{AUTH_PREFIX}/logout", token=access_token)
        except HostedBackendError as exc:
            # An already-expired token is as good as signed out.
            if exc.status_code not in (401, 403, 404):
                raise

    @staticmethod
    def _to_session(user: dict, token: str) -> AuthSession:
        metadata = user.get("user_metadata") or {}
        app_metadata = user.get("app_metadata") or {}
        return AuthSession(
            user_id=str(user["id"]),
            email=user.get("email") or "",
            access_token=token,
            full_name=metadata.get("full_name"),
            is_admin=app_metadata.get("role") == ADMIN_ROLE,
        )
