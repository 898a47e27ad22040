"""Abstract gateway for the backend's authentication service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.user import AuthSession


class AuthGateway(ABC):

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session.

        Raises AuthenticationRequiredError on bad credentials.
        """

    @abstractmethod
    def sign_up(self, email: str, password: str, full_name: str) -> AuthSession:
        """Register a new user and return its session.

        Raises ValidationError if the email is already registered.
        """

    @abstractmethod
    def current_user(self, access_token: str) -> AuthSession | None:
        """Resolve a token to its session, or None when it is no longer valid."""

    @abstractmethod
    def sign_out(self, access_token: str) -> None:
        """Invalidate a session token."""
