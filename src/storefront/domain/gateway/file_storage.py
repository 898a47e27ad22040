"""Abstract gateway for the backend's file storage."""

from __future__ import annotations

from abc import ABC, abstractmethod


class FileStorage(ABC):

    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store *data* under *path* and return the stored path."""

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Return the publicly reachable URL for a stored path."""
