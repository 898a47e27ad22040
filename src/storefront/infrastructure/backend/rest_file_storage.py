"""Hosted-backend implementation of FileStorage (``/storage/v1``)."""

from __future__ import annotations

from urllib.parse import quote

from storefront.domain.gateway.file_storage import FileStorage
from storefront.infrastructure.backend.rest_client import BackendClient

STORAGE_PREFIX = "/storage/v1/object"


class RestFileStorage(FileStorage):

    def __init__(self, client: BackendClient, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        self._client.request(
            "POST",
            f"{STORAGE_PREFIX}/{self._bucket}/{quote(path)}",
            content=data,
            headers={"Content-Type": content_type, "x-upsert": "false"},
        )
        return path

    def public_url(self, path: str) -> str:
        return f"{self._client.base_url}{STORAGE_PREFIX}/public/{self._bucket}/{quote(path)}"
