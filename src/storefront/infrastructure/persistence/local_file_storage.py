"""Local-directory implementation of FileStorage."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from storefront.domain.exceptions import BackendError, ValidationError
from storefront.domain.gateway.file_storage import FileStorage


class LocalFileStorage(FileStorage):

    def __init__(self, root: Path) -> None:
        self._root = root

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise BackendError(f"Cannot store {path}: {exc}") from exc
        return path

    def public_url(self, path: str) -> str:
        return self._resolve(path).resolve().as_uri()

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValidationError(f"Invalid storage path '{path}'")
        return self._root.joinpath(*relative.parts)
