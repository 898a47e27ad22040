"""Application service: Upload Product Image use case (admin).

Stores the image blob under a generated ``<uuid>.<ext>`` path and returns
its public URL.  When a product id is given, the URL is also written to
that product's ``image_url``.
"""

from __future__ import annotations

import logging
import mimetypes
import uuid
from pathlib import PurePath

from storefront.application.context import StoreContext
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.gateway.file_storage import FileStorage
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}
MAX_IMAGE_BYTES = 5 * 1024 * 1024


class UploadProductImageHandler:

    def __init__(
        self,
        storage: FileStorage,
        product_repo: ProductRepository,
        context: StoreContext,
    ) -> None:
        self._storage = storage
        self._product_repo = product_repo
        self._context = context

    def handle(self, filename: str, data: bytes, product_id: str | None = None) -> str:
        self._context.require_admin()

        extension = PurePath(filename).suffix.lstrip(".").lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                f"Unsupported image type '.{extension}' "
                f"(allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))})"
            )
        if not data:
            raise ValidationError("Image file is empty")
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError("Image is larger than 5 MB")

        product = None
        if product_id is not None:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        content_type = mimetypes.types_map.get(f".{extension}", "application/octet-stream")
        path = self._storage.upload(f"{uuid.uuid4()}.{extension}", data, content_type)
        url = self._storage.public_url(path)
        logger.info("Uploaded image %s (%d bytes)", path, len(data))

        if product is not None:
            product.image_url = url
            self._product_repo.save(product)
        return url
