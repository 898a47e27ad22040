"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from storefront.domain.gateway.auth_gateway import AuthGateway
from storefront.domain.gateway.file_storage import FileStorage
from storefront.domain.gateway.order_feed import OrderFeed
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.backend.rest_auth_gateway import RestAuthGateway
from storefront.infrastructure.backend.rest_client import BackendClient
from storefront.infrastructure.backend.rest_file_storage import RestFileStorage
from storefront.infrastructure.backend.rest_order_repository import RestOrderRepository
from storefront.infrastructure.backend.rest_product_repository import RestProductRepository
from storefront.infrastructure.config import HOSTED_BACKEND, Settings
from storefront.infrastructure.persistence.json_auth_gateway import JsonAuthGateway
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import JsonProductRepository
from storefront.infrastructure.persistence.local_file_storage import LocalFileStorage
from storefront.infrastructure.realtime.polling_order_feed import PollingOrderFeed


@dataclass
class Backend:
    """Every backend port, built for one configuration."""

    products: ProductRepository
    orders: OrderRepository
    auth: AuthGateway
    storage: FileStorage
    feed: OrderFeed
    use_token: Callable[[str | None], None] = lambda token: None
    close: Callable[[], None] = lambda: None


def build_backend(settings: Settings) -> Backend:
    if settings.backend == HOSTED_BACKEND:
        return _hosted_backend(settings)
    return _local_backend(settings)


def _local_backend(settings: Settings) -> Backend:
    data = settings.data_dir
    orders = JsonOrderRepository(data / "orders.json", data / "order_items.json", settings.currency)
    return Backend(
        products=JsonProductRepository(data / "products.json", settings.currency),
        orders=orders,
        auth=JsonAuthGateway(
            data / "users.json", data / "auth_sessions.json", settings.admin_emails,
        ),
        storage=LocalFileStorage(data / "storage" / settings.storage_bucket),
        feed=PollingOrderFeed(orders, settings.feed_interval),
    )


def _hosted_backend(settings: Settings) -> Backend:
    client = BackendClient(
        settings.backend_url or "",
        settings.backend_key or "",
        timeout=settings.http_timeout,
    )
    orders = RestOrderRepository(client, settings.currency)
    return Backend(
        products=RestProductRepository(client, settings.currency),
        orders=orders,
        auth=RestAuthGateway(client),
        storage=RestFileStorage(client, settings.storage_bucket),
        feed=PollingOrderFeed(orders, settings.feed_interval),
        use_token=client.set_access_token,
        close=client.close,
    )
