"""Runtime configuration read from the environment (and an optional .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.checkout import ShippingPolicy
from storefront.domain.model.value_objects import Money

LOCAL_BACKEND = "local"
HOSTED_BACKEND = "hosted"


class ConfigurationError(RuntimeError):
    """The environment holds a missing or malformed setting."""


@dataclass(frozen=True)
class Settings:
    backend: str = LOCAL_BACKEND
    data_dir: Path = Path("data")
    backend_url: str | None = None
    backend_key: str | None = None
    storage_bucket: str = "product-images"
    http_timeout: float = 10.0
    currency: str = "USD"
    shipping_fee: str = "10.00"
    free_shipping_threshold: str = "100.00"
    require_region: bool = False
    bank_account: str | None = None
    admin_emails: frozenset[str] = frozenset()
    feed_interval: float = 2.0
    log_level: str = "INFO"

    @property
    def session_file(self) -> Path:
        return self.data_dir / "session.json"

    def shipping_policy(self) -> ShippingPolicy:
        try:
            return ShippingPolicy(
                fee=Money.of(self.shipping_fee, self.currency),
                free_shipping_threshold=Money.of(self.free_shipping_threshold, self.currency),
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid shipping configuration: {exc}") from exc

    def validate(self) -> None:
        if self.backend not in (LOCAL_BACKEND, HOSTED_BACKEND):
            raise ConfigurationError(
                f"STOREFRONT_BACKEND must be '{LOCAL_BACKEND}' or '{HOSTED_BACKEND}', "
                f"got '{self.backend}'"
            )
        if self.backend == HOSTED_BACKEND:
            missing = [
                name
                for name, value in (
                    ("STOREFRONT_BACKEND_URL", self.backend_url),
                    ("STOREFRONT_BACKEND_KEY", self.backend_key),
                )
                if not value
            ]
            if missing:
                raise ConfigurationError(
                    f"Missing required env vars for the hosted backend: {', '.join(missing)}"
                )
        self.shipping_policy()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'") from None


def load_settings(dotenv: bool = True) -> Settings:
    """Build and validate Settings from ``STOREFRONT_*`` variables."""
    if dotenv:
        load_dotenv()

    settings = Settings(
        backend=os.getenv("STOREFRONT_BACKEND", LOCAL_BACKEND).strip().lower(),
        data_dir=Path(os.getenv("STOREFRONT_DATA_DIR", "data")),
        backend_url=(os.getenv("STOREFRONT_BACKEND_URL") or "").rstrip("/") or None,
        backend_key=os.getenv("STOREFRONT_BACKEND_KEY") or None,
        storage_bucket=os.getenv("STOREFRONT_STORAGE_BUCKET", "product-images"),
        http_timeout=_env_float("STOREFRONT_HTTP_TIMEOUT", 10.0),
        currency=os.getenv("STOREFRONT_CURRENCY", "USD").strip().upper(),
        shipping_fee=os.getenv("STOREFRONT_SHIPPING_FEE", "10.00"),
        free_shipping_threshold=os.getenv("STOREFRONT_FREE_SHIPPING_THRESHOLD", "100.00"),
        require_region=_env_bool("STOREFRONT_REQUIRE_REGION", False),
        bank_account=os.getenv("STOREFRONT_BANK_ACCOUNT") or None,
        admin_emails=frozenset(
            e.strip().lower()
            for e in os.getenv("STOREFRONT_ADMIN_EMAILS", "").split(",")
            if e.strip()
        ),
        feed_interval=_env_float("STOREFRONT_FEED_INTERVAL", 2.0),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
    settings.validate()
    return settings
