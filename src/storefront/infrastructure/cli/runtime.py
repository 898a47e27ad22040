"""Per-invocation wiring shared by all CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

import click

from storefront.application.context import StoreContext
from storefront.infrastructure.bootstrap import Backend, build_backend
from storefront.infrastructure.config import Settings
from storefront.infrastructure.session_store import JsonSessionStore


@dataclass
class Runtime:
    settings: Settings
    backend: Backend
    context: StoreContext
    store: JsonSessionStore

    @staticmethod
    def start(settings: Settings) -> Runtime:
        backend = build_backend(settings)
        store = JsonSessionStore(settings.session_file)
        context = store.load(settings, notify=click.echo)
        if context.session is not None:
            backend.use_token(context.session.access_token)
        return Runtime(settings=settings, backend=backend, context=context, store=store)

    def finish(self) -> None:
        try:
            self.store.save(self.context)
        finally:
            self.backend.close()


pass_runtime = click.make_pass_decorator(Runtime)
