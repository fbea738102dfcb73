"""Logfire setup and instrumentation hooks.

Application code logs through ``logfire`` itself, e.g.
``logfire.info("Reply created", reply_id=str(reply.id))``. This module only
owns process-level configuration and the library integrations.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from forum.config import Settings

SERVICE_NAME = "forum-api"


def configure_logfire(settings: Settings) -> None:
    """Configure logfire once per process.

    Console output is always on. Export to the Logfire backend follows
    ``ObservabilitySettings.export_enabled``.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    logfire.configure(
        service_name=SERVICE_NAME,
        environment=settings.environment,
        send_to_logfire=observability.export_enabled,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        export=observability.export_enabled,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, without capturing headers (they carry the auth cookie)."""

    def request_attributes(request, attributes):
        return {**attributes, "method": request.method, "path": request.url.path}

    logfire.instrument_fastapi(
        app, capture_headers=False, request_attributes_mapper=request_attributes
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
