"""Observability configuration using Logfire.

Every domain operation runs inside a span named ``<service>.<operation>``;
tree traversals and deletions add their sizes as attributes:

    with logfire.span("cascading_delete.delete_subtree", root_id=str(root_id)):
        ...
    logfire.info("Comment subtree deleted", deleted_count=3)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from replytree.config import Settings

SERVICE_NAME = "replytree"
SERVICE_VERSION = "0.1.0"


def _should_send(settings: Settings) -> bool:
    # Explicit setting wins, otherwise send whenever a token is configured
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the API process or a script.

    OBSERVABILITY__LOGFIRE_TOKEN enables sending to Logfire cloud;
    OBSERVABILITY__SEND_TO_LOGFIRE overrides either way. Without a token,
    spans and events only go to the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request (duration, status, errors).

    The X-User-Id and X-User-Role headers are captured so deletions can be
    traced back to the actor.
    """
    logfire.instrument_fastapi(app, capture_headers=True)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every SQL statement, so each traversal level shows up as a span.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
