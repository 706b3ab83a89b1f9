"""FastAPI application."""

from fastapi import FastAPI

from replytree.interface.api.routes import comments, health, posts
from replytree.util.di.container import create_container, setup_di
from replytree.util.observability import SERVICE_VERSION, instrument_fastapi


def create_app() -> FastAPI:
    """Build the API with production providers.

    Configure Logfire first (``scripts/start_app.py`` does). Tests call
    ``setup_di`` again with a test container.
    """
    app_instance = FastAPI(
        title="replytree API",
        description="Threaded comments with exact, self-repairing reply counts",
        version=SERVICE_VERSION,
    )
    instrument_fastapi(app_instance)
    setup_di(app_instance, create_container())

    for module in (health, posts, comments):
        app_instance.include_router(module.router)

    return app_instance


# Imported by uvicorn as replytree.interface.api.app:app
app = create_app()
