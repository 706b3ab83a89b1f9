"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from replytree.util.di import PROVIDERS, get_provider


def create_container(web: bool = True) -> AsyncContainer:
    """Build the production container.

    Settings are loaded from environment variables when first requested, so
    building the container never touches the database.

    Args:
        web: Register FastAPI's request objects (off for CLI scripts)

    Returns:
        Container with production providers
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    if web:
        providers.append(FastapiProvider())
    return make_async_container(*providers)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; each request gets a REQUEST scope."""
    setup_dishka(container, app)
