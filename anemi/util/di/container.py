"""Production DI container assembly."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from anemi.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container the API and housekeeping scripts run with.

    Every mockable component resolves to its production implementation.
    FastapiProvider exposes the current ``Request`` to request-scoped
    providers.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container so routes can resolve ``FromDishka`` parameters."""
    setup_dishka(container=container, app=app)
