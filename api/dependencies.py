"""
Dependency injection module for FastAPI.

The container declares each capability with its lifetime:

- ``engine``      — process-wide singleton (Resource; owns the connection pool)
- ``repository``  — abstract ``DataRepository``; a fresh instance per request
                    once a concrete factory is registered
- ``service``     — ``DataService`` over the repository, per request

Handlers declare ``Depends(Provide[Container.service])`` and are wired by
``wiring_config``. ``register_providers`` must run before serving; a
missing registration is caught by ``verify_registrations`` at startup.
"""

import logging
from typing import List

from dependency_injector import containers, providers

from config import container_settings
from api.services import DataService
from src.db import engine_resource
from src.errors import ContainerError
from src.repository import DataRepository, SqlDataRepository

logger = logging.getLogger(__name__)


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["api.routes.data"])

    config = providers.Configuration()

    engine = providers.Resource(
        engine_resource,
        url=config.database.url,
        pool_size=config.database.pool_size,
        max_overflow=config.database.max_overflow,
        pool_timeout=config.database.pool_timeout,
        echo=config.database.echo,
    )

    repository = providers.AbstractFactory(DataRepository)

    service = providers.Factory(DataService, repository=repository)


def register_providers(container: Container) -> None:
    """Bind abstract capabilities to their database-backed implementations."""
    container.repository.override(
        providers.Factory(
            SqlDataRepository,
            engine=container.engine,
            limit=container.config.query_limit,
        )
    )


def missing_registrations(container: Container) -> List[str]:
    return sorted(
        name for name, provider in container.providers.items()
        if isinstance(provider, providers.AbstractFactory) and not provider.overridden
    )


def verify_registrations(container: Container) -> None:
    """Raise ContainerError if any abstract capability has no registration."""
    missing = missing_registrations(container)
    if missing:
        logger.critical("DI container misconfigured, unregistered: %s", ", ".join(missing))
        raise ContainerError(f"No registration for capabilities: {', '.join(missing)}")


def build_container() -> Container:
    """Create, configure and register the process-wide container."""
    container = Container()
    container.config.from_dict(container_settings())
    register_providers(container)
    return container
