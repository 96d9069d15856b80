"""
Tests for api/dependencies.py — registrations, lifetimes, misconfiguration.
"""
import pytest
from dependency_injector import errors, providers

from api.dependencies import (
    Container, build_container, missing_registrations, register_providers,
    verify_registrations,
)
from api.services import DataService
from src.errors import ContainerError
from src.repository import SqlDataRepository


@pytest.fixture
def unregistered(engine):
    container = Container()
    container.config.from_dict({"query_limit": 50})
    container.engine.override(providers.Object(engine))
    yield container
    container.unwire()


class TestRegistration:

    def test_repository_resolves_to_sql_repository(self, container):
        assert isinstance(container.repository(), SqlDataRepository)

    def test_resolved_repository_is_working(self, container, seed_rows):
        rows = container.repository().get_all()
        assert [r.id for r in rows] == [r["id"] for r in seed_rows]

    def test_service_resolves(self, container):
        assert isinstance(container.service(), DataService)

    def test_build_container_registers_everything(self):
        container = build_container()
        try:
            assert missing_registrations(container) == []
            verify_registrations(container)
        finally:
            container.unwire()

    def test_query_limit_comes_from_config(self, container):
        container.config.query_limit.from_value(2)
        assert len(container.repository().get_all()) == 2


class TestLifetimes:

    def test_engine_is_process_singleton(self, container, engine):
        assert container.engine() is engine
        assert container.engine() is container.engine()

    def test_repository_is_per_request(self, container):
        assert container.repository() is not container.repository()

    def test_service_is_per_request(self, container):
        assert container.service() is not container.service()


class TestMisconfiguration:

    def test_missing_registration_reported(self, unregistered):
        assert missing_registrations(unregistered) == ["repository"]

    def test_verify_raises_container_error(self, unregistered):
        with pytest.raises(ContainerError, match="repository"):
            verify_registrations(unregistered)

    def test_resolving_unregistered_capability_fails(self, unregistered):
        with pytest.raises(errors.Error):
            unregistered.service()

    def test_registering_fixes_resolution(self, unregistered):
        register_providers(unregistered)
        verify_registrations(unregistered)
        assert isinstance(unregistered.repository(), SqlDataRepository)
