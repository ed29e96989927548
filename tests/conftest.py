# tests/conftest.py

from collections.abc import Iterator
from datetime import date

import pytest
from fastapi.testclient import TestClient

from lifedash.application import Services, UserContext, build_services
from lifedash.config import Settings
from lifedash.domain.shared import DomainEvent
from lifedash.interfaces.api import create_app

TODAY = date(2025, 6, 10)


@pytest.fixture()
def settings() -> Settings:
    """In-memory database, no seeding."""
    return Settings(database_url="sqlite://", seed_defaults=False)


@pytest.fixture()
def services(settings: Settings) -> Iterator[Services]:
    services = build_services(settings)
    services.init_db()
    yield services
    services.db.dispose()


@pytest.fixture()
def ctx() -> UserContext:
    """User 1, with "today" pinned to 2025-06-10."""
    return UserContext.on(1, TODAY)


@pytest.fixture()
def other_ctx() -> UserContext:
    return UserContext.on(2, TODAY)


@pytest.fixture()
def events(services: Services) -> list[DomainEvent]:
    """Every event published on the services' bus during the test."""
    received: list[DomainEvent] = []
    services.bus.subscribe(received.append)
    return received


@pytest.fixture()
def client(services: Services) -> TestClient:
    return TestClient(create_app(services=services))
