# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.metrics import RequestMetrics, create_registry
from main import create_app


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        environment="test",
        app_version="9.9.9",
        branch="main",
        service_name="Thrive",
        port=3000,
    )


@pytest.fixture
def request_metrics():
    # Bare registry so samples are not mixed with process collectors
    return RequestMetrics(create_registry(include_default_metrics=False))


@pytest.fixture
def app(settings, request_metrics):
    return create_app(settings, request_metrics)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
