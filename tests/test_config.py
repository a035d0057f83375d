# tests/test_config.py
import pytest
from pydantic import ValidationError

from core.config import Settings

ENV_VARS = ("PORT", "HOST", "NODE_ENV", "ENVIRONMENT", "APP_VERSION", "APP_BRANCH", "SERVICE_NAME", "DEBUG", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert settings.environment == "development"
    assert settings.app_version == "1.0.0"
    assert settings.branch == "dev"
    assert settings.debug is False
    assert settings.log_level == "INFO"


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("NODE_ENV", "Production")
    monkeypatch.setenv("APP_VERSION", "2.3.4")
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.environment == "production"
    assert settings.app_version == "2.3.4"
    assert settings.debug is True
    assert settings.log_level == "WARNING"
    assert settings.get_server_config() == {"host": "0.0.0.0", "port": 8080}


def test_environment_fallback_name(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "staging")

    assert Settings(_env_file=None).environment == "staging"


@pytest.mark.parametrize("name,value", [
    ("PORT", "0"),
    ("PORT", "70000"),
    ("LOG_LEVEL", "chatty"),
    ("NODE_ENV", "   "),
])
def test_invalid_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
