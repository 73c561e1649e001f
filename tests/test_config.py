import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from conftest import Api
from signature_studio.core.config import DatabaseSettings, SecuritySettings, Settings, get_settings
from signature_studio.main import create_app


def _security(**overrides) -> SecuritySettings:
    return SecuritySettings(access_secret="access-secret", refresh_secret="refresh-secret", **overrides)


def test_low_bcrypt_cost_rejected_outside_tests():
    with pytest.raises(ValidationError) as excinfo:
        Settings(_env_file=None, environment="production", security=_security(bcrypt_rounds=4))
    assert "bcrypt_rounds" in str(excinfo.value)


def test_low_bcrypt_cost_allowed_in_tests():
    settings = Settings(_env_file=None, environment="test", security=_security(bcrypt_rounds=4))
    assert settings.security.bcrypt_rounds == 4


def test_default_bcrypt_cost_is_twelve():
    settings = Settings(_env_file=None, environment="production", security=_security())
    assert settings.security.bcrypt_rounds == 12


def test_secrets_must_differ():
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            environment="test",
            security=SecuritySettings(access_secret="same-secret", refresh_secret="same-secret"),
        )


def test_app_uses_database_from_its_own_settings(app_factory, tmp_path):
    app_factory()
    explicit = tmp_path / "explicit.db"
    settings = get_settings().model_copy(
        update={"database": DatabaseSettings(url=f"sqlite+aiosqlite:///{explicit}")}
    )

    with TestClient(create_app(settings)) as client:
        Api(client).register()

    assert explicit.exists()
    assert not (tmp_path / "test.db").exists()
