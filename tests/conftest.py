import os
import tempfile
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

_BOOT_DIR = tempfile.mkdtemp(prefix="signature-studio-tests-")
os.environ.setdefault("DATABASE__URL", f"sqlite+aiosqlite:///{_BOOT_DIR}/boot.db")
os.environ.setdefault("STORAGE__ASSET_DIR", f"{_BOOT_DIR}/assets")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECURITY__BCRYPT_ROUNDS", "4")

from signature_studio.core.config import get_settings  # noqa: E402
from signature_studio.infrastructure.database import reset_engine  # noqa: E402
from signature_studio.main import create_app  # noqa: E402

API = "/api"
PASSWORD = "Password123"


@pytest.fixture
def app_factory(tmp_path, monkeypatch):
    def factory(**overrides: Any):
        env: Dict[str, Any] = {
            "ENVIRONMENT": "test",
            "DATABASE__URL": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            "STORAGE__ASSET_DIR": str(tmp_path / "assets"),
            "SECURITY__BCRYPT_ROUNDS": 4,
            "SECURITY__ACCESS_SECRET": "test-access-secret",
            "SECURITY__REFRESH_SECRET": "test-refresh-secret",
            "RATE_LIMIT__LOGIN_MAX_ATTEMPTS": 100,
            "RATE_LIMIT__REGISTER_MAX_ATTEMPTS": 100,
        }
        env.update(overrides)
        for key, value in env.items():
            monkeypatch.setenv(key, str(value))
        get_settings.cache_clear()
        reset_engine()
        return create_app(get_settings())

    yield factory
    get_settings.cache_clear()
    reset_engine()


@pytest.fixture
def client(app_factory):
    with TestClient(app_factory()) as test_client:
        yield test_client


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class Api:
    """Shortcuts for the flows most tests start from."""

    def __init__(self, client: TestClient) -> None:
        self.client = client

    def register(
        self,
        domain: str = "acme.com",
        email: str = "admin@acme.com",
        organization_name: str = "Acme Corporation",
    ) -> Dict[str, Any]:
        response = self.client.post(
            f"{API}/auth/register",
            json={
                "organization_name": organization_name,
                "domain": domain,
                "first_name": "Ada",
                "last_name": "Admin",
                "email": email,
                "password": PASSWORD,
                "confirm_password": PASSWORD,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        body["headers"] = auth_headers(body["access_token"])
        return body

    def login(self, email: str, password: str = PASSWORD) -> Dict[str, Any]:
        response = self.client.post(f"{API}/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        body = response.json()
        body["headers"] = auth_headers(body["access_token"])
        return body

    def create_user(self, admin_headers: Dict[str, str], email: str, role: str = "member") -> Dict[str, Any]:
        response = self.client.post(
            f"{API}/users/",
            json={"email": email, "first_name": "Mia", "last_name": "Member", "role": role, "password": PASSWORD},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["user"]

    def member(self, admin_headers: Dict[str, str], email: str) -> Dict[str, Any]:
        user = self.create_user(admin_headers, email)
        session = self.login(email)
        session["user"] = user
        return session

    def create_template(self, headers: Dict[str, str], name: str = "Standard", **fields: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": name,
            "content": {"fullName": "Ada Admin", "jobTitle": "CEO", "company": "Acme", "email": "ada@acme.com"},
            "formatting": "modern",
        }
        payload.update(fields)
        response = self.client.post(f"{API}/templates/", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()


@pytest.fixture
def api(client) -> Api:
    return Api(client)
