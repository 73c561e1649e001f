from datetime import datetime, timedelta, timezone

from signature_studio.core.security import AccessTokenClaims
from signature_studio.modules.users.models import Role

from conftest import API, auth_headers


def _issue(client, **claims) -> str:
    tokens = client.app.state.container.tokens
    return tokens.issue_access_token(AccessTokenClaims(**claims))


def test_missing_token(client):
    response = client.get(f"{API}/auth/me")
    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_MISSING"


def test_non_bearer_scheme_counts_as_missing(client):
    response = client.get(f"{API}/auth/me", headers={"Authorization": "Basic abc"})
    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_MISSING"


def test_invalid_token(client):
    response = client.get(f"{API}/auth/me", headers=auth_headers("garbage"))
    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_INVALID"


def test_expired_token(client, api):
    admin = api.register()
    tokens = client.app.state.container.tokens
    token = tokens.issue_access_token(
        AccessTokenClaims(
            user_id=admin["user"]["id"],
            tenant_id=admin["tenant"]["id"],
            email=admin["user"]["email"],
            role=Role.ADMIN,
        ),
        issued_at=datetime.now(timezone.utc) - timedelta(hours=2),
    )
    response = client.get(f"{API}/auth/me", headers=auth_headers(token))
    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_INVALID"


def test_authentication_runs_before_role_check(client):
    response = client.get(f"{API}/users/", headers=auth_headers("garbage"))
    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_INVALID"


def test_token_for_unknown_user(client, api):
    admin = api.register()
    token = _issue(
        client,
        user_id="00000000-0000-0000-0000-000000000000",
        tenant_id=admin["tenant"]["id"],
        email="ghost@acme.com",
        role=Role.ADMIN,
    )
    response = client.get(f"{API}/auth/me", headers=auth_headers(token))
    assert response.status_code == 404
    assert response.json()["code"] == "USER_NOT_FOUND"


def test_tenant_mismatch_is_forbidden(client, api):
    acme = api.register()
    globex = api.register(domain="globex.com", email="admin@globex.com", organization_name="Globex")
    forged = _issue(
        client,
        user_id=acme["user"]["id"],
        tenant_id=globex["tenant"]["id"],
        email=acme["user"]["email"],
        role=Role.ADMIN,
    )
    response = client.get(f"{API}/auth/me", headers=auth_headers(forged))
    assert response.status_code == 403
    assert response.json()["code"] == "TENANT_MISMATCH"


def test_tenant_check_runs_before_role_check(client, api):
    acme = api.register()
    globex = api.register(domain="globex.com", email="admin@globex.com", organization_name="Globex")
    forged = _issue(
        client,
        user_id=acme["user"]["id"],
        tenant_id=globex["tenant"]["id"],
        email=acme["user"]["email"],
        role=Role.MEMBER,
    )
    response = client.get(f"{API}/users/", headers=auth_headers(forged))
    assert response.json()["code"] == "TENANT_MISMATCH"


def test_member_cannot_use_admin_routes(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    response = client.get(f"{API}/users/", headers=member["headers"])
    assert response.status_code == 403
    assert response.json()["code"] == "ADMIN_REQUIRED"


def test_role_comes_from_token_claims(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    promoted = client.put(f"{API}/users/{member['user']['id']}", json={"role": "admin"}, headers=admin["headers"])
    assert promoted.status_code == 200

    # the old token still carries the member role
    response = client.get(f"{API}/users/", headers=member["headers"])
    assert response.status_code == 403

    fresh = api.login("mia@acme.com")
    assert client.get(f"{API}/users/", headers=fresh["headers"]).status_code == 200


def test_admin_passes_every_stage(client, api):
    admin = api.register()
    response = client.get(f"{API}/users/", headers=admin["headers"])
    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 1


def test_refresh_picks_up_current_role(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    client.put(f"{API}/users/{member['user']['id']}", json={"role": "admin"}, headers=admin["headers"])

    # the refresh cookie now belongs to the member's session
    refreshed = client.post(f"{API}/auth/refresh")
    assert refreshed.status_code == 200
    assert refreshed.json()["user"]["role"] == "admin"
    response = client.get(f"{API}/users/", headers=auth_headers(refreshed.json()["access_token"]))
    assert response.status_code == 200
