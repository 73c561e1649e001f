import sqlite3

from conftest import API, PASSWORD


def test_create_user_generates_temporary_password(client, api):
    admin = api.register()
    response = client.post(
        f"{API}/users/",
        json={"email": "Mia@Acme.com", "first_name": "Mia", "last_name": "Member"},
        headers=admin["headers"],
    )
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "mia@acme.com"
    assert body["user"]["role"] == "member"
    assert body["user"]["tenant_id"] == admin["tenant"]["id"]
    temporary = body["temporary_password"]
    assert temporary and len(temporary) == 12

    login = client.post(f"{API}/auth/login", json={"email": "mia@acme.com", "password": temporary})
    assert login.status_code == 200


def test_create_user_with_password_returns_no_temporary_password(client, api):
    admin = api.register()
    response = client.post(
        f"{API}/users/",
        json={"email": "mia@acme.com", "password": PASSWORD},
        headers=admin["headers"],
    )
    assert response.json()["temporary_password"] is None


def test_legacy_user_role_is_accepted(client, api):
    admin = api.register()
    response = client.post(f"{API}/users/", json={"email": "mia@acme.com", "role": "user"}, headers=admin["headers"])
    assert response.json()["user"]["role"] == "member"


def test_member_filter_includes_legacy_user_rows(client, api, tmp_path):
    admin = api.register()
    api.create_user(admin["headers"], "mia@acme.com")
    with sqlite3.connect(tmp_path / "test.db") as conn:
        conn.execute("UPDATE users SET role = 'user' WHERE email = 'mia@acme.com'")

    members = client.get(f"{API}/users/", params={"filter": "member"}, headers=admin["headers"]).json()
    assert [user["email"] for user in members["users"]] == ["mia@acme.com"]
    assert members["users"][0]["role"] == "member"


def test_duplicate_email_is_rejected(client, api):
    admin = api.register()
    api.create_user(admin["headers"], "mia@acme.com")
    response = client.post(f"{API}/users/", json={"email": "mia@acme.com"}, headers=admin["headers"])
    assert response.status_code == 409
    assert response.json()["code"] == "EMAIL_EXISTS"


def test_starter_plan_user_limit(client, api):
    admin = api.register()
    for index in range(4):
        api.create_user(admin["headers"], f"user{index}@acme.com")
    response = client.post(f"{API}/users/", json={"email": "one-too-many@acme.com"}, headers=admin["headers"])
    assert response.status_code == 403
    body = response.json()
    assert body["code"] == "PLAN_LIMIT_EXCEEDED"
    assert body["details"] == {"resource": "users", "limit": 5, "current": 5}


def test_list_users_with_search_filter_and_counts(client, api):
    admin = api.register()
    api.create_user(admin["headers"], "mia@acme.com")
    api.create_user(admin["headers"], "max@acme.com", role="admin")

    members = client.get(f"{API}/users/", params={"filter": "member"}, headers=admin["headers"]).json()
    assert [user["email"] for user in members["users"]] == ["mia@acme.com"]
    assert members["users"][0]["assignment_count"] == 0

    admins = client.get(f"{API}/users/", params={"filter": "admin"}, headers=admin["headers"]).json()
    assert sorted(user["email"] for user in admins["users"]) == ["admin@acme.com", "max@acme.com"]

    search = client.get(f"{API}/users/", params={"q": "max"}, headers=admin["headers"]).json()
    assert search["pagination"]["total"] == 1

    page = client.get(
        f"{API}/users/",
        params={"limit": 2, "page": 2, "sort": "email", "order": "asc"},
        headers=admin["headers"],
    ).json()
    assert page["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}
    assert [user["email"] for user in page["users"]] == ["mia@acme.com"]


def test_limit_is_capped(client, api):
    admin = api.register()
    response = client.get(f"{API}/users/", params={"limit": 101}, headers=admin["headers"])
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_member_updates_own_profile(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    response = client.put(
        f"{API}/users/{member['user']['id']}",
        json={"title": "Designer", "department": "Brand"},
        headers=member["headers"],
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Designer"
    assert response.json()["role"] == "member"


def test_member_cannot_update_someone_else(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    response = client.put(f"{API}/users/{admin['user']['id']}", json={"title": "Nope"}, headers=member["headers"])
    assert response.status_code == 403
    assert response.json()["code"] == "INSUFFICIENT_PERMISSIONS"


def test_member_cannot_change_own_role(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    response = client.put(f"{API}/users/{member['user']['id']}", json={"role": "admin"}, headers=member["headers"])
    assert response.status_code == 403


def test_password_change_revokes_refresh_tokens(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    old_refresh = client.cookies.get("refreshToken")

    response = client.put(
        f"{API}/users/{member['user']['id']}",
        json={"password": "NewPassword1"},
        headers=member["headers"],
    )
    assert response.status_code == 200

    refreshed = client.post(f"{API}/auth/refresh", json={"refresh_token": old_refresh})
    assert refreshed.status_code == 401
    api.login("mia@acme.com", "NewPassword1")


def test_update_email_to_existing_one_conflicts(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    response = client.put(
        f"{API}/users/{member['user']['id']}",
        json={"email": "admin@acme.com"},
        headers=admin["headers"],
    )
    assert response.status_code == 409
    assert response.json()["code"] == "EMAIL_EXISTS"


def test_get_user_in_other_tenant_is_not_found(client, api):
    acme = api.register()
    globex = api.register(domain="globex.com", email="admin@globex.com", organization_name="Globex")
    response = client.get(f"{API}/users/{globex['user']['id']}", headers=acme["headers"])
    assert response.status_code == 404
    assert response.json()["code"] == "USER_NOT_FOUND"


def test_admin_cannot_delete_self(client, api):
    admin = api.register()
    response = client.delete(f"{API}/users/{admin['user']['id']}", headers=admin["headers"])
    assert response.status_code == 400
    assert response.json()["code"] == "CANNOT_DELETE_SELF"


def test_delete_user(client, api):
    admin = api.register()
    user = api.create_user(admin["headers"], "mia@acme.com")
    response = client.delete(f"{API}/users/{user['id']}", headers=admin["headers"])
    assert response.status_code == 200
    assert client.get(f"{API}/users/{user['id']}", headers=admin["headers"]).status_code == 404


def test_delete_template_author_conflicts(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    api.create_template(member["headers"], "Mia's template")
    response = client.delete(f"{API}/users/{member['user']['id']}", headers=admin["headers"])
    assert response.status_code == 409
    assert response.json()["code"] == "USER_HAS_TEMPLATES"


def test_reset_password_generates_and_revokes(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    old_refresh = client.cookies.get("refreshToken")

    response = client.post(f"{API}/users/{member['user']['id']}/reset-password", headers=admin["headers"])
    assert response.status_code == 200
    temporary = response.json()["temporary_password"]
    assert temporary

    assert client.post(f"{API}/auth/refresh", json={"refresh_token": old_refresh}).status_code == 401
    assert client.post(f"{API}/auth/login", json={"email": "mia@acme.com", "password": PASSWORD}).status_code == 401
    api.login("mia@acme.com", temporary)


def test_new_user_gets_default_template(client, api):
    admin = api.register()
    template = api.create_template(admin["headers"], "House style", is_default=True)
    member = api.member(admin["headers"], "mia@acme.com")

    profile = client.get(f"{API}/users/me", headers=member["headers"]).json()
    assert [item["template_id"] for item in profile["assignments"]] == [template["id"]]
    assert profile["tenant"]["id"] == admin["tenant"]["id"]
