from fastapi.testclient import TestClient

from conftest import API


def test_unknown_route_uses_error_envelope(client):
    response = client.get(f"{API}/nowhere")
    assert response.status_code == 404
    body = response.json()
    assert body["code"] == "ROUTE_NOT_FOUND"
    assert body["error"] == f"Route GET {API}/nowhere not found"
    assert body["path"] == f"{API}/nowhere"
    assert body["method"] == "GET"


def test_wrong_method_is_reported(client):
    response = client.delete(f"{API}/health")
    assert response.status_code == 405
    assert response.json()["code"] == "HTTP_ERROR"


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"


def test_api_info_lists_endpoints(client):
    body = client.get(f"{API}/").json()
    assert body["endpoints"]["templates"] == f"{API}/templates"


def test_unexpected_errors_hide_details_outside_debug(app_factory):
    app = app_factory()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")
    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "INTERNAL_ERROR"
    assert "details" not in body or body["details"] is None
    assert "hunter2" not in response.text


def test_unexpected_errors_show_details_in_debug(app_factory):
    app = app_factory(DEBUG="true")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")
    assert response.json()["details"] == {"type": "RuntimeError", "message": "kaboom"}


def test_activity_log_records_changes(client, api):
    admin = api.register()
    user = api.create_user(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")
    client.put(f"{API}/templates/{template['id']}", json={"name": "Renamed"}, headers=admin["headers"])

    entries = client.get(f"{API}/activity/", headers=admin["headers"]).json()["activity"]
    assert [(entry["action"], entry["entity_type"]) for entry in entries] == [
        ("update", "template"),
        ("create", "template"),
        ("create", "user"),
    ]
    assert entries[2]["entity_id"] == user["id"]
    assert entries[0]["details"] == {"fields": ["name"]}
    assert all(entry["user_id"] == admin["user"]["id"] for entry in entries)

    users_only = client.get(f"{API}/activity/", params={"entity_type": "user"}, headers=admin["headers"]).json()
    assert len(users_only["activity"]) == 1
    limited = client.get(f"{API}/activity/", params={"limit": 1}, headers=admin["headers"]).json()
    assert len(limited["activity"]) == 1


def test_activity_log_is_admin_only(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    response = client.get(f"{API}/activity/", headers=member["headers"])
    assert response.status_code == 403
