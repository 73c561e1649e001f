"""Two organizations side by side must never see each other's data."""

import pytest

from conftest import API


@pytest.fixture
def tenants(client, api):
    acme = api.register()
    globex = api.register(domain="globex.com", email="admin@globex.com", organization_name="Globex")
    acme["template"] = api.create_template(acme["headers"], "Acme standard", is_default=True)
    globex["template"] = api.create_template(globex["headers"], "Globex standard", is_default=True)
    acme["member"] = api.member(acme["headers"], "mia@acme.com")
    return acme, globex


def test_listings_only_show_own_tenant(client, tenants):
    acme, globex = tenants
    users = client.get(f"{API}/users/", headers=globex["headers"]).json()
    assert [user["email"] for user in users["users"]] == ["admin@globex.com"]

    templates = client.get(f"{API}/templates/", headers=globex["headers"]).json()
    assert [template["name"] for template in templates["templates"]] == ["Globex standard"]

    assignments = client.get(f"{API}/assignments/", headers=globex["headers"]).json()
    assert assignments["assignments"] == []

    activity = client.get(f"{API}/activity/", headers=globex["headers"]).json()["activity"]
    assert {entry["entity_id"] for entry in activity} == {globex["template"]["id"]}


def test_default_template_of_each_tenant_survives(client, tenants):
    acme, globex = tenants
    acme_default = client.get(f"{API}/templates/{acme['template']['id']}", headers=acme["headers"]).json()
    globex_default = client.get(f"{API}/templates/{globex['template']['id']}", headers=globex["headers"]).json()
    assert acme_default["is_default"] and globex_default["is_default"]


def test_new_member_only_gets_own_tenant_default(client, tenants):
    acme, _ = tenants
    profile = client.get(f"{API}/users/me", headers=acme["member"]["headers"]).json()
    assert [item["template_id"] for item in profile["assignments"]] == [acme["template"]["id"]]


def test_cross_tenant_writes_are_refused(client, tenants):
    acme, globex = tenants
    member_id = acme["member"]["user"]["id"]

    update = client.put(f"{API}/users/{member_id}", json={"title": "Spy"}, headers=globex["headers"])
    assert update.status_code == 404
    delete = client.delete(f"{API}/users/{member_id}", headers=globex["headers"])
    assert delete.status_code == 404
    reset = client.post(f"{API}/users/{member_id}/reset-password", headers=globex["headers"])
    assert reset.status_code == 404

    bulk = client.post(
        f"{API}/assignments/bulk",
        json={"template_id": globex["template"]["id"], "user_ids": [member_id]},
        headers=globex["headers"],
    )
    assert bulk.json()["details"] == {"missingUserIds": [member_id]}

    assignment_id = client.get(f"{API}/assignments/", headers=acme["headers"]).json()["assignments"][0]["id"]
    unassign = client.delete(f"{API}/assignments/{assignment_id}", headers=globex["headers"])
    assert unassign.status_code == 404


def test_same_user_ids_cannot_be_combined_across_tenants(client, tenants):
    acme, globex = tenants
    response = client.post(
        f"{API}/assignments/",
        json={"user_id": globex["user"]["id"], "template_id": acme["template"]["id"]},
        headers=globex["headers"],
    )
    assert response.status_code == 404
    assert response.json()["code"] == "TEMPLATE_NOT_FOUND"
