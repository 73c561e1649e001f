from conftest import API


def _assign(client, headers, user_id, template_id):
    return client.post(f"{API}/assignments/", json={"user_id": user_id, "template_id": template_id}, headers=headers)


def test_assign_template_to_user(client, api):
    admin = api.register()
    user = api.create_user(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")

    response = _assign(client, admin["headers"], user["id"], template["id"])
    assert response.status_code == 201
    assignment = response.json()
    assert assignment["user_id"] == user["id"]
    assert assignment["template_id"] == template["id"]
    assert assignment["assigned_by"] == admin["user"]["id"]

    listing = client.get(f"{API}/assignments/", headers=admin["headers"]).json()
    assert listing["pagination"]["total"] == 1
    assert client.get(f"{API}/assignments/{assignment['id']}", headers=admin["headers"]).status_code == 200


def test_duplicate_assignment_conflicts(client, api):
    admin = api.register()
    user = api.create_user(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")
    _assign(client, admin["headers"], user["id"], template["id"])

    response = _assign(client, admin["headers"], user["id"], template["id"])
    assert response.status_code == 409
    assert response.json()["code"] == "ASSIGNMENT_EXISTS"


def test_assign_unknown_template_or_user(client, api):
    admin = api.register()
    user = api.create_user(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")

    missing_template = _assign(client, admin["headers"], user["id"], "no-such-template")
    assert missing_template.json()["code"] == "TEMPLATE_NOT_FOUND"
    missing_user = _assign(client, admin["headers"], "no-such-user", template["id"])
    assert missing_user.json()["code"] == "USER_NOT_FOUND"


def test_cannot_assign_to_user_of_other_tenant(client, api):
    acme = api.register()
    globex = api.register(domain="globex.com", email="admin@globex.com", organization_name="Globex")
    template = api.create_template(acme["headers"], "Standard")

    response = _assign(client, acme["headers"], globex["user"]["id"], template["id"])
    assert response.status_code == 404
    assert response.json()["code"] == "USER_NOT_FOUND"


def test_bulk_assign_skips_existing(client, api):
    admin = api.register()
    first = api.create_user(admin["headers"], "mia@acme.com")
    second = api.create_user(admin["headers"], "max@acme.com")
    template = api.create_template(admin["headers"], "Standard")
    _assign(client, admin["headers"], first["id"], template["id"])

    response = client.post(
        f"{API}/assignments/bulk",
        json={"template_id": template["id"], "user_ids": [first["id"], second["id"], second["id"]]},
        headers=admin["headers"],
    )
    assert response.status_code == 201
    body = response.json()
    assert [item["user_id"] for item in body["created"]] == [second["id"]]
    assert body["skipped_user_ids"] == [first["id"]]


def test_bulk_assign_with_unknown_users(client, api):
    admin = api.register()
    user = api.create_user(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")

    response = client.post(
        f"{API}/assignments/bulk",
        json={"template_id": template["id"], "user_ids": [user["id"], "ghost"]},
        headers=admin["headers"],
    )
    assert response.status_code == 404
    body = response.json()
    assert body["code"] == "USERS_NOT_FOUND"
    assert body["details"] == {"missingUserIds": ["ghost"]}
    # nothing is created when any user is missing
    assert client.get(f"{API}/assignments/template/{template['id']}", headers=admin["headers"]).json() == []


def test_bulk_assign_when_everyone_has_it(client, api):
    admin = api.register()
    user = api.create_user(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")
    _assign(client, admin["headers"], user["id"], template["id"])

    response = client.post(
        f"{API}/assignments/bulk",
        json={"template_id": template["id"], "user_ids": [user["id"]]},
        headers=admin["headers"],
    )
    assert response.status_code == 409
    assert response.json()["code"] == "ALL_ASSIGNMENTS_EXIST"


def test_unassign(client, api):
    admin = api.register()
    user = api.create_user(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")
    assignment = _assign(client, admin["headers"], user["id"], template["id"]).json()

    response = client.delete(f"{API}/assignments/{assignment['id']}", headers=admin["headers"])
    assert response.status_code == 200
    again = client.delete(f"{API}/assignments/{assignment['id']}", headers=admin["headers"])
    assert again.status_code == 404
    assert again.json()["code"] == "ASSIGNMENT_NOT_FOUND"


def test_bulk_unassign(client, api):
    admin = api.register()
    first = api.create_user(admin["headers"], "mia@acme.com")
    second = api.create_user(admin["headers"], "max@acme.com")
    template = api.create_template(admin["headers"], "Standard")
    ids = [_assign(client, admin["headers"], user["id"], template["id"]).json()["id"] for user in (first, second)]

    missing = client.request(
        "DELETE", f"{API}/assignments/bulk", json={"assignment_ids": ids + ["ghost"]}, headers=admin["headers"]
    )
    assert missing.status_code == 404
    assert missing.json()["details"] == {"missingAssignmentIds": ["ghost"]}

    response = client.request("DELETE", f"{API}/assignments/bulk", json={"assignment_ids": ids}, headers=admin["headers"])
    assert response.status_code == 200
    assert response.json() == {"deleted": 2}


def test_member_reads_only_own_assignments(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")
    mine = _assign(client, admin["headers"], member["user"]["id"], template["id"]).json()
    theirs = _assign(client, admin["headers"], admin["user"]["id"], template["id"]).json()

    own = client.get(f"{API}/assignments/user/{member['user']['id']}", headers=member["headers"])
    assert [item["id"] for item in own.json()] == [mine["id"]]
    assert client.get(f"{API}/assignments/{mine['id']}", headers=member["headers"]).status_code == 200

    other = client.get(f"{API}/assignments/user/{admin['user']['id']}", headers=member["headers"])
    assert other.status_code == 403
    assert other.json()["code"] == "INSUFFICIENT_PERMISSIONS"
    assert client.get(f"{API}/assignments/{theirs['id']}", headers=member["headers"]).status_code == 403


def test_member_cannot_assign(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    template = api.create_template(admin["headers"], "Standard")
    response = _assign(client, member["headers"], member["user"]["id"], template["id"])
    assert response.status_code == 403
    assert response.json()["code"] == "ADMIN_REQUIRED"


def test_admin_reads_user_of_other_tenant_as_not_found(client, api):
    acme = api.register()
    globex = api.register(domain="globex.com", email="admin@globex.com", organization_name="Globex")
    response = client.get(f"{API}/assignments/user/{globex['user']['id']}", headers=acme["headers"])
    assert response.status_code == 404
