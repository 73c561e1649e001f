from conftest import API


def _get(client, headers, template_id):
    return client.get(f"{API}/templates/{template_id}", headers=headers)


def test_create_renders_html_and_records_first_version(client, api):
    admin = api.register()
    template = api.create_template(admin["headers"], "Standard", formatting="corporate")
    assert template["created_by"] == admin["user"]["id"]
    assert template["status"] == "draft"
    assert ">Ada Admin</div>" in template["html_content"]
    assert 'href="mailto:ada@acme.com"' in template["html_content"]

    versions = client.get(f"{API}/templates/{template['id']}/versions", headers=admin["headers"]).json()
    assert [version["version"] for version in versions] == [1]
    assert versions[0]["html_content"] == template["html_content"]


def test_supplied_html_is_stored_verbatim(api):
    admin = api.register()
    template = api.create_template(admin["headers"], "Hand made", html_content="<p>hello</p>")
    assert template["html_content"] == "<p>hello</p>"


def test_content_is_stored_with_editor_keys(api):
    admin = api.register()
    template = api.create_template(
        admin["headers"],
        "Social",
        content={"fullName": "Ada", "linked_in": "https://l.in/ada", "promotionalImage": "https://cdn/p.png"},
    )
    assert template["content"] == {
        "fullName": "Ada",
        "linkedIn": "https://l.in/ada",
        "promotionalImage": "https://cdn/p.png",
    }
    assert ">LinkedIn</a>" in template["html_content"]
    assert 'alt="Promotional Banner"' in template["html_content"]


def test_only_one_default_per_tenant(client, api):
    acme = api.register()
    globex = api.register(domain="globex.com", email="admin@globex.com", organization_name="Globex")
    first = api.create_template(acme["headers"], "First", is_default=True)
    other_tenant = api.create_template(globex["headers"], "Globex default", is_default=True)
    second = api.create_template(acme["headers"], "Second", is_default=True)

    assert _get(client, acme["headers"], first["id"]).json()["is_default"] is False
    assert _get(client, acme["headers"], second["id"]).json()["is_default"] is True
    assert _get(client, globex["headers"], other_tenant["id"]).json()["is_default"] is True

    client.put(f"{API}/templates/{first['id']}", json={"is_default": True}, headers=acme["headers"])
    defaults = client.get(f"{API}/templates/", params={"filter": "default"}, headers=acme["headers"]).json()
    assert [template["id"] for template in defaults["templates"]] == [first["id"]]


def test_update_rerenders_and_appends_version(client, api):
    admin = api.register()
    template = api.create_template(admin["headers"], "Standard")
    response = client.put(
        f"{API}/templates/{template['id']}",
        json={"content": {"fullName": "Grace Hopper"}, "formatting": "minimal"},
        headers=admin["headers"],
    )
    assert response.status_code == 200
    updated = response.json()
    assert "Grace Hopper" in updated["html_content"]
    assert "Ada Admin" not in updated["html_content"]
    assert updated["formatting"] == "minimal"

    versions = client.get(f"{API}/templates/{template['id']}/versions", headers=admin["headers"]).json()
    assert [version["version"] for version in versions] == [2, 1]


def test_metadata_update_keeps_html_and_versions(client, api):
    admin = api.register()
    template = api.create_template(admin["headers"], "Standard")
    response = client.put(
        f"{API}/templates/{template['id']}",
        json={"status": "active", "description": "Company wide"},
        headers=admin["headers"],
    )
    assert response.json()["status"] == "active"
    assert response.json()["html_content"] == template["html_content"]
    versions = client.get(f"{API}/templates/{template['id']}/versions", headers=admin["headers"]).json()
    assert len(versions) == 1


def test_duplicate_is_non_default_draft(client, api):
    admin = api.register()
    source = api.create_template(admin["headers"], "Standard", is_default=True, status="active")
    response = client.post(f"{API}/templates/{source['id']}/duplicate", headers=admin["headers"])
    assert response.status_code == 201
    copy = response.json()
    assert copy["name"] == "Standard (Copy)"
    assert copy["status"] == "draft"
    assert copy["is_default"] is False
    assert copy["html_content"] == source["html_content"]
    assert _get(client, admin["headers"], source["id"]).json()["is_default"] is True

    named = client.post(
        f"{API}/templates/{source['id']}/duplicate",
        json={"name": "Holiday edition"},
        headers=admin["headers"],
    )
    assert named.json()["name"] == "Holiday edition"


def test_list_search_and_status_filter(client, api):
    admin = api.register()
    api.create_template(admin["headers"], "Sales team", status="active")
    api.create_template(admin["headers"], "Support team")
    api.create_template(admin["headers"], "Legal")

    search = client.get(f"{API}/templates/", params={"q": "team", "sort": "name", "order": "asc"}, headers=admin["headers"])
    assert [template["name"] for template in search.json()["templates"]] == ["Sales team", "Support team"]

    active = client.get(f"{API}/templates/", params={"filter": "active"}, headers=admin["headers"]).json()
    assert active["pagination"]["total"] == 1


def test_delete_template_with_assignments_conflicts(client, api):
    admin = api.register()
    template = api.create_template(admin["headers"], "Standard")
    client.post(
        f"{API}/assignments/",
        json={"user_id": admin["user"]["id"], "template_id": template["id"]},
        headers=admin["headers"],
    )
    response = client.delete(f"{API}/templates/{template['id']}", headers=admin["headers"])
    assert response.status_code == 409
    assert response.json()["code"] == "TEMPLATE_HAS_ASSIGNMENTS"

    detail = _get(client, admin["headers"], template["id"]).json()
    assert [item["user_id"] for item in detail["assignments"]] == [admin["user"]["id"]]


def test_delete_template(client, api):
    admin = api.register()
    template = api.create_template(admin["headers"], "Standard")
    response = client.delete(f"{API}/templates/{template['id']}", headers=admin["headers"])
    assert response.status_code == 204
    assert _get(client, admin["headers"], template["id"]).status_code == 404


def test_member_cannot_delete_template(client, api):
    admin = api.register()
    member = api.member(admin["headers"], "mia@acme.com")
    template = api.create_template(member["headers"], "Mine")
    response = client.delete(f"{API}/templates/{template['id']}", headers=member["headers"])
    assert response.status_code == 403
    assert response.json()["code"] == "ADMIN_REQUIRED"


def test_template_of_other_tenant_is_not_found(client, api):
    acme = api.register()
    globex = api.register(domain="globex.com", email="admin@globex.com", organization_name="Globex")
    template = api.create_template(acme["headers"], "Acme only")

    for response in (
        _get(client, globex["headers"], template["id"]),
        client.put(f"{API}/templates/{template['id']}", json={"name": "Stolen"}, headers=globex["headers"]),
        client.delete(f"{API}/templates/{template['id']}", headers=globex["headers"]),
        client.post(f"{API}/templates/{template['id']}/duplicate", headers=globex["headers"]),
    ):
        assert response.status_code == 404
        assert response.json()["code"] == "TEMPLATE_NOT_FOUND"

    listing = client.get(f"{API}/templates/", headers=globex["headers"]).json()
    assert listing["templates"] == []


def test_starter_plan_template_limit(client, api):
    admin = api.register()
    for index in range(10):
        api.create_template(admin["headers"], f"Template {index}")
    response = client.post(f"{API}/templates/", json={"name": "Eleventh"}, headers=admin["headers"])
    assert response.status_code == 403
    assert response.json()["details"]["resource"] == "templates"


def test_preview_does_not_persist(client, api):
    admin = api.register()
    response = client.post(
        f"{API}/templates/preview",
        json={"content": {"fullName": "Preview Person"}, "formatting": "neon"},
        headers=admin["headers"],
    )
    assert response.status_code == 200
    body = response.json()
    assert body["formatting"] == "modern"
    assert "Preview Person" in body["html_content"]
    assert client.get(f"{API}/templates/", headers=admin["headers"]).json()["pagination"]["total"] == 0


def test_preview_with_custom_styles(client, api):
    admin = api.register()
    response = client.post(
        f"{API}/templates/preview",
        json={"content": {"fullName": "Ada"}, "formatting": "custom", "custom_styles": {"nameColor": "#ff0000"}},
        headers=admin["headers"],
    )
    assert response.json()["formatting"] == "custom"
    assert "color: #ff0000;" in response.json()["html_content"]


def test_invalid_custom_color_is_rejected(client, api):
    admin = api.register()
    response = client.post(
        f"{API}/templates/preview",
        json={"formatting": "custom", "custom_styles": {"nameColor": "red; background: url(x)"}},
        headers=admin["headers"],
    )
    assert response.status_code == 400


def test_presets_listing(client, api):
    admin = api.register()
    body = client.get(f"{API}/templates/presets", headers=admin["headers"]).json()
    assert body["default"] == "modern"
    assert "corporate" in body["presets"] and "custom" in body["presets"]
