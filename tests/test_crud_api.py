"""Tests for email server, category and template endpoints."""
import pytest


def _server(user_id, **overrides):
    data = {
        "userId": user_id,
        "serverType": "custom",
        "imapServer": "imap.uni.edu",
        "imapPort": 993,
        "smtpServer": "smtp.uni.edu",
        "smtpPort": 587,
        "credentials": {"email": "a@uni.edu", "password": "secret"},
    }
    data.update(overrides)
    return data


# ================== EMAIL SERVERS ==================

def test_create_email_server_defaults_ssl(client, user):
    r = client.post("/api/email-servers", json=_server(user.id))

    assert r.status_code == 201
    body = r.json()
    assert body["id"] == 1
    assert body["useSSL"] is True
    assert body["imapPort"] == 993
    assert body["credentials"] == {"email": "a@uni.edu", "password": "secret"}


@pytest.mark.parametrize("overrides, loc", [
    ({"serverType": "yahoo"}, "serverType"),
    ({"imapPort": 70000}, "imapPort"),
    ({"userId": "abc"}, "userId"),
])
def test_create_email_server_invalid(client, user, overrides, loc):
    r = client.post("/api/email-servers", json=_server(user.id, **overrides))

    assert r.status_code == 400
    assert r.json()["message"] == "Invalid server data"
    assert [loc] in [e["loc"] for e in r.json()["errors"]]


def test_list_email_servers_by_owner(client, user, storage):
    client.post("/api/email-servers", json=_server(user.id))
    client.post("/api/email-servers", json=_server(user.id + 1))

    r = client.get("/api/email-servers", params={"userId": user.id})

    assert r.status_code == 200
    assert [s["userId"] for s in r.json()] == [user.id]


def test_update_email_server_merges_partial_body(client, user):
    server_id = client.post("/api/email-servers", json=_server(user.id)).json()["id"]

    r = client.put(f"/api/email-servers/{server_id}", json={"useSSL": False, "smtpPort": 465, "userId": 77})

    assert r.status_code == 200
    body = r.json()
    assert body["useSSL"] is False
    assert body["smtpPort"] == 465
    assert body["userId"] == user.id
    assert body["imapServer"] == "imap.uni.edu"


def test_update_email_server_errors(client):
    assert client.put("/api/email-servers/x", json={}).status_code == 400

    r = client.put("/api/email-servers/4", json={"smtpPort": 465})
    assert r.status_code == 404
    assert r.json() == {"message": "Email server not found"}


def test_delete_email_server(client, user):
    server_id = client.post("/api/email-servers", json=_server(user.id)).json()["id"]

    r = client.delete(f"/api/email-servers/{server_id}")

    assert r.status_code == 200
    assert r.json() == {"message": "Email server deleted"}
    assert client.get(f"/api/email-servers/{server_id}").status_code == 404
    assert client.delete(f"/api/email-servers/{server_id}").status_code == 404


# ================== CATEGORIES ==================

def test_categories_for_unknown_user_is_empty(client):
    r = client.get("/api/categories", params={"userId": 999})

    assert r.status_code == 200
    assert r.json() == []


def test_create_category(client, user):
    r = client.post("/api/categories", json={
        "userId": user.id,
        "name": "Sports",
        "color": "#9C27B0",
        "icon": "sports",
        "rules": [{"field": "subject", "operator": "contains", "value": "match"}],
    })

    assert r.status_code == 201
    body = r.json()
    assert body["id"] == 4
    assert body["rules"] == [{"field": "subject", "operator": "contains", "value": "match"}]
    assert len(client.get("/api/categories", params={"userId": user.id}).json()) == 4


def test_create_category_invalid(client, user):
    r = client.post("/api/categories", json={"userId": user.id, "name": "", "color": "blue", "rules": [{"field": "from"}]})

    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Invalid category data"
    locs = [e["loc"] for e in body["errors"]]
    assert ["name"] in locs
    assert ["color"] in locs


def test_update_and_delete_category(client, storage, user):
    classes = storage.get_categories(user.id)[0]

    r = client.put(f"/api/categories/{classes.id}", json={"color": "#000000"})
    assert r.status_code == 200
    assert r.json()["color"] == "#000000"
    assert r.json()["name"] == classes.name

    assert client.delete(f"/api/categories/{classes.id}").json() == {"message": "Category deleted"}
    assert client.get(f"/api/categories/{classes.id}").status_code == 404
    assert len(storage.get_categories(user.id)) == 2


def test_category_list_requires_user_id(client):
    assert client.get("/api/categories").status_code == 400


# ================== TEMPLATES ==================

def test_template_crud(client, user):
    r = client.post("/api/templates", json={
        "userId": user.id,
        "name": "Office Hours Appointment",
        "subject": "Office Hours Appointment Request",
        "body": "Hello Professor,",
    })
    assert r.status_code == 201
    template_id = r.json()["id"]

    listed = client.get("/api/templates", params={"userId": user.id}).json()
    assert [t["id"] for t in listed] == [template_id]

    r = client.put(f"/api/templates/{template_id}", json={"body": "Hi Professor,"})
    assert r.json()["body"] == "Hi Professor,"
    assert r.json()["subject"] == "Office Hours Appointment Request"

    assert client.delete(f"/api/templates/{template_id}").json() == {"message": "Template deleted"}
    assert client.get("/api/templates", params={"userId": user.id}).json() == []


def test_template_requires_body(client, user):
    r = client.post("/api/templates", json={"userId": user.id, "name": "Empty"})

    assert r.status_code == 400
    assert r.json()["message"] == "Invalid template data"


def test_template_not_found(client):
    assert client.get("/api/templates/1").json() == {"message": "Template not found"}
    assert client.put("/api/templates/1", json={"name": "x"}).status_code == 404
    assert client.delete("/api/templates/1").status_code == 404


def test_update_body_must_be_object(client, user, storage):
    template = storage.create_template({"userId": user.id, "name": "T", "body": "B"})

    r = client.put(f"/api/templates/{template.id}", json=["name"])

    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request"


# ================== UPDATE VALIDATION ==================

def test_update_email_server_bad_type_leaves_store_intact(client, user):
    server_id = client.post("/api/email-servers", json=_server(user.id)).json()["id"]

    r = client.put(f"/api/email-servers/{server_id}", json={"imapPort": "abc"})

    assert r.status_code == 400
    assert r.json()["message"] == "Invalid server data"
    assert ["imapPort"] in [e["loc"] for e in r.json()["errors"]]

    listed = client.get("/api/email-servers", params={"userId": user.id})
    assert listed.status_code == 200
    assert listed.json()[0]["imapPort"] == 993


def test_update_email_server_rejects_unknown_server_type(client, user):
    server_id = client.post("/api/email-servers", json=_server(user.id)).json()["id"]

    r = client.put(f"/api/email-servers/{server_id}", json={"serverType": "yahoo"})

    assert r.status_code == 400
    assert client.get(f"/api/email-servers/{server_id}").json()["serverType"] == "custom"


def test_update_category_bad_type_leaves_store_intact(client, storage, user):
    classes = storage.get_categories(user.id)[0]

    r = client.put(f"/api/categories/{classes.id}", json={"color": 123})

    assert r.status_code == 400
    assert r.json()["message"] == "Invalid category data"

    fetched = client.get(f"/api/categories/{classes.id}")
    assert fetched.status_code == 200
    assert fetched.json()["color"] == "#2196F3"
    assert client.get("/api/categories", params={"userId": user.id}).status_code == 200


def test_update_category_rejects_null_name(client, storage, user):
    classes = storage.get_categories(user.id)[0]

    r = client.put(f"/api/categories/{classes.id}", json={"name": None})

    assert r.status_code == 400
    assert storage.get_category(classes.id).name == "Classes"


def test_update_template_bad_type_leaves_store_intact(client, storage, user):
    template = storage.create_template({"userId": user.id, "name": "T", "body": "B"})

    r = client.put(f"/api/templates/{template.id}", json={"body": ["not", "text"]})

    assert r.status_code == 400
    assert r.json()["message"] == "Invalid template data"

    listed = client.get("/api/templates", params={"userId": user.id})
    assert listed.status_code == 200
    assert listed.json()[0]["body"] == "B"


def test_update_merges_only_sent_fields(client, storage, user):
    template = storage.create_template({"userId": user.id, "name": "T", "subject": "S", "body": "B"})

    r = client.put(f"/api/templates/{template.id}", json={"name": "Renamed", "id": 9, "userId": 5})

    assert r.status_code == 200
    assert r.json() == {"id": template.id, "userId": user.id, "name": "Renamed", "subject": "S", "body": "B"}
