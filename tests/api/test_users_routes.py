"""User Routes — end-to-end behaviour of the five CRUD endpoints.

Invariants:
    - Both /usuarios and /api/usuarios serve the same handlers
    - Success codes: list 200, get 200, create 201, update 200, delete 200
    - Validation → 400, missing user → 404, storage failure → 500 with upstream error
    - Every response is the {success, message, ...} envelope
"""

import pytest

PREFIXES = ["/usuarios", "/api/usuarios"]


# ─── list ────────────────────────────────────────────────────────

@pytest.mark.parametrize("prefix", PREFIXES)
async def test_list_returns_users_and_count(client, ann, prefix):
    res = await client.get(prefix)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Users retrieved successfully"
    assert body["data"] == [ann]
    assert body["count"] == 1


async def test_list_empty(client):
    res = await client.get("/usuarios")
    assert res.status_code == 200
    assert res.json()["data"] == []
    assert res.json()["count"] == 0


async def test_list_storage_failure_is_500_with_upstream_message(client, repository):
    repository.fail_on["list"] = "connection refused"
    res = await client.get("/usuarios")
    assert res.status_code == 500
    assert res.json() == {
        "success": False,
        "message": "Error retrieving users",
        "error": "connection refused",
    }


# ─── get ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("prefix", PREFIXES)
async def test_get_existing_user(client, ann, prefix):
    res = await client.get(f"{prefix}/{ann['id']}")
    assert res.status_code == 200
    body = res.json()
    assert body["data"] == ann
    assert "count" not in body


async def test_get_missing_user_is_404(client):
    res = await client.get("/usuarios/999")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "User not found"}


# ─── create ──────────────────────────────────────────────────────

async def test_create_normalizes_and_persists(client, repository):
    res = await client.post(
        "/usuarios",
        json={"name": "Ann Lee", "email": "ANN@Example.com ", "age": "25"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "User created successfully"
    stored = repository.rows[str(body["data"]["id"])]
    assert stored["name"] == "Ann Lee"
    assert stored["email"] == "ann@example.com"
    assert stored["age"] == 25


@pytest.mark.parametrize("payload, message", [
    ({"email": "ann@example.com", "age": 25}, "Name is required and must be text"),
    ({"name": "Al", "email": "ann@example.com", "age": 25},
     "Name must be at least 3 characters long"),
    ({"name": "Ann Lee", "email": "ann.example.com", "age": 25},
     "Email does not have a valid format"),
    ({"name": "Ann Lee", "email": "ann@example.com", "age": 17},
     "Age must be greater than or equal to 18"),
    ({"name": "Ann Lee", "email": "ann@example.com", "age": "20.5"},
     "Age must be a valid whole number"),
])
async def test_create_validation_failures_are_400(client, repository, payload, message):
    res = await client.post("/usuarios", json=payload)
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": message}
    assert repository.calls == []


async def test_create_reports_first_invalid_field(client):
    res = await client.post("/usuarios", json={"name": "A", "email": "x", "age": 5})
    assert res.json()["message"] == "Name must be at least 3 characters long"


async def test_create_malformed_json_is_400(client):
    res = await client.post(
        "/usuarios", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_create_storage_failure_is_500(client, repository):
    repository.fail_on["create"] = "duplicate key value violates unique constraint"
    res = await client.post(
        "/api/usuarios",
        json={"name": "Ann Lee", "email": "ann@example.com", "age": 25},
    )
    assert res.status_code == 500
    assert res.json()["message"] == "Error creating user"
    assert res.json()["error"] == "duplicate key value violates unique constraint"


# ─── update ──────────────────────────────────────────────────────

async def test_update_replaces_only_supplied_fields(client, ann):
    res = await client.put(f"/usuarios/{ann['id']}", json={"age": "40"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["age"] == 40
    assert data["name"] == ann["name"]
    assert data["email"] == ann["email"]


async def test_update_normalizes_email(client, ann, repository):
    await client.put(f"/usuarios/{ann['id']}", json={"email": " NEW@Mail.com"})
    assert repository.rows[str(ann["id"])]["email"] == "new@mail.com"


@pytest.mark.parametrize("payload", [{}, {"nickname": "annie"}, {"name": None}])
async def test_update_without_recognized_fields_is_400(client, ann, repository, payload):
    res = await client.put(f"/usuarios/{ann['id']}", json=payload)
    assert res.status_code == 400
    assert res.json() == {
        "success": False, "message": "Provide at least one field to update",
    }
    assert "update" not in repository.calls


async def test_update_without_body_is_400(client, ann):
    res = await client.put(f"/usuarios/{ann['id']}")
    assert res.status_code == 400


async def test_update_invalid_field_is_400(client, ann):
    res = await client.put(f"/usuarios/{ann['id']}", json={"age": 121})
    assert res.status_code == 400
    assert res.json()["message"] == "Age cannot be greater than 120"


async def test_update_missing_user_is_404(client):
    res = await client.put("/usuarios/999", json={"name": "Bob Ray"})
    assert res.status_code == 404
    assert res.json()["success"] is False


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_twice_returns_record_then_404(client, ann):
    first = await client.delete(f"/usuarios/{ann['id']}")
    assert first.status_code == 200
    assert first.json()["message"] == "User deleted successfully"
    assert first.json()["data"] == ann

    second = await client.delete(f"/usuarios/{ann['id']}")
    assert second.status_code == 404
    assert second.json() == {"success": False, "message": "User not found"}


async def test_delete_storage_failure_is_500(client, ann, repository):
    repository.fail_on["delete"] = "timeout"
    res = await client.delete(f"/api/usuarios/{ann['id']}")
    assert res.status_code == 500
    assert res.json()["message"] == "Error deleting user"
    assert str(ann["id"]) in repository.rows


# ─── form bodies & trailing slash ────────────────────────────────

async def test_create_accepts_form_encoded_body(client, repository):
    res = await client.post(
        "/usuarios",
        data={"name": "Ann Lee", "email": "ANN@Example.com", "age": "25"},
    )
    assert res.status_code == 201
    stored = repository.rows[str(res.json()["data"]["id"])]
    assert stored == {"id": 1, "name": "Ann Lee", "email": "ann@example.com", "age": 25}


async def test_create_form_body_is_validated(client, repository):
    res = await client.post(
        "/api/usuarios",
        data={"name": "Ann Lee", "email": "ann@example.com", "age": "17"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Age must be greater than or equal to 18"
    assert repository.calls == []


async def test_update_accepts_form_encoded_body(client, ann):
    res = await client.put(f"/usuarios/{ann['id']}", data={"age": "33"})
    assert res.status_code == 200
    assert res.json()["data"]["age"] == 33
    assert res.json()["data"]["name"] == ann["name"]


async def test_create_without_body_reports_name_message(client, repository):
    res = await client.post("/usuarios")
    assert res.status_code == 400
    assert res.json() == {
        "success": False, "message": "Name is required and must be text",
    }
    assert repository.calls == []


async def test_create_non_object_body_is_400(client):
    res = await client.post("/usuarios", json=["Ann Lee"])
    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_non_ascii_digit_age_is_rejected(client, repository):
    res = await client.post(
        "/usuarios",
        json={"name": "Ann Lee", "email": "ann@example.com", "age": "٢٥"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Age must be a valid whole number"
    assert repository.rows == {}


@pytest.mark.parametrize("prefix", PREFIXES)
async def test_collection_answers_trailing_slash_directly(client, ann, prefix):
    listed = await client.get(f"{prefix}/")
    assert listed.status_code == 200
    assert listed.json()["count"] == 1

    created = await client.post(
        f"{prefix}/",
        json={"name": "Bob Ray", "email": "bob@example.com", "age": 30},
    )
    assert created.status_code == 201
