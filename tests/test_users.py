from bson import ObjectId

from cafehub.core.exceptions import IdentityProviderError


USERS = [
    {"name": "Alice Barista", "email": "alice@cafe.io", "phoneNumber": "+15550001", "address": "12 Bean St"},
    {"name": "Bob", "email": "bob@example.com", "phoneNumber": "+15550002", "address": "9 Roast Ave"},
    {"name": "Carol", "email": "carol@example.com", "phoneNumber": "+4477001", "address": "1 Alice Lane"},
]


def seed(client, documents=USERS):
    return [client.post("/users", json=dict(document)).json()["insertedId"] for document in documents]


def names(response):
    return sorted(user["name"] for user in response.json())


def test_create_user_returns_insert_ack(client):
    response = client.post("/users", json={"email": "new@cafe.io"})
    assert response.status_code == 200
    ack = response.json()
    assert ack["acknowledged"] is True
    assert ObjectId.is_valid(ack["insertedId"])


def test_list_without_query_returns_all(client):
    seed(client)
    response = client.get("/users")
    assert response.status_code == 200
    assert names(response) == ["Alice Barista", "Bob", "Carol"]


def test_search_is_case_insensitive_or_across_fields(client):
    seed(client)

    # name of one user, address of another
    assert names(client.get("/users", params={"searchQuery": "ALICE"})) == ["Alice Barista", "Carol"]
    assert names(client.get("/users", params={"searchQuery": "example.com"})) == ["Bob", "Carol"]
    assert names(client.get("/users", params={"searchQuery": "+44"})) == ["Carol"]
    assert names(client.get("/users", params={"searchQuery": "roast"})) == ["Bob"]


def test_search_without_match_is_empty(client):
    seed(client)
    response = client.get("/users", params={"searchQuery": "nobody"})
    assert response.status_code == 200
    assert response.json() == []


def test_empty_search_query_returns_all(client):
    seed(client)
    assert names(client.get("/users", params={"searchQuery": ""})) == ["Alice Barista", "Bob", "Carol"]


def test_update_last_sign_in(client, database):
    seed(client)

    response = client.patch("/users", json={"email": "bob@example.com", "lastSignInTime": "2026-10-19T08:00:00Z"})
    assert response.status_code == 200
    assert response.json()["matchedCount"] == 1
    assert response.json()["modifiedCount"] == 1

    bob = next(user for user in client.get("/users").json() if user["name"] == "Bob")
    assert bob["lastSignInTime"] == "2026-10-19T08:00:00Z"


def test_update_last_sign_in_unknown_email_is_noop(client):
    seed(client)

    response = client.patch("/users", json={"email": "ghost@cafe.io", "lastSignInTime": "2026-10-19T08:00:00Z"})
    assert response.status_code == 200
    assert response.json() == {
        "acknowledged": True,
        "matchedCount": 0,
        "modifiedCount": 0,
        "upsertedCount": 0,
        "upsertedId": None,
    }


def test_delete_user_with_firebase_uid(client, identity):
    [user_id] = seed(client, [{"email": "a@x.com", "firebaseUid": "u1"}])

    response = client.delete(f"/users/{user_id}")

    assert response.status_code == 200
    assert response.json() == {"acknowledged": True, "deletedCount": 1}
    identity.delete_user.assert_awaited_once_with("u1")
    identity.get_user_by_email.assert_not_awaited()
    assert client.get("/users").json() == []


def test_delete_user_by_email_lookup(client, identity):
    [user_id] = seed(client, [{"email": "a@x.com"}])

    response = client.delete(f"/users/{user_id}")

    assert response.status_code == 200
    assert response.json()["deletedCount"] == 1
    identity.get_user_by_email.assert_awaited_once_with("a@x.com")
    identity.delete_user.assert_awaited_once_with("fb-email-uid")


def test_delete_user_when_email_account_missing(client, identity):
    identity.get_user_by_email.side_effect = IdentityProviderError("No user record found")
    [user_id] = seed(client, [{"email": "a@x.com"}])

    response = client.delete(f"/users/{user_id}")

    assert response.status_code == 200
    assert response.json() == {"acknowledged": True, "deletedCount": 1}
    identity.delete_user.assert_not_awaited()
    assert client.get("/users").json() == []


def test_delete_user_without_identity_fields(client, identity):
    [user_id] = seed(client, [{"name": "Anonymous"}])

    response = client.delete(f"/users/{user_id}")

    assert response.status_code == 200
    assert response.json()["deletedCount"] == 1
    identity.delete_user.assert_not_awaited()
    identity.get_user_by_email.assert_not_awaited()


def test_delete_unknown_user_is_404(client, identity):
    response = client.delete(f"/users/{ObjectId()}")

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"
    identity.delete_user.assert_not_awaited()
    identity.get_user_by_email.assert_not_awaited()


def test_delete_user_firebase_failure_keeps_document(client, identity):
    identity.delete_user.side_effect = RuntimeError("firebase unavailable")
    [user_id] = seed(client, [{"email": "a@x.com", "firebaseUid": "u1"}])

    response = client.delete(f"/users/{user_id}")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Failed to delete user"
    assert body["error"] == "firebase unavailable"
    assert [user["_id"] for user in client.get("/users").json()] == [user_id]


def test_delete_user_malformed_id_is_client_error(client, identity):
    response = client.delete("/users/12345")

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_IDENTIFIER"
    identity.delete_user.assert_not_awaited()
