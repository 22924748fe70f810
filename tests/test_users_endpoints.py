"""Tests for user endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from tests.conftest import register_user


def test_create_user_returns_session(client: TestClient) -> None:
    response = client.post(
        "/users", json={"username": "meal_user", "email": "a@example.com"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "meal_user"
    assert body["email"] == "a@example.com"
    assert body["session_id"]
    assert response.cookies.get("sessionId") == body["session_id"]


def test_create_user_without_email(client: TestClient) -> None:
    response = client.post("/users", json={"username": "meal_user"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "Bad Request",
        "message": "body must have required property 'email'",
        "statusCode": 400,
    }


def test_create_user_with_invalid_email(client: TestClient) -> None:
    response = client.post("/users", json={"username": "meal_user", "email": "nope"})

    assert response.status_code == 400
    assert response.json()["message"] == "body must send a valid email address"


def test_create_user_with_same_email(client: TestClient) -> None:
    first = register_user(client, username="first")
    second = register_user(client, username="second")

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json() == {
        "error": "Bad Request",
        "message": "email address is invalid",
        "statusCode": 400,
    }


def test_create_user_with_non_object_body(client: TestClient) -> None:
    response = client.post("/users", json=["meal_user"])

    assert response.status_code == 400
    assert response.json()["message"] == "body must be a JSON object"


def test_get_user_hides_session(client: TestClient) -> None:
    created = register_user(client).json()

    response = client.get(f"/users/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["username"] == "meal_user"
    assert "session_id" not in body


def test_get_user_not_found(client: TestClient) -> None:
    response = client.get(f"/users/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Not Found",
        "message": "user not found",
        "statusCode": 404,
    }


def test_get_user_with_invalid_id(client: TestClient) -> None:
    response = client.get("/users/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["message"] == "params id must be a valid UUID"


def test_update_user(client: TestClient) -> None:
    created = register_user(client).json()

    response = client.put(
        f"/users/{created['id']}",
        json={"username": "renamed", "email": "b@example.com"},
    )

    assert response.status_code == 200
    assert response.json()["username"] == "renamed"
    assert response.json()["email"] == "b@example.com"


def test_update_user_with_taken_email(client: TestClient) -> None:
    register_user(client, email="a@example.com")
    second = register_user(client, email="b@example.com").json()

    response = client.put(f"/users/{second['id']}", json={"email": "a@example.com"})

    assert response.status_code == 400
    assert response.json()["message"] == "email address is invalid"


def test_update_missing_user(client: TestClient) -> None:
    response = client.put(f"/users/{uuid4()}", json={"username": "renamed"})

    assert response.status_code == 404


def test_delete_user(client: TestClient) -> None:
    created = register_user(client).json()

    first = client.delete(f"/users/{created['id']}")
    second = client.delete(f"/users/{created['id']}")

    assert first.status_code == 204
    assert first.content == b""
    assert second.status_code == 404


def test_delete_user_with_invalid_id(client: TestClient) -> None:
    response = client.delete("/users/123")

    assert response.status_code == 400
