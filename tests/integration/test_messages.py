from __future__ import annotations

from datetime import datetime

BASE = "/api/v1/messages"


def test_message_lifecycle(client) -> None:
    response = client.post(BASE, json={"message": "Hello world"})
    assert response.status_code == 201
    payload = response.json()
    assert payload["success"] is True
    record = payload["data"]
    assert record["message"] == "Hello world"
    assert record["id"]
    assert record["createdAt"].endswith("Z")
    datetime.fromisoformat(record["createdAt"].replace("Z", "+00:00"))

    listing = client.get(BASE)
    assert listing.status_code == 200
    assert listing.json() == {"success": True, "count": 1, "data": [record]}

    get_resp = client.get(f"{BASE}/{record['id']}")
    assert get_resp.status_code == 200
    assert get_resp.json() == {"success": True, "data": record}

    deleted = client.delete(f"{BASE}/{record['id']}")
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": "Message deleted successfully"}

    missing = client.get(f"{BASE}/{record['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Message not found"}


def test_create_short_message_rejected(client) -> None:
    response = client.post(BASE, json={"message": "short"})
    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["message"] == "Message must be at least 10 characters long."
    assert payload["error_code"] == "invalid_request"
    assert payload["details"]

    assert client.get(BASE).json()["count"] == 0


def test_create_missing_or_wrong_type_rejected(client) -> None:
    for body in ({}, {"message": 1234567890}, ["Hello world"]):
        response = client.post(BASE, json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Message must be at least 10 characters long."


def test_create_without_body_rejected(client) -> None:
    response = client.post(BASE)
    assert response.status_code == 400
    assert response.json()["message"] == "Message must be at least 10 characters long."


def test_malformed_json_rejected(client) -> None:
    response = client.post(
        BASE, content=b'{"message": "Hello', headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["error_code"] == "invalid_request"
    assert payload["message"] == "Request validation failed"


def test_trailing_slash_collection_routes(client) -> None:
    created = client.post(f"{BASE}/", json={"message": "Trailing slash works"})
    assert created.status_code == 201

    listing = client.get(f"{BASE}/")
    assert listing.status_code == 200
    assert listing.json()["count"] == 1


def test_delete_twice_reports_not_found(client) -> None:
    created = client.post(BASE, json={"message": "Delete me twice"}).json()["data"]

    assert client.delete(f"{BASE}/{created['id']}").status_code == 200
    second = client.delete(f"{BASE}/{created['id']}")
    assert second.status_code == 404
    assert second.json() == {"success": False, "message": "Message not found"}


def test_unknown_id_not_found(client) -> None:
    response = client.get(f"{BASE}/not-a-real-id")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Message not found"}


def test_count_tracks_creates_and_deletes(client) -> None:
    ids = [
        client.post(BASE, json={"message": f"message number {i}"}).json()["data"]["id"]
        for i in range(3)
    ]
    assert len(set(ids)) == 3
    client.delete(f"{BASE}/{ids[0]}")

    listing = client.get(BASE).json()
    assert listing["count"] == 2
    assert [item["id"] for item in listing["data"]] == ids[1:]
    for message_id in ids[1:]:
        assert client.get(f"{BASE}/{message_id}").status_code == 200


def test_apps_do_not_share_stores(client) -> None:
    from fastapi.testclient import TestClient

    from message_api.main import create_app

    client.post(BASE, json={"message": "Only in the first app"})
    with TestClient(create_app()) as other:
        assert other.get(BASE).json()["count"] == 0


def test_emoji_message_counts_utf16_length(client) -> None:
    accepted = client.post(BASE, json={"message": "\U0001F600" * 5})
    assert accepted.status_code == 201
    assert accepted.json()["data"]["message"] == "\U0001F600" * 5

    rejected = client.post(BASE, json={"message": "\U0001F600" * 4})
    assert rejected.status_code == 400
