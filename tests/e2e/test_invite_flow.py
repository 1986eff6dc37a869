"""End-to-end tests for the invite HTTP API."""

import pytest
from fastapi.testclient import TestClient

from anemi.config import Settings
from anemi.interface.api.app import create_app
from anemi.util.jwt import create_token
from tests.di import build_test_container

INVITE_BODY = {
    "organizer_name": "Ada Lovelace",
    "organizer_email": "ada@example.com",
    "dates": ["2026-11-02", "2026-11-03"],
    "times": ["09:00", "14:00"],
}


@pytest.fixture
def client():
    """Create test client with test container."""
    return TestClient(create_app(build_test_container()))


def auth_headers(email: str) -> dict[str, str]:
    token = create_token(f"user-{email}", email, Settings().auth)
    return {"Authorization": f"Bearer {token}"}


def create_invite(client: TestClient, headers: dict | None = None, **overrides) -> dict:
    response = client.post("/invites", json={**INVITE_BODY, **overrides}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestInviteResponseFlow:
    """Invitee-facing flow: look up, accept, decline."""

    def test_create_and_accept(self, client):
        # Arrange
        created = create_invite(client)

        # Act
        lookup = client.get(f"/invites/{created['token']}")
        accepted = client.post(
            f"/invites/{created['token']}/accept",
            json={
                "invitee_name": "Bob",
                "invitee_email": "bob@example.com",
                "chosen_date": "2026-11-03",
                "chosen_time": "14:00",
            },
        )

        # Assert
        assert created["status"] == "pending"
        assert created["invite_url"].endswith(f"/invite/{created['token']}")
        assert lookup.status_code == 200
        assert lookup.json()["available_dates"] == ["2026-11-02", "2026-11-03"]
        assert "invite_id" not in lookup.json()
        assert accepted.status_code == 200
        assert accepted.json()["status"] == "confirmed"
        assert accepted.json()["chosen_date"] == "2026-11-03"

        after = client.get(f"/invites/{created['token']}").json()
        assert after["status"] == "confirmed"
        assert after["invitee_email"] == "bob@example.com"

    def test_second_answer_conflicts(self, client):
        created = create_invite(client)
        client.post(
            f"/invites/{created['token']}/decline",
            json={"invitee_name": "Bob", "invitee_email": "bob@example.com"},
        )

        response = client.post(
            f"/invites/{created['token']}/accept",
            json={
                "invitee_name": "Eve",
                "invitee_email": "eve@example.com",
                "chosen_date": "2026-11-02",
                "chosen_time": "09:00",
            },
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Invite already declined"

    def test_decline_with_reason(self, client):
        created = create_invite(client)

        response = client.post(
            f"/invites/{created['token']}/decline",
            json={
                "invitee_name": "Bob",
                "invitee_email": "bob@example.com",
                "reason": "Out of town",
            },
        )

        assert response.status_code == 200
        assert response.json()["status"] == "declined"

    def test_send_invite_link(self, client):
        created = create_invite(client)

        response = client.post(
            f"/invites/{created['token']}/send", json={"email": "Bob@Example.com"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "recipient_email": "bob@example.com",
            "notification_sent": True,
        }

    def test_send_invite_link_rejects_bad_address(self, client):
        created = create_invite(client)

        response = client.post(
            f"/invites/{created['token']}/send", json={"email": "ada..lovelace@example.com"}
        )

        assert response.status_code == 400

    def test_send_invite_link_unknown_token(self, client):
        response = client.post("/invites/no-such-token/send", json={"email": "bob@example.com"})

        assert response.status_code == 404

    def test_unknown_token(self, client):
        response = client.get("/invites/no-such-token")

        assert response.status_code == 404

    def test_accept_missing_fields(self, client):
        created = create_invite(client)

        response = client.post(
            f"/invites/{created['token']}/accept",
            json={"invitee_name": "Bob", "invitee_email": "bob@example.com"},
        )

        assert response.status_code == 400


class TestCreateInviteEndpoint:
    def test_invalid_body_is_bad_request(self, client):
        response = client.post("/invites", json={**INVITE_BODY, "dates": []})

        assert response.status_code == 400
        assert "date" in response.json()["detail"]

    def test_wrong_type_is_bad_request(self, client):
        response = client.post("/invites", json={**INVITE_BODY, "dates": "2026-11-02"})

        assert response.status_code == 400

    def test_rate_limited_after_five(self, client):
        for _ in range(5):
            create_invite(client)

        response = client.post("/invites", json=INVITE_BODY)

        assert response.status_code == 429
        assert int(response.headers["Retry-After"]) >= 1

    def test_forwarded_header_does_not_reset_rate_limit(self, client):
        """A rotating X-Forwarded-For from an untrusted peer is ignored."""
        statuses = [
            client.post(
                "/invites",
                json=INVITE_BODY,
                headers={"X-Forwarded-For": f"203.0.113.{i}"},
            ).status_code
            for i in range(6)
        ]

        assert statuses == [200] * 5 + [429]


class TestOwnerEndpoints:
    """Owner-facing flow: list, edit, delete, restore."""

    def test_list_requires_auth(self, client):
        assert client.get("/invites").status_code == 401
        assert (
            client.get("/invites", headers={"Authorization": "Bearer nope"}).status_code
            == 401
        )

    def test_signed_in_creator_owns_invite(self, client):
        # Arrange
        owner = auth_headers("owner@example.com")
        created = create_invite(client, headers=owner)

        # Act
        mine = client.get("/invites", headers=owner)
        theirs = client.get("/invites", headers=auth_headers("ada@example.com"))

        # Assert
        assert mine.status_code == 200
        assert [i["invite_id"] for i in mine.json()["invites"]] == [created["invite_id"]]
        assert theirs.json()["total"] == 0

    def test_anonymous_creator_owns_by_email(self, client):
        created = create_invite(client)

        response = client.get("/invites", headers=auth_headers("ADA@example.com"))

        assert response.json()["invites"][0]["invite_id"] == created["invite_id"]

    def test_edit_invite(self, client):
        owner = auth_headers("ada@example.com")
        created = create_invite(client)

        response = client.put(
            f"/invites/{created['invite_id']}",
            json={"available_times": ["10:00"]},
            headers=owner,
        )

        assert response.status_code == 200
        assert response.json()["changed_fields"] == ["available_times"]
        assert response.json()["invite"]["available_times"] == ["10:00"]

    def test_edit_by_stranger_forbidden(self, client):
        created = create_invite(client)

        response = client.put(
            f"/invites/{created['invite_id']}",
            json={"organizer_name": "Eve"},
            headers=auth_headers("eve@example.com"),
        )

        assert response.status_code == 403

    def test_edit_without_auth(self, client):
        created = create_invite(client)

        response = client.put(
            f"/invites/{created['invite_id']}", json={"organizer_name": "Eve"}
        )

        assert response.status_code == 401

    def test_delete_and_restore(self, client):
        # Arrange
        owner = auth_headers("ada@example.com")
        created = create_invite(client)

        # Act / Assert
        deleted = client.delete(f"/invites/{created['invite_id']}", headers=owner)
        assert deleted.status_code == 200
        assert client.get(f"/invites/{created['token']}").status_code == 404

        restored = client.post(
            f"/invites/{created['invite_id']}/restore", headers=owner
        )
        assert restored.status_code == 200
        assert client.get(f"/invites/{created['token']}").status_code == 200

    def test_received_invites(self, client):
        created = create_invite(client)
        client.post(
            f"/invites/{created['token']}/accept",
            json={
                "invitee_name": "Bob",
                "invitee_email": "bob@example.com",
                "chosen_date": "2026-11-02",
                "chosen_time": "09:00",
            },
        )

        response = client.get(
            "/invites/received", headers=auth_headers("bob@example.com")
        )

        assert response.status_code == 200
        assert response.json()["total"] == 1


class TestStatsAndHealth:
    def test_stats_require_city(self, client):
        response = client.get("/stats/meetups")

        assert response.status_code == 400

    def test_stats_for_city(self, client):
        response = client.get("/stats/meetups", params={"city": "Rotterdam"})

        assert response.status_code == 200
        assert response.json()["total_meetups"] == 0

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
