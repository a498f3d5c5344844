"""HTTP surface: authentication, structured errors and the participation flow end to end."""

from datetime import timedelta

from volunteerhub.core.config import settings
from volunteerhub.models.base import utcnow
from volunteerhub.models.user import UserRole
from tests.factories import auth_headers, make_event, make_reward, make_user

API = settings.API_V1_STR


def _register(client, email="jane@example.com", role="volunteer", password="secret123"):
    return client.post(
        f"{API}/auth/register",
        json={
            "first_name": "Jane",
            "last_name": "Doe",
            "email": email,
            "password": password,
            "birth_date": "1990-04-01",
            "interests": ["Environmental"],
            "role": role,
        },
    )


class TestAuth:
    def test_register_login_and_profile(self, client) -> None:
        response = _register(client)
        assert response.status_code == 201
        assert response.json()["role"] == "volunteer"
        assert response.json()["volunteer_level"] == 1

        response = client.post(f"{API}/auth/login", json={"email": "JANE@example.com", "password": "secret123"})
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"

        me = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "jane@example.com"
        assert me.json()["full_name"] == "Jane Doe"

    def test_duplicate_email(self, client) -> None:
        _register(client)
        response = _register(client)
        assert response.status_code == 409
        assert response.json()["code"] == "email_already_registered"

    def test_admin_role_cannot_self_register(self, client) -> None:
        response = _register(client, role="admin")
        assert response.status_code == 422

    def test_wrong_password(self, client) -> None:
        _register(client)
        response = client.post(f"{API}/auth/login", json={"email": "jane@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthenticated"
        assert response.json()["code"] == "invalid_credentials"

    def test_missing_token(self, client) -> None:
        response = client.get(f"{API}/events/")
        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Unauthenticated",
            "code": "unauthenticated",
            "message": "Authentication token is missing",
        }

    def test_garbage_token(self, client) -> None:
        response = client.get(f"{API}/users/me", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401

    def test_profile_update(self, client, volunteer) -> None:
        response = client.patch(
            f"{API}/users/me",
            json={"address": "Nairobi", "interests": ["Education"]},
            headers=auth_headers(volunteer),
        )
        assert response.status_code == 200
        assert response.json()["address"] == "Nairobi"
        assert response.json()["interests"] == ["Education"]


class TestEventsApi:
    def _event_payload(self, **overrides):
        payload = {
            "title": "Tree Planting",
            "description": "Plant indigenous trees",
            "date": (utcnow() + timedelta(days=3)).isoformat(),
            "location": "Karura Forest",
            "category": "Environmental",
            "credits": 10,
            "max_participants": 1,
            "actions": [{"title": "Dig holes", "required_volunteers": 2, "credits": 5}],
        }
        payload.update(overrides)
        return payload

    def test_company_creates_volunteer_cannot(self, client, company, volunteer) -> None:
        response = client.post(f"{API}/events/", json=self._event_payload(), headers=auth_headers(company))
        assert response.status_code == 201
        body = response.json()
        assert body["remaining_slots"] == 1
        assert body["status"] == "active"
        assert body["actions"][0]["status"] == "open"
        assert body["actions"][0]["current_volunteers"] == 0

        response = client.post(f"{API}/events/", json=self._event_payload(), headers=auth_headers(volunteer))
        assert response.status_code == 403
        assert response.json()["code"] == "role_not_allowed"

    def test_listing_is_scoped_by_role(self, db, client, company, volunteer) -> None:
        other_company = make_user(db, role=UserRole.COMPANY)
        make_event(db, company, title="Mine")
        make_event(db, other_company, title="Theirs")

        own = client.get(f"{API}/events/", headers=auth_headers(company)).json()
        assert [e["title"] for e in own] == ["Mine"]

        everything = client.get(f"{API}/events/", headers=auth_headers(volunteer)).json()
        assert sorted(e["title"] for e in everything) == ["Mine", "Theirs"]

    def test_unknown_event_is_structured_not_found(self, client, volunteer) -> None:
        response = client.get(f"{API}/events/4040", headers=auth_headers(volunteer))
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"
        assert response.json()["code"] == "event_not_found"

    def test_full_participation_flow(self, db, client, company, volunteer) -> None:
        event = make_event(db, company, credits=10, max_participants=1)
        late = make_user(db)

        response = client.post(f"{API}/events/{event.id}/requests", headers=auth_headers(volunteer))
        assert response.status_code == 201
        request_id = response.json()["request"]["id"]

        duplicate = client.post(f"{API}/events/{event.id}/requests", headers=auth_headers(volunteer))
        assert duplicate.status_code == 409
        assert duplicate.json()["code"] == "already_applied"
        assert duplicate.json()["existing_request"]["id"] == request_id

        late_id = client.post(f"{API}/events/{event.id}/requests", headers=auth_headers(late)).json()["request"]["id"]

        listed = client.get(f"{API}/events/{event.id}/requests", headers=auth_headers(company))
        assert [r["id"] for r in listed.json()] == [request_id, late_id]
        assert client.get(f"{API}/events/{event.id}/requests", headers=auth_headers(volunteer)).status_code == 403

        approved = client.patch(
            f"{API}/events/{event.id}/requests/{request_id}",
            json={"status": "approved"},
            headers=auth_headers(company),
        )
        assert approved.status_code == 200
        assert approved.json()["remaining_slots"] == 0

        exhausted = client.patch(
            f"{API}/events/{event.id}/requests/{late_id}",
            json={"status": "approved"},
            headers=auth_headers(company),
        )
        assert exhausted.status_code == 409
        assert exhausted.json()["error"] == "ResourceExhausted"
        assert exhausted.json()["code"] == "no_remaining_slots"

        early_claim = client.post(f"{API}/credits/claim", json={"event_id": event.id}, headers=auth_headers(volunteer))
        assert early_claim.status_code == 400
        assert early_claim.json()["code"] == "event_not_completed"

        assert client.post(f"{API}/events/{event.id}/complete", headers=auth_headers(company)).status_code == 200
        again = client.post(f"{API}/events/{event.id}/complete", headers=auth_headers(company))
        assert again.status_code == 400
        assert again.json()["error"] == "InvalidState"

        claim = client.post(f"{API}/credits/claim", json={"event_id": event.id}, headers=auth_headers(volunteer))
        assert claim.status_code == 200
        assert claim.json()["credits_earned"] == 10
        assert claim.json()["total_credits"] == 10

        not_approved = client.post(f"{API}/credits/claim", json={"event_id": event.id}, headers=auth_headers(late))
        assert not_approved.status_code == 403
        assert not_approved.json()["code"] == "not_approved"

        summary = client.get(f"{API}/credits/", headers=auth_headers(volunteer)).json()
        assert summary["total"] == 10
        assert summary["history"][0]["event_title"] == event.title

        chats = client.get(f"{API}/events/approved", headers=auth_headers(volunteer)).json()
        assert [e["id"] for e in chats] == [event.id]

    def test_apply_to_action(self, db, client, company, volunteer) -> None:
        event = make_event(db, company, actions=[{"title": "Dig holes", "required_volunteers": 1}])
        action_id = event.actions[0].id

        response = client.post(f"{API}/events/{event.id}/actions/{action_id}/apply", headers=auth_headers(volunteer))
        assert response.status_code == 200
        assert response.json()["action"]["status"] == "full"

        full = client.post(
            f"{API}/events/{event.id}/actions/{action_id}/apply", headers=auth_headers(make_user(db))
        )
        assert full.status_code == 409
        assert full.json()["code"] == "action_full"

    def test_owner_updates_and_deletes(self, db, client, company, volunteer) -> None:
        event = make_event(db, company, max_participants=2)

        response = client.patch(
            f"{API}/events/{event.id}", json={"max_participants": 5}, headers=auth_headers(company)
        )
        assert response.status_code == 200
        assert response.json()["remaining_slots"] == 5

        assert client.delete(f"{API}/events/{event.id}", headers=auth_headers(volunteer)).status_code == 403
        assert client.delete(f"{API}/events/{event.id}", headers=auth_headers(company)).status_code == 200
        assert client.get(f"{API}/events/{event.id}", headers=auth_headers(company)).status_code == 404

    def test_completed_event_cannot_be_patched(self, db, client, company) -> None:
        event = make_event(db, company, credits=10, max_participants=2)
        assert client.post(f"{API}/events/{event.id}/complete", headers=auth_headers(company)).status_code == 200

        response = client.patch(
            f"{API}/events/{event.id}",
            json={"credits": 1000, "max_participants": 50},
            headers=auth_headers(company),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "event_not_active"

        body = client.get(f"{API}/events/{event.id}", headers=auth_headers(company)).json()
        assert body["credits"] == 10
        assert body["max_participants"] == 2


class TestRewardsApi:
    def test_redeem_and_use(self, db, client, company) -> None:
        reward = make_reward(db, company, credit_cost=15)
        user = make_user(db, credits=15)

        listed = client.get(f"{API}/rewards/", headers=auth_headers(user)).json()
        assert [r["id"] for r in listed] == [reward.id]
        assert listed[0]["type"] == "discount"

        response = client.post(f"{API}/rewards/{reward.id}/redeem", headers=auth_headers(user))
        assert response.status_code == 200
        body = response.json()
        assert body["remaining_credits"] == 0
        assert body["reward"]["redemption_code"].startswith("DSC-")
        assert body["reward"]["type"] == "discount"

        broke = client.post(f"{API}/rewards/{reward.id}/redeem", headers=auth_headers(user))
        assert broke.status_code == 400
        assert broke.json()["error"] == "InsufficientBalance"

        mine = client.get(f"{API}/rewards/redeemed", headers=auth_headers(user)).json()
        assert len(mine) == 1
        used = client.post(f"{API}/rewards/redeemed/{mine[0]['id']}/use", headers=auth_headers(user))
        assert used.status_code == 200
        assert used.json()["status"] == "used"

    def test_create_reward(self, client, company) -> None:
        response = client.post(
            f"{API}/rewards/",
            json={
                "title": "Gym Pass",
                "description": "One week of free gym access",
                "credit_cost": 60,
                "type": "service",
                "category": "health",
                "valid_until": (utcnow() + timedelta(days=30)).isoformat(),
                "terms_and_conditions": "Photo ID required at entry",
                "redemption_instructions": "Present the code at reception",
                "restrictions": {"min_age": 18},
            },
            headers=auth_headers(company),
        )
        assert response.status_code == 201
        assert response.json()["restrictions"]["min_age"] == 18
        assert response.json()["is_available"] is True


class TestHealth:
    def test_health(self, client) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers
