"""Owner edits to events and the point at which they freeze."""

import logging

import pytest

from volunteerhub.core.exceptions import EventNotActive, NotEventOwner, ValidationFailed
from volunteerhub.models.event import EventStatus
from volunteerhub.models.event_request import RequestStatus
from volunteerhub.schemas.event import EventUpdate
from volunteerhub.services.event_service import EventService
from volunteerhub.services.participation_service import ParticipationService
from tests.factories import make_event, make_user, principal_for


@pytest.fixture
def service(db) -> EventService:
    return EventService(db)


@pytest.fixture
def participation(db) -> ParticipationService:
    return ParticipationService(db)


def _approve(participation, event, owner, *volunteers) -> None:
    for v in volunteers:
        request = participation.submit_request(event.id, principal_for(v))
        participation.respond_to_request(event.id, request.id, principal_for(owner), RequestStatus.APPROVED)


class TestUpdateActiveEvent:
    def test_owner_edits_details_and_capacity(
        self, db, service, participation, company, volunteer, caplog
    ) -> None:
        event = make_event(db, company, max_participants=3)
        _approve(participation, event, company, volunteer)

        with caplog.at_level(logging.INFO, logger="volunteerhub.services.event_service"):
            updated = service.update_event(
                event.id,
                principal_for(company),
                EventUpdate(title="River Cleanup", credits=25, max_participants=5),
            )

        assert "['credits', 'max_participants', 'title']" in caplog.text

        assert updated.title == "River Cleanup"
        assert updated.credits == 25
        assert updated.max_participants == 5
        # The approved volunteer keeps holding a slot
        assert updated.remaining_slots == 4

    def test_stranger_cannot_edit(self, db, service, company) -> None:
        other = make_user(db)
        event = make_event(db, company)
        with pytest.raises(NotEventOwner):
            service.update_event(event.id, principal_for(other), EventUpdate(credits=99))
        db.refresh(event)
        assert event.credits == 10

    def test_unknown_field_is_refused_by_the_aggregate(self, db, company) -> None:
        event = make_event(db, company)
        with pytest.raises(ValidationFailed):
            event.update_details({"status": EventStatus.COMPLETED})


class TestSettlementTermsFreeze:
    def test_completed_event_keeps_its_credits_between_claims(
        self, db, service, participation, company
    ) -> None:
        event = make_event(db, company, credits=10, max_participants=2)
        a = make_user(db, first_name="A")
        b = make_user(db, first_name="B")
        _approve(participation, event, company, a, b)
        participation.complete_event(event.id, principal_for(company))

        entry_a, _ = participation.claim_credits(event.id, principal_for(a))
        assert entry_a.credits_earned == 10

        with pytest.raises(EventNotActive) as exc_info:
            service.update_event(
                event.id, principal_for(company), EventUpdate(credits=1000, max_participants=50)
            )
        assert exc_info.value.to_dict()["code"] == "event_not_active"

        db.refresh(event)
        assert event.credits == 10
        assert event.max_participants == 2
        assert event.remaining_slots == 0

        entry_b, user_b = participation.claim_credits(event.id, principal_for(b))
        assert entry_b.credits_earned == 10
        assert user_b.credits_total == 10

    def test_admin_cannot_edit_completed_event_either(self, db, service, participation, company, admin) -> None:
        event = make_event(db, company)
        participation.complete_event(event.id, principal_for(company))

        with pytest.raises(EventNotActive):
            service.update_event(event.id, principal_for(admin), EventUpdate(credits=500))

    def test_cancelled_event_cannot_reopen_slots(self, db, service, participation, company, volunteer) -> None:
        event = make_event(db, company, credits=10, max_participants=1)
        _approve(participation, event, company, volunteer)
        participation.cancel_event(event.id, principal_for(company))

        with pytest.raises(EventNotActive):
            service.update_event(event.id, principal_for(company), EventUpdate(max_participants=50))
        with pytest.raises(EventNotActive):
            service.update_event(event.id, principal_for(company), EventUpdate(credits=1000))

        db.refresh(event)
        assert event.status == EventStatus.CANCELLED
        assert event.credits == 10
        assert event.max_participants == 1
        assert event.remaining_slots == 0
