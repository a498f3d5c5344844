from datetime import timedelta

import pytest

from volunteerhub.core.config import settings
from volunteerhub.core.exceptions import EventNotFound, ValidationFailed
from volunteerhub.models.chat import ChatMessage
from volunteerhub.services.chat_service import ChatService
from tests.factories import auth_headers, make_event, principal_for

API = settings.API_V1_STR


class TestChatService:
    def test_messages_come_back_oldest_first(self, db, company, volunteer) -> None:
        event = make_event(db, company)
        service = ChatService(db)

        first = service.append_message(event.id, principal_for(volunteer), "  Hello everyone  ")
        second = service.append_message(event.id, principal_for(company), "Welcome aboard")
        # Force an out-of-order timestamp to prove ordering is by time
        second.timestamp = first.timestamp - timedelta(seconds=5)
        db.commit()

        messages = service.list_messages(event.id)
        assert [m.id for m in messages] == [second.id, first.id]
        assert first.content == "Hello everyone"
        assert first.sender_name == volunteer.full_name

    def test_blank_message_rejected(self, db, company, volunteer) -> None:
        event = make_event(db, company)
        with pytest.raises(ValidationFailed):
            ChatService(db).append_message(event.id, principal_for(volunteer), "   ")
        assert db.query(ChatMessage).count() == 0

    def test_unknown_event(self, db, volunteer) -> None:
        with pytest.raises(EventNotFound):
            ChatService(db).append_message(777, principal_for(volunteer), "hi")
        with pytest.raises(EventNotFound):
            ChatService(db).list_messages(777)


class TestChatApi:
    def test_post_and_poll(self, db, client, company, volunteer) -> None:
        event = make_event(db, company)

        response = client.post(
            f"{API}/events/{event.id}/messages", json={"content": "See you there"}, headers=auth_headers(volunteer)
        )
        assert response.status_code == 201
        assert response.json()["sender_id"] == volunteer.id

        messages = client.get(f"{API}/events/{event.id}/messages", headers=auth_headers(company)).json()
        assert [m["content"] for m in messages] == ["See you there"]

    def test_blank_message_is_validation_failed(self, db, client, company) -> None:
        event = make_event(db, company)
        response = client.post(
            f"{API}/events/{event.id}/messages", json={"content": ""}, headers=auth_headers(company)
        )
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationFailed"
