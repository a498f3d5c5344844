# File: volunteerhub/services/participation_service.py
"""
Participation workflow: applications, approvals, action assignment, event
completion and credit settlement.

Every operation loads the event aggregate, checks role and ownership, lets the
aggregate enforce its lifecycle invariants and commits one unit of work. A
failed precondition rolls the session back before the error propagates.
"""
from contextlib import contextmanager
from typing import Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from volunteerhub import crud
from volunteerhub.crud.base import commit
from volunteerhub.core.exceptions import AlreadyClaimed, WorkflowError
from volunteerhub.core.permissions import require_event_manager, require_role
from volunteerhub.core.principal import Principal
from volunteerhub.models.credit import CreditHistoryEntry
from volunteerhub.models.event import Event
from volunteerhub.models.event_action import EventAction, ActionAssignment
from volunteerhub.models.event_request import EventRequest, RequestStatus
from volunteerhub.models.user import User, UserRole
from volunteerhub.schemas.event import ActionCreate
import logging

logger = logging.getLogger(__name__)


class ParticipationService:

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _unit_of_work(self):
        try:
            yield
        except WorkflowError:
            self.db.rollback()
            raise

    # ---------------------------
    # Requests
    # ---------------------------
    def submit_request(
        self, event_id: int, principal: Principal, action_id: Optional[int] = None
    ) -> EventRequest:
        with self._unit_of_work():
            require_role(principal, UserRole.VOLUNTEER)
            event = crud.event.get_or_raise(self.db, event_id)
            request = event.submit_request(principal.user_id, principal.display_name, action_id)
            commit(self.db)

        logger.info(f"Volunteer {principal.user_id} applied to event {event_id} (request {request.id})")
        return request

    def respond_to_request(
        self,
        event_id: int,
        request_id: int,
        principal: Principal,
        decision: RequestStatus,
        action_id: Optional[int] = None,
    ) -> EventRequest:
        with self._unit_of_work():
            event = crud.event.get_or_raise(self.db, event_id)
            require_event_manager(principal, event)
            request = event.respond_to_request(request_id, principal.user_id, decision, action_id)
            commit(self.db)

        logger.info(
            f"Request {request_id} on event {event_id} {decision.value} by user {principal.user_id}, "
            f"remaining slots: {event.remaining_slots}"
        )
        return request

    def list_requests(self, event_id: int, principal: Principal):
        event = crud.event.get_or_raise(self.db, event_id)
        require_event_manager(principal, event)
        return list(event.requests)

    # ---------------------------
    # Actions
    # ---------------------------
    def add_action(self, event_id: int, principal: Principal, action_in: ActionCreate) -> EventAction:
        with self._unit_of_work():
            event = crud.event.get_or_raise(self.db, event_id)
            require_event_manager(principal, event)
            action = event.add_action(
                title=action_in.title,
                description=action_in.description,
                required_volunteers=action_in.required_volunteers,
                credits=action_in.credits,
            )
            commit(self.db)

        logger.info(f"Action {action.id} '{action.title}' added to event {event_id}")
        return action

    def apply_to_action(
        self, event_id: int, action_id: int, principal: Principal
    ) -> Tuple[EventAction, ActionAssignment]:
        with self._unit_of_work():
            require_role(principal, UserRole.VOLUNTEER)
            event = crud.event.get_or_raise(self.db, event_id)
            action, assignment = event.assign_to_action(action_id, principal.user_id, principal.display_name)
            commit(self.db)

        logger.info(
            f"Volunteer {principal.user_id} assigned to action {action_id} "
            f"({action.current_volunteers}/{action.required_volunteers}, {action.status.value})"
        )
        return action, assignment

    # ---------------------------
    # Lifecycle
    # ---------------------------
    def complete_event(self, event_id: int, principal: Principal) -> Event:
        with self._unit_of_work():
            event = crud.event.get_or_raise(self.db, event_id)
            require_event_manager(principal, event)
            event.complete()
            commit(self.db)

        logger.info(f"Event {event_id} completed by user {principal.user_id}")
        return event

    def cancel_event(self, event_id: int, principal: Principal) -> Event:
        with self._unit_of_work():
            event = crud.event.get_or_raise(self.db, event_id)
            require_event_manager(principal, event)
            event.cancel()
            commit(self.db)

        logger.info(f"Event {event_id} cancelled by user {principal.user_id}")
        return event

    # ---------------------------
    # Settlement
    # ---------------------------
    def claim_credits(self, event_id: int, principal: Principal) -> Tuple[CreditHistoryEntry, User]:
        """Credit an approved volunteer once per completed event"""
        with self._unit_of_work():
            require_role(principal, UserRole.VOLUNTEER)
            event = crud.event.get_or_raise(self.db, event_id)
            award, action_title = event.settlement_for(principal.user_id)

            user = crud.user.get_or_raise(self.db, principal.user_id)
            if user.has_claimed_event(event.id):
                raise AlreadyClaimed()

            entry = user.add_credits(event.id, event.title, action_title, award)
            if not event.credits_have_been_claimed:
                event.credits_have_been_claimed = True

            try:
                commit(self.db)
            except IntegrityError as e:
                # Another claim for the same pair won the race
                raise AlreadyClaimed() from e

        logger.info(
            f"Volunteer {principal.user_id} claimed {award} credits for event {event_id}, "
            f"total now {user.credits_total}"
        )
        return entry, user
