# File: volunteerhub/core/exceptions.py
"""
Error taxonomy for the participation workflow.

Every precondition failure maps to exactly one concrete exception below.
Each concrete class belongs to one taxonomy kind (its direct base) and
carries a stable ``code`` clients can branch on. The HTTP layer turns these
into structured JSON responses in ``volunteerhub.main``.
"""
from typing import Any, Dict, Optional


class WorkflowError(Exception):
    kind = "WorkflowError"
    code = "workflow_error"
    status_code = 400
    message = "Operation failed"
    retryable = False

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "success": False,
            "error": self.kind,
            "code": self.code,
            "message": self.message,
        }
        if self.retryable:
            payload["retryable"] = True
        payload.update(self.extra)
        return payload


# ---------------------------
# Taxonomy kinds
# ---------------------------
class NotFound(WorkflowError):
    kind = "NotFound"
    code = "not_found"
    status_code = 404
    message = "Not found"


class Forbidden(WorkflowError):
    kind = "Forbidden"
    code = "forbidden"
    status_code = 403
    message = "You do not have permission to perform this operation"


class Conflict(WorkflowError):
    kind = "Conflict"
    code = "conflict"
    status_code = 409
    message = "Conflicting operation"


class InvalidState(WorkflowError):
    kind = "InvalidState"
    code = "invalid_state"
    status_code = 400
    message = "Operation is not allowed in the current state"


class ResourceExhausted(WorkflowError):
    kind = "ResourceExhausted"
    code = "resource_exhausted"
    status_code = 409
    message = "No capacity left"


class InsufficientBalance(WorkflowError):
    kind = "InsufficientBalance"
    code = "insufficient_balance"
    status_code = 400
    message = "Insufficient balance"


class Unauthenticated(WorkflowError):
    kind = "Unauthenticated"
    code = "unauthenticated"
    status_code = 401
    message = "Could not validate credentials"


class Unavailable(WorkflowError):
    kind = "Unavailable"
    code = "unavailable"
    status_code = 503
    message = "Service temporarily unavailable, please retry"
    retryable = True


class ValidationFailed(WorkflowError):
    kind = "ValidationFailed"
    code = "validation_failed"
    status_code = 400
    message = "Invalid input"


# ---------------------------
# NotFound
# ---------------------------
class EventNotFound(NotFound):
    code = "event_not_found"
    message = "Event not found"


class ActionNotFound(NotFound):
    code = "action_not_found"
    message = "Action not found"


class RequestNotFound(NotFound):
    code = "request_not_found"
    message = "Request not found"


class UserNotFound(NotFound):
    code = "user_not_found"
    message = "User not found"


class RewardNotFound(NotFound):
    code = "reward_not_found"
    message = "Reward not found"


class RedemptionNotFound(NotFound):
    code = "redemption_not_found"
    message = "Redeemed reward not found"


# ---------------------------
# Forbidden
# ---------------------------
class NotEventOwner(Forbidden):
    code = "not_event_owner"
    message = "Only the event owner or an admin can do this"


class RoleNotAllowed(Forbidden):
    code = "role_not_allowed"
    message = "Your role is not allowed to perform this operation"


class NotApproved(Forbidden):
    code = "not_approved"
    message = "You must be an approved participant to claim credits"


class AgeRestricted(Forbidden):
    code = "age_restricted"
    message = "You do not meet the minimum age for this reward"


# ---------------------------
# Conflict
# ---------------------------
class DuplicateApplication(Conflict):
    code = "already_applied"
    message = "You have already applied to this event"


class RequestAlreadyProcessed(Conflict):
    code = "request_already_processed"
    message = "Request has already been processed"


class AlreadyAssigned(Conflict):
    code = "already_assigned"
    message = "You are already assigned to this action"


class AlreadyClaimed(Conflict):
    code = "already_claimed"
    message = "Credits for this event have already been claimed"


class EmailAlreadyRegistered(Conflict):
    code = "email_already_registered"
    message = "Email is already in use"


class ConcurrentModification(Conflict):
    code = "concurrent_modification"
    message = "The record was modified concurrently, please retry"
    retryable = True


# ---------------------------
# InvalidState
# ---------------------------
class EventNotActive(InvalidState):
    code = "event_not_active"
    message = "Event is not active"


class AlreadyCompleted(InvalidState):
    code = "already_completed"
    message = "Event is already completed"


class EventNotCompleted(InvalidState):
    code = "event_not_completed"
    message = "Event must be completed to claim credits"


class ActionClosed(InvalidState):
    code = "action_closed"
    message = "This action is not currently accepting volunteers"


class RedemptionNotActive(InvalidState):
    code = "redemption_not_active"
    message = "This redemption can no longer be used"


# ---------------------------
# ResourceExhausted
# ---------------------------
class SlotsExhausted(ResourceExhausted):
    code = "no_remaining_slots"
    message = "Event has no remaining slots"


class ActionFull(ResourceExhausted):
    code = "action_full"
    message = "This action has reached its maximum number of volunteers"


class RewardUnavailable(ResourceExhausted):
    code = "reward_unavailable"
    message = "Reward is no longer available"


class RedemptionLimitReached(ResourceExhausted):
    code = "redemption_limit_reached"
    message = "You have reached the redemption limit for this reward"


# ---------------------------
# InsufficientBalance
# ---------------------------
class InsufficientCredits(InsufficientBalance):
    code = "insufficient_credits"
    message = "Insufficient credits"


# ---------------------------
# Unauthenticated
# ---------------------------
class InvalidCredentials(Unauthenticated):
    code = "invalid_credentials"
    message = "Incorrect email or password"
