from .base import BaseModel
from .user import User, UserRole
from .credit import CreditHistoryEntry
from .event import Event, EventStatus, EventCategory
from .event_action import EventAction, ActionAssignment, ActionStatus
from .event_request import EventRequest, RequestStatus
from .reward import Reward, RewardType, RewardCategory
from .redeemed_reward import RedeemedReward, RedemptionStatus
from .chat import ChatMessage
