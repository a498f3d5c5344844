# File: volunteerhub/models/user.py
from datetime import date
from sqlalchemy import Column, String, Boolean, Enum, Date, Integer, JSON
from sqlalchemy.orm import relationship
from volunteerhub.models.base import BaseModel, utcnow
from volunteerhub.models.credit import CreditHistoryEntry
from volunteerhub.core.exceptions import InsufficientCredits
import enum


class UserRole(enum.Enum):
    ADMIN = "admin"
    COMPANY = "company"
    VOLUNTEER = "volunteer"


# Lower bound of credits for levels 2..5
LEVEL_THRESHOLDS = (50, 100, 250, 500)


def volunteer_level_for(total_credits: int) -> int:
    level = 1
    for threshold in LEVEL_THRESHOLDS:
        if total_credits >= threshold:
            level += 1
    return level


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.VOLUNTEER)
    is_active = Column(Boolean, default=True)

    # Profile fields
    birth_date = Column(Date, nullable=True)
    address = Column(String(500), nullable=True)
    interests = Column(JSON, nullable=False, default=list)
    avatar_url = Column(String(500), nullable=True)

    # Credit ledger
    credits_total = Column(Integer, nullable=False, default=0)
    volunteer_level = Column(Integer, nullable=False, default=1)

    version_id = Column(Integer, nullable=False)

    # Relationships
    credit_history = relationship(
        "CreditHistoryEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="CreditHistoryEntry.earned_at",
    )
    redeemed_rewards = relationship(
        "RedeemedReward",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="RedeemedReward.redeemed_at",
    )

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def age_on(self, today: date):
        if self.birth_date is None:
            return None
        had_birthday = (today.month, today.day) >= (self.birth_date.month, self.birth_date.day)
        return today.year - self.birth_date.year - (0 if had_birthday else 1)

    # ---------------------------
    # Ledger operations
    # ---------------------------
    def has_claimed_event(self, event_id: int) -> bool:
        return any(entry.event_id == event_id for entry in self.credit_history)

    def add_credits(self, event_id: int, event_title: str, action_title: str, amount: int):
        """Append a history entry and bump the running total together"""
        entry = CreditHistoryEntry(
            event_id=event_id,
            event_title=event_title,
            action_title=action_title,
            credits_earned=amount,
            earned_at=utcnow(),
        )
        self.credit_history.append(entry)
        self.credits_total = (self.credits_total or 0) + amount
        self.volunteer_level = volunteer_level_for(self.credits_total)
        return entry

    def debit_credits(self, amount: int) -> None:
        if (self.credits_total or 0) < amount:
            raise InsufficientCredits(
                f"Insufficient credits: {amount} needed, {self.credits_total or 0} available"
            )
        self.credits_total -= amount

    def redemption_count(self, reward_id: int) -> int:
        return sum(1 for r in self.redeemed_rewards if r.reward_id == reward_id)
