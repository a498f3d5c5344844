# File: volunteerhub/models/redeemed_reward.py
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
from volunteerhub.models.base import BaseModel, utcnow
from volunteerhub.models.reward import RewardType, RewardCategory
import enum


class RedemptionStatus(enum.Enum):
    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"


class RedeemedReward(BaseModel):
    """Snapshot of a reward taken at redemption time, owned by the user"""

    __tablename__ = "redeemed_rewards"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reward_id = Column(Integer, nullable=False, index=True)
    reward_title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    reward_type = Column(Enum(RewardType), nullable=False)
    category = Column(Enum(RewardCategory), nullable=False)
    partner_name = Column(String(255), nullable=False)
    redemption_code = Column(String(32), nullable=False, index=True)
    instructions = Column(Text, nullable=False)
    terms_and_conditions = Column(Text, nullable=False)
    credit_cost = Column(Integer, nullable=False)
    status = Column(Enum(RedemptionStatus), nullable=False, default=RedemptionStatus.ACTIVE)
    redeemed_at = Column(DateTime, nullable=False, default=utcnow)
    valid_until = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="redeemed_rewards")

    def effective_status(self, now: Optional[datetime] = None) -> RedemptionStatus:
        if self.status == RedemptionStatus.ACTIVE and self.valid_until < (now or utcnow()):
            return RedemptionStatus.EXPIRED
        return self.status
