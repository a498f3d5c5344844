# File: volunteerhub/models/reward.py
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Text, Boolean, Integer, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
from volunteerhub.models.base import BaseModel, utcnow
import enum


class RewardType(enum.Enum):
    DISCOUNT = "discount"
    VOUCHER = "voucher"
    PRODUCT = "product"
    SERVICE = "service"


class RewardCategory(enum.Enum):
    DINING = "dining"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    TRAVEL = "travel"
    EDUCATION = "education"
    HEALTH = "health"
    SERVICES = "services"
    OTHER = "other"


class Reward(BaseModel):
    """A partner-offered item redeemable for credits"""

    __tablename__ = "rewards"

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    partner_name = Column(String(255), nullable=False)
    partner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    credit_cost = Column(Integer, nullable=False)
    reward_type = Column(Enum(RewardType), nullable=False)
    category = Column(Enum(RewardCategory), nullable=False, default=RewardCategory.OTHER)
    valid_until = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    available_quantity = Column(Integer, nullable=True)  # None = unlimited
    times_redeemed = Column(Integer, nullable=False, default=0)
    terms_and_conditions = Column(Text, nullable=False)
    redemption_instructions = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)

    # Restrictions
    min_age = Column(Integer, nullable=True)
    max_redemptions_per_user = Column(Integer, nullable=True)
    location_restriction = Column(String(255), nullable=True)

    version_id = Column(Integer, nullable=False)

    # Relationships
    partner = relationship("User", foreign_keys=[partner_id])

    __mapper_args__ = {"version_id_col": version_id}

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.valid_until < (now or utcnow())

    @property
    def is_sold_out(self) -> bool:
        return self.available_quantity is not None and self.available_quantity <= 0

    def is_available(self, now: Optional[datetime] = None) -> bool:
        return bool(self.is_active) and not self.is_expired(now) and not self.is_sold_out

    def record_redemption(self) -> None:
        self.times_redeemed = (self.times_redeemed or 0) + 1
        if self.available_quantity is not None:
            self.available_quantity -= 1
