# File: volunteerhub/schemas/reward.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from volunteerhub.models.reward import Reward as RewardModel, RewardType, RewardCategory
from volunteerhub.models.redeemed_reward import RedeemedReward as RedeemedRewardModel, RedemptionStatus


class RewardRestrictions(BaseModel):
    min_age: Optional[int] = Field(None, ge=0)
    max_redemptions_per_user: Optional[int] = Field(None, gt=0)
    location_restriction: Optional[str] = None


class RewardCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    partner_name: Optional[str] = None
    credit_cost: int = Field(..., ge=1)
    type: RewardType
    category: RewardCategory = RewardCategory.OTHER
    valid_until: datetime
    available_quantity: Optional[int] = Field(None, ge=0)
    terms_and_conditions: str = Field(..., min_length=10)
    redemption_instructions: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    restrictions: RewardRestrictions = RewardRestrictions()


class Reward(BaseModel):
    id: int
    title: str
    description: str
    partner_name: str
    credit_cost: int
    type: RewardType
    category: RewardCategory
    valid_until: datetime
    is_active: bool
    is_expired: bool
    is_available: bool
    available_quantity: Optional[int] = None
    times_redeemed: int
    terms_and_conditions: str
    redemption_instructions: str
    image_url: Optional[str] = None
    restrictions: RewardRestrictions

    @classmethod
    def from_model(cls, reward: RewardModel, now: Optional[datetime] = None) -> "Reward":
        return cls(
            id=reward.id,
            title=reward.title,
            description=reward.description,
            partner_name=reward.partner_name,
            credit_cost=reward.credit_cost,
            type=reward.reward_type,
            category=reward.category,
            valid_until=reward.valid_until,
            is_active=reward.is_active,
            is_expired=reward.is_expired(now),
            is_available=reward.is_available(now),
            available_quantity=reward.available_quantity,
            times_redeemed=reward.times_redeemed or 0,
            terms_and_conditions=reward.terms_and_conditions,
            redemption_instructions=reward.redemption_instructions,
            image_url=reward.image_url,
            restrictions=RewardRestrictions(
                min_age=reward.min_age,
                max_redemptions_per_user=reward.max_redemptions_per_user,
                location_restriction=reward.location_restriction,
            ),
        )


class RedeemedReward(BaseModel):
    id: int
    reward_id: int
    reward_title: str
    description: str
    type: RewardType = Field(validation_alias="reward_type")
    category: RewardCategory
    partner_name: str
    redemption_code: str
    instructions: str
    terms_and_conditions: str
    credit_cost: int
    status: RedemptionStatus
    redeemed_at: datetime
    valid_until: datetime
    used_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @classmethod
    def from_model(cls, redeemed: RedeemedRewardModel, now: Optional[datetime] = None) -> "RedeemedReward":
        result = cls.model_validate(redeemed)
        result.status = redeemed.effective_status(now)
        return result


class RedemptionResult(BaseModel):
    success: bool = True
    message: str = "Reward redeemed successfully"
    remaining_credits: int
    reward: RedeemedReward
