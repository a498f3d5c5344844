# File: volunteerhub/services/reward_service.py
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from volunteerhub import crud
from volunteerhub.crud.base import commit
from volunteerhub.core.exceptions import (
    AgeRestricted,
    RedemptionLimitReached,
    RedemptionNotActive,
    RedemptionNotFound,
    RewardUnavailable,
    ValidationFailed,
    WorkflowError,
)
from volunteerhub.core.permissions import require_role
from volunteerhub.core.principal import Principal
from volunteerhub.models.base import utcnow, to_naive_utc
from volunteerhub.models.redeemed_reward import RedeemedReward, RedemptionStatus
from volunteerhub.models.reward import Reward, RewardType
from volunteerhub.models.user import User, UserRole
from volunteerhub.schemas.reward import RewardCreate
import logging
import secrets
import string
import time

logger = logging.getLogger(__name__)

CODE_PREFIXES = {
    RewardType.DISCOUNT: "DSC",
    RewardType.VOUCHER: "VCH",
    RewardType.PRODUCT: "PRD",
    RewardType.SERVICE: "SRV",
}
DEFAULT_CODE_PREFIX = "REW"
CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_redemption_code(reward_type: RewardType) -> str:
    """PREFIX-######-XXX: type prefix, last six digits of the epoch millis, three random chars"""
    prefix = CODE_PREFIXES.get(reward_type, DEFAULT_CODE_PREFIX)
    stamp = str(int(time.time() * 1000))[-6:]
    suffix = "".join(secrets.choice(CODE_ALPHABET) for _ in range(3))
    return f"{prefix}-{stamp}-{suffix}"


class RewardService:

    def __init__(self, db: Session):
        self.db = db

    def list_available(self, now: Optional[datetime] = None) -> List[Reward]:
        return crud.reward.get_available(self.db, now=now or utcnow())

    def create_reward(self, principal: Principal, reward_in: RewardCreate) -> Reward:
        require_role(principal, UserRole.COMPANY, UserRole.ADMIN)

        valid_until = to_naive_utc(reward_in.valid_until)
        if valid_until <= utcnow():
            raise ValidationFailed("Validity date must be in the future")

        reward = Reward(
            title=reward_in.title.strip(),
            description=reward_in.description.strip(),
            partner_name=(reward_in.partner_name or principal.display_name).strip(),
            partner_id=principal.user_id,
            credit_cost=reward_in.credit_cost,
            reward_type=reward_in.type,
            category=reward_in.category,
            valid_until=valid_until,
            is_active=True,
            available_quantity=reward_in.available_quantity,
            times_redeemed=0,
            terms_and_conditions=reward_in.terms_and_conditions,
            redemption_instructions=reward_in.redemption_instructions,
            image_url=reward_in.image_url,
            min_age=reward_in.restrictions.min_age,
            max_redemptions_per_user=reward_in.restrictions.max_redemptions_per_user,
            location_restriction=reward_in.restrictions.location_restriction,
        )
        reward = crud.reward.save(self.db, reward)
        logger.info(f"Reward {reward.id} '{reward.title}' created by user {principal.user_id}")
        return reward

    def redeem(
        self, principal: Principal, reward_id: int, now: Optional[datetime] = None
    ) -> Tuple[RedeemedReward, User]:
        """
        Exchange credits for a reward.

        The debit, the redemption snapshot and the stock decrement are committed
        together; the version columns on the user and the reward make a
        concurrent redemption against the same balance or stock fail instead of
        overspending.
        """
        now = now or utcnow()
        try:
            require_role(principal, UserRole.VOLUNTEER)
            reward = crud.reward.get_or_raise(self.db, reward_id)
            user = crud.user.get_or_raise(self.db, principal.user_id)

            self._check_available(reward, now)
            user.debit_credits(reward.credit_cost)
            self._check_restrictions(reward, user, now)

            redeemed = RedeemedReward(
                reward_id=reward.id,
                reward_title=reward.title,
                description=reward.description,
                reward_type=reward.reward_type,
                category=reward.category,
                partner_name=reward.partner_name,
                redemption_code=generate_redemption_code(reward.reward_type),
                instructions=reward.redemption_instructions,
                terms_and_conditions=reward.terms_and_conditions,
                credit_cost=reward.credit_cost,
                status=RedemptionStatus.ACTIVE,
                redeemed_at=now,
                valid_until=reward.valid_until,
            )
            user.redeemed_rewards.append(redeemed)
            reward.record_redemption()
            commit(self.db)
        except WorkflowError:
            self.db.rollback()
            raise

        logger.info(
            f"User {principal.user_id} redeemed reward {reward_id} for {redeemed.credit_cost} credits "
            f"(code {redeemed.redemption_code}), remaining {user.credits_total}"
        )
        return redeemed, user

    def _check_available(self, reward: Reward, now: datetime) -> None:
        if not reward.is_active:
            raise RewardUnavailable("Reward is no longer active")
        if reward.is_expired(now):
            raise RewardUnavailable("Reward has expired")
        if reward.is_sold_out:
            raise RewardUnavailable("Reward is sold out")

    def _check_restrictions(self, reward: Reward, user: User, now: datetime) -> None:
        if reward.max_redemptions_per_user:
            if user.redemption_count(reward.id) >= reward.max_redemptions_per_user:
                raise RedemptionLimitReached()
        if reward.min_age:
            age = user.age_on(now.date())
            if age is None or age < reward.min_age:
                raise AgeRestricted(f"This reward requires a minimum age of {reward.min_age}")

    def list_redemptions(self, principal: Principal) -> List[RedeemedReward]:
        user = crud.user.get_or_raise(self.db, principal.user_id)
        return list(user.redeemed_rewards)

    def mark_used(self, principal: Principal, redemption_id: int, now: Optional[datetime] = None) -> RedeemedReward:
        now = now or utcnow()
        user = crud.user.get_or_raise(self.db, principal.user_id)
        redeemed = next((r for r in user.redeemed_rewards if r.id == redemption_id), None)
        if redeemed is None:
            raise RedemptionNotFound()
        if redeemed.effective_status(now) != RedemptionStatus.ACTIVE:
            raise RedemptionNotActive(f"Redemption is {redeemed.effective_status(now).value}")

        redeemed.status = RedemptionStatus.USED
        redeemed.used_at = now
        commit(self.db)
        logger.info(f"Redemption {redemption_id} marked used by user {principal.user_id}")
        return redeemed
