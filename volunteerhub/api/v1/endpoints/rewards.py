# File: volunteerhub/api/v1/endpoints/rewards.py
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from volunteerhub import schemas
from volunteerhub.api.deps import get_current_principal
from volunteerhub.core.principal import Principal
from volunteerhub.db.database import get_db
from volunteerhub.models.base import utcnow
from volunteerhub.services.reward_service import RewardService

router = APIRouter()


@router.get("/", response_model=List[schemas.reward.Reward])
def list_rewards(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Rewards that can currently be redeemed"""
    now = utcnow()
    return [schemas.reward.Reward.from_model(r, now) for r in RewardService(db).list_available(now)]


@router.post("/", response_model=schemas.reward.Reward, status_code=status.HTTP_201_CREATED)
def create_reward(
    reward_in: schemas.reward.RewardCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    reward = RewardService(db).create_reward(principal, reward_in)
    return schemas.reward.Reward.from_model(reward)


@router.get("/redeemed", response_model=List[schemas.reward.RedeemedReward])
def list_redeemed_rewards(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """The caller's redemptions, newest last"""
    now = utcnow()
    return [schemas.reward.RedeemedReward.from_model(r, now) for r in RewardService(db).list_redemptions(principal)]


@router.post("/redeemed/{redemption_id}/use", response_model=schemas.reward.RedeemedReward)
def use_redeemed_reward(
    redemption_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    redeemed = RewardService(db).mark_used(principal, redemption_id)
    return schemas.reward.RedeemedReward.from_model(redeemed)


@router.post("/{reward_id}/redeem", response_model=schemas.reward.RedemptionResult)
def redeem_reward(
    reward_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Spend credits on a reward and receive a redemption code"""
    redeemed, user = RewardService(db).redeem(principal, reward_id)
    return schemas.reward.RedemptionResult(
        remaining_credits=user.credits_total,
        reward=schemas.reward.RedeemedReward.from_model(redeemed),
    )
