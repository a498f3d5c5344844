# File: volunteerhub/crud/reward.py
from datetime import datetime
from typing import List
from sqlalchemy import or_
from sqlalchemy.orm import Session
from volunteerhub.crud.base import CRUDBase
from volunteerhub.models.reward import Reward
from volunteerhub.core.exceptions import RewardNotFound
from volunteerhub.schemas.reward import RewardCreate


class CRUDReward(CRUDBase[Reward, RewardCreate, RewardCreate]):

    def get_or_raise(self, db: Session, id: int) -> Reward:
        reward = self.get(db, id)
        if reward is None:
            raise RewardNotFound()
        return reward

    def get_available(self, db: Session, *, now: datetime) -> List[Reward]:
        return (
            db.query(Reward)
            .filter(
                Reward.is_active.is_(True),
                Reward.valid_until > now,
                or_(Reward.available_quantity.is_(None), Reward.available_quantity > 0),
            )
            .order_by(Reward.credit_cost.asc(), Reward.id.asc())
            .all()
        )

    def get_by_partner(self, db: Session, *, partner_id: int) -> List[Reward]:
        return db.query(Reward).filter(Reward.partner_id == partner_id).order_by(Reward.id.asc()).all()


reward = CRUDReward(Reward)
