# File: volunteerhub/schemas/credit.py
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict


class CreditHistoryEntry(BaseModel):
    event_id: int
    event_title: str
    action_title: str
    credits_earned: int
    earned_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CreditSummary(BaseModel):
    total: int
    volunteer_level: int
    history: List[CreditHistoryEntry] = []


class ClaimResult(BaseModel):
    success: bool = True
    message: str = "Credits claimed successfully"
    credits_earned: int
    total_credits: int
    entry: CreditHistoryEntry
