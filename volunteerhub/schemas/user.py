# File: volunteerhub/schemas/user.py
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr
from volunteerhub.models.user import UserRole


class User(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: UserRole
    birth_date: Optional[date] = None
    address: Optional[str] = None
    interests: List[str] = []
    avatar_url: Optional[str] = None
    credits_total: int
    volunteer_level: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    interests: Optional[List[str]] = None
    avatar_url: Optional[str] = None
