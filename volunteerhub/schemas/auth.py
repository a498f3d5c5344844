# File: volunteerhub/schemas/auth.py
from datetime import date
from typing import List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field
from volunteerhub.schemas.user import User


class RegisterRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    birth_date: date
    address: Optional[str] = None
    interests: List[str] = []
    # Admin accounts are created by the bootstrap script only
    role: Literal["volunteer", "company"]


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
