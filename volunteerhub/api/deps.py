# File: volunteerhub/api/deps.py
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from volunteerhub import crud
from volunteerhub.db.database import get_db
from volunteerhub.core.exceptions import Unauthenticated
from volunteerhub.core.principal import Principal
from volunteerhub.core.security import decode_token
from volunteerhub.models.user import User

security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Authentication token is missing")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise Unauthenticated("Invalid or expired token")

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise Unauthenticated("Token is missing the user id")

    user = crud.user.get(db, int(subject))
    if user is None or not user.is_active:
        raise Unauthenticated("User no longer exists or is inactive")
    return user


def get_current_principal(current_user: User = Depends(get_current_user)) -> Principal:
    """Request-scoped identity handed to every workflow call"""
    return Principal(
        user_id=current_user.id,
        role=current_user.role,
        display_name=current_user.full_name,
    )
