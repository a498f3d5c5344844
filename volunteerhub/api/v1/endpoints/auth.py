# File: volunteerhub/api/v1/endpoints/auth.py
from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from volunteerhub import crud, schemas
from volunteerhub.core import security
from volunteerhub.core.exceptions import InvalidCredentials
from volunteerhub.db.database import get_db
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=schemas.user.User, status_code=status.HTTP_201_CREATED)
def register(
    user_in: schemas.auth.RegisterRequest,
    db: Session = Depends(get_db),
) -> Any:
    """Register a volunteer or company account"""
    user = crud.user.create(db, obj_in=user_in)
    logger.info(f"Registered {user.role.value} account {user.id} ({user.email})")
    return user


@router.post("/login", response_model=schemas.auth.Token)
def login(
    login_in: schemas.auth.LoginRequest,
    db: Session = Depends(get_db),
) -> Any:
    """Exchange email and password for a bearer token"""
    user = crud.user.authenticate(db, email=login_in.email, password=login_in.password)
    if not user:
        logger.warning(f"Failed login attempt for {login_in.email}")
        raise InvalidCredentials()

    access_token = security.create_access_token(user.id, role=user.role.value, name=user.full_name)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": schemas.user.User.model_validate(user),
    }
