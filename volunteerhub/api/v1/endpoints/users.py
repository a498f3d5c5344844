# File: volunteerhub/api/v1/endpoints/users.py
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from volunteerhub import crud, schemas
from volunteerhub.api.deps import get_current_user
from volunteerhub.db.database import get_db
from volunteerhub.models.user import User

router = APIRouter()


@router.get("/me", response_model=schemas.user.User)
def read_profile(current_user: User = Depends(get_current_user)) -> Any:
    return current_user


@router.patch("/me", response_model=schemas.user.User)
def update_profile(
    user_in: schemas.user.UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Update the caller's own profile"""
    return crud.user.update_profile(db, db_obj=current_user, obj_in=user_in)
