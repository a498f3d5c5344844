# File: volunteerhub/crud/user.py
from typing import Optional
from sqlalchemy.orm import Session
from volunteerhub.crud.base import CRUDBase
from volunteerhub.models.user import User, UserRole
from volunteerhub.schemas.auth import RegisterRequest
from volunteerhub.schemas.user import UserUpdate
from volunteerhub.core.exceptions import EmailAlreadyRegistered, UserNotFound
from volunteerhub.core.security import get_password_hash, verify_password


class CRUDUser(CRUDBase[User, RegisterRequest, UserUpdate]):

    def get_or_raise(self, db: Session, id: int) -> User:
        user = self.get(db, id)
        if user is None:
            raise UserNotFound()
        return user

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    def get_admin(self, db: Session) -> Optional[User]:
        return db.query(User).filter(User.role == UserRole.ADMIN).first()

    def create(self, db: Session, *, obj_in: RegisterRequest, role: Optional[UserRole] = None) -> User:
        if self.get_by_email(db, email=obj_in.email):
            raise EmailAlreadyRegistered()

        db_obj = User(
            email=obj_in.email.lower(),
            hashed_password=get_password_hash(obj_in.password),
            first_name=obj_in.first_name.strip(),
            last_name=obj_in.last_name.strip(),
            role=role or UserRole(obj_in.role),
            birth_date=obj_in.birth_date,
            address=obj_in.address,
            interests=list(obj_in.interests),
            credits_total=0,
            volunteer_level=1,
            is_active=True,
        )
        return self.save(db, db_obj)

    def update_profile(self, db: Session, *, db_obj: User, obj_in: UserUpdate) -> User:
        update_data = obj_in.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in update_data:
            email = update_data["email"].lower()
            existing = self.get_by_email(db, email=email)
            if existing is not None and existing.id != db_obj.id:
                raise EmailAlreadyRegistered()
            update_data["email"] = email
        return self.update(db, db_obj=db_obj, obj_in=update_data)

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user or not user.is_active:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user


user = CRUDUser(User)
