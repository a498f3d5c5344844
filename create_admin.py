#!/usr/bin/env python3
"""Create the platform admin account from ADMIN_EMAIL / ADMIN_PASSWORD"""

import logging
import sys

from volunteerhub.core.config import settings
from volunteerhub.core.security import get_password_hash
from volunteerhub.db.database import SessionLocal
from volunteerhub.models.user import User, UserRole
from volunteerhub import crud

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger("create_admin")


def create_admin() -> int:
    if not settings.ADMIN_PASSWORD:
        logger.error("ADMIN_PASSWORD is not set, refusing to create an admin with a default password")
        return 1

    db = SessionLocal()
    try:
        existing_admin = crud.user.get_admin(db)
        if existing_admin:
            logger.info(f"Admin already exists: {existing_admin.email}")
            return 0

        if crud.user.get_by_email(db, email=settings.ADMIN_EMAIL):
            logger.error(f"{settings.ADMIN_EMAIL} is already registered as a non-admin account")
            return 1

        admin_user = User(
            email=settings.ADMIN_EMAIL.lower(),
            hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
            first_name="Platform",
            last_name="Administrator",
            role=UserRole.ADMIN,
            is_active=True,
            interests=[],
            credits_total=0,
            volunteer_level=1,
        )
        crud.user.save(db, admin_user)
        logger.info(f"Admin created: {admin_user.email}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(create_admin())
