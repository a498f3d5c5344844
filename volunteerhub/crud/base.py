# File: volunteerhub/crud/base.py
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy.exc import DisconnectionError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from volunteerhub.db.database import Base
from volunteerhub.core.exceptions import ConcurrentModification, Unavailable
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def commit(db: Session) -> None:
    """
    Commit the unit of work, rolling back on failure.

    A failed optimistic version check becomes ConcurrentModification and a
    lost database connection becomes Unavailable; both are safe to retry.
    """
    try:
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning(f"Concurrent modification detected: {e}")
        raise ConcurrentModification() from e
    except (OperationalError, DisconnectionError) as e:
        db.rollback()
        logger.exception("Database unavailable during commit")
        raise Unavailable() from e
    except Exception:
        db.rollback()
        raise


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        try:
            return db.get(self.model, id)
        except (OperationalError, DisconnectionError) as e:
            logger.exception(f"Database unavailable while loading {self.model.__name__} {id}")
            raise Unavailable() from e

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return db.query(self.model).order_by(self.model.id).offset(skip).limit(limit).all()

    def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
        obj_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**obj_data)
        return self.save(db, db_obj)

    def update(
        self, db: Session, *, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        return self.save(db, db_obj)

    def save(self, db: Session, db_obj: ModelType) -> ModelType:
        db.add(db_obj)
        commit(db)
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, db_obj: ModelType) -> None:
        db.delete(db_obj)
        commit(db)
