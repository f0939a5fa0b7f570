"""
Base repository.

Every repository exposes find_by_id, save and update_fields; none of
them leak the storage engine to callers.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from adfluence.database import Base
from adfluence.errors import StoreFailure, ValidationError
from adfluence.services.logging_service import logger

ModelT = TypeVar("ModelT", bound=Base)


class SQLAlchemyRepository(Generic[ModelT]):
    """Repository for one mapped class."""

    model: Type[ModelT]

    #: Attributes update_fields refuses to touch
    immutable_fields = frozenset({"id"})

    def __init__(self, db: Session):
        self.db = db

    def query(self):
        return self.db.query(self.model)

    def find_by_id(self, entity_id: Any) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def save(self, entity: ModelT) -> ModelT:
        """Insert or update an entity and return it refreshed."""
        self.db.add(entity)
        self.commit()
        self.db.refresh(entity)
        return entity

    def update_fields(self, entity: ModelT, **fields: Any) -> ModelT:
        """
        Set attributes on an entity and persist.

        Raises:
            ValidationError: unknown or immutable attribute
        """
        for name, value in fields.items():
            if name in self.immutable_fields:
                raise ValidationError(f"Field '{name}' cannot be changed")
            if not hasattr(type(entity), name):
                raise ValidationError(f"Unknown field '{name}'")
            setattr(entity, name, value)
        return self.save(entity)

    def commit(self) -> None:
        """
        Commit the unit of work.

        IntegrityError propagates so callers can map constraint violations
        to domain errors; every other store error becomes StoreFailure.
        """
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Store commit failed", model=self.model.__name__, error=str(e))
            raise StoreFailure() from e
