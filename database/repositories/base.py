import uuid
from typing import Any, Optional

from sqlalchemy.orm import Session


def as_uuid(value: Any) -> Optional[uuid.UUID]:
    """Coerce an id from a path, CLI argument or row into a UUID; None if malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class BaseRepository:
    model = None

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, entity_id: Any):
        entity_uuid = as_uuid(entity_id)
        if entity_uuid is None:
            return None
        return self.db.get(self.model, entity_uuid)

    def add(self, entity):
        self.db.add(entity)
        self.db.flush()
        return entity

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
