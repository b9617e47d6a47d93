import logging
from typing import Any, Iterable, List, Optional

from sqlalchemy import select, func

from database.models import User
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_ids(self, user_ids: Iterable[Any]) -> List[User]:
        """Users for the given ids; malformed or unknown ids are skipped."""
        ids = [uid for uid in (as_uuid(u) for u in user_ids) if uid is not None]
        if not ids:
            return []
        stmt = select(User).where(User.id.in_(ids)).order_by(User.created_at)
        return self.db.execute(stmt).scalars().all()

    def get_or_create(self, email: str, name: Optional[str] = None, phone: Optional[str] = None) -> User:
        user = self.get_by_email(email)
        if user is not None:
            return user
        user = User(email=email.strip().lower(), name=name or 'Unknown', phone=phone, tags=[])
        return self.add(user)

    def get_match_candidates(self) -> List[User]:
        """Candidates eligible for proactive matching: not hired, with resume text."""
        stmt = select(User).where(
            User.is_hired.is_(False),
            User.resume_text.is_not(None),
            func.length(func.trim(User.resume_text)) > 0,
        ).order_by(User.created_at)
        return self.db.execute(stmt).scalars().all()
