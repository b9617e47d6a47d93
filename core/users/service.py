#!/usr/bin/env python3
"""
User Service - candidate profile reads and updates.

Profile views never include application scores.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import sessionmaker

from core.errors import NotFoundError, ValidationError
from database.uow import unit_of_work

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'phone', 'github_url', 'portfolio_url', 'compensation_expectation', 'is_hired')


@dataclass
class UserDTO:
    id: str
    email: str
    name: str
    phone: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    resume_summary: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    compensation_expectation: Optional[str] = None
    is_hired: bool = False
    hired_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, user: Any) -> 'UserDTO':
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            phone=user.phone,
            tags=list(user.tags or []),
            resume_summary=user.resume_summary,
            github_url=user.github_url,
            portfolio_url=user.portfolio_url,
            linkedin_url=user.linkedin_url,
            compensation_expectation=user.compensation_expectation,
            is_hired=bool(user.is_hired),
            hired_at=user.hired_at,
        )


class UserService:

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get_user(self, user_id: Any) -> UserDTO:
        with unit_of_work(self.session_factory) as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError('User', user_id)
            return UserDTO.from_orm(user)

    def update_user(self, user_id: Any, updates: Mapping[str, Any]) -> UserDTO:
        """
        Update profile fields.

        Setting ``is_hired`` stamps ``hired_at`` the first time; clearing it
        clears ``hired_at``. Hired candidates drop out of proactive matching.
        """
        changes: Dict[str, Any] = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS}
        if not changes:
            raise ValidationError(f"No updatable fields supplied; allowed: {', '.join(UPDATABLE_FIELDS)}")
        if 'name' in changes and not str(changes['name'] or '').strip():
            raise ValidationError('name cannot be empty')

        with unit_of_work(self.session_factory) as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError('User', user_id)

            for key, value in changes.items():
                if key == 'is_hired':
                    continue
                setattr(user, key, value.strip() if isinstance(value, str) else value)

            if 'is_hired' in changes:
                is_hired = bool(changes['is_hired'])
                if is_hired and user.hired_at is None:
                    user.hired_at = datetime.now(timezone.utc)
                elif not is_hired:
                    user.hired_at = None
                user.is_hired = is_hired
                logger.info(f"User {user.id} is_hired={is_hired}")

            return UserDTO.from_orm(user)
