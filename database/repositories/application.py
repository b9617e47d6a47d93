import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy import select, func

from database.models import Application
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    'score': Application.unified_score,
    'createdAt': Application.created_at,
    'updatedAt': Application.updated_at,
}


class ApplicationRepository(BaseRepository):
    model = Application

    def get_for_job_and_user(self, job_id: Any, user_id: Any) -> Optional[Application]:
        stmt = select(Application).where(
            Application.job_id == as_uuid(job_id),
            Application.user_id == as_uuid(user_id),
        ).order_by(Application.created_at.desc()).limit(1)
        return self.db.execute(stmt).scalars().first()

    def list_for_job(
        self,
        job_id: Any,
        status: Optional[str] = None,
        min_score: Optional[float] = None,
        sort_by: str = 'createdAt',
        sort_order: str = 'desc',
        page: int = 1,
        limit: int = 100
    ) -> Tuple[List[Application], int]:
        """
        Applications for a job with recruiter filters.

        status: 'approved' (level 1 approved) or 'pending' (not yet approved).
        Returns the requested page and the total count before paging.
        """
        stmt = select(Application).where(Application.job_id == as_uuid(job_id))

        if status == 'approved':
            stmt = stmt.where(Application.level1_approved.is_(True))
        elif status == 'pending':
            stmt = stmt.where(Application.level1_approved.is_(False))

        if min_score is not None:
            stmt = stmt.where(Application.unified_score >= min_score)

        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()

        column = SORT_COLUMNS.get(sort_by, Application.created_at)
        order = column.asc() if sort_order == 'asc' else column.desc()
        stmt = stmt.order_by(order, Application.id).offset((max(page, 1) - 1) * limit).limit(limit)

        return self.db.execute(stmt).scalars().all(), total
