import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from core.errors import PersistenceConflict
from database.models import JobCandidateMatch
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)


class MatchRepository(BaseRepository):
    model = JobCandidateMatch

    def get_existing_match(self, job_id: Any, user_id: Any) -> Optional[JobCandidateMatch]:
        stmt = select(JobCandidateMatch).where(
            JobCandidateMatch.job_id == as_uuid(job_id),
            JobCandidateMatch.user_id == as_uuid(user_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def insert_or_get(self, match: JobCandidateMatch) -> Tuple[JobCandidateMatch, bool]:
        """
        Insert a match, or return the row that won the race for (job_id, user_id).

        The insert runs in a savepoint so a unique violation leaves the outer
        transaction usable.

        Returns:
            (match, created)
        """
        try:
            with self.db.begin_nested():
                self.db.add(match)
                self.db.flush()
            return match, True
        except IntegrityError:
            existing = self.get_existing_match(match.job_id, match.user_id)
            if existing is None:
                raise PersistenceConflict(
                    f"Match insert rejected for job={match.job_id} user={match.user_id}"
                )
            logger.info(f"Match for job={match.job_id} user={match.user_id} already exists; reusing it")
            return existing, False

    def get_matches_for_job(
        self,
        job_id: Any,
        min_score: float = 0,
        limit: int = 50,
        status: Optional[str] = None
    ) -> List[JobCandidateMatch]:
        stmt = select(JobCandidateMatch).where(
            JobCandidateMatch.job_id == as_uuid(job_id),
            JobCandidateMatch.match_score >= min_score
        )

        if status:
            stmt = stmt.where(JobCandidateMatch.status == status)

        stmt = stmt.order_by(JobCandidateMatch.match_score.desc(), JobCandidateMatch.created_at).limit(limit)
        return self.db.execute(stmt).scalars().all()

    def set_status(self, match: JobCandidateMatch, status: str) -> JobCandidateMatch:
        match.status = status
        if status == 'contacted':
            match.contacted_at = datetime.now(timezone.utc)
        self.db.flush()
        return match

    def link_application(self, match: JobCandidateMatch, application_id: Any) -> JobCandidateMatch:
        match.status = 'applied'
        match.application_id = as_uuid(application_id)
        self.db.flush()
        return match
