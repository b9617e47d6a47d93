import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from database.models import Job, DEFAULT_JOB_SETTINGS
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class JobRepository(BaseRepository):
    model = Job

    @staticmethod
    def build_job(job_data: Dict[str, Any]) -> Job:
        """Transient draft Job from request data (not yet in a session)."""
        return Job(
            raw_jd=job_data['raw_jd'],
            company_name=job_data['company_name'],
            role=job_data['role'],
            seniority=job_data.get('seniority'),
            location=job_data.get('location'),
            budget_info=job_data.get('budget_info'),
            must_have_skills=list(job_data.get('must_have_skills') or []),
            nice_to_have=list(job_data.get('nice_to_have') or []),
            screening_questions=list(job_data.get('screening_questions') or []),
            settings={**DEFAULT_JOB_SETTINGS, **(job_data.get('settings') or {})},
            tags=[],
            apply_form_fields=[],
            status='draft',
        )

    def create_job(self, job_data: Dict[str, Any]) -> Job:
        return self.add(self.build_job(job_data))

    def list_jobs(self, status: Optional[str] = None, limit: int = 100) -> List[Job]:
        stmt = select(Job)
        if status:
            stmt = stmt.where(Job.status == status)
        stmt = stmt.order_by(Job.created_at.desc()).limit(limit)
        return self.db.execute(stmt).scalars().all()

    def update_settings(self, job: Job, updates: Dict[str, Any]) -> Job:
        # Reassign so the JSON column is flagged dirty
        job.settings = {**(job.settings or {}), **updates}
        self.db.flush()
        return job

    def set_tags(self, job: Job, tags: List[str]) -> None:
        job.tags = list(tags)
