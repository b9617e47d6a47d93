#!/usr/bin/env python3
"""
Job Service - job creation and per-job settings.

A job is enhanced by the LLM and tagged before it is first stored, then
saved as finalized. When auto-matching is on, candidate matching for the
new job runs as a background task.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import sessionmaker

from core.errors import AdapterError, NotFoundError, ValidationError
from core.matcher.dto import MatchRunResult
from core.matcher.service import CandidateMatcher
from core.jobs.dto import JobDTO
from core.scoring.adapter import ScoringAdapter
from core.tags.extractor import TagExtractor
from database.models import DEFAULT_JOB_SETTINGS
from database.repositories import JobRepository
from database.uow import unit_of_work
from pipeline.tasks import BackgroundTaskQueue, match_job_task

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('raw_jd', 'company_name', 'role')

SETTING_TYPES = {
    'autoInviteOnLevel1Approval': (bool,),
    'autoInviteThreshold': (int, float),
    'autoCreateScreeningThreshold': (int, float),
}


def validate_settings(updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Check setting keys and value types; thresholds must lie in [0, 100]."""
    if not updates:
        raise ValidationError('No settings provided')

    clean = {}
    for key, value in updates.items():
        if key not in DEFAULT_JOB_SETTINGS:
            raise ValidationError(f"Unknown job setting: {key}")
        expected = SETTING_TYPES[key]
        # bool is an int subclass
        if not isinstance(value, expected) or (bool not in expected and isinstance(value, bool)):
            raise ValidationError(f"Invalid value for {key}: {value!r}")
        if bool not in expected and not 0 <= value <= 100:
            raise ValidationError(f"{key} must be between 0 and 100")
        clean[key] = value
    return clean


class JobService:

    def __init__(
        self,
        session_factory: sessionmaker,
        scoring: ScoringAdapter,
        tag_extractor: TagExtractor,
        matcher: CandidateMatcher,
        task_queue: BackgroundTaskQueue,
        auto_match: bool = True
    ):
        self.session_factory = session_factory
        self.scoring = scoring
        self.tag_extractor = tag_extractor
        self.matcher = matcher
        self.task_queue = task_queue
        self.auto_match = auto_match

    def create_job(self, job_data: Mapping[str, Any]) -> JobDTO:
        """
        Enhance, tag and store a new job.

        Raises:
            ValidationError: a required field is missing
            AdapterError: the job description could not be enhanced
        """
        missing = [f for f in REQUIRED_FIELDS if not str(job_data.get(f) or '').strip()]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if job_data.get('settings'):
            validate_settings(job_data['settings'])

        job = JobRepository.build_job(dict(job_data))

        enhancement = self.scoring.enhance_job(job)
        if not enhancement.ok:
            raise AdapterError(f"Failed to enhance job description: {enhancement.reason}")
        job.enhanced_jd = enhancement.data.enhanced_jd
        job.apply_form_fields = list(enhancement.data.apply_form_fields)
        if enhancement.data.screening_questions:
            job.screening_questions = [q.model_dump() for q in enhancement.data.screening_questions]

        job.tags = self.tag_extractor.extract_for_job(job)
        job.status = 'finalized'

        with unit_of_work(self.session_factory) as uow:
            uow.jobs.add(job)
            dto = JobDTO.from_orm(job)

        logger.info(f"Created job {dto.id} ({dto.role} at {dto.company_name}) with {len(dto.tags)} tags")

        if self.auto_match:
            self.task_queue.enqueue(match_job_task, dto.id, local_func=self.matcher.match_job_to_candidates)
        return dto

    def get_job(self, job_id: Any) -> JobDTO:
        with unit_of_work(self.session_factory) as uow:
            job = uow.jobs.get_by_id(job_id)
            if job is None:
                raise NotFoundError('Job', job_id)
            return JobDTO.from_orm(job)

    def list_jobs(self, status: Optional[str] = None, limit: int = 100) -> List[JobDTO]:
        with unit_of_work(self.session_factory) as uow:
            return [JobDTO.from_orm(j) for j in uow.jobs.list_jobs(status=status, limit=limit)]

    def update_settings(self, job_id: Any, updates: Mapping[str, Any]) -> JobDTO:
        clean = validate_settings(updates)
        with unit_of_work(self.session_factory) as uow:
            job = uow.jobs.get_by_id(job_id)
            if job is None:
                raise NotFoundError('Job', job_id)
            uow.jobs.update_settings(job, clean)
            return JobDTO.from_orm(job)

    def match_candidates(self, job_id: Any) -> MatchRunResult:
        """Run candidate matching for a job synchronously."""
        return self.matcher.match_job_to_candidates(job_id)
