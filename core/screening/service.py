#!/usr/bin/env python3
"""
Screening Service - video screening lifecycle.

A Screening is created once per application (auto-created by scoring or on
approval with auto-invite). Questions are generated lazily on first read and
persisted; when generation fails the job's own screening questions are used.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import sessionmaker

from core.errors import AdapterError, NotFoundError, ValidationError
from core.scoring.adapter import ScoringAdapter
from core.screening.dto import ScreeningDTO
from core.utils import build_screening_link, generate_screening_token
from database.models import Screening
from database.uow import UnitOfWork, unit_of_work

logger = logging.getLogger(__name__)


class ScreeningService:

    def __init__(self, session_factory: sessionmaker, scoring: ScoringAdapter, link_base_url: str):
        self.session_factory = session_factory
        self.scoring = scoring
        self.link_base_url = link_base_url

    def ensure_screening(self, uow: UnitOfWork, application: Any) -> Tuple[Screening, bool]:
        """
        Return the application's Screening, creating it when absent.

        Runs inside the caller's unit of work.

        Returns:
            (screening, created)
        """
        screening = uow.screenings.get_by_application(application.id)
        if screening is not None:
            return screening, False

        link = build_screening_link(self.link_base_url, generate_screening_token())
        screening, created = uow.screenings.create_screening(
            application_id=application.id,
            job_id=application.job_id,
            screening_link=link,
        )
        if created:
            logger.info(f"Created screening {screening.id} for application {application.id}")
        return screening, created

    def _generate_questions(self, job: Any, candidate: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        result = self.scoring.generate_screening_questions(job, candidate)
        if result.ok:
            return [q.model_dump() for q in result.data.screening_questions]

        logger.warning(f"Screening question generation failed for job {job.id}: {result.reason}")
        return list(job.screening_questions or [])

    def _load_for_generation(self, screening_id: Any) -> Tuple[ScreeningDTO, Any, Dict[str, Any]]:
        with unit_of_work(self.session_factory) as uow:
            screening = uow.screenings.get_by_id(screening_id)
            if screening is None:
                raise NotFoundError('Screening', screening_id)

            job = uow.jobs.get_by_id(screening.job_id)
            application = uow.applications.get_by_id(screening.application_id)
            candidate = {}
            if application is not None:
                user = uow.users.get_by_id(application.user_id)
                candidate = {
                    'name': user.name if user else None,
                    'skills_matched': list(application.skills_matched or []),
                    'resume_summary': user.resume_summary if user else None,
                }
            return ScreeningDTO.from_orm(screening), job, candidate

    def _store_questions(self, screening_id: Any, questions: List[Dict[str, Any]], overwrite: bool = False) -> ScreeningDTO:
        with unit_of_work(self.session_factory) as uow:
            screening = uow.screenings.get_by_id(screening_id)
            if screening is None:
                raise NotFoundError('Screening', screening_id)
            # First writer wins unless questions are explicitly replaced
            if questions and (overwrite or not screening.screening_questions):
                screening.screening_questions = list(questions)
            return ScreeningDTO.from_orm(screening)

    def get_questions(self, screening_id: Any) -> Dict[str, Any]:
        """Questions for a screening, generated and persisted on first read."""
        screening, job, candidate = self._load_for_generation(screening_id)

        if not screening.screening_questions:
            questions = self._generate_questions(job, candidate)
            screening = self._store_questions(screening.id, questions)

        return {
            'screening_id': screening.id,
            'role': job.role if job else None,
            'company_name': job.company_name if job else None,
            'questions': screening.screening_questions,
        }

    def upload_video(
        self,
        screening_id: Any,
        video_url: Optional[str],
        questions: Optional[List[Dict[str, Any]]] = None
    ) -> ScreeningDTO:
        if not video_url or not video_url.strip():
            raise ValidationError('video_url is required')

        if questions:
            self._store_questions(screening_id, questions, overwrite=True)
        else:
            current, job, candidate = self._load_for_generation(screening_id)
            if not current.screening_questions:
                self._store_questions(current.id, self._generate_questions(job, candidate))

        with unit_of_work(self.session_factory) as uow:
            screening = uow.screenings.get_by_id(screening_id)
            if screening is None:
                raise NotFoundError('Screening', screening_id)
            screening.video_url = video_url.strip()
            logger.info(f"Video uploaded for screening {screening.id}")
            return ScreeningDTO.from_orm(screening)

    def process(self, screening_id: Any, transcript: Optional[str] = None) -> ScreeningDTO:
        """Score the screening video from its transcript and store the result."""
        with unit_of_work(self.session_factory) as uow:
            screening = uow.screenings.get_by_id(screening_id)
            if screening is None:
                raise NotFoundError('Screening', screening_id)
            current = ScreeningDTO.from_orm(screening)

        if not current.video_url:
            raise ValidationError('No video uploaded for this screening')

        transcript = (transcript or current.transcript or '').strip()
        if not transcript:
            raise ValidationError('A transcript is required to score the screening')

        result = self.scoring.score_video(transcript, current.screening_questions)
        if not result.ok:
            raise AdapterError(f"Video scoring failed: {result.reason}")

        with unit_of_work(self.session_factory) as uow:
            screening = uow.screenings.get_by_id(current.id)
            screening.transcript = transcript
            screening.scoring = result.data.model_dump()
            logger.info(
                f"Screening {screening.id} scored: {result.data.overall_score} "
                f"({result.data.overall_recommendation})"
            )
            return ScreeningDTO.from_orm(screening)
