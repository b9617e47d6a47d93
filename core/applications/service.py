#!/usr/bin/env python3
"""
Application Service - candidate submissions and recruiter actions.

Submission is synchronous and cheap: the Application is stored with zero
scores and scoring is handed to the background task queue. Approval is
synchronous; the invite email is generated and sent outside the database
transaction.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.orm import sessionmaker

from core.applications.dto import ApplicationDTO, ApplicationReceipt, ApprovalResult
from core.applications.orchestrator import ApplicationScoringOrchestrator
from core.errors import NotFoundError, PreconditionError, ValidationError
from core.scoring.adapter import ScoringAdapter
from core.screening.dto import ScreeningDTO
from core.screening.service import ScreeningService
from core.utils import mask_email, normalize_email
from database.models import Application
from database.uow import unit_of_work
from notification.channels import EmailMessage, NotificationChannel
from pipeline.tasks import BackgroundTaskQueue, score_application_task

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('github_url', 'portfolio_url', 'linkedin_url', 'compensation_expectation')
LIST_STATUSES = ('approved', 'pending')
SORT_FIELDS = ('score', 'createdAt', 'updatedAt')
SORT_ORDERS = ('asc', 'desc')


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class ApplicationService:

    def __init__(
        self,
        session_factory: sessionmaker,
        scoring: ScoringAdapter,
        orchestrator: ApplicationScoringOrchestrator,
        screening_service: ScreeningService,
        email_channel: NotificationChannel,
        task_queue: BackgroundTaskQueue
    ):
        self.session_factory = session_factory
        self.scoring = scoring
        self.orchestrator = orchestrator
        self.screening_service = screening_service
        self.email_channel = email_channel
        self.task_queue = task_queue

    def _enqueue_scoring(self, application_id: str) -> None:
        self.task_queue.enqueue(
            score_application_task,
            application_id,
            local_func=self.orchestrator.score_application
        )

    def submit_application(self, job_id: Any, payload: Mapping[str, Any]) -> ApplicationReceipt:
        """
        Store a new application and schedule its scoring.

        Creates the candidate on first application; resume text and any
        explicitly supplied profile fields overwrite the stored ones.
        """
        email = _clean(payload.get('email'))
        if not email or '@' not in email:
            raise ValidationError('A valid email is required')
        resume_text = _clean(payload.get('resume_text'))
        if not resume_text:
            raise ValidationError('resume_text is required')

        with unit_of_work(self.session_factory) as uow:
            job = uow.jobs.get_by_id(job_id)
            if job is None:
                raise NotFoundError('Job', job_id)

            user = uow.users.get_or_create(
                normalize_email(email),
                name=_clean(payload.get('name')),
                phone=_clean(payload.get('phone'))
            )
            if _clean(payload.get('name')):
                user.name = _clean(payload.get('name'))
            if _clean(payload.get('phone')):
                user.phone = _clean(payload.get('phone'))
            user.resume_text = resume_text
            user.resume_path = _clean(payload.get('resume_path'))
            for field_name in PROFILE_FIELDS:
                value = _clean(payload.get(field_name))
                if value:
                    setattr(user, field_name, value)

            application = uow.applications.add(Application(
                job_id=job.id,
                user_id=user.id,
                resume_text=resume_text,
                resume_path=user.resume_path,
                resume_score=0,
                github_portfolio_score=0,
                compensation_score=0,
                unified_score=0,
                consent_given=bool(payload.get('consent_given', False)),
                level1_approved=False,
                scoring_status='pending',
            ))

            match = uow.matches.get_existing_match(job.id, user.id)
            if match is not None:
                uow.matches.link_application(match, application.id)
                application.match_id = match.id

            receipt = ApplicationReceipt(
                application_id=str(application.id),
                job_id=str(job.id),
                user_id=str(user.id),
            )

        logger.info(
            f"Application {receipt.application_id} submitted by {mask_email(email)} for job {receipt.job_id}"
        )
        self._enqueue_scoring(receipt.application_id)
        return receipt

    def record_consent(self, application_id: Any, consent_given: bool = True) -> ApplicationDTO:
        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(application_id)
            if application is None:
                raise NotFoundError('Application', application_id)
            application.consent_given = bool(consent_given)
            return ApplicationDTO.from_orm(application)

    def approve_application(self, application_id: Any) -> ApprovalResult:
        """
        Level-1 approval.

        Requires candidate consent. When the job enables auto-invite and the
        unified score reaches its threshold, a screening is found or created
        and an invite email is sent. Email failures never undo the approval.
        """
        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(application_id)
            if application is None:
                raise NotFoundError('Application', application_id)
            if not application.consent_given:
                raise PreconditionError('Candidate consent is required before approval')

            application.level1_approved = True
            job = uow.jobs.get_by_id(application.job_id)
            user = uow.users.get_by_id(application.user_id)

            auto_invite = bool(job.get_setting('autoInviteOnLevel1Approval')) and \
                application.unified_score >= job.get_setting('autoInviteThreshold')

            screening = None
            email_context = None
            if auto_invite:
                screening, _created = self.screening_service.ensure_screening(uow, application)
                email_context = {
                    'candidate_name': user.name,
                    'role': job.role,
                    'company': job.company_name,
                    'screening_link': screening.screening_link,
                    'screening_questions': list(screening.screening_questions or job.screening_questions or []),
                    'unified_score': application.unified_score,
                    'skills_matched': list(application.skills_matched or []),
                }
                screening = ScreeningDTO.from_orm(screening)

            result = ApprovalResult(application=ApplicationDTO.from_orm(application, user))
            recipient = user.email

        logger.info(f"Application {result.application.id} approved (auto_invite={auto_invite})")
        if not auto_invite:
            return result

        result.screening = screening
        result.email_sent = self._send_invite(recipient, email_context)
        return result

    def _send_invite(self, recipient: str, context: Dict[str, Any]) -> bool:
        generated = self.scoring.generate_invite_email(context)
        if not generated.ok:
            logger.error(f"Invite email generation failed for {mask_email(recipient)}: {generated.reason}")
            return False

        email = generated.data
        sent = self.email_channel.send(EmailMessage(
            to=recipient,
            subject=email.subject,
            text=email.plain_text,
            html=email.html_snippet,
        ))
        if not sent.ok:
            logger.error(f"Invite email to {mask_email(recipient)} failed: {sent.error}")

        with unit_of_work(self.session_factory) as uow:
            screening = uow.screenings.get_by_link(context['screening_link'])
            if screening is not None:
                screening.invite_sent_at = datetime.now(timezone.utc)
        return sent.ok

    def list_applications(
        self,
        job_id: Any,
        status: Optional[str] = None,
        min_score: Optional[float] = None,
        sort_by: str = 'createdAt',
        sort_order: str = 'desc',
        page: int = 1,
        limit: int = 100
    ) -> Tuple[List[ApplicationDTO], int]:
        if status is not None and status not in LIST_STATUSES:
            raise ValidationError(f"Invalid status filter: {status}")
        if sort_by not in SORT_FIELDS:
            raise ValidationError(f"Invalid sort field: {sort_by}")
        if sort_order not in SORT_ORDERS:
            raise ValidationError(f"Invalid sort order: {sort_order}")
        if page < 1 or limit < 1:
            raise ValidationError('page and limit must be positive')

        with unit_of_work(self.session_factory) as uow:
            job = uow.jobs.get_by_id(job_id)
            if job is None:
                raise NotFoundError('Job', job_id)

            rows, total = uow.applications.list_for_job(
                job.id, status=status, min_score=min_score,
                sort_by=sort_by, sort_order=sort_order, page=page, limit=limit
            )
            return [ApplicationDTO.from_orm(a, a.user) for a in rows], total

    def get_application(self, application_id: Any) -> ApplicationDTO:
        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(application_id)
            if application is None:
                raise NotFoundError('Application', application_id)
            screening = uow.screenings.get_by_application(application.id)
            return ApplicationDTO.from_orm(application, application.user, screening)

    def rescore(self, application_id: Any) -> ApplicationDTO:
        """Reset the application to pending and schedule scoring again."""
        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(application_id)
            if application is None:
                raise NotFoundError('Application', application_id)
            application.scoring_status = 'pending'
            dto = ApplicationDTO.from_orm(application)

        self._enqueue_scoring(dto.id)
        return dto
