#!/usr/bin/env python3
"""
Shared test helpers: in-memory database, seed data and adapter results.
"""
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

from core.scoring.adapter import ScoringAdapter
from core.scoring.results import Err, Ok
from core.scoring.schema_models import (
    CompensationScore,
    InviteEmail,
    ParsedResume,
    ProfileScore,
    ResumeScore,
    ScreeningQuestionSet,
    TextSummary,
)
from database.database import create_db_engine, create_session_factory, init_db
from database.models import Application, Job, User
from database.uow import unit_of_work
from pipeline.tasks import BackgroundTaskQueue


def make_session_factory():
    """Fresh in-memory SQLite database with all tables."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return create_session_factory(engine)


def inline_queue() -> BackgroundTaskQueue:
    return BackgroundTaskQueue(use_async_queue=False, run_inline=True)


def seed_job(session_factory, **overrides) -> str:
    data = dict(
        raw_jd="We need a backend engineer to build Python services on AWS.",
        enhanced_jd="Backend engineer building Python services on AWS.",
        company_name="Acme",
        role="Backend Engineer",
        budget_info="$120k-$150k",
        must_have_skills=["Python", "AWS"],
        nice_to_have=["Docker"],
        tags=["Python", "AWS", "Docker", "Kubernetes"],
        apply_form_fields=[],
        screening_questions=[{"text": "Tell us about a system you built.", "time_limit_sec": 120, "type": "video"}],
        settings={
            "autoInviteOnLevel1Approval": False,
            "autoInviteThreshold": 70,
            "autoCreateScreeningThreshold": 60,
        },
        status="finalized",
    )
    data.update(overrides)
    with unit_of_work(session_factory) as uow:
        job = uow.jobs.add(Job(**data))
        return str(job.id)


def seed_user(session_factory, email: str = "jane@example.com", **overrides) -> str:
    data = dict(
        email=email,
        name="Jane Doe",
        resume_text="Senior Python engineer with AWS experience.",
        tags=["python", "aws"],
        is_hired=False,
    )
    data.update(overrides)
    with unit_of_work(session_factory) as uow:
        user = uow.users.add(User(**data))
        return str(user.id)


def seed_application(session_factory, job_id: str, user_id: str, **overrides) -> str:
    data = dict(
        resume_text="Senior Python engineer with AWS experience.",
        resume_score=0,
        github_portfolio_score=0,
        compensation_score=0,
        unified_score=0,
        consent_given=False,
        level1_approved=False,
        scoring_status="pending",
    )
    data.update(overrides)
    with unit_of_work(session_factory) as uow:
        job = uow.jobs.get_by_id(job_id)
        user = uow.users.get_by_id(user_id)
        application = uow.applications.add(Application(job_id=job.id, user_id=user.id, **data))
        return str(application.id)


def resume_ok(score: float = 80, skills_matched: Optional[List[str]] = None, **kwargs) -> Ok:
    data = ResumeScore(
        match_score=score,
        skills_matched=skills_matched if skills_matched is not None else ["Python", "AWS"],
        skills_missing=kwargs.pop("skills_missing", ["Kubernetes"]),
        recommended_action=kwargs.pop("recommended_action", "yes"),
        top_reasons=kwargs.pop("top_reasons", ["Strong Python background"]),
        **kwargs
    )
    return Ok(data=data, raw=data.model_dump_json())


def scoring_mock(
    resume: Any = None,
    profile: Any = None,
    compensation: Any = None,
    summary: Any = None,
    parsed: Any = None,
    linkedin: Any = None,
    invite: Any = None,
    questions: Any = None,
) -> Mock:
    """ScoringAdapter double with successful defaults for every capability."""
    scoring = Mock(spec=ScoringAdapter)
    scoring.score_resume.return_value = resume if resume is not None else resume_ok()
    scoring.score_profile.return_value = profile if profile is not None else Ok(
        ProfileScore(score=60, analysis="Active GitHub with Python projects")
    )
    scoring.score_compensation.return_value = compensation if compensation is not None else Ok(
        CompensationScore(score=0, analysis="Expectation above budget")
    )
    scoring.summarize_resume.return_value = summary if summary is not None else Ok(
        TextSummary(summary="Python engineer, 8 years")
    )
    scoring.parse_resume.return_value = parsed if parsed is not None else Ok(ParsedResume(
        name="Jane Doe",
        github_url="https://github.com/janedoe",
    ))
    scoring.summarize_linkedin.return_value = linkedin if linkedin is not None else Ok(
        TextSummary(summary="LinkedIn summary")
    )
    scoring.generate_invite_email.return_value = invite if invite is not None else Ok(InviteEmail(
        subject="Next steps at Acme",
        plain_text="Hi Jane, please record your screening.",
    ))
    scoring.generate_screening_questions.return_value = questions if questions is not None else Ok(
        ScreeningQuestionSet.model_validate({"screening_questions": [{"text": "Walk us through a recent project."}]})
    )
    return scoring


def err(reason: str = "llm_error: boom", raw: Optional[str] = None) -> Err:
    return Err(reason=reason, raw=raw)


def job_settings(**settings) -> Dict[str, Any]:
    base = {
        "autoInviteOnLevel1Approval": False,
        "autoInviteThreshold": 70,
        "autoCreateScreeningThreshold": 60,
    }
    base.update(settings)
    return base
