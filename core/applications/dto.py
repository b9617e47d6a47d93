"""Data Transfer Objects for applications.

Recruiter-facing views carry every sub-score; the candidate-facing receipt
returned by the apply endpoint carries none.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.screening.dto import ScreeningDTO


@dataclass
class ApplicationDTO:
    id: str
    job_id: str
    user_id: str
    resume_score: int
    github_portfolio_score: int
    compensation_score: int
    unified_score: int
    scoring_status: str
    consent_given: bool
    level1_approved: bool
    skills_matched: List[str] = field(default_factory=list)
    skills_missing: List[str] = field(default_factory=list)
    top_reasons: List[str] = field(default_factory=list)
    recommended_action: Optional[str] = None
    compensation_analysis: Optional[str] = None
    github_portfolio_summary: Optional[str] = None
    match_id: Optional[str] = None
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    screening_id: Optional[str] = None
    scored_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, application: Any, user: Any = None, screening: Any = None) -> 'ApplicationDTO':
        return cls(
            id=str(application.id),
            job_id=str(application.job_id),
            user_id=str(application.user_id),
            resume_score=application.resume_score,
            github_portfolio_score=application.github_portfolio_score,
            compensation_score=application.compensation_score,
            unified_score=application.unified_score,
            scoring_status=application.scoring_status,
            consent_given=application.consent_given,
            level1_approved=application.level1_approved,
            skills_matched=list(application.skills_matched or []),
            skills_missing=list(application.skills_missing or []),
            top_reasons=list(application.top_reasons or []),
            recommended_action=application.recommended_action,
            compensation_analysis=application.compensation_analysis,
            github_portfolio_summary=application.github_portfolio_summary,
            match_id=str(application.match_id) if application.match_id else None,
            candidate_name=user.name if user is not None else None,
            candidate_email=user.email if user is not None else None,
            screening_id=str(screening.id) if screening is not None else None,
            scored_at=application.scored_at,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )


@dataclass
class ApplicationReceipt:
    """What the candidate sees after applying."""
    application_id: str
    job_id: str
    user_id: str
    status: str = 'submitted'


@dataclass
class ApprovalResult:
    application: ApplicationDTO
    screening: Optional[ScreeningDTO] = None
    email_sent: bool = False


@dataclass
class ScoringOutcome:
    """Result of one background scoring run."""
    application_id: str
    status: str
    resume_score: int = 0
    github_portfolio_score: int = 0
    compensation_score: int = 0
    unified_score: int = 0
    screening_id: Optional[str] = None
    screening_created: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)
