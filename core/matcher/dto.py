"""Data Transfer Objects for the candidate matcher.

DTOs carry match data outside of the Unit of Work context, so ORM rows
are converted to plain Python objects while the session is still open.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class CandidateSummaryDTO:
    """Candidate fields shown next to a match (no application scores)."""
    id: str
    name: str
    email: str
    tags: List[str] = field(default_factory=list)
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    compensation_expectation: Optional[str] = None

    @classmethod
    def from_orm(cls, user: Any) -> 'CandidateSummaryDTO':
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            tags=list(user.tags or []),
            github_url=user.github_url,
            portfolio_url=user.portfolio_url,
            compensation_expectation=user.compensation_expectation,
        )


@dataclass
class MatchDTO:
    """A persisted job-candidate match."""
    id: str
    job_id: str
    user_id: str
    match_score: int
    tag_match_score: int
    skills_match_score: int
    matched_tags: List[str] = field(default_factory=list)
    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    match_reason: Optional[str] = None
    status: str = 'pending'
    contacted_at: Optional[datetime] = None
    application_id: Optional[str] = None
    created_at: Optional[datetime] = None
    candidate: Optional[CandidateSummaryDTO] = None

    @classmethod
    def from_orm(cls, match: Any, user: Any = None) -> 'MatchDTO':
        return cls(
            id=str(match.id),
            job_id=str(match.job_id),
            user_id=str(match.user_id),
            match_score=match.match_score,
            tag_match_score=match.tag_match_score,
            skills_match_score=match.skills_match_score,
            matched_tags=list(match.matched_tags or []),
            matched_skills=list(match.matched_skills or []),
            missing_skills=list(match.missing_skills or []),
            match_reason=match.match_reason,
            status=match.status,
            contacted_at=match.contacted_at,
            application_id=str(match.application_id) if match.application_id else None,
            created_at=match.created_at,
            candidate=CandidateSummaryDTO.from_orm(user) if user is not None else None,
        )


@dataclass
class MatchRunResult:
    """Outcome of matching one job against the candidate pool."""
    matches: List[MatchDTO] = field(default_factory=list)
    total_candidates: int = 0
    matched_candidates: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_candidates': self.total_candidates,
            'matched_candidates': self.matched_candidates,
            'match_ids': [m.id for m in self.matches],
        }
