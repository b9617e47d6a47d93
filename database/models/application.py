import uuid
from typing import Dict, Optional

from sqlalchemy import Column, Integer, Text, Boolean, TIMESTAMP, ForeignKey, Uuid, Index, func
from sqlalchemy.orm import relationship

from core.scorer.aggregator import APPLICATION_WEIGHTS, unified_score
from .base import Base, JsonType


class Application(Base):
    """
    One candidate's application to one job.

    Created synchronously with zero scores (``scoring_status='pending'``);
    the background scoring task fills in the sub-scores afterwards.
    ``unified_score`` is only ever written by ``recompute_unified_score``.
    """
    __tablename__ = 'application'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey('job.id'), nullable=False)
    user_id = Column(Uuid, ForeignKey('users.id'), nullable=False)

    # Resume snapshot
    resume_path = Column(Text)
    resume_text = Column(Text)

    # Sub-scores (0-100)
    resume_score = Column(Integer, nullable=False, default=0)
    github_portfolio_score = Column(Integer, nullable=False, default=0)
    compensation_score = Column(Integer, nullable=False, default=0)
    unified_score = Column(Integer, nullable=False, default=0)

    compensation_analysis = Column(Text)
    github_portfolio_summary = Column(Text)

    # Resume scoring detail
    skills_matched = Column(JsonType, nullable=False, default=list)
    skills_missing = Column(JsonType, nullable=False, default=list)
    top_reasons = Column(JsonType, nullable=False, default=list)
    recommended_action = Column(Text)  # yes|maybe|no
    raw_resume_llm = Column(Text)

    # Gates
    consent_given = Column(Boolean, nullable=False, default=False)
    level1_approved = Column(Boolean, nullable=False, default=False)

    scoring_status = Column(Text, nullable=False, default='pending')  # pending|scored|failed
    scored_at = Column(TIMESTAMP(timezone=True))

    match_id = Column(Uuid, ForeignKey('job_candidate_match.id'), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    job = relationship("Job", back_populates="applications")
    user = relationship("User", back_populates="applications")
    screenings = relationship("Screening", back_populates="application")

    __table_args__ = (
        Index('idx_application_job', 'job_id'),
        Index('idx_application_user', 'user_id'),
        Index('idx_application_unified', 'unified_score'),
    )

    def sub_scores(self) -> dict:
        return {
            'resume_score': self.resume_score,
            'github_portfolio_score': self.github_portfolio_score,
            'compensation_score': self.compensation_score,
        }

    def recompute_unified_score(self, weights: Optional[Dict[str, float]] = None) -> int:
        """Derive ``unified_score`` from the current sub-scores (integer, half-up)."""
        self.unified_score = unified_score(self.sub_scores(), weights or APPLICATION_WEIGHTS, precision=0)
        return self.unified_score
