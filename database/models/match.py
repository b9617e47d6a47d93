import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Uuid, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JsonType


MATCH_STATUSES = ('pending', 'contacted', 'interested', 'not_interested', 'applied')


class JobCandidateMatch(Base):
    """
    Proactive match between a job and an existing candidate.

    At most one row per (job_id, user_id); the unique constraint is the
    enforcement mechanism, not the repository's existence check. Once
    written, a match is never recomputed by later matching runs.
    """
    __tablename__ = 'job_candidate_match'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey('job.id'), nullable=False)
    user_id = Column(Uuid, ForeignKey('users.id'), nullable=False)

    # Scores (0-100)
    match_score = Column(Integer, nullable=False)
    tag_match_score = Column(Integer, nullable=False, default=0)
    skills_match_score = Column(Integer, nullable=False, default=0)

    matched_tags = Column(JsonType, nullable=False, default=list)
    matched_skills = Column(JsonType, nullable=False, default=list)
    missing_skills = Column(JsonType, nullable=False, default=list)
    match_reason = Column(Text)

    status = Column(Text, nullable=False, default='pending')
    contacted_at = Column(TIMESTAMP(timezone=True))

    # Set once the candidate applies
    application_id = Column(Uuid, ForeignKey('application.id', use_alter=True), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    job = relationship("Job", back_populates="matches")
    user = relationship("User", back_populates="matches")

    __table_args__ = (
        UniqueConstraint('job_id', 'user_id', name='uq_job_candidate_match_job_user'),
        Index('idx_jcm_job_score', 'job_id', 'match_score'),
        Index('idx_jcm_status', 'status'),
    )
