import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Uuid, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JsonType


DEFAULT_JOB_SETTINGS = {
    'autoInviteOnLevel1Approval': False,
    'autoInviteThreshold': 70,
    'autoCreateScreeningThreshold': 60,
}


def default_job_settings() -> dict:
    return dict(DEFAULT_JOB_SETTINGS)


class Job(Base):
    """
    A job posting.

    Created as a draft, enhanced once by the LLM and then finalized.
    After finalization only ``settings`` and ``tags`` change.
    """
    __tablename__ = 'job'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Description
    raw_jd = Column(Text, nullable=False)
    enhanced_jd = Column(Text)

    # Structured fields
    company_name = Column(Text, nullable=False)
    role = Column(Text, nullable=False)
    seniority = Column(Text)
    location = Column(Text)
    budget_info = Column(Text)
    must_have_skills = Column(JsonType, nullable=False, default=list)
    nice_to_have = Column(JsonType, nullable=False, default=list)

    # Derived, recomputed on enhancement
    tags = Column(JsonType, nullable=False, default=list)

    apply_form_fields = Column(JsonType, nullable=False, default=list)
    screening_questions = Column(JsonType, nullable=False, default=list)  # fallback questions

    # autoInviteOnLevel1Approval | autoInviteThreshold | autoCreateScreeningThreshold
    settings = Column(JsonType, nullable=False, default=default_job_settings)

    status = Column(Text, nullable=False, default='draft')  # draft|finalized

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    applications = relationship("Application", back_populates="job")
    matches = relationship("JobCandidateMatch", back_populates="job")

    __table_args__ = (
        Index('idx_job_status', 'status'),
        Index('idx_job_created', 'created_at'),
    )

    def get_setting(self, key: str):
        """Read a per-job setting, falling back to the default value."""
        settings = self.settings or {}
        if key in settings and settings[key] is not None:
            return settings[key]
        return DEFAULT_JOB_SETTINGS.get(key)
