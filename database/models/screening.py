import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Uuid, UniqueConstraint, func
from sqlalchemy.orm import relationship

from .base import Base, JsonType


class Screening(Base):
    """
    Video/phone assessment invitation tied to one application; at most one
    per application.

    Questions are generated lazily on first read and persisted so repeated
    reads return the same set.
    """
    __tablename__ = 'screening'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id = Column(Uuid, ForeignKey('application.id'), nullable=False)
    job_id = Column(Uuid, ForeignKey('job.id'), nullable=False)

    screening_link = Column(Text, nullable=False, unique=True)
    screening_questions = Column(JsonType, nullable=False, default=list)

    video_url = Column(Text)
    transcript = Column(Text)
    # per_question | overall_score | confidence | overall_recommendation | two_line_summary
    scoring = Column(JsonType)

    invite_sent_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    application = relationship("Application", back_populates="screenings")
    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint('application_id', name='uq_screening_application'),
    )
