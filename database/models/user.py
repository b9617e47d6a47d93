import uuid

from sqlalchemy import Column, Text, Boolean, TIMESTAMP, Uuid, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JsonType


class User(Base):
    """
    Candidate account.

    Created on first application. Resume text, tags and the derived resume
    fields are overwritten on every new resume submission (last write wins).
    """
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    phone = Column(Text)

    # Resume
    resume_path = Column(Text)
    resume_text = Column(Text)
    tags = Column(JsonType, nullable=False, default=list)
    parsed_resume = Column(JsonType)
    resume_summary = Column(Text)

    # External profiles
    github_url = Column(Text)
    portfolio_url = Column(Text)
    linkedin_url = Column(Text)
    linkedin_summary = Column(Text)

    compensation_expectation = Column(Text)

    # Hiring state
    is_hired = Column(Boolean, nullable=False, default=False)
    hired_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    applications = relationship("Application", back_populates="user")
    matches = relationship("JobCandidateMatch", back_populates="user")

    __table_args__ = (
        Index('idx_users_email', 'email'),
        Index('idx_users_is_hired', 'is_hired'),
    )
