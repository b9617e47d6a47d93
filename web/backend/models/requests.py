#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ScreeningQuestionInput(BaseModel):
    text: str
    time_limit_sec: int = Field(default=120, ge=10, le=600)
    type: str = "video"


class JobCreateRequest(BaseModel):
    """Request to create and enhance a job posting."""
    raw_jd: str = Field(..., description="Job description as written by the recruiter")
    company_name: str
    role: str
    seniority: Optional[str] = None
    location: Optional[str] = None
    budget_info: Optional[str] = Field(None, description="Compensation budget, free text")
    must_have_skills: List[str] = Field(default_factory=list)
    nice_to_have: List[str] = Field(default_factory=list)
    screening_questions: List[ScreeningQuestionInput] = Field(
        default_factory=list,
        description="Fallback questions used when generation fails"
    )
    settings: Optional[Dict[str, Any]] = None


class JobSettingsUpdate(BaseModel):
    """Partial update of per-job automation settings."""
    autoInviteOnLevel1Approval: Optional[bool] = None
    autoInviteThreshold: Optional[int] = Field(None, ge=0, le=100)
    autoCreateScreeningThreshold: Optional[int] = Field(None, ge=0, le=100)


class ApplyRequest(BaseModel):
    """Candidate application to a job."""
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    resume_text: str = Field(..., description="Plain-text resume")
    resume_path: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    compensation_expectation: Optional[str] = None
    consent_given: bool = False


class ConsentRequest(BaseModel):
    consent_given: bool = True


class MatchStatusUpdate(BaseModel):
    status: str = Field(..., description="pending, contacted, interested, not_interested or applied")


class VideoUploadRequest(BaseModel):
    videoUrl: Optional[str] = Field(None, description="URL of the uploaded screening video")
    questions: Optional[List[ScreeningQuestionInput]] = None


class ProcessScreeningRequest(BaseModel):
    transcript: Optional[str] = Field(None, description="Transcript of the screening video")


class UserUpdate(BaseModel):
    """Candidate profile fields a recruiter or candidate may change."""
    name: Optional[str] = None
    phone: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    compensation_expectation: Optional[str] = None
    is_hired: Optional[bool] = None


class EmailSendRequest(BaseModel):
    """Single outreach email; the recipient comes from ``to`` or the candidate ``userId``."""
    to: Optional[str] = None
    userId: Optional[str] = None
    subject: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None
    cc: Optional[str] = None
    bcc: Optional[str] = None
    replyTo: Optional[str] = None


class BulkEmailRequest(BaseModel):
    recipients: List[str] = Field(default_factory=list)
    userIds: List[str] = Field(default_factory=list)
    subject: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None
