#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class _FromDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class JobDetail(_FromDTO):
    id: str
    company_name: str
    role: str
    status: str
    raw_jd: str
    enhanced_jd: Optional[str] = None
    seniority: Optional[str] = None
    location: Optional[str] = None
    budget_info: Optional[str] = None
    must_have_skills: List[str] = Field(default_factory=list)
    nice_to_have: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    apply_form_fields: List[Dict[str, Any]] = Field(default_factory=list)
    settings: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None


class JobResponse(BaseModel):
    success: bool = True
    job: JobDetail


class CandidateSummary(_FromDTO):
    id: str
    name: str
    email: str
    tags: List[str] = Field(default_factory=list)
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    compensation_expectation: Optional[str] = None


class MatchDetail(_FromDTO):
    """A job-candidate match."""
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "job_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "user_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                "match_score": 62,
                "tag_match_score": 50,
                "skills_match_score": 70,
                "matched_tags": ["Python", "AWS"],
                "match_reason": "Relevant skills. Matched tags: Python, AWS",
                "status": "pending"
            }
        }
    )

    id: str
    job_id: str
    user_id: str
    match_score: int = Field(ge=0, le=100)
    tag_match_score: int = Field(ge=0, le=100)
    skills_match_score: int = Field(ge=0, le=100)
    matched_tags: List[str] = Field(default_factory=list)
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    match_reason: Optional[str] = None
    status: str
    contacted_at: Optional[datetime] = None
    application_id: Optional[str] = None
    candidate: Optional[CandidateSummary] = None


class MatchesResponse(BaseModel):
    success: bool = True
    count: int
    matches: List[MatchDetail]


class MatchRunResponse(BaseModel):
    success: bool = True
    total_candidates: int
    matched_candidates: int
    matches: List[MatchDetail]


class MatchResponse(BaseModel):
    success: bool = True
    match: MatchDetail


class ApplicationReceiptResponse(BaseModel):
    """Candidate-facing; carries no scores."""
    success: bool = True
    application_id: str
    job_id: str
    status: str
    message: str = "Application received"


class ApplicationDetail(_FromDTO):
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
    skills_matched: List[str] = Field(default_factory=list)
    skills_missing: List[str] = Field(default_factory=list)
    top_reasons: List[str] = Field(default_factory=list)
    recommended_action: Optional[str] = None
    compensation_analysis: Optional[str] = None
    github_portfolio_summary: Optional[str] = None
    match_id: Optional[str] = None
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    screening_id: Optional[str] = None
    scored_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class ApplicationResponse(BaseModel):
    success: bool = True
    application: ApplicationDetail


class ApplicationsListResponse(BaseModel):
    success: bool = True
    total: int
    page: int
    limit: int
    applications: List[ApplicationDetail]


class ScreeningDetail(_FromDTO):
    id: str
    application_id: str
    job_id: str
    screening_link: str
    screening_questions: List[Dict[str, Any]] = Field(default_factory=list)
    video_url: Optional[str] = None
    scoring: Optional[Dict[str, Any]] = None
    invite_sent_at: Optional[datetime] = None


class ApprovalResponse(BaseModel):
    success: bool = True
    application: ApplicationDetail
    screening: Optional[ScreeningDetail] = None
    email_sent: bool = False


class ScreeningQuestionsResponse(BaseModel):
    success: bool = True
    screening_id: str
    role: Optional[str] = None
    company_name: Optional[str] = None
    questions: List[Dict[str, Any]]


class ScreeningResponse(BaseModel):
    success: bool = True
    screening: ScreeningDetail


class UserDetail(_FromDTO):
    id: str
    email: str
    name: str
    phone: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    resume_summary: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    compensation_expectation: Optional[str] = None
    is_hired: bool = False
    hired_at: Optional[datetime] = None


class UserResponse(BaseModel):
    success: bool = True
    user: UserDetail


class EmailSendResponse(BaseModel):
    success: bool = True
    message: str = "Email sent successfully"
    messageId: Optional[str] = None
    to: str
    subject: str
    sentAt: datetime


class BulkEmailResponse(BaseModel):
    success: bool = True
    message: str
    totalRecipients: int
    successful: int
    failed: int
    recipients: List[str] = Field(default_factory=list)
    sentAt: Optional[datetime] = None
