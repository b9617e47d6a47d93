"""
Pydantic models for the JSON payloads returned by each scoring capability.

Models are lenient about extra keys (LLMs add them freely) and strict about
the fields the pipeline reads. Scores are clamped into their documented range.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class _LlmPayload(BaseModel):
    model_config = ConfigDict(extra='ignore')


class ResumeScore(_LlmPayload):
    match_score: float
    confidence: Optional[float] = None
    skills_matched: List[str] = Field(default_factory=list)
    skills_missing: List[str] = Field(default_factory=list)
    recommended_action: Literal['yes', 'maybe', 'no'] = 'maybe'
    top_reasons: List[str] = Field(default_factory=list)

    @field_validator('match_score')
    @classmethod
    def _score_range(cls, v: float) -> float:
        return _clamp(v, 0.0, 100.0)

    @field_validator('recommended_action', mode='before')
    @classmethod
    def _lower_action(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class ProfileScore(_LlmPayload):
    score: float
    confidence: Optional[float] = None
    analysis: Optional[str] = None

    @field_validator('score')
    @classmethod
    def _score_range(cls, v: float) -> float:
        return _clamp(v, 0.0, 100.0)


class CompensationScore(_LlmPayload):
    score: float
    analysis: Optional[str] = None

    @field_validator('score')
    @classmethod
    def _score_range(cls, v: float) -> float:
        return _clamp(v, 0.0, 100.0)


class TextSummary(_LlmPayload):
    summary: str


class ParsedResume(_LlmPayload):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    years_of_experience: Optional[float] = None


class InviteEmail(_LlmPayload):
    subject: str
    plain_text: str
    preview_text: Optional[str] = None
    tone: Optional[str] = None
    html_snippet: Optional[str] = None


class ScreeningQuestion(_LlmPayload):
    text: str
    time_limit_sec: int = 120
    type: str = 'video'


class ScreeningQuestionSet(_LlmPayload):
    screening_questions: List[ScreeningQuestion] = Field(min_length=1)


class JobEnhancement(_LlmPayload):
    enhanced_jd: str
    apply_form_fields: List[Dict[str, Any]] = Field(default_factory=list)
    # Stored on the job as fallback screening questions
    screening_questions: List[ScreeningQuestion] = Field(default_factory=list)


class QuestionAssessment(_LlmPayload):
    question_index: int
    communication: Optional[float] = None
    technical_depth: Optional[float] = None
    clarity: Optional[float] = None
    notes: Optional[str] = None


class VideoScore(_LlmPayload):
    overall_score: float
    per_question: List[QuestionAssessment] = Field(default_factory=list)
    confidence: Optional[float] = None
    overall_recommendation: Optional[str] = None
    two_line_summary: Optional[str] = None

    @field_validator('overall_score')
    @classmethod
    def _score_range(cls, v: float) -> float:
        return _clamp(v, 0.0, 100.0)
