#!/usr/bin/env python3
"""
Scoring Adapter - LLM-backed scoring and generation capabilities.

Every method returns an AdapterResult: ``Ok(model)`` with a validated pydantic
payload, or ``Err(reason, raw)``. Provider exceptions, unparseable output and
schema violations all become ``Err``; nothing here raises to the caller.
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from core.llm.interfaces import LLMProvider
from core.llm import system_prompts as prompts
from core.profiles.github import format_for_llm
from core.scoring.results import AdapterResult, Err, Ok
from core.scoring.schema_models import (
    CompensationScore,
    InviteEmail,
    JobEnhancement,
    ParsedResume,
    ProfileScore,
    ResumeScore,
    ScreeningQuestionSet,
    TextSummary,
    VideoScore,
)
from core.utils import parse_json_safely

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=BaseModel)


class ScoringAdapter:
    """Facade over an LLMProvider exposing one method per capability."""

    def __init__(self, llm: LLMProvider):
        self.llm = llm

    def _call(self, capability: str, user_message: str, schema: Type[M]) -> AdapterResult[M]:
        system_prompt, temperature = prompts.PROMPT_SETTINGS[capability]

        try:
            raw = self.llm.complete_json(system_prompt, user_message, temperature=temperature)
        except Exception as e:
            logger.error(f"{capability}: LLM call failed: {e}")
            return Err(reason=f"llm_error: {e}")

        parsed = parse_json_safely(raw)
        if not parsed['ok']:
            logger.warning(f"{capability}: could not parse LLM response as JSON")
            return Err(reason=f"invalid_json: {parsed['error']}", raw=raw)
        if not isinstance(parsed['json'], dict):
            return Err(reason="invalid_json: expected a JSON object", raw=raw)

        try:
            data = schema.model_validate(parsed['json'])
        except PydanticValidationError as e:
            logger.warning(f"{capability}: response failed validation: {e.error_count()} error(s)")
            return Err(reason=f"schema_violation: {e}", raw=raw)

        return Ok(data=data, raw=raw)

    # ------------------------------------------------------------------
    # Scores
    # ------------------------------------------------------------------

    def score_resume(self, resume_text: str, job: Any) -> AdapterResult[ResumeScore]:
        if not resume_text or not resume_text.strip():
            return Err(reason="empty resume text")
        return self._call('score_resume', prompts.build_resume_scoring_prompt(resume_text, job), ResumeScore)

    def score_profile(
        self,
        github_data: Optional[Dict[str, Any]],
        portfolio_url: Optional[str],
        job: Any,
    ) -> AdapterResult[ProfileScore]:
        if not github_data and not portfolio_url:
            return Err(reason="no profile data")
        github_summary = format_for_llm(github_data) if github_data else None
        return self._call(
            'score_profile',
            prompts.build_profile_scoring_prompt(github_summary, portfolio_url, job),
            ProfileScore,
        )

    def score_compensation(self, expectation: Optional[str], budget: Optional[str]) -> AdapterResult[CompensationScore]:
        if not expectation or not budget:
            return Err(reason="missing compensation expectation or budget")
        return self._call('score_compensation', prompts.build_compensation_prompt(expectation, budget), CompensationScore)

    def score_video(self, transcript: str, questions: List[Dict[str, Any]]) -> AdapterResult[VideoScore]:
        if not transcript or not transcript.strip():
            return Err(reason="empty transcript")
        return self._call('score_video', prompts.build_video_scoring_prompt(transcript, questions), VideoScore)

    # ------------------------------------------------------------------
    # Resume / profile enrichment
    # ------------------------------------------------------------------

    def summarize_resume(self, resume_text: str) -> AdapterResult[TextSummary]:
        return self._call('summarize_resume', prompts.build_resume_summary_prompt(resume_text), TextSummary)

    def parse_resume(self, resume_text: str) -> AdapterResult[ParsedResume]:
        return self._call('parse_resume', prompts.build_resume_parse_prompt(resume_text), ParsedResume)

    def summarize_linkedin(self, linkedin_url: str, resume_summary: Optional[str] = None) -> AdapterResult[TextSummary]:
        return self._call(
            'summarize_linkedin',
            prompts.build_linkedin_summary_prompt(linkedin_url, resume_summary),
            TextSummary,
        )

    # ------------------------------------------------------------------
    # Jobs and outreach
    # ------------------------------------------------------------------

    def enhance_job(self, job: Any) -> AdapterResult[JobEnhancement]:
        return self._call('enhance_job', prompts.build_enhance_job_prompt(job), JobEnhancement)

    def generate_invite_email(self, context: Dict[str, Any]) -> AdapterResult[InviteEmail]:
        return self._call('generate_invite_email', prompts.build_invite_email_prompt(context), InviteEmail)

    def generate_screening_questions(
        self,
        job: Any,
        candidate: Optional[Dict[str, Any]] = None,
    ) -> AdapterResult[ScreeningQuestionSet]:
        return self._call(
            'generate_screening_questions',
            prompts.build_screening_questions_prompt(job, candidate),
            ScreeningQuestionSet,
        )
