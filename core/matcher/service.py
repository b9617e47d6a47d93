#!/usr/bin/env python3
"""
Matcher Service - proactive matching of a job against existing candidates.

For every eligible candidate (not hired, with resume text):
1. Tag score: bidirectional substring match of job tags vs candidate tags
2. Skills score: LLM resume-vs-job scoring through the ScoringAdapter
3. match_score = round(tag * tag_weight + skills * skills_weight)

Existing matches are reused verbatim; a (job, user) pair is persisted at
most once, enforced by the unique constraint on job_candidate_match.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import sessionmaker

from core.errors import NotFoundError, PersistenceConflict, ValidationError
from core.matcher.dto import MatchDTO, MatchRunResult
from core.matcher.explainability import build_match_reason
from core.scorer.aggregator import round_half_up
from core.scorer.tag_matcher import match_tags
from core.scoring.adapter import ScoringAdapter
from database.models import JobCandidateMatch, MATCH_STATUSES
from database.uow import unit_of_work

logger = logging.getLogger(__name__)

DEFAULT_TAG_WEIGHT = 0.4
DEFAULT_SKILLS_WEIGHT = 0.6


def combine_scores(
    tag_score: float,
    skills_score: float,
    tag_weight: float = DEFAULT_TAG_WEIGHT,
    skills_weight: float = DEFAULT_SKILLS_WEIGHT
) -> int:
    """Weighted match score, rounded half-up and clamped to [0, 100]."""
    combined = int(round_half_up(tag_score * tag_weight + skills_score * skills_weight))
    return max(0, min(100, combined))


class CandidateMatcher:
    """
    Matches one job against the candidate pool.

    Reads and writes happen in separate units of work; LLM scoring for the
    batch fans out over a thread pool with no database access in workers.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        scoring: ScoringAdapter,
        tag_weight: float = DEFAULT_TAG_WEIGHT,
        skills_weight: float = DEFAULT_SKILLS_WEIGHT,
        max_workers: int = 4
    ):
        self.session_factory = session_factory
        self.scoring = scoring
        self.tag_weight = tag_weight
        self.skills_weight = skills_weight
        self.max_workers = max(1, max_workers)

    def _skills_score(self, resume_text: str, job: Any) -> int:
        result = self.scoring.score_resume(resume_text, job)
        if not result.ok:
            raise RuntimeError(result.reason)
        return int(round_half_up(result.data.match_score))

    def _score_batch(self, job: Any, candidates: List[Dict[str, Any]]) -> Dict[str, int]:
        """Skills score per user id; adapter failures score 0 and are logged."""
        scores: Dict[str, int] = {}
        if not candidates:
            return scores

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {
                pool.submit(self._skills_score, c['resume_text'], job): c['user_id']
                for c in candidates
            }
            for future in as_completed(futures):
                user_id = futures[future]
                try:
                    scores[user_id] = future.result()
                except Exception as e:
                    logger.warning(f"Skills scoring failed for user {user_id}: {e}")
                    scores[user_id] = 0
        return scores

    def match_job_to_candidates(self, job_id: Any) -> MatchRunResult:
        """
        Score every eligible candidate against a job and persist new matches.

        Returns:
            MatchRunResult with matches sorted by match_score descending
        """
        with unit_of_work(self.session_factory) as uow:
            job = uow.jobs.get_by_id(job_id)
            if job is None:
                raise NotFoundError('Job', job_id)

            candidates = uow.users.get_match_candidates()
            existing: Dict[str, MatchDTO] = {}
            pending: List[Dict[str, Any]] = []

            for user in candidates:
                match = uow.matches.get_existing_match(job.id, user.id)
                if match is not None:
                    existing[str(user.id)] = MatchDTO.from_orm(match, user)
                    continue

                application = uow.applications.get_for_job_and_user(job.id, user.id)
                pending.append({
                    'user_id': str(user.id),
                    'user': user,
                    'resume_text': user.resume_text,
                    'tags': list(user.tags or []),
                    'matched_skills': list(application.skills_matched or []) if application else [],
                    'missing_skills': list(application.skills_missing or []) if application else [],
                })

        total = len(candidates)
        if total == 0:
            logger.info(f"No candidates available to match for job {job_id}")
            return MatchRunResult()

        logger.info(
            f"Matching job {job.id} ({job.role}) against {total} candidates "
            f"({len(existing)} already matched)"
        )

        skills_scores = self._score_batch(job, pending)
        job_tags = list(job.tags or [])

        matches: List[MatchDTO] = list(existing.values())
        with unit_of_work(self.session_factory) as uow:
            for candidate in pending:
                user_id = candidate['user_id']
                tag_result = match_tags(job_tags, candidate['tags'])
                skills_score = skills_scores.get(user_id, 0)

                match = JobCandidateMatch(
                    job_id=job.id,
                    user_id=candidate['user'].id,
                    match_score=combine_scores(
                        tag_result.score, skills_score, self.tag_weight, self.skills_weight
                    ),
                    tag_match_score=tag_result.score,
                    skills_match_score=skills_score,
                    matched_tags=list(tag_result.matched_tags),
                    matched_skills=candidate['matched_skills'],
                    missing_skills=candidate['missing_skills'],
                    match_reason=build_match_reason(
                        tag_result.score, skills_score,
                        tag_result.matched_tags, candidate['matched_skills']
                    ),
                    status='pending',
                )
                try:
                    saved, _created = uow.matches.insert_or_get(match)
                except PersistenceConflict as e:
                    logger.error(f"Skipping match for user {user_id} on job {job.id}: {e}")
                    continue
                matches.append(MatchDTO.from_orm(saved, uow.users.get_by_id(user_id)))

        matches.sort(key=lambda m: m.match_score, reverse=True)
        logger.info(f"Job {job.id}: {len(matches)} matches from {total} candidates")

        return MatchRunResult(
            matches=matches,
            total_candidates=total,
            matched_candidates=len(matches),
        )

    def get_job_matches(
        self,
        job_id: Any,
        min_score: float = 0,
        limit: int = 50,
        status: Optional[str] = None
    ) -> List[MatchDTO]:
        if status is not None and status not in MATCH_STATUSES:
            raise ValidationError(f"Invalid match status: {status}")

        with unit_of_work(self.session_factory) as uow:
            job = uow.jobs.get_by_id(job_id)
            if job is None:
                raise NotFoundError('Job', job_id)

            rows = uow.matches.get_matches_for_job(job.id, min_score=min_score, limit=limit, status=status)
            return [MatchDTO.from_orm(m, m.user) for m in rows]

    def update_match_status(self, match_id: Any, status: str) -> MatchDTO:
        if status not in MATCH_STATUSES:
            raise ValidationError(
                f"Invalid match status: {status}. Must be one of: {', '.join(MATCH_STATUSES)}"
            )

        with unit_of_work(self.session_factory) as uow:
            match = uow.matches.get_by_id(match_id)
            if match is None:
                raise NotFoundError('Match', match_id)
            uow.matches.set_status(match, status)
            return MatchDTO.from_orm(match, match.user)

    def link_application(self, job_id: Any, user_id: Any, application_id: Any) -> Optional[MatchDTO]:
        """Mark the (job, user) match as applied; None when no match exists."""
        with unit_of_work(self.session_factory) as uow:
            match = uow.matches.get_existing_match(job_id, user_id)
            if match is None:
                return None
            uow.matches.link_application(match, application_id)
            return MatchDTO.from_orm(match)
