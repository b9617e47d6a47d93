#!/usr/bin/env python3
"""
Application Scoring Orchestrator - background scoring of one application.

Phases:
1. Parallel, isolated: resume tags, resume summary, resume parse, resume-vs-job score
2. Resolve profile URLs (explicit first, parsed fallback) and persist the candidate
3. Parallel, each optional: GitHub fetch + profile score, LinkedIn summary,
   compensation score
4. Unified score, persist results, auto-create a screening at threshold

LLM and HTTP calls never run inside a database transaction; each phase that
writes opens its own unit of work.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from sqlalchemy.orm import sessionmaker

from core.applications.dto import ScoringOutcome
from core.errors import NotFoundError
from core.profiles.github import GitHubProfileFetcher
from core.scorer.aggregator import APPLICATION_WEIGHTS, round_half_up
from core.scoring.adapter import ScoringAdapter
from core.screening.service import ScreeningService
from core.tags.extractor import TagExtractor
from database.uow import unit_of_work

logger = logging.getLogger(__name__)


def run_isolated(tasks: Mapping[str, Callable[[], Any]], max_workers: int = 4, label: str = '') -> Dict[str, Any]:
    """
    Run independent tasks concurrently.

    A task that raises yields None for its key; the others are unaffected.
    """
    results: Dict[str, Any] = {name: None for name in tasks}
    if not tasks:
        return results

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(tasks)))) as pool:
        futures = {pool.submit(fn): name for name, fn in tasks.items()}
        for future in as_completed(futures):
            name = futures[future]
            try:
                results[name] = future.result()
            except Exception as e:
                logger.warning(f"{label} task '{name}' failed: {e}")
    return results


def _score_of(result: Any, attr: str) -> int:
    if result is None or not result.ok:
        return 0
    return int(round_half_up(getattr(result.data, attr)))


class ApplicationScoringOrchestrator:

    def __init__(
        self,
        session_factory: sessionmaker,
        scoring: ScoringAdapter,
        tag_extractor: TagExtractor,
        github_fetcher: GitHubProfileFetcher,
        screening_service: ScreeningService,
        weights: Optional[Dict[str, float]] = None,
        max_workers: int = 4
    ):
        self.session_factory = session_factory
        self.scoring = scoring
        self.tag_extractor = tag_extractor
        self.github_fetcher = github_fetcher
        self.screening_service = screening_service
        self.weights = dict(weights or APPLICATION_WEIGHTS)
        self.max_workers = max_workers

    def score_application(self, application_id: Any) -> ScoringOutcome:
        """Score an application end to end. Never raises."""
        try:
            return self._score(application_id)
        except Exception as e:
            logger.exception(f"Scoring failed for application {application_id}: {e}")
            self._mark_failed(application_id)
            return ScoringOutcome(application_id=str(application_id), status='failed', error=str(e))

    def _mark_failed(self, application_id: Any) -> None:
        try:
            with unit_of_work(self.session_factory) as uow:
                application = uow.applications.get_by_id(application_id)
                if application is not None:
                    application.scoring_status = 'failed'
        except Exception as e:
            logger.error(f"Could not mark application {application_id} as failed: {e}")

    def _load(self, application_id: Any) -> Dict[str, Any]:
        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(application_id)
            if application is None:
                raise NotFoundError('Application', application_id)
            job = uow.jobs.get_by_id(application.job_id)
            if job is None:
                raise NotFoundError('Job', application.job_id)
            user = uow.users.get_by_id(application.user_id)
            if user is None:
                raise NotFoundError('User', application.user_id)

            return {
                'application_id': application.id,
                'user_id': user.id,
                'job': job,
                'resume_text': application.resume_text or user.resume_text or '',
                'github_url': user.github_url,
                'portfolio_url': user.portfolio_url,
                'linkedin_url': user.linkedin_url,
                'compensation_expectation': user.compensation_expectation,
            }

    def _score(self, application_id: Any) -> ScoringOutcome:
        ctx = self._load(application_id)
        job = ctx['job']
        resume_text = ctx['resume_text']

        logger.info(f"Scoring application {ctx['application_id']} for job {job.id} ({job.role})")

        # Phase 1
        phase1 = run_isolated({
            'tags': lambda: self.tag_extractor.extract(resume_text),
            'summary': lambda: self.scoring.summarize_resume(resume_text),
            'parsed': lambda: self.scoring.parse_resume(resume_text),
            'resume': lambda: self.scoring.score_resume(resume_text, job),
        }, self.max_workers, label=f"application {ctx['application_id']} phase 1")

        summary = phase1['summary'].data.summary if phase1['summary'] and phase1['summary'].ok else None
        parsed = phase1['parsed'].data if phase1['parsed'] and phase1['parsed'].ok else None

        # Phase 2
        github_url = ctx['github_url'] or (parsed.github_url if parsed else None)
        portfolio_url = ctx['portfolio_url'] or (parsed.portfolio_url if parsed else None)
        linkedin_url = ctx['linkedin_url'] or (parsed.linkedin_url if parsed else None)

        with unit_of_work(self.session_factory) as uow:
            user = uow.users.get_by_id(ctx['user_id'])
            if phase1['tags'] is not None:
                user.tags = list(phase1['tags'])
            if summary:
                user.resume_summary = summary
            if parsed is not None:
                user.parsed_resume = parsed.model_dump()
            user.github_url = github_url
            user.portfolio_url = portfolio_url
            user.linkedin_url = linkedin_url

        # Phase 3
        phase3_tasks: Dict[str, Callable[[], Any]] = {}
        if github_url or portfolio_url:
            phase3_tasks['profile'] = lambda: self._score_profile(github_url, portfolio_url, job)
        if linkedin_url:
            phase3_tasks['linkedin'] = lambda: self.scoring.summarize_linkedin(linkedin_url, summary)
        if ctx['compensation_expectation'] and job.budget_info:
            phase3_tasks['compensation'] = lambda: self.scoring.score_compensation(
                ctx['compensation_expectation'], job.budget_info
            )
        phase3 = run_isolated(phase3_tasks, self.max_workers, label=f"application {ctx['application_id']} phase 3")

        # Phase 4
        return self._persist_results(ctx, phase1['resume'], phase3)

    def _score_profile(self, github_url: Optional[str], portfolio_url: Optional[str], job: Any):
        github_data = None
        if github_url:
            github_data = self.github_fetcher.fetch(github_url)
            if 'error' in github_data:
                logger.info(f"No GitHub data for {github_url}: {github_data['error']}")
                github_data = None
        return self.scoring.score_profile(github_data, portfolio_url, job)

    def _persist_results(self, ctx: Dict[str, Any], resume, phase3: Dict[str, Any]) -> ScoringOutcome:
        profile = phase3.get('profile')
        compensation = phase3.get('compensation')
        linkedin = phase3.get('linkedin')

        if resume is not None and not resume.ok:
            logger.warning(f"Resume scoring failed for application {ctx['application_id']}: {resume.reason}")

        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(ctx['application_id'])
            job = uow.jobs.get_by_id(application.job_id)

            application.resume_score = _score_of(resume, 'match_score')
            application.github_portfolio_score = _score_of(profile, 'score')
            application.compensation_score = _score_of(compensation, 'score')

            if resume is not None:
                application.raw_resume_llm = resume.raw
                if resume.ok:
                    application.skills_matched = list(resume.data.skills_matched)
                    application.skills_missing = list(resume.data.skills_missing)
                    application.top_reasons = list(resume.data.top_reasons)
                    application.recommended_action = resume.data.recommended_action
            if profile is not None and profile.ok:
                application.github_portfolio_summary = profile.data.analysis
            if compensation is not None and compensation.ok:
                application.compensation_analysis = compensation.data.analysis
            if linkedin is not None and linkedin.ok:
                uow.users.get_by_id(ctx['user_id']).linkedin_summary = linkedin.data.summary

            application.recompute_unified_score(self.weights)
            application.scoring_status = 'scored'
            application.scored_at = datetime.now(timezone.utc)

            outcome = ScoringOutcome(
                application_id=str(application.id),
                status='scored',
                resume_score=application.resume_score,
                github_portfolio_score=application.github_portfolio_score,
                compensation_score=application.compensation_score,
                unified_score=application.unified_score,
            )

            threshold = job.get_setting('autoCreateScreeningThreshold')
            if application.unified_score >= threshold:
                try:
                    with uow.session.begin_nested():
                        screening, created = self.screening_service.ensure_screening(uow, application)
                    outcome.screening_id = str(screening.id)
                    outcome.screening_created = created
                except Exception as e:
                    logger.error(f"Auto-creating screening failed for application {application.id}: {e}")

        logger.info(
            f"Application {outcome.application_id} scored: unified={outcome.unified_score} "
            f"(resume={outcome.resume_score}, profile={outcome.github_portfolio_score}, "
            f"compensation={outcome.compensation_score})"
        )
        return outcome
