from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from core.applications.orchestrator import ApplicationScoringOrchestrator
from core.applications.service import ApplicationService
from core.config_loader import AppConfig, LlmConfig
from core.jobs.service import JobService
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService
from core.matcher.service import CandidateMatcher
from core.outreach.service import OutreachService
from core.profiles.github import GitHubProfileFetcher
from core.scoring.adapter import ScoringAdapter
from core.screening.service import ScreeningService
from core.tags.extractor import TagEmbeddingCache, TagExtractor
from core.users.service import UserService
from database.database import create_db_engine, create_session_factory
from notification.channels import EmailChannel, NotificationChannel
from pipeline.tasks import BackgroundTaskQueue


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    A single source of truth for service instantiation. Services receive
    the session factory and open their own units of work.
    """
    config: AppConfig
    session_factory: sessionmaker
    llm: LLMProvider
    scoring: ScoringAdapter
    tag_extractor: TagExtractor
    github_fetcher: GitHubProfileFetcher
    email_channel: NotificationChannel
    task_queue: BackgroundTaskQueue
    screening_service: ScreeningService
    matcher: CandidateMatcher
    orchestrator: ApplicationScoringOrchestrator
    application_service: ApplicationService
    job_service: JobService
    user_service: UserService
    outreach_service: OutreachService

    @classmethod
    def build(
        cls,
        config: AppConfig,
        session_factory: Optional[sessionmaker] = None,
        llm: Optional[LLMProvider] = None,
        github_fetcher: Optional[GitHubProfileFetcher] = None,
        email_channel: Optional[NotificationChannel] = None,
        task_queue: Optional[BackgroundTaskQueue] = None,
        in_worker: bool = False
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            session_factory: Existing session factory (tests); built from
                config.database otherwise
            llm, github_fetcher, email_channel, task_queue: Overrides for
                the external adapters
            in_worker: Running inside a task worker; nested background work
                runs inline instead of being queued again

        Returns:
            Fully wired AppContext instance
        """
        if session_factory is None:
            engine = create_db_engine(config.database.url, echo=config.database.echo)
            session_factory = create_session_factory(engine)

        llm = llm or cls._build_ai_service(config.llm)
        scoring = ScoringAdapter(llm)
        tag_extractor = TagExtractor(
            llm,
            cache=TagEmbeddingCache(),
            top_k=config.tags.top_k,
            min_similarity=config.tags.min_similarity,
            max_job_tags=config.tags.max_job_tags
        )
        github_fetcher = github_fetcher or GitHubProfileFetcher(
            api_url=config.github.api_url,
            token=config.github.token,
            timeout_seconds=config.github.timeout_seconds,
            max_repos=config.github.max_repos
        )
        email_channel = email_channel or cls._build_email_channel(config)
        task_queue = task_queue or BackgroundTaskQueue(
            redis_url=config.queue.redis_url,
            use_async_queue=config.queue.use_async_queue,
            name=config.queue.name,
            run_inline=config.queue.run_inline or in_worker
        )

        screening_service = ScreeningService(session_factory, scoring, config.screening.link_base_url)
        matcher = CandidateMatcher(
            session_factory,
            scoring,
            tag_weight=config.matching.tag_weight,
            skills_weight=config.matching.skills_weight,
            max_workers=config.matching.max_workers
        )
        orchestrator = ApplicationScoringOrchestrator(
            session_factory,
            scoring,
            tag_extractor,
            github_fetcher,
            screening_service,
            weights=config.scoring.application_weights,
            max_workers=config.scoring.max_workers
        )
        application_service = ApplicationService(
            session_factory,
            scoring,
            orchestrator,
            screening_service,
            email_channel,
            task_queue
        )
        job_service = JobService(
            session_factory,
            scoring,
            tag_extractor,
            matcher,
            task_queue,
            auto_match=config.matching.auto_match_on_job_create
        )

        return cls(
            config=config,
            session_factory=session_factory,
            llm=llm,
            scoring=scoring,
            tag_extractor=tag_extractor,
            github_fetcher=github_fetcher,
            email_channel=email_channel,
            task_queue=task_queue,
            screening_service=screening_service,
            matcher=matcher,
            orchestrator=orchestrator,
            application_service=application_service,
            job_service=job_service,
            user_service=UserService(session_factory),
            outreach_service=OutreachService(session_factory, email_channel)
        )

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        model_config = {
            'model': llm_config.model,
            'embedding_model': llm_config.embedding_model,
            'embedding_dimensions': llm_config.embedding_dimensions,
            'temperature': llm_config.temperature,
        }
        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config,
            max_retries=llm_config.max_retries
        )

    @staticmethod
    def _build_email_channel(config: AppConfig) -> EmailChannel:
        email = config.email
        return EmailChannel(
            smtp_host=email.smtp_host,
            smtp_port=email.smtp_port,
            smtp_user=email.smtp_user,
            smtp_password=email.smtp_password,
            from_address=email.from_address,
            use_tls=email.use_tls,
            dry_run=email.dry_run
        )
