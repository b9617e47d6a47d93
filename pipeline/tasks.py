#!/usr/bin/env python3
"""
Background task queue for scoring and matching.

Tasks go to a Redis Queue (RQ) when async mode is enabled and Redis answers
a ping; otherwise they run on an in-process daemon thread. Tasks carry no
retry policy and no cancellation handle: callers poll the Application or
the job's matches for the outcome.

Usage:
    queue = BackgroundTaskQueue(redis_url='redis://localhost:6379/0')
    queue.enqueue(score_application_task, application_id,
                  local_func=orchestrator.score_application)
"""

import logging
import threading
from typing import Any, Callable, Optional

from redis import Redis
from rq import Queue

logger = logging.getLogger(__name__)

_worker_context = None
_worker_context_lock = threading.Lock()


class BackgroundTaskQueue:
    """
    Dispatches background work to RQ, a daemon thread, or inline.

    ``run_inline`` executes tasks synchronously in the caller's thread
    (CLI and tests).
    """

    def __init__(
        self,
        redis_url: str = 'redis://localhost:6379/0',
        use_async_queue: bool = True,
        name: str = 'talentscout',
        run_inline: bool = False,
        job_timeout: str = '15m'
    ):
        self.redis_url = redis_url
        self.name = name
        self.run_inline = run_inline
        self.job_timeout = job_timeout
        self.redis_conn = None
        self.queue = None
        self.async_mode = False

        if run_inline:
            logger.info("Background tasks run inline.")
        elif not use_async_queue:
            logger.info("Async queue disabled via config. Using background threads.")
        else:
            try:
                self.redis_conn = Redis.from_url(redis_url)
                self.redis_conn.ping()
                self.queue = Queue(name, connection=self.redis_conn)
                self.async_mode = True
                logger.info(f"Task queue '{name}' connected to Redis")
            except Exception as e:
                logger.error(f"Redis connection failed: {e}. Falling back to background threads.")
                self.redis_conn = None
                self.queue = None

    @property
    def mode(self) -> str:
        if self.async_mode:
            return 'rq'
        return 'inline' if self.run_inline else 'thread'

    def enqueue(self, func: Callable, *args: Any, local_func: Optional[Callable] = None) -> Optional[str]:
        """
        Schedule ``func(*args)``.

        ``func`` must be importable by an RQ worker. ``local_func`` is the
        in-process equivalent used when no queue is available; it defaults
        to ``func``.

        Returns:
            RQ job id when queued, None otherwise
        """
        if self.async_mode:
            job = self.queue.enqueue(func, *args, job_timeout=self.job_timeout, result_ttl=86400)
            logger.info(f"Queued {func.__name__} as job {job.id}")
            return job.id

        target = local_func or func
        if self.run_inline:
            target(*args)
            return None

        thread = threading.Thread(
            target=self._run_safely,
            args=(target, args),
            name=f"task-{func.__name__}",
            daemon=True
        )
        thread.start()
        return None

    @staticmethod
    def _run_safely(target: Callable, args: tuple) -> None:
        try:
            target(*args)
        except Exception as e:
            logger.exception(f"Background task {getattr(target, '__name__', target)} failed: {e}")

    def health(self) -> dict:
        connected = False
        if self.redis_conn is not None:
            try:
                connected = bool(self.redis_conn.ping())
            except Exception:
                connected = False
        return {'mode': self.mode, 'queue': self.name, 'redis_connected': connected}


def warm_worker_context(config=None):
    """
    Build the worker's AppContext now instead of on the first task.

    ``config`` defaults to config.yaml plus environment overrides.
    """
    global _worker_context
    with _worker_context_lock:
        if _worker_context is None:
            from core.app_context import AppContext
            from core.config_loader import load_config

            _worker_context = AppContext.build(config or load_config(), in_worker=True)
            logger.info("Worker context ready")
        return _worker_context


def _get_worker_context():
    """AppContext for tasks executed by an RQ worker, built once per process."""
    return warm_worker_context()


def score_application_task(application_id: str) -> dict:
    """Score one application (called by RQ worker)."""
    context = _get_worker_context()
    return context.orchestrator.score_application(application_id).to_dict()


def match_job_task(job_id: str) -> dict:
    """Match one job against the candidate pool (called by RQ worker)."""
    context = _get_worker_context()
    return context.matcher.match_job_to_candidates(job_id).to_dict()
