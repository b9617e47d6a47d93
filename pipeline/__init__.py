"""Background task execution for TalentScout."""

from .tasks import BackgroundTaskQueue, match_job_task, score_application_task

__all__ = ['BackgroundTaskQueue', 'match_job_task', 'score_application_task']
