from .base import Base, JsonType
from .job import Job, DEFAULT_JOB_SETTINGS
from .user import User
from .application import Application
from .match import JobCandidateMatch, MATCH_STATUSES
from .screening import Screening

__all__ = [
    'Base',
    'JsonType',
    'Job',
    'DEFAULT_JOB_SETTINGS',
    'User',
    'Application',
    'JobCandidateMatch',
    'MATCH_STATUSES',
    'Screening',
]
