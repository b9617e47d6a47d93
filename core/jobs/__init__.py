from core.jobs.dto import JobDTO
from core.jobs.service import JobService, validate_settings

__all__ = ['JobDTO', 'JobService', 'validate_settings']
