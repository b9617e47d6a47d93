from database.repositories.base import BaseRepository, as_uuid
from database.repositories.job import JobRepository
from database.repositories.user import UserRepository
from database.repositories.application import ApplicationRepository
from database.repositories.match import MatchRepository
from database.repositories.screening import ScreeningRepository

__all__ = [
    'BaseRepository',
    'as_uuid',
    'JobRepository',
    'UserRepository',
    'ApplicationRepository',
    'MatchRepository',
    'ScreeningRepository',
]
