import contextlib
import logging

from sqlalchemy.orm import Session, sessionmaker

from database.repositories import (
    ApplicationRepository,
    JobRepository,
    MatchRepository,
    ScreeningRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Repositories sharing one Session, and so one transaction."""

    def __init__(self, session: Session):
        self.session = session
        self.jobs = JobRepository(session)
        self.users = UserRepository(session)
        self.applications = ApplicationRepository(session)
        self.matches = MatchRepository(session)
        self.screenings = ScreeningRepository(session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


@contextlib.contextmanager
def unit_of_work(session_factory: sessionmaker):
    """Per-unit-of-work transaction scope.

    Yields a UnitOfWork bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with unit_of_work(session_factory) as uow:
            job = uow.jobs.get_by_id(job_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        uow = UnitOfWork(session)
        yield uow
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
