import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from core.errors import PersistenceConflict
from database.models import Screening
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)


class ScreeningRepository(BaseRepository):
    model = Screening

    def get_by_application(self, application_id: Any) -> Optional[Screening]:
        stmt = select(Screening).where(Screening.application_id == as_uuid(application_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_link(self, screening_link: str) -> Optional[Screening]:
        stmt = select(Screening).where(Screening.screening_link == screening_link)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_screening(
        self,
        application_id: Any,
        job_id: Any,
        screening_link: str,
        screening_questions: Optional[List[dict]] = None
    ) -> Tuple[Screening, bool]:
        """
        Insert the application's Screening, or return the one another writer
        already stored.

        Returns:
            (screening, created)
        """
        screening = Screening(
            application_id=as_uuid(application_id),
            job_id=as_uuid(job_id),
            screening_link=screening_link,
            screening_questions=list(screening_questions or []),
        )
        try:
            with self.db.begin_nested():
                self.db.add(screening)
                self.db.flush()
            return screening, True
        except IntegrityError:
            existing = self.get_by_application(application_id)
            if existing is None:
                raise PersistenceConflict(f"Screening insert rejected for application={application_id}")
            logger.info(f"Screening for application={application_id} already exists; reusing it")
            return existing, False
