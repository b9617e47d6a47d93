from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class ScreeningDTO:
    id: str
    application_id: str
    job_id: str
    screening_link: str
    screening_questions: List[Dict[str, Any]] = field(default_factory=list)
    video_url: Optional[str] = None
    transcript: Optional[str] = None
    scoring: Optional[Dict[str, Any]] = None
    invite_sent_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, screening: Any) -> 'ScreeningDTO':
        return cls(
            id=str(screening.id),
            application_id=str(screening.application_id),
            job_id=str(screening.job_id),
            screening_link=screening.screening_link,
            screening_questions=list(screening.screening_questions or []),
            video_url=screening.video_url,
            transcript=screening.transcript,
            scoring=screening.scoring,
            invite_sent_at=screening.invite_sent_at,
        )
