from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class JobDTO:
    id: str
    company_name: str
    role: str
    raw_jd: str
    status: str
    enhanced_jd: Optional[str] = None
    seniority: Optional[str] = None
    location: Optional[str] = None
    budget_info: Optional[str] = None
    must_have_skills: List[str] = field(default_factory=list)
    nice_to_have: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    apply_form_fields: List[Dict[str, Any]] = field(default_factory=list)
    screening_questions: List[Dict[str, Any]] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, job: Any) -> 'JobDTO':
        return cls(
            id=str(job.id),
            company_name=job.company_name,
            role=job.role,
            raw_jd=job.raw_jd,
            status=job.status,
            enhanced_jd=job.enhanced_jd,
            seniority=job.seniority,
            location=job.location,
            budget_info=job.budget_info,
            must_have_skills=list(job.must_have_skills or []),
            nice_to_have=list(job.nice_to_have or []),
            tags=list(job.tags or []),
            apply_form_fields=list(job.apply_form_fields or []),
            screening_questions=list(job.screening_questions or []),
            settings=dict(job.settings or {}),
            created_at=job.created_at,
        )
