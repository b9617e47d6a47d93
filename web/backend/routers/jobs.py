#!/usr/bin/env python3
"""
Job endpoints - create jobs, tune settings, run and list candidate matches.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.app_context import AppContext
from ..dependencies import get_context
from ..models.requests import JobCreateRequest, JobSettingsUpdate
from ..models.responses import (
    JobDetail,
    JobResponse,
    MatchDetail,
    MatchesResponse,
    MatchRunResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.post("", response_model=JobResponse, status_code=201)
def create_job(body: JobCreateRequest, ctx: AppContext = Depends(get_context)):
    """
    Create a job: enhance the description, extract tags and finalize.

    Candidate matching for the new job starts in the background.
    """
    job = ctx.job_service.create_job(body.model_dump())
    return JobResponse(job=JobDetail.model_validate(job))


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, ctx: AppContext = Depends(get_context)):
    return JobResponse(job=JobDetail.model_validate(ctx.job_service.get_job(job_id)))


@router.patch("/{job_id}/settings", response_model=JobResponse)
def update_job_settings(job_id: str, body: JobSettingsUpdate, ctx: AppContext = Depends(get_context)):
    job = ctx.job_service.update_settings(job_id, body.model_dump(exclude_none=True))
    return JobResponse(job=JobDetail.model_validate(job))


@router.post("/{job_id}/match-candidates", response_model=MatchRunResponse)
def match_candidates(job_id: str, ctx: AppContext = Depends(get_context)):
    """Match the job against all eligible candidates now."""
    result = ctx.job_service.match_candidates(job_id)
    return MatchRunResponse(
        total_candidates=result.total_candidates,
        matched_candidates=result.matched_candidates,
        matches=[MatchDetail.model_validate(m) for m in result.matches]
    )


@router.get("/{job_id}/matches", response_model=MatchesResponse)
def get_job_matches(
    job_id: str,
    min_score: float = Query(default=0, ge=0, le=100, description="Minimum match score"),
    limit: int = Query(default=50, ge=1, le=500, description="Maximum results to return"),
    status: Optional[str] = Query(default=None, description="Filter by match status"),
    ctx: AppContext = Depends(get_context)
):
    """Matches for a job, highest score first."""
    matches = ctx.matcher.get_job_matches(job_id, min_score=min_score, limit=limit, status=status)
    return MatchesResponse(count=len(matches), matches=[MatchDetail.model_validate(m) for m in matches])
