#!/usr/bin/env python3
"""
Application endpoints - candidate submissions and recruiter review.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from core.app_context import AppContext
from ..dependencies import get_context
from ..models.requests import ApplyRequest, ConsentRequest
from ..models.responses import (
    ApplicationDetail,
    ApplicationReceiptResponse,
    ApplicationResponse,
    ApplicationsListResponse,
    ApprovalResponse,
    ScreeningDetail,
)
from ..rate_limit import limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post("/{job_id}", response_model=ApplicationReceiptResponse, status_code=201)
@limiter.limit("30/minute")
def apply_to_job(request: Request, job_id: str, body: ApplyRequest, ctx: AppContext = Depends(get_context)):
    """
    Submit an application. Scoring runs in the background; the response
    carries no scores.
    """
    receipt = ctx.application_service.submit_application(job_id, body.model_dump())
    return ApplicationReceiptResponse(
        application_id=receipt.application_id,
        job_id=receipt.job_id,
        status=receipt.status
    )


@router.get("/job/{job_id}", response_model=ApplicationsListResponse)
def list_applications(
    job_id: str,
    status: Optional[str] = Query(default=None, description="approved or pending"),
    min_score: Optional[float] = Query(default=None, ge=0, le=100, description="Minimum unified score"),
    sort_by: str = Query(default="createdAt", description="score, createdAt or updatedAt"),
    sort_order: str = Query(default="desc", description="asc or desc"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=100, ge=1, le=500),
    ctx: AppContext = Depends(get_context)
):
    applications, total = ctx.application_service.list_applications(
        job_id,
        status=status,
        min_score=min_score,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit
    )
    return ApplicationsListResponse(
        total=total,
        page=page,
        limit=limit,
        applications=[ApplicationDetail.model_validate(a) for a in applications]
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(application_id: str, ctx: AppContext = Depends(get_context)):
    application = ctx.application_service.get_application(application_id)
    return ApplicationResponse(application=ApplicationDetail.model_validate(application))


@router.post("/{application_id}/consent", response_model=ApplicationResponse)
def record_consent(application_id: str, body: ConsentRequest, ctx: AppContext = Depends(get_context)):
    application = ctx.application_service.record_consent(application_id, body.consent_given)
    return ApplicationResponse(application=ApplicationDetail.model_validate(application))


@router.post("/{application_id}/approve-level1", response_model=ApprovalResponse)
def approve_level1(application_id: str, ctx: AppContext = Depends(get_context)):
    """Level-1 approval; may create a screening and send the invite email."""
    result = ctx.application_service.approve_application(application_id)
    return ApprovalResponse(
        application=ApplicationDetail.model_validate(result.application),
        screening=ScreeningDetail.model_validate(result.screening) if result.screening else None,
        email_sent=result.email_sent
    )


@router.post("/{application_id}/rescore", response_model=ApplicationResponse, status_code=202)
def rescore_application(application_id: str, ctx: AppContext = Depends(get_context)):
    application = ctx.application_service.rescore(application_id)
    return ApplicationResponse(application=ApplicationDetail.model_validate(application))
