#!/usr/bin/env python3
"""
Screening endpoints - questions, video upload and scoring.
"""

import logging

from fastapi import APIRouter, Depends, Request

from core.app_context import AppContext
from ..dependencies import get_context
from ..models.requests import ProcessScreeningRequest, VideoUploadRequest
from ..models.responses import ScreeningDetail, ScreeningQuestionsResponse, ScreeningResponse
from ..rate_limit import limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/screenings", tags=["screenings"])


@router.get("/{screening_id}/questions", response_model=ScreeningQuestionsResponse)
def get_questions(screening_id: str, ctx: AppContext = Depends(get_context)):
    """Questions are generated on first request and reused afterwards."""
    return ScreeningQuestionsResponse(**ctx.screening_service.get_questions(screening_id))


@router.post("/{screening_id}/upload-video", response_model=ScreeningResponse)
def upload_video(screening_id: str, body: VideoUploadRequest, ctx: AppContext = Depends(get_context)):
    questions = [q.model_dump() for q in body.questions] if body.questions else None
    screening = ctx.screening_service.upload_video(screening_id, body.videoUrl, questions)
    return ScreeningResponse(screening=ScreeningDetail.model_validate(screening))


@router.post("/{screening_id}/process", response_model=ScreeningResponse)
@limiter.limit("10/minute")
def process_screening(
    request: Request,
    screening_id: str,
    body: ProcessScreeningRequest,
    ctx: AppContext = Depends(get_context)
):
    """Score the uploaded video from its transcript."""
    screening = ctx.screening_service.process(screening_id, body.transcript)
    return ScreeningResponse(screening=ScreeningDetail.model_validate(screening))
