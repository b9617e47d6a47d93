#!/usr/bin/env python3
"""
Match endpoints - recruiter outreach status.
"""

from fastapi import APIRouter, Depends

from core.app_context import AppContext
from ..dependencies import get_context
from ..models.requests import MatchStatusUpdate
from ..models.responses import MatchDetail, MatchResponse

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.patch("/{match_id}/status", response_model=MatchResponse)
def update_match_status(match_id: str, body: MatchStatusUpdate, ctx: AppContext = Depends(get_context)):
    match = ctx.matcher.update_match_status(match_id, body.status)
    return MatchResponse(match=MatchDetail.model_validate(match))
