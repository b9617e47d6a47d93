#!/usr/bin/env python3
"""
User endpoints - candidate profile.
"""

from fastapi import APIRouter, Depends

from core.app_context import AppContext
from ..dependencies import get_context
from ..models.requests import UserUpdate
from ..models.responses import UserDetail, UserResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, ctx: AppContext = Depends(get_context)):
    return UserResponse(user=UserDetail.model_validate(ctx.user_service.get_user(user_id)))


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, body: UserUpdate, ctx: AppContext = Depends(get_context)):
    user = ctx.user_service.update_user(user_id, body.model_dump(exclude_unset=True))
    return UserResponse(user=UserDetail.model_validate(user))
