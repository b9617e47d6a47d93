#!/usr/bin/env python3
"""
Email endpoints - recruiter outreach to candidates.
"""

from fastapi import APIRouter, Depends, Request

from core.app_context import AppContext
from ..dependencies import get_context
from ..models.requests import BulkEmailRequest, EmailSendRequest
from ..models.responses import BulkEmailResponse, EmailSendResponse
from ..rate_limit import limiter

router = APIRouter(prefix="/api/email", tags=["email"])


@router.post("/send", response_model=EmailSendResponse)
@limiter.limit("30/minute")
def send_email(request: Request, body: EmailSendRequest, ctx: AppContext = Depends(get_context)):
    receipt = ctx.outreach_service.send(
        subject=body.subject,
        to=body.to,
        user_id=body.userId,
        html=body.html,
        text=body.text,
        cc=body.cc,
        bcc=body.bcc,
        reply_to=body.replyTo,
    )
    return EmailSendResponse(
        messageId=receipt.message_id,
        to=receipt.to,
        subject=receipt.subject,
        sentAt=receipt.sent_at,
    )


@router.post("/send-bulk", response_model=BulkEmailResponse)
@limiter.limit("10/minute")
def send_bulk_email(request: Request, body: BulkEmailRequest, ctx: AppContext = Depends(get_context)):
    report = ctx.outreach_service.send_bulk(
        subject=body.subject,
        recipients=body.recipients,
        user_ids=body.userIds,
        html=body.html,
        text=body.text,
    )
    return BulkEmailResponse(
        message=f"Email sending completed: {report.successful} successful, {report.failed} failed",
        totalRecipients=report.total_recipients,
        successful=report.successful,
        failed=report.failed,
        recipients=report.recipients,
        sentAt=report.sent_at,
    )
