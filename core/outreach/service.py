#!/usr/bin/env python3
"""
Outreach Service - recruiter-composed email to candidates.

Recipients are given as addresses or resolved from candidate records by
user id. Delivery goes through the configured NotificationChannel; bulk
sends fan out on a thread pool and report per-run success counts.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import sessionmaker

from core.errors import AdapterError, NotFoundError, ValidationError
from core.utils import is_valid_email, mask_email
from database.uow import unit_of_work
from notification.channels import EmailMessage, EmailResult, NotificationChannel

logger = logging.getLogger(__name__)


@dataclass
class SendReceipt:
    message_id: Optional[str]
    to: str
    subject: str
    sent_at: datetime


@dataclass
class BulkSendReport:
    total_recipients: int
    successful: int
    failed: int
    recipients: List[str] = field(default_factory=list)
    sent_at: Optional[datetime] = None


def _clean(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _require_content(subject: Any, html: Any, text: Any) -> str:
    subject = _clean(subject)
    if subject is None:
        raise ValidationError('subject is required and must be a non-empty string')
    if _clean(html) is None and _clean(text) is None:
        raise ValidationError('Either "html" or "text" email body is required')
    return subject


class OutreachService:

    def __init__(self, session_factory: sessionmaker, email_channel: NotificationChannel, max_workers: int = 4):
        self.session_factory = session_factory
        self.email_channel = email_channel
        self.max_workers = max(1, max_workers)

    def _email_for_user(self, user_id: Any) -> str:
        with unit_of_work(self.session_factory) as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError('User', user_id)
            if not user.email:
                raise ValidationError('User does not have an email address')
            return user.email

    def send(
        self,
        subject: Any,
        to: Any = None,
        user_id: Any = None,
        html: Any = None,
        text: Any = None,
        cc: Optional[str] = None,
        bcc: Optional[str] = None,
        reply_to: Optional[str] = None
    ) -> SendReceipt:
        """
        Send one email. ``to`` wins over ``user_id`` when both are given.

        Raises:
            ValidationError: missing subject, body or recipient, or a malformed address
            NotFoundError: ``user_id`` does not exist
            AdapterError: the channel could not deliver the message
        """
        subject = _require_content(subject, html, text)

        recipient = _clean(to)
        if recipient is None and user_id:
            recipient = self._email_for_user(user_id)
            logger.info(f"Using email from candidate record {user_id}: {mask_email(recipient)}")
        if recipient is None:
            raise ValidationError('to (recipient email) is required. Provide either "to" or "userId"')
        if not is_valid_email(recipient):
            raise ValidationError('Invalid email format for recipient')

        result = self.email_channel.send(EmailMessage(
            to=recipient.strip(),
            subject=subject,
            text=_clean(text) or '',
            html=_clean(html),
            cc=_clean(cc),
            bcc=_clean(bcc),
            reply_to=_clean(reply_to),
        ))
        if not result.ok:
            raise AdapterError(f"Failed to send email: {result.error}")

        return SendReceipt(
            message_id=result.id,
            to=recipient.strip(),
            subject=subject,
            sent_at=datetime.now(timezone.utc),
        )

    def _collect_recipients(self, recipients: Iterable[Any], user_ids: Iterable[Any]) -> List[str]:
        addresses = [r for r in recipients if isinstance(r, str)]
        user_ids = list(user_ids)
        if user_ids:
            with unit_of_work(self.session_factory) as uow:
                found = [u.email for u in uow.users.get_by_ids(user_ids) if u.email]
            logger.info(f"Resolved {len(found)} of {len(user_ids)} candidate emails")
            addresses.extend(found)

        unique: List[str] = []
        for address in addresses:
            normalized = address.strip().lower()
            if normalized and normalized not in unique:
                unique.append(normalized)
        return unique

    def send_bulk(
        self,
        subject: Any,
        recipients: Optional[Iterable[Any]] = None,
        user_ids: Optional[Iterable[Any]] = None,
        html: Any = None,
        text: Any = None
    ) -> BulkSendReport:
        """
        Send the same email to every address and candidate given.

        Addresses are lower-cased and deduplicated; malformed ones are
        dropped. Individual delivery failures are counted, never raised.
        """
        subject = _require_content(subject, html, text)

        addresses = self._collect_recipients(recipients or [], user_ids or [])
        if not addresses:
            raise ValidationError(
                'No valid recipient emails found. Provide either "recipients" or "userIds"'
            )
        valid = [a for a in addresses if is_valid_email(a)]
        if not valid:
            raise ValidationError('No valid email addresses found')

        def deliver(address: str) -> EmailResult:
            return self.email_channel.send(EmailMessage(
                to=address, subject=subject, text=_clean(text) or '', html=_clean(html)
            ))

        successful = 0
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(valid))) as pool:
            futures = [pool.submit(deliver, address) for address in valid]
            for address, future in zip(valid, futures):
                try:
                    ok = future.result().ok
                except Exception as e:
                    logger.error(f"Bulk email to {mask_email(address)} raised: {e}")
                    ok = False
                if ok:
                    successful += 1

        failed = len(valid) - successful
        logger.info(f"Bulk email '{subject}': {successful} successful, {failed} failed")
        return BulkSendReport(
            total_recipients=len(valid),
            successful=successful,
            failed=failed,
            recipients=valid,
            sent_at=datetime.now(timezone.utc),
        )
