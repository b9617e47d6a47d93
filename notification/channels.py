#!/usr/bin/env python3
"""
Notification Channels - outbound candidate messaging.

Usage:
    from notification.channels import EmailChannel, EmailMessage

    channel = EmailChannel(smtp_host='smtp.example.com', from_address='jobs@example.com')
    result = channel.send(EmailMessage(to='jane@example.com', subject='Hi', text='...'))
    if not result.ok:
        logger.warning(result.error)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
import smtplib
import uuid
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import getaddresses, make_msgid

from core.utils import mask_email

logger = logging.getLogger(__name__)


@dataclass
class EmailMessage:
    to: str
    subject: str
    text: str = ''
    html: Optional[str] = None
    # Comma-separated address lists
    cc: Optional[str] = None
    bcc: Optional[str] = None
    reply_to: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def recipients(self) -> List[str]:
        """Every envelope recipient: To, then Cc, then Bcc."""
        extra = [addr for _, addr in getaddresses([self.cc or '', self.bcc or '']) if addr]
        return [self.to, *extra]


@dataclass(frozen=True)
class EmailResult:
    ok: bool
    id: Optional[str] = None
    error: Optional[str] = None


class NotificationChannel(ABC):
    """
    Abstract base class for outbound channels.

    ``send`` must never raise; delivery problems are reported in the result.
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, message: EmailMessage) -> EmailResult:
        pass

    def validate_config(self) -> bool:
        return True


class EmailChannel(NotificationChannel):
    """Email channel via SMTP. In dry-run mode messages are logged, not sent."""

    def __init__(
        self,
        smtp_host: str = 'localhost',
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        from_address: str = 'recruiting@talentscout.local',
        use_tls: bool = True,
        dry_run: bool = False
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.from_address = from_address
        self.use_tls = use_tls
        self.dry_run = dry_run

    @property
    def channel_type(self) -> str:
        return 'email'

    def validate_config(self) -> bool:
        return bool(self.smtp_host and self.smtp_port and self.from_address)

    def _build_mime(self, message: EmailMessage, message_id: str) -> MIMEMultipart:
        msg = MIMEMultipart('alternative')
        msg['From'] = self.from_address
        msg['To'] = message.to
        msg['Subject'] = message.subject
        msg['Message-ID'] = message_id
        if message.cc:
            msg['Cc'] = message.cc
        if message.reply_to:
            msg['Reply-To'] = message.reply_to
        for name, value in message.headers.items():
            msg[name] = value
        if message.text:
            msg.attach(MIMEText(message.text, 'plain', 'utf-8'))
        if message.html:
            msg.attach(MIMEText(message.html, 'html', 'utf-8'))
        return msg

    def send(self, message: EmailMessage) -> EmailResult:
        if not message.to or '@' not in message.to:
            return EmailResult(ok=False, error='Invalid recipient address')

        if self.dry_run:
            message_id = f"dry-run-{uuid.uuid4()}"
            logger.info(f"[DRY RUN] Email to {mask_email(message.to)}: {message.subject}")
            return EmailResult(ok=True, id=message_id)

        if not self.validate_config():
            logger.error("Email not configured - SMTP settings missing")
            return EmailResult(ok=False, error='SMTP not configured')

        message_id = make_msgid()
        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(self._build_mime(message, message_id), to_addrs=message.recipients())
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {mask_email(message.to)}: {e}")
            return EmailResult(ok=False, error=str(e))

        logger.info(f"Email sent to {mask_email(message.to)}")
        return EmailResult(ok=True, id=message_id)
