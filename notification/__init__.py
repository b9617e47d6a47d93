"""
Notification Module - outbound candidate messaging.

Usage:
    from notification import EmailChannel, EmailMessage

    channel = EmailChannel(dry_run=True)
    result = channel.send(EmailMessage(to='jane@example.com', subject='Subject', text='Body'))
"""

from notification.channels import (
    NotificationChannel,
    EmailChannel,
    EmailMessage,
    EmailResult,
)

__all__ = [
    'NotificationChannel',
    'EmailChannel',
    'EmailMessage',
    'EmailResult',
]
