from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage

from profiler.core.config import settings
from profiler.core.errors import ServiceNotConfiguredError

logger = logging.getLogger(__name__)


def smtp_ready() -> bool:
    return bool(settings.smtp_host and (settings.smtp_from or settings.smtp_user))


def _smtp_password() -> str | None:
    if not settings.smtp_password:
        return None
    # Gmail app passwords are often copied with spaces every 4 chars.
    return settings.smtp_password.replace(" ", "")


def _smtp_login_if_needed(server: smtplib.SMTP) -> None:
    if settings.smtp_user and _smtp_password():
        server.login(settings.smtp_user, _smtp_password())


def _send(msg: EmailMessage) -> None:
    context = ssl.create_default_context()
    host = settings.smtp_host or ""
    if settings.smtp_use_tls:
        with smtplib.SMTP(host, settings.smtp_port, timeout=15) as server:
            server.starttls(context=context)
            _smtp_login_if_needed(server)
            server.send_message(msg)
        return

    with smtplib.SMTP_SSL(host, settings.smtp_port, context=context, timeout=15) as server:
        _smtp_login_if_needed(server)
        server.send_message(msg)


def share_report_via_email(
    *,
    recipient: str,
    subject: str,
    content: str,
    sender_name: str | None = None,
) -> None:
    if not smtp_ready():
        raise ServiceNotConfiguredError("Email sharing is not configured.")

    sender = settings.smtp_from or settings.smtp_user or ""
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = f"{sender_name} <{sender}>" if sender_name else sender
    msg["To"] = recipient

    intro = f"{sender_name} shared a report with you." if sender_name else "A report was shared with you."
    msg.set_content(f"{intro}\n\n{content}".strip())

    try:
        _send(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.exception(
            "Report email via SMTP failed (host=%s port=%s mode=%s): %s",
            settings.smtp_host,
            settings.smtp_port,
            "STARTTLS" if settings.smtp_use_tls else "SSL",
            exc,
        )
        raise ServiceNotConfiguredError("Email delivery failed.") from exc
