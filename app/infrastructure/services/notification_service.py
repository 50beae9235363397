"""Email notifiers: log-only fallback and SMTP sender.

build_notification_service() picks SMTP when smtp_host is configured and the
log-only sender otherwise, so an unconfigured deployment never fails to "send".
"""

from __future__ import annotations

import asyncio
import re
import smtplib
from email.mime.text import MIMEText
from urllib.parse import urlsplit

from app.core.config import Settings
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


# Absolute links in a message body, and the token query value inside one.
_LINK_RE = re.compile(r"https?://\S+")
_TOKEN_PARAM_RE = re.compile(r"(?<=[?&]token=)[^&\s#]+")


def redact_link(link: str) -> str:
    """Path and query of link with any token value replaced by <redacted>."""
    parts = urlsplit(link)
    query = _TOKEN_PARAM_RE.sub("<redacted>", f"?{parts.query}")[1:] if parts.query else ""
    return parts.path + (f"?{query}" if query else "")


class LogOnlyNotificationService:
    """INotificationService implementation that logs instead of sending email.

    Used when no SMTP server is configured. Logs who would receive the
    message and which portal pages it links to. Token values never reach the
    log, so a log reader cannot redeem a password link.
    """

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        recipients = list(to_emails or [])
        subject_preview = (subject or "")[:80]
        if not recipients:
            logger.info(
                "Email: no recipients, skipping send (subject=%r)",
                subject_preview,
            )
            return
        links = [redact_link(link) for link in _LINK_RE.findall(body or "")]
        logger.info(
            "Email disabled: would send to %d recipients (subject=%r, links=%s)",
            len(recipients),
            subject_preview,
            ", ".join(links) or "none",
        )


class SmtpNotificationService:
    """INotificationService that delivers plain-text email over SMTP.

    smtplib is blocking, so each send runs in a worker thread. SMTP errors
    propagate to the caller.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: int = 10,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def _build_message(self, to_emails: list[str], subject: str, body: str) -> MIMEText:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self._sender
        msg["To"] = ", ".join(to_emails)
        return msg

    def _send_sync(self, to_emails: list[str], subject: str, body: str) -> None:
        msg = self._build_message(to_emails, subject, body)
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._use_tls:
                smtp.starttls()
            if self._username and self._password:
                smtp.login(self._username, self._password)
            smtp.sendmail(self._sender, to_emails, msg.as_string())

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        recipients = list(to_emails or [])
        if not recipients:
            return
        await asyncio.to_thread(self._send_sync, recipients, subject, body)
        logger.info(
            "Email sent via %s:%s to %d recipients (subject=%r)",
            self._host,
            self._port,
            len(recipients),
            subject[:80],
        )


def build_notification_service(
    settings: Settings,
) -> LogOnlyNotificationService | SmtpNotificationService:
    """Return the SMTP notifier when smtp_host is set, else the log-only notifier."""
    if not settings.smtp_host:
        logger.info("SMTP not configured; emails will be logged only")
        return LogOnlyNotificationService()
    return SmtpNotificationService(
        host=settings.smtp_host,
        port=settings.smtp_port,
        sender=settings.smtp_from,
        username=settings.smtp_username,
        password=(
            settings.smtp_password.get_secret_value() if settings.smtp_password else None
        ),
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout_seconds,
    )
