# portfolio/core/mailer.py
import logging
import smtplib
from email.message import Message
from typing import Optional, Protocol

from portfolio.core.settings import Settings

log = logging.getLogger("uvicorn.error")


class DeliveryError(Exception):
    """The message did not go out: connecting, logging in or sending failed."""


class MailRelay(Protocol):
    def send(self, message: Message) -> None: ...


class SmtpMailRelay:
    """SMTP over SSL, one connection per message."""

    def __init__(self, host: str, port: int, username: str, password: str, timeout: float = 10.0):
        self.host = host
        self.port = port
        self.username = username
        self._password = password
        self.timeout = timeout

    def send(self, message: Message) -> None:
        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.login(self.username, self._password)
                smtp.send_message(message)
        except Exception as exc:
            raise DeliveryError(f"{self.host}:{self.port}: {exc}") from exc
        log.info(f"[mailer] sent {message['Subject']!r} to {message['To']}")


def build_relay(settings: Settings) -> Optional[MailRelay]:
    if not settings.delivery_enabled:
        return None
    if not settings.email_user:
        log.warning("[mailer] EMAIL_PASS is set but EMAIL_USER is not; delivery is disabled.")
        return None
    return SmtpMailRelay(
        settings.smtp_host,
        settings.smtp_port,
        settings.email_user,
        settings.email_pass,
        timeout=settings.smtp_timeout,
    )
