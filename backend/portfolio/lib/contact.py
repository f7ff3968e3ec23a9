import html
import re
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS_MESSAGE = "Name, email, and message are required"
INVALID_EMAIL_MESSAGE = "Please provide a valid email address"
PHONE_PLACEHOLDER = "Not provided"


class MalformedRequestError(Exception):
    pass


class ContactValidationError(Exception):
    """A problem the sender can fix; the message is shown to them as-is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Submission(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    honeypot: Optional[str] = None

    @property
    def is_spam(self) -> bool:
        return bool(self.honeypot)


def parse_submission(payload: Any) -> Submission:
    try:
        return Submission.model_validate(payload)
    except ValidationError as exc:
        raise MalformedRequestError(str(exc)) from exc


def _filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_submission(submission: Submission) -> None:
    """
    Raise ContactValidationError for the first problem found.
    Callers should run the spam check first: a bot filling the honeypot
    must never learn which of its other fields were wrong.
    """
    if not all(_filled(v) for v in (submission.name, submission.email, submission.message)):
        raise ContactValidationError(REQUIRED_FIELDS_MESSAGE)
    if not is_valid_email(submission.email):
        raise ContactValidationError(INVALID_EMAIL_MESSAGE)


def _single_line(value: str) -> str:
    return " ".join(value.split())


def render_text_body(submission: Submission) -> str:
    return (
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Phone: {submission.phone or PHONE_PLACEHOLDER}\n"
        f"\n"
        f"Message:\n{submission.message}"
    )


def render_html_body(submission: Submission) -> str:
    name = html.escape(submission.name or "")
    email = html.escape(submission.email or "")
    phone = html.escape(submission.phone or PHONE_PLACEHOLDER)
    message = html.escape(submission.message or "").replace("\r\n", "\n").replace("\n", "<br>")
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #333;">New Contact Form Submission</h2>
  <p><strong>Name:</strong> {name}</p>
  <p><strong>Email:</strong> {email}</p>
  <p><strong>Phone:</strong> {phone}</p>
  <p><strong>Message:</strong></p>
  <div style="background-color: #f5f5f5; padding: 15px; border-radius: 5px;">
    {message}
  </div>
  <p style="color: #777; font-size: 12px; margin-top: 20px;">
    This email was sent from your portfolio website contact form.
  </p>
</div>
"""


def compose_notification(
    submission: Submission,
    *,
    sender: str,
    recipient: str,
    from_name: str = "Portfolio Contact Form",
) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = f"New Contact Form Submission from {_single_line(submission.name or '')}"
    msg["From"] = formataddr((from_name, sender))
    msg["To"] = recipient
    msg["Reply-To"] = _single_line(submission.email or "")
    msg.attach(MIMEText(render_text_body(submission), "plain", "utf-8"))
    msg.attach(MIMEText(render_html_body(submission), "html", "utf-8"))
    return msg
