import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from portfolio.core.mailer import MailRelay, build_relay
from portfolio.core.settings import Settings, get_settings
from portfolio.lib.contact import (
    ContactValidationError,
    MalformedRequestError,
    compose_notification,
    parse_submission,
    validate_submission,
)

router = APIRouter(prefix="/api", tags=["contact"])
log = logging.getLogger("uvicorn.error")

SENT_MESSAGE = "Your message has been sent successfully!"
RECEIVED_MESSAGE = "Your message has been received!"
MALFORMED_MESSAGE = "Invalid request body"
INTERNAL_ERROR_MESSAGE = "An error occurred while processing your request"


@dataclass(frozen=True)
class ContactResult:
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, message: str) -> "ContactResult":
        return cls(200, {"success": True, "message": message})

    @classmethod
    def client_error(cls, message: str) -> "ContactResult":
        return cls(400, {"error": message})

    @classmethod
    def internal_error(cls) -> "ContactResult":
        return cls(500, {"error": INTERNAL_ERROR_MESSAGE})

    def to_response(self) -> JSONResponse:
        return JSONResponse(self.body, status_code=self.status_code)


def get_mail_relay(settings: Settings = Depends(get_settings)) -> Optional[MailRelay]:
    return build_relay(settings)


async def handle_submission(
    payload: Any,
    settings: Settings,
    relay: Optional[MailRelay],
) -> ContactResult:
    try:
        submission = parse_submission(payload)
    except MalformedRequestError as exc:
        log.info(f"[contact] malformed submission: {exc}")
        return ContactResult.client_error(MALFORMED_MESSAGE)

    # Bots get the same answer as everyone else
    if submission.is_spam:
        log.info("[contact] honeypot filled; submission dropped")
        return ContactResult.success(SENT_MESSAGE)

    try:
        validate_submission(submission)
    except ContactValidationError as exc:
        return ContactResult.client_error(exc.message)

    log.info(f"[contact] submission from {submission.name} <{submission.email}>")

    if relay is None:
        log.info("[contact] email not sent: no EMAIL_PASS configured")
        return ContactResult.success(SENT_MESSAGE)

    message = compose_notification(
        submission,
        sender=settings.email_user,
        recipient=settings.notification_recipient,
        from_name=settings.mail_from_name,
    )
    try:
        await run_in_threadpool(relay.send, message)
    except Exception:
        # The submission itself was fine; the sender can't do anything about the relay.
        log.exception("[contact] error sending email")
        return ContactResult.success(RECEIVED_MESSAGE)

    return ContactResult.success(SENT_MESSAGE)


@router.post("/contact")
async def contact(
    request: Request,
    settings: Settings = Depends(get_settings),
    relay: Optional[MailRelay] = Depends(get_mail_relay),
):
    try:
        try:
            payload = await request.json()
        except ValueError:
            log.info("[contact] request body is not valid JSON")
            return ContactResult.client_error(MALFORMED_MESSAGE).to_response()
        result = await handle_submission(payload, settings, relay)
    except Exception:
        log.exception("[contact] error processing contact form")
        result = ContactResult.internal_error()
    return result.to_response()
