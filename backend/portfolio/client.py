"""
Python counterpart of the portfolio page's contact form.

Holds the field values, runs the same checks the browser form does,
and posts one submission at a time to /api/contact.
"""
import argparse
import asyncio
import enum
import logging
import sys
from dataclasses import dataclass, fields
from typing import Optional

import httpx

from portfolio.lib.contact import INVALID_EMAIL_MESSAGE, REQUIRED_FIELDS_MESSAGE, is_valid_email

log = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again later."


class FormStatus(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class ContactFields:
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""
    # hidden from people, so only bots ever fill it
    honeypot: str = ""

    def clear(self) -> None:
        for f in fields(self):
            setattr(self, f.name, "")

    def as_payload(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SubmitOutcome:
    status: FormStatus
    message: str

    @property
    def ok(self) -> bool:
        return self.status is FormStatus.SUCCESS


class ContactFormClient:
    def __init__(
        self,
        base_url: str,
        *,
        path: str = "/api/contact",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.fields = ContactFields()
        self.status = FormStatus.IDLE
        self.status_message: Optional[str] = None
        self._path = path
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    @property
    def pending(self) -> bool:
        return self.status is FormStatus.PENDING

    def check_fields(self) -> Optional[str]:
        """Return the first problem the browser form would flag, if any."""
        f = self.fields
        if not (f.name.strip() and f.email.strip() and f.message.strip()):
            return REQUIRED_FIELDS_MESSAGE
        if not is_valid_email(f.email):
            return INVALID_EMAIL_MESSAGE
        return None

    async def submit(self) -> Optional[SubmitOutcome]:
        """
        Send the current fields once.

        Returns None without sending anything when a previous submit is
        still in flight. Fields are cleared only after a successful
        response; on any failure they are kept so the user can retry.
        """
        if self.pending:
            log.debug("submit ignored: request already pending")
            return None

        problem = self.check_fields()
        if problem:
            return self._finish(FormStatus.ERROR, problem)

        self.status = FormStatus.PENDING
        self.status_message = None
        try:
            resp = await self._http.post(self._path, json=self.fields.as_payload())
        except httpx.TransportError as exc:
            log.warning(f"contact request failed: {exc!r}")
            return self._finish(FormStatus.ERROR, GENERIC_FAILURE_MESSAGE)
        except BaseException:
            self.status = FormStatus.IDLE
            raise

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            return self._finish(FormStatus.ERROR, GENERIC_FAILURE_MESSAGE)

        if resp.status_code == 200 and data.get("success"):
            self.fields.clear()
            return self._finish(FormStatus.SUCCESS, data.get("message") or "Your message has been sent!")

        return self._finish(FormStatus.ERROR, data.get("error") or GENERIC_FAILURE_MESSAGE)

    def _finish(self, status: FormStatus, message: str) -> SubmitOutcome:
        self.status = status
        self.status_message = message
        return SubmitOutcome(status, message)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ContactFormClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


async def _run(args: argparse.Namespace) -> SubmitOutcome:
    async with ContactFormClient(args.url, timeout=args.timeout) as client:
        client.fields.name = args.name
        client.fields.email = args.email
        client.fields.phone = args.phone
        client.fields.message = args.message
        return await client.submit()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Send a message through the portfolio contact form")
    parser.add_argument("--url", default="http://localhost:8000", help="Base URL of the portfolio API")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--phone", default="")
    parser.add_argument("--message", required=True)
    parser.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")
    args = parser.parse_args(argv)

    outcome = asyncio.run(_run(args))
    print(f"{outcome.status.value}: {outcome.message}")
    return 0 if outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
